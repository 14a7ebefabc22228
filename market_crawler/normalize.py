"""
Normalization helpers: currency conversion, slugs and numeric parsing.

Pure functions, no I/O. Shared by every marketplace.
"""

import re
import threading
import time
from decimal import Decimal, InvalidOperation, ROUND_HALF_EVEN
from typing import Optional

# Latin letters, digits, Hangul, Thai, whitespace and hyphen survive slugify
_SLUG_STRIP = re.compile(r'[^a-z0-9가-힣ก-๙\s-]')
_WHITESPACE = re.compile(r'\s+')

_NUMBER = re.compile(r'(\d[\d,]*(?:\.\d+)?|\.\d+)')

# Magnitude words and suffixes -> multiplier
MAGNITUDES = {
    'k': 1_000,
    'พัน': 1_000,
    'หมื่น': 10_000,
    'แสน': 100_000,
    'm': 1_000_000,
    'ล้าน': 1_000_000,
}

_COUNT = re.compile(
    r'(\d[\d,]*(?:\.\d+)?)\s*(?:([km])(?![a-z])|(พัน|หมื่น|แสน|ล้าน))?',
    re.IGNORECASE,
)

_RATING_OUT_OF = re.compile(r'([\d.]+)\s*out\s*of\s*5', re.IGNORECASE)
_DISCOUNT = re.compile(r'(\d+)\s*%')


def convert(amount: Optional[float], rate: float) -> Optional[int]:
    """
    Convert a source-currency amount to the local currency.

    A missing amount stays missing; it is never turned into 0.
    """
    if amount is None:
        return None
    return int(round(amount * rate))


class SlugDiscriminator:
    """
    Millisecond timestamps that never repeat within a process.

    If the clock has not moved since the last call, the previous value is
    bumped by one.
    """

    def __init__(self, clock=None):
        self._clock = clock or (lambda: int(time.time() * 1000))
        self._last = 0
        self._lock = threading.Lock()

    def next(self) -> int:
        with self._lock:
            value = self._clock()
            if value <= self._last:
                value = self._last + 1
            self._last = value
            return value


_discriminator = SlugDiscriminator()


def slugify(title: str, max_length: int = 100, discriminator: Optional[object] = None) -> str:
    """
    Turn a product title into a URL-safe slug with a uniqueness suffix.

    Args:
        title: Free-text title (English, Korean or Thai)
        max_length: Length of the title part before the suffix
        discriminator: Suffix value; defaults to the next process-wide
            discriminator

    Returns:
        e.g. "wireless-earbuds-x1-1734451200000"
    """
    base = _SLUG_STRIP.sub('', (title or '').lower())
    base = _WHITESPACE.sub('-', base.strip())
    base = base[:max_length]

    if discriminator is None:
        discriminator = _discriminator.next()

    if not base:
        return str(discriminator)
    return f"{base}-{discriminator}"


def clean_text(text: Optional[str]) -> str:
    """Collapse whitespace and trim."""
    if not text:
        return ''
    return _WHITESPACE.sub(' ', text).strip()


def parse_price(text: Optional[str]) -> Optional[float]:
    """Parse the first number in a price string like '$1,299.99' or '฿ 259'."""
    if not text:
        return None
    match = _NUMBER.search(text)
    if not match:
        return None
    try:
        return float(match.group(1).replace(',', ''))
    except ValueError:
        return None


def parse_rating(text: Optional[str]) -> Optional[float]:
    """
    Parse a star rating.

    Prefers "4.8 out of 5", falls back to the first number. Anything outside
    1-5 is rejected so the next lookup rule gets a chance.
    """
    if not text:
        return None
    match = _RATING_OUT_OF.search(text) or _NUMBER.search(text)
    if not match:
        return None
    try:
        value = float(match.group(1).replace(',', ''))
    except ValueError:
        return None
    if 1 <= value <= 5:
        return value
    return None


def parse_count(text: Optional[str]) -> int:
    """
    Parse a review/sold count with magnitude suffixes.

    "1,234 ratings" -> 1234, "1.2k sold" -> 1200, "1.25k" -> 1250,
    "ขายแล้ว 2.5 หมื่น ชิ้น" -> 25000. Fractions are resolved on the exact
    decimal value, rounding half to even.
    """
    if not text:
        return 0
    match = _COUNT.search(text)
    if not match:
        return 0
    try:
        value = Decimal(match.group(1).replace(',', ''))
    except InvalidOperation:
        return 0

    unit = (match.group(2) or match.group(3) or '').lower()
    value *= MAGNITUDES.get(unit, 1)
    return int(value.quantize(Decimal('1'), rounding=ROUND_HALF_EVEN))


def parse_discount(text: Optional[str]) -> Optional[int]:
    """Parse '-35%' style discount badges."""
    if not text:
        return None
    match = _DISCOUNT.search(text)
    if not match:
        return None
    return int(match.group(1))


def derive_discount(price: Optional[float], original_price: Optional[float]) -> Optional[int]:
    """Discount percent implied by a struck-through original price."""
    if not price or not original_price or original_price <= price:
        return None
    return int(round((1 - price / original_price) * 100))
