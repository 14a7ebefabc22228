"""
Lookup rules for field extraction.

A marketplace describes each product field as an ordered tuple of
LookupRule, most specific first. The extractor walks the tuple and stops at
the first rule that yields a usable value, so markup changes between page
variants (sponsored vs organic, mobile vs desktop render) only cost a
fallback, not the field.
"""

import re
from dataclasses import dataclass, field
from typing import Iterator, Optional, Pattern, Tuple

from ..normalize import clean_text


@dataclass(frozen=True)
class LookupRule:
    """
    One way of reading a field off the DOM.

    Args:
        selector: CSS selector (soupsieve syntax)
        attributes: Attribute names tried in order; empty means element text
        pattern: Regex the raw value must match. Group 1 is returned when the
            pattern has a group, otherwise the whole match.
    """
    selector: str
    attributes: Tuple[str, ...] = ()
    pattern: Optional[str] = None

    def compiled(self) -> Optional[Pattern]:
        if self.pattern is None:
            return None
        return _compile(self.pattern)

    def values(self, soup) -> Iterator[str]:
        """Candidate values from every element matching the selector."""
        regex = self.compiled()
        for el in soup.select(self.selector):
            raw = self._raw_value(el)
            if not raw:
                continue
            if regex is not None:
                match = regex.search(raw)
                if not match:
                    continue
                raw = match.group(1) if regex.groups else match.group(0)
            value = clean_text(raw)
            if value:
                yield value

    def matches(self, soup) -> bool:
        """Presence check; with a pattern, some element must also match it."""
        if self.pattern is None:
            return soup.select_one(self.selector) is not None
        return next(self.values(soup), None) is not None

    def _raw_value(self, el) -> str:
        if not self.attributes:
            return el.get_text(' ', strip=True)
        for attr in self.attributes:
            value = el.get(attr)
            if isinstance(value, list):
                value = ' '.join(value)
            if value and value.strip():
                return value.strip()
        return ''


_PATTERN_CACHE = {}


def _compile(pattern: str) -> Pattern:
    compiled = _PATTERN_CACHE.get(pattern)
    if compiled is None:
        compiled = re.compile(pattern, re.IGNORECASE)
        _PATTERN_CACHE[pattern] = compiled
    return compiled


Rules = Tuple[LookupRule, ...]


@dataclass(frozen=True)
class FieldRules:
    """Ordered lookup rules for every extracted field of one marketplace."""
    title: Rules = ()
    price: Rules = ()
    original_price: Rules = ()
    discount: Rules = ()
    rating: Rules = ()
    review_count: Rules = ()
    sold_count: Rules = ()
    thumbnail: Rules = ()
    images: Rules = ()
    video: Rules = ()
    description: Rules = ()
    category: Rules = ()
    seller: Rules = ()
    availability: Rules = ()
    free_shipping: Rules = ()
    is_prime: Rules = ()

    # Regexes over the page URL capturing (shop_id, item_id) or (item_id,)
    id_patterns: Tuple[str, ...] = ()

    # Lowest price on the page is the price, highest is the original price
    price_from_range: bool = False

    # (pattern, replacement) applied to image URLs, e.g. strip size tokens
    image_rewrite: Optional[Tuple[str, str]] = None

    # Strings removed from the seller text ("Visit the", "Store")
    seller_noise: Tuple[str, ...] = field(default_factory=tuple)

    description_limit: int = 500
    max_images: int = 5
    default_availability: str = ''
