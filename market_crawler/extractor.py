"""
Field extraction from a loaded product page.

Applies a marketplace's FieldRules to the page DOM and returns
ExtractedFields. A field that no rule can produce is left empty/zero/False;
only the pipeline decides whether the record is usable.
"""

import re
from typing import Callable, List, Optional, Tuple
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from .logger import get_logger
from .models import ExtractedFields
from .normalize import clean_text, parse_count, parse_discount, parse_price, parse_rating
from .strategies.base import FieldRules, Rules

log = get_logger('extractor')


class FieldExtractor:
    """
    Ordered-fallback field extraction.

    Usage:
        extractor = FieldExtractor(AMAZON_RULES)
        fields = extractor.extract(html, url)
        if fields.is_usable():
            ...
    """

    def __init__(self, rules: FieldRules):
        self.rules = rules
        self._id_patterns = [re.compile(p) for p in rules.id_patterns]

    def extract(self, html: str, url: str, requested_url: Optional[str] = None) -> ExtractedFields:
        """
        Extract product fields.

        Args:
            html: Rendered page HTML
            url: Final page URL (after redirects)
            requested_url: URL that was navigated to, used for the id when the
                final URL lost it

        Returns:
            ExtractedFields; never raises for missing markup
        """
        soup = BeautifulSoup(html or '', 'html.parser')
        rules = self.rules

        shop_id, item_id = self.extract_ids(url, requested_url)
        price, original_price = self._extract_prices(soup)

        discount = self.first_value(soup, rules.discount, parse_discount)

        description = self.first_value(soup, rules.description) or ''
        if rules.description_limit:
            description = description[:rules.description_limit]

        fields = ExtractedFields(
            external_id=item_id,
            shop_or_seller_id=shop_id,
            title=self.first_value(soup, rules.title) or '',
            description=description,
            thumbnail_url=self._absolute(self.first_value(soup, rules.thumbnail), url) or '',
            image_urls=self._extract_images(soup, url),
            video_url=self._absolute(self.first_value(soup, rules.video), url),
            price=price,
            original_price=original_price,
            discount_percent=discount,
            rating=self.first_value(soup, rules.rating, parse_rating) or 0.0,
            review_count=self.first_value(soup, rules.review_count, parse_count) or 0,
            sold_count=self.first_value(soup, rules.sold_count, parse_count) or 0,
            category=self.first_value(soup, rules.category) or '',
            seller_name=self._clean_seller(self.first_value(soup, rules.seller)),
            free_shipping=self.has_any(soup, rules.free_shipping),
            availability=self.first_value(soup, rules.availability) or rules.default_availability,
            is_prime=self.has_any(soup, rules.is_prime),
        )

        if not fields.is_usable():
            log.debug("unusable page %s (title=%r, id=%r)", url, fields.title[:40], fields.external_id)

        return fields

    # ------------------------------------------------------------------
    # Generic rule evaluation
    # ------------------------------------------------------------------

    @staticmethod
    def first_value(soup, rules: Rules, parse: Optional[Callable] = None, allow_zero: bool = False):
        """
        Walk the rules in order and return the first usable value.

        With a parser, a value only counts when the parser returns something
        truthy (a rating outside 1-5 or a count of 0 falls through to the
        next rule). allow_zero accepts any parsed value that is not None, so
        a real 0.00 price is kept.
        """
        for rule in rules:
            for raw in rule.values(soup):
                value = parse(raw) if parse else raw
                usable = value is not None if allow_zero else bool(value)
                if usable:
                    return value
        return None

    @staticmethod
    def all_values(soup, rules: Rules) -> List[str]:
        values = []
        for rule in rules:
            values.extend(rule.values(soup))
        return values

    @staticmethod
    def has_any(soup, rules: Rules) -> bool:
        return any(rule.matches(soup) for rule in rules)

    # ------------------------------------------------------------------
    # Field-specific handling
    # ------------------------------------------------------------------

    def extract_ids(self, url: str, requested_url: Optional[str] = None) -> Tuple[str, str]:
        """(shop_or_seller_id, external_id) from the first matching id pattern."""
        for candidate in (url, requested_url):
            if not candidate:
                continue
            for regex in self._id_patterns:
                match = regex.search(candidate)
                if not match:
                    continue
                groups = match.groups()
                if len(groups) >= 2:
                    return groups[0] or '', groups[1] or ''
                if groups:
                    return '', groups[0] or ''
        return '', ''

    def _extract_prices(self, soup) -> Tuple[Optional[float], Optional[float]]:
        rules = self.rules

        if rules.price_from_range:
            price, original = None, None
            for rule in rules.price:
                amounts = [a for a in (parse_price(v) for v in rule.values(soup)) if a is not None]
                if amounts:
                    price = min(amounts)
                    highest = max(amounts)
                    original = highest if highest > price else None
                    break
        else:
            price = self.first_value(soup, rules.price, parse_price, allow_zero=True)
            original = None

        if original is None:
            original = self.first_value(soup, rules.original_price, parse_price, allow_zero=True)
        return price, original

    def _extract_images(self, soup, url: str) -> List[str]:
        rewrite = self.rules.image_rewrite
        seen = set()
        images = []
        for value in self.all_values(soup, self.rules.images):
            if rewrite:
                value = re.sub(rewrite[0], rewrite[1], value)
            value = self._absolute(value, url)
            if value and value not in seen:
                seen.add(value)
                images.append(value)
            if len(images) >= self.rules.max_images:
                break
        return images

    def _clean_seller(self, seller: Optional[str]) -> str:
        if not seller:
            return ''
        for noise in self.rules.seller_noise:
            seller = seller.replace(noise, ' ')
        return clean_text(seller)

    @staticmethod
    def _absolute(value: Optional[str], base_url: str) -> Optional[str]:
        if not value:
            return None
        if value.startswith('//'):
            return 'https:' + value
        if value.startswith('http') or value.startswith('data:'):
            return value
        return urljoin(base_url, value)
