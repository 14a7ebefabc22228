"""
Marketplace configuration.

Everything that differs between Shopee, Amazon and eBay lives in one
immutable MarketplaceConfig passed to the stages: entry points, link
pattern, lookup rules, exchange rate, tagging and timing.
"""

import re
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Pattern, Tuple
from urllib.parse import quote_plus, urldefrag, urljoin, urlsplit, urlunsplit

from ..config import Settings
from ..errors import ConfigError
from ..models import EntryPoint, SourcePlatform
from ..strategies.base import FieldRules
from ..utils.page_wait import Delays

SEARCH_MODE = 'search'


@dataclass(frozen=True)
class MarketplaceConfig:
    """Source-specific parameters for one marketplace."""
    name: str
    display_name: str
    platform: SourcePlatform
    base_url: str

    # Currency: source code and static rate to the local currency (KRW)
    currency: str
    rate_to_local: float

    rules: FieldRules

    # Product links on listing pages; group 1 fills link_template
    link_pattern: str
    link_template: Optional[str] = None

    # Entry point resolution
    modes: Tuple[str, ...] = (SEARCH_MODE,)
    default_mode: str = SEARCH_MODE
    entry_points_for: Optional[Callable[['MarketplaceConfig', str, Settings], List[EntryPoint]]] = None

    # Normalization
    slug_max_length: int = 100
    platform_tag: Optional[str] = None
    featured_metric: str = 'review_count'
    featured_min_rating: float = 4.5
    featured_min_volume: int = 1000

    # Browser behavior
    languages: Tuple[str, ...] = ('en-US', 'en')
    timezone_id: Optional[str] = None
    fresh_page_per_visit: bool = False
    discovery_wait_until: str = 'domcontentloaded'
    item_wait_until: str = 'domcontentloaded'
    navigation_timeout_ms: int = 30000
    # Capped networkidle wait after navigation; 0 skips it
    network_idle_ms: int = 0
    scroll_cycles: int = 3
    delays: Delays = field(default_factory=Delays)

    def compiled_link_pattern(self) -> Pattern:
        return re.compile(self.link_pattern)

    def canonical_url(self, href: str, page_url: Optional[str] = None) -> Optional[str]:
        """
        Canonical product URL for an anchor href, or None if it is not a
        product link.
        """
        match = self.compiled_link_pattern().search(href)
        if not match:
            return None
        if self.link_template:
            return self.link_template.format(*match.groups())

        absolute = urljoin(page_url or self.base_url, href)
        if absolute.startswith('/'):
            absolute = urljoin(self.base_url, absolute)
        # Tracking query strings make the same item look distinct
        parts = urlsplit(urldefrag(absolute)[0])
        return urlunsplit((parts.scheme, parts.netloc, parts.path, '', ''))

    def resolve_mode(self, settings: Settings) -> str:
        mode = settings.crawl_mode or self.default_mode
        if mode not in self.modes:
            raise ConfigError(
                f"{self.display_name} does not support CRAWL_MODE={mode!r} "
                f"(choose from: {', '.join(self.modes)})"
            )
        return mode

    def entry_points(self, settings: Settings) -> List[EntryPoint]:
        """Entry points for the configured mode (ConfigError if invalid)."""
        mode = self.resolve_mode(settings)
        return self.entry_points_for(self, mode, settings)


def keyword_entry_points(
    config: MarketplaceConfig,
    settings: Settings,
    search_url: str,
    default_keywords: Tuple[str, ...],
    explicit: bool,
) -> List[EntryPoint]:
    """
    Search entry points: the configured keyword, or the canned keyword list
    when the mode was not asked for explicitly.
    """
    if settings.search_keyword:
        keywords = (settings.search_keyword,)
    elif explicit:
        raise ConfigError("CRAWL_MODE=search requires SEARCH_KEYWORD")
    else:
        keywords = default_keywords

    return [
        EntryPoint(label=f"search: {kw}", url=search_url.format(quote_plus(kw)))
        for kw in keywords
    ]
