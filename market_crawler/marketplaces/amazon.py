"""
Amazon US marketplace.

Modes:
  bestsellers     Best Sellers (default)
  new-releases    New Releases
  movers-shakers  Movers & Shakers
  search          Keyword search (SEARCH_KEYWORD required)

CATEGORY narrows the ranking modes to one department; "all" walks the
electronics, beauty and home-garden rankings.
"""

from typing import Dict, List

from ..config import Settings
from ..errors import ConfigError
from ..models import EntryPoint, SourcePlatform
from ..strategies.amazon import AMAZON_RULES
from ..utils.page_wait import Delays, Jitter
from .base import SEARCH_MODE, MarketplaceConfig, keyword_entry_points

BESTSELLERS = 'bestsellers'
NEW_RELEASES = 'new-releases'
MOVERS_SHAKERS = 'movers-shakers'

CATEGORY_URLS: Dict[str, Dict[str, str]] = {
    'electronics': {
        BESTSELLERS: 'https://www.amazon.com/Best-Sellers-Electronics/zgbs/electronics/',
        NEW_RELEASES: 'https://www.amazon.com/gp/new-releases/electronics/',
        MOVERS_SHAKERS: 'https://www.amazon.com/gp/movers-and-shakers/electronics/',
    },
    'beauty': {
        BESTSELLERS: 'https://www.amazon.com/Best-Sellers-Beauty/zgbs/beauty/',
        NEW_RELEASES: 'https://www.amazon.com/gp/new-releases/beauty/',
        MOVERS_SHAKERS: 'https://www.amazon.com/gp/movers-and-shakers/beauty/',
    },
    'home-garden': {
        BESTSELLERS: 'https://www.amazon.com/Best-Sellers-Home-Kitchen/zgbs/home-garden/',
        NEW_RELEASES: 'https://www.amazon.com/gp/new-releases/home-garden/',
        MOVERS_SHAKERS: 'https://www.amazon.com/gp/movers-and-shakers/home-garden/',
    },
    'fashion': {
        BESTSELLERS: 'https://www.amazon.com/Best-Sellers-Clothing-Shoes-Jewelry/zgbs/fashion/',
        NEW_RELEASES: 'https://www.amazon.com/gp/new-releases/fashion/',
        MOVERS_SHAKERS: 'https://www.amazon.com/gp/movers-and-shakers/fashion/',
    },
    'toys': {
        BESTSELLERS: 'https://www.amazon.com/Best-Sellers-Toys-Games/zgbs/toys-and-games/',
        NEW_RELEASES: 'https://www.amazon.com/gp/new-releases/toys-and-games/',
        MOVERS_SHAKERS: 'https://www.amazon.com/gp/movers-and-shakers/toys-and-games/',
    },
    'books': {
        BESTSELLERS: 'https://www.amazon.com/Best-Sellers-Books/zgbs/books/',
        NEW_RELEASES: 'https://www.amazon.com/gp/new-releases/books/',
        MOVERS_SHAKERS: 'https://www.amazon.com/gp/movers-and-shakers/books/',
    },
}

# Departments walked when CATEGORY=all
ALL = 'all'
ALL_CATEGORIES = ('electronics', 'beauty', 'home-garden')

USD_TO_KRW = 1400


def amazon_entry_points(config: MarketplaceConfig, mode: str, settings: Settings) -> List[EntryPoint]:
    if mode == SEARCH_MODE:
        return keyword_entry_points(
            config, settings,
            search_url='https://www.amazon.com/s?k={}',
            default_keywords=(),
            explicit=True,
        )

    category = settings.category
    if category != ALL and category not in CATEGORY_URLS:
        choices = ', '.join(list(CATEGORY_URLS) + [ALL])
        raise ConfigError(f"Unknown Amazon CATEGORY={category!r} (choose from: {choices})")

    categories = ALL_CATEGORIES if category == ALL else (category,)
    return [
        EntryPoint(label=f"{mode}: {name}", url=CATEGORY_URLS[name][mode])
        for name in categories
    ]


AMAZON = MarketplaceConfig(
    name='amazon',
    display_name='Amazon',
    platform=SourcePlatform.AMAZON,
    base_url='https://www.amazon.com',
    currency='USD',
    rate_to_local=USD_TO_KRW,
    rules=AMAZON_RULES,
    link_pattern=r'/dp/([A-Z0-9]{10})',
    link_template='https://www.amazon.com/dp/{0}',
    modes=(BESTSELLERS, NEW_RELEASES, MOVERS_SHAKERS, SEARCH_MODE),
    default_mode=BESTSELLERS,
    entry_points_for=amazon_entry_points,
    slug_max_length=100,
    platform_tag=None,
    featured_metric='review_count',
    languages=('en-US', 'en'),
    timezone_id='America/New_York',
    fresh_page_per_visit=False,
    navigation_timeout_ms=30000,
    scroll_cycles=2,
    delays=Delays(
        discovery_settle=Jitter(2.0, 2.0),
        scroll_cycle=Jitter(1.0, 1.0),
        scroll_top=Jitter(0.5),
        between_entry_points=Jitter(2.0, 2.0),
        item_settle=Jitter(1.5, 1.5),
        between_items=Jitter(3.0, 3.0),
    ),
)
