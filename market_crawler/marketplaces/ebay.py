"""
eBay US marketplace.
"""

from typing import List

from ..config import Settings
from ..models import EntryPoint, SourcePlatform
from ..strategies.ebay import EBAY_RULES
from ..utils.page_wait import Delays, Jitter
from .base import SEARCH_MODE, MarketplaceConfig, keyword_entry_points

DEFAULT_KEYWORDS = ('wireless earbuds', 'smart watch', 'skincare', 'kitchen gadgets')

USD_TO_KRW = 1400


def ebay_entry_points(config: MarketplaceConfig, mode: str, settings: Settings) -> List[EntryPoint]:
    return keyword_entry_points(
        config, settings,
        search_url='https://www.ebay.com/sch/i.html?_nkw={}',
        default_keywords=DEFAULT_KEYWORDS,
        explicit=settings.crawl_mode == SEARCH_MODE,
    )


EBAY = MarketplaceConfig(
    name='ebay',
    display_name='eBay',
    platform=SourcePlatform.EBAY,
    base_url='https://www.ebay.com',
    currency='USD',
    rate_to_local=USD_TO_KRW,
    rules=EBAY_RULES,
    link_pattern=r'/itm/(?:[^/?#]+/)?(\d{9,})',
    link_template='https://www.ebay.com/itm/{0}',
    modes=(SEARCH_MODE,),
    default_mode=SEARCH_MODE,
    entry_points_for=ebay_entry_points,
    slug_max_length=100,
    platform_tag='ebay-us',
    featured_metric='review_count',
    languages=('en-US', 'en'),
    timezone_id='America/New_York',
    fresh_page_per_visit=False,
    navigation_timeout_ms=30000,
    scroll_cycles=1,
    delays=Delays(
        discovery_settle=Jitter(2.0, 2.0),
        scroll_cycle=Jitter(1.0, 1.0),
        scroll_top=Jitter(0.5),
        between_entry_points=Jitter(2.0, 2.0),
        item_settle=Jitter(1.5, 1.5),
        between_items=Jitter(3.0, 2.0),
    ),
)
