"""
Shopee Thailand marketplace.

Shopee's bot detection is aggressive: every visit gets a fresh tab, pages
settle for several seconds and requests are spaced 4-7s apart. With
SEARCH_KEYWORD the crawl searches for it; otherwise it walks a canned list
of category keywords.
"""

from typing import List

from ..config import Settings
from ..models import EntryPoint, SourcePlatform
from ..strategies.shopee import SHOPEE_RULES
from ..utils.page_wait import Delays, Jitter
from .base import SEARCH_MODE, MarketplaceConfig, keyword_entry_points

DEFAULT_KEYWORDS = ('electronics', 'phone', 'fashion', 'beauty', 'appliances')

THB_TO_KRW = 40


def shopee_entry_points(config: MarketplaceConfig, mode: str, settings: Settings) -> List[EntryPoint]:
    return keyword_entry_points(
        config, settings,
        search_url='https://shopee.co.th/search?keyword={}',
        default_keywords=DEFAULT_KEYWORDS,
        explicit=settings.crawl_mode == SEARCH_MODE,
    )


SHOPEE = MarketplaceConfig(
    name='shopee',
    display_name='Shopee Thailand',
    platform=SourcePlatform.SHOPEE,
    base_url='https://shopee.co.th',
    currency='THB',
    rate_to_local=THB_TO_KRW,
    rules=SHOPEE_RULES,
    # -i.<shopId>.<itemId> in the product slug
    link_pattern=r'-i\.\d+\.\d+',
    link_template=None,
    modes=(SEARCH_MODE,),
    default_mode=SEARCH_MODE,
    entry_points_for=shopee_entry_points,
    slug_max_length=80,
    platform_tag='shopee-thailand',
    featured_metric='sold_count',
    languages=('th-TH', 'th', 'en-US', 'en'),
    timezone_id='Asia/Bangkok',
    fresh_page_per_visit=True,
    discovery_wait_until='domcontentloaded',
    item_wait_until='domcontentloaded',
    navigation_timeout_ms=60000,
    network_idle_ms=10000,
    scroll_cycles=3,
    delays=Delays(
        discovery_settle=Jitter(8.0),
        scroll_cycle=Jitter(2.0, 1.0),
        scroll_top=Jitter(1.0),
        between_entry_points=Jitter(3.0, 2.0),
        item_settle=Jitter(3.0, 2.0),
        between_items=Jitter(4.0, 3.0),
    ),
)
