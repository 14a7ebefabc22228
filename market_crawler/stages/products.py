"""
Stage 2: Product Extraction

Visits each discovered URL one at a time, extracts the product fields,
normalizes them into a catalog row and hands it to the writer.
"""

import asyncio
from typing import Iterable, List, Optional, Tuple

from ..extractor import FieldExtractor
from ..logger import get_logger
from ..marketplaces.base import MarketplaceConfig
from ..models import ExtractedFields, NormalizedProduct, RunReport
from ..normalize import convert, derive_discount, slugify
from ..page_loader import PageData, PageProvider, capture, navigate
from ..utils.page_wait import Delays, pause, wait_for_page_ready

log = get_logger('stages.products')


def build_tags(fields: ExtractedFields, config: MarketplaceConfig) -> List[str]:
    """[category, seller, platform tag] without empties or repeats."""
    tags = []
    for tag in (fields.category, fields.seller_name, config.platform_tag):
        if tag and tag not in tags:
            tags.append(tag)
    return tags


def is_featured(fields: ExtractedFields, config: MarketplaceConfig) -> bool:
    volume = getattr(fields, config.featured_metric, 0) or 0
    return fields.rating >= config.featured_min_rating and volume >= config.featured_min_volume


def build_product(
    fields: ExtractedFields,
    config: MarketplaceConfig,
    url: str,
    discriminator: Optional[object] = None,
) -> NormalizedProduct:
    """
    Normalize extracted fields into the canonical record.

    Args:
        fields: Usable fields from FieldExtractor
        config: Marketplace the page came from
        url: Product URL as discovered (stored as source_url)
        discriminator: Slug suffix override (tests)
    """
    discount = fields.discount_percent
    if discount is None:
        discount = derive_discount(fields.price, fields.original_price)

    return NormalizedProduct(
        external_id=fields.external_id,
        shop_or_seller_id=fields.shop_or_seller_id,
        title=fields.title,
        slug=slugify(fields.title, config.slug_max_length, discriminator),
        description=fields.description,
        thumbnail_url=fields.thumbnail_url,
        image_urls=list(fields.image_urls),
        video_url=fields.video_url,
        price=fields.price,
        original_price=fields.original_price,
        discount_percent=discount,
        price_local=convert(fields.price, config.rate_to_local),
        currency=config.currency,
        rating=fields.rating,
        review_count=fields.review_count,
        sold_count=fields.sold_count,
        category=fields.category,
        seller_name=fields.seller_name,
        free_shipping=fields.free_shipping,
        availability=fields.availability,
        is_prime=fields.is_prime,
        source_platform=config.platform,
        source_url=url,
        tags=build_tags(fields, config),
        is_featured=is_featured(fields, config),
    )


def describe(product: NormalizedProduct) -> str:
    """One-line product summary for the log."""
    price = f"{product.currency} {product.price}" if product.price is not None else "no price"
    local = f"{product.price_local:,} KRW" if product.price_local is not None else "-"
    parts = [product.title[:50], f"{price} ({local})"]
    if product.rating:
        parts.append(f"{product.rating}★")
    if product.review_count:
        parts.append(f"{product.review_count:,} reviews")
    if product.sold_count:
        parts.append(f"{product.sold_count:,} sold")
    if product.is_featured:
        parts.append("featured")
    return " | ".join(parts)


class ProductPipeline:
    """
    Sequential extract -> normalize -> persist loop.

    Usage:
        pipeline = ProductPipeline(PageProvider(browser), SHOPEE, CatalogWriter(client))
        report = await pipeline.run(urls)
        print(report.summary())
    """

    def __init__(
        self,
        pages: PageProvider,
        config: MarketplaceConfig,
        writer,
        delays: Optional[Delays] = None,
        extractor: Optional[FieldExtractor] = None,
    ):
        self.pages = pages
        self.config = config
        self.writer = writer
        self.delays = delays or config.delays
        self.extractor = extractor or FieldExtractor(config.rules)

    async def fetch(self, url: str) -> Tuple[PageData, ExtractedFields]:
        """Load one product page and extract its fields."""
        config = self.config
        async with self.pages.page() as page:
            await navigate(page, url, config.item_wait_until, config.navigation_timeout_ms)
            if config.network_idle_ms:
                await wait_for_page_ready(page, config.network_idle_ms)
            await pause(self.delays.item_settle)
            page_data = await capture(page, url)
        fields = self.extractor.extract(page_data.html, page_data.url, requested_url=url)
        return page_data, fields

    async def process(self, url: str, report: RunReport) -> None:
        """Run one URL through the pipeline, recording the outcome in `report`."""
        report.attempted += 1
        try:
            page_data, fields = await self.fetch(url)
        except Exception as e:
            log.error("Error extracting %s: %s", url, e)
            report.errors += 1
            return

        if not fields.is_usable():
            reason = "bot challenge page" if page_data.waf_detected else "missing title or id"
            log.warning("Skipping %s: %s", url, reason)
            report.discarded += 1
            return

        product = build_product(fields, self.config, url)
        log.info("Extracted: %s", describe(product))

        # Writer does blocking HTTP; keep it off the event loop
        if await asyncio.to_thread(self.writer.write, product):
            report.succeeded += 1
        else:
            report.failed_writes += 1

    async def run(self, urls: Iterable[str], discovered: Optional[int] = None) -> RunReport:
        urls = list(urls)
        report = RunReport(discovered=len(urls) if discovered is None else discovered)

        for index, url in enumerate(urls):
            log.info("[%d/%d] %s", index + 1, len(urls), url)
            await self.process(url, report)
            if index < len(urls) - 1:
                await pause(self.delays.between_items)

        log.info("Pipeline finished: %s", report.summary())
        return report
