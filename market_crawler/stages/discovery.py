"""
Stage 1: URL Discovery

Visits each entry point (bestseller ranking, search results...) and
collects product URLs matching the marketplace link pattern, in page order,
deduplicated and capped.
"""

import os
import re
from datetime import datetime
from typing import List, Optional, Sequence

from bs4 import BeautifulSoup

from ..logger import get_logger
from ..marketplaces.base import MarketplaceConfig
from ..models import EntryPoint
from ..page_loader import PageData, PageProvider, body_excerpt, capture, navigate
from ..utils.page_wait import Delays, pause, scroll_for_lazy_content, wait_for_page_ready

log = get_logger('stages.discovery')


def extract_product_links(html: str, page_url: str, config: MarketplaceConfig) -> List[str]:
    """Canonical product URLs from every anchor on a page, in document order."""
    soup = BeautifulSoup(html or '', 'html.parser')
    links = []
    for anchor in soup.select('a[href]'):
        url = config.canonical_url(anchor.get('href', ''), page_url)
        if url:
            links.append(url)
    return links


class UrlDiscoverer:
    """
    Collects product URLs from a marketplace's entry points.

    Usage:
        discoverer = UrlDiscoverer(PageProvider(browser), AMAZON)
        urls = await discoverer.discover(AMAZON.entry_points(settings), 10)
    """

    def __init__(
        self,
        pages: PageProvider,
        config: MarketplaceConfig,
        delays: Optional[Delays] = None,
        screenshot_dir: Optional[str] = None,
    ):
        self.pages = pages
        self.config = config
        self.delays = delays or config.delays
        self.screenshot_dir = screenshot_dir

    async def discover(self, entry_points: Sequence[EntryPoint], max_items: int) -> List[str]:
        """
        Visit entry points in order until `max_items` URLs are known.

        Returns:
            Unique product URLs in discovery order, at most `max_items`
        """
        seen = set()
        urls: List[str] = []

        for index, entry in enumerate(entry_points):
            if len(urls) >= max_items:
                break

            if index > 0:
                await pause(self.delays.between_entry_points)

            log.info("Visiting %s (%s)", entry.label, entry.url)
            try:
                found = await self._visit(entry)
            except Exception as e:
                log.error("Failed to load %s: %s", entry.url, e)
                continue

            added = 0
            for url in found:
                if url in seen:
                    continue
                seen.add(url)
                urls.append(url)
                added += 1
                if len(urls) >= max_items:
                    break

            log.info("Found %d product links on %s (%d new, %d total)", len(found), entry.label, added, len(urls))

        log.info("Discovered %d product URLs", len(urls))
        return urls

    async def _visit(self, entry: EntryPoint) -> List[str]:
        config = self.config
        async with self.pages.page() as page:
            await navigate(page, entry.url, config.discovery_wait_until, config.navigation_timeout_ms)
            if config.network_idle_ms:
                await wait_for_page_ready(page, config.network_idle_ms)
            await pause(self.delays.discovery_settle)
            await scroll_for_lazy_content(page, config.scroll_cycles, self.delays)

            page_data = await capture(page, entry.url)
            found = extract_product_links(page_data.html, page_data.url, config)

            if not found:
                await self._debug_empty_page(page, entry, page_data)
            return found

    async def _debug_empty_page(self, page, entry: EntryPoint, page_data: PageData) -> None:
        """Log what the browser actually saw and keep a screenshot of it."""
        reason = "bot challenge page" if page_data.waf_detected else "no matching anchors"
        log.warning("No product links on %s (%s)", entry.label, reason)
        log.warning("  page URL: %s", page_data.url)
        try:
            log.warning("  body: %s", await body_excerpt(page))
        except Exception as e:
            log.debug("body excerpt failed: %s", e)

        if not self.screenshot_dir:
            return
        try:
            os.makedirs(self.screenshot_dir, exist_ok=True)
            slug = re.sub(r'[^a-z0-9]+', '-', entry.label.lower()).strip('-') or 'entry'
            stamp = datetime.now().strftime('%Y%m%d-%H%M%S')
            path = os.path.join(self.screenshot_dir, f"{self.config.name}-{slug}-{stamp}.png")
            await page.screenshot(path=path, full_page=True)
            log.warning("  screenshot: %s", path)
        except Exception as e:
            log.warning("  screenshot failed: %s", e)
