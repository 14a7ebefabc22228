"""
Page loading on top of the browser automation interface.

The stages never talk to Playwright directly. They borrow a page from a
PageProvider, navigate it with navigate(), and read it back with capture().
Anything with async goto/content/evaluate/screenshot/close and a `url`
attribute works as a page, which keeps the stages testable without a
browser.
"""

from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Optional

from .errors import NavigationError
from .logger import get_logger

log = get_logger('page_loader')

# WAF/bot challenge detection threshold and markers
WAF_MAX_LENGTH = 5000  # Real product pages are much larger than this

WAF_MARKERS = [
    'captcha', 'cf-browser-verification', 'challenge-platform',
    'just a moment', 'checking your browser', 'attention required',
    'verify you are human', 'robot check', 'enter the characters you see below',
]


@dataclass
class PageData:
    """Data captured from a loaded page."""
    requested_url: str
    url: str = ""
    html: str = ""
    waf_detected: bool = False


def is_waf_page(html: str) -> bool:
    """Detect if the loaded page is a bot challenge instead of real content."""
    if not html or len(html) > WAF_MAX_LENGTH:
        return False
    html_lower = html.lower()
    return any(marker in html_lower for marker in WAF_MARKERS)


async def navigate(page, url: str, wait_until: str = 'domcontentloaded', timeout_ms: int = 30000) -> Optional[int]:
    """
    Navigate `page` to `url`.

    Returns:
        HTTP status of the main document, if the driver reported one

    Raises:
        NavigationError: on HTTP >= 400
        Exception: whatever the driver raises on timeout/network failure
    """
    response = await page.goto(url, wait_until=wait_until, timeout=timeout_ms)
    status = getattr(response, 'status', None) if response is not None else None
    if status is not None and status >= 400:
        raise NavigationError(url, f"HTTP {status}")
    return status


async def capture(page, requested_url: str) -> PageData:
    """Read the rendered HTML and final URL of a loaded page."""
    page_data = PageData(requested_url=requested_url)
    page_data.url = page.url or requested_url
    page_data.html = await page.content()

    if is_waf_page(page_data.html):
        page_data.waf_detected = True
        log.warning("bot challenge detected (%d chars) for %s", len(page_data.html), requested_url)

    return page_data


async def body_excerpt(page, limit: int = 200) -> str:
    """First `limit` characters of visible body text, for diagnostics."""
    text = await page.evaluate(
        '(limit) => (document.body && document.body.innerText) ? document.body.innerText.substring(0, limit) : ""',
        limit,
    )
    return text or ''


async def close_quietly(page) -> None:
    try:
        await page.close()
    except Exception as e:
        log.debug("page close failed: %s", e)


class PageProvider:
    """
    Hands out pages from one browser.

    fresh_per_visit=True opens a new tab for every visit and closes it
    afterwards (Shopee detaches frames on reused tabs); otherwise a single
    tab is shared by every visit of the run.

    Usage:
        pages = PageProvider(browser, fresh_per_visit=True)
        async with pages.page() as page:
            await navigate(page, url)
        await pages.close()
    """

    def __init__(self, browser, fresh_per_visit: bool = False):
        self.browser = browser
        self.fresh_per_visit = fresh_per_visit
        self._shared = None

    @asynccontextmanager
    async def page(self):
        if self.fresh_per_visit:
            page = await self.browser.new_page()
            try:
                yield page
            finally:
                await close_quietly(page)
        else:
            if self._shared is None:
                self._shared = await self.browser.new_page()
            yield self._shared

    async def close(self):
        if self._shared is not None:
            await close_quietly(self._shared)
            self._shared = None
