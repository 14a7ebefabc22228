"""
Stealth Browser Module

Provides a Playwright browser that evades common bot detection.
"""

from typing import Optional, Sequence

from playwright.async_api import async_playwright, Browser, BrowserContext, Page, Playwright

from .patches import VIEWPORT, USER_AGENT, get_accept_language, get_stealth_args, get_stealth_js


class StealthBrowser:
    """
    One Chromium browser + context with stealth settings.

    This is the browser automation interface the crawler depends on:
    launch(), new_page(), close(). Pages are plain Playwright pages.

    Usage:
        async with StealthBrowser(headless=True, languages=('th-TH', 'th')) as sb:
            page = await sb.new_page()
            await page.goto('https://shopee.co.th')
    """

    def __init__(
        self,
        headless: bool = True,
        languages: Sequence[str] = ('en-US', 'en'),
        timezone_id: Optional[str] = None,
        navigation_timeout_ms: int = 60000,
        default_timeout_ms: int = 30000,
    ):
        self.headless = headless
        self.languages = tuple(languages)
        self.timezone_id = timezone_id
        self.navigation_timeout_ms = navigation_timeout_ms
        self.default_timeout_ms = default_timeout_ms
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None

    async def __aenter__(self):
        await self.launch()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def launch(self) -> 'StealthBrowser':
        """Start Playwright, launch Chromium and open a stealth context."""
        self._playwright = await async_playwright().start()
        self._browser = await self._playwright.chromium.launch(
            headless=self.headless,
            args=get_stealth_args(self.languages),
        )
        self._context = await self._browser.new_context(
            user_agent=USER_AGENT,
            viewport=VIEWPORT,
            locale=self.languages[0],
            timezone_id=self.timezone_id,
            extra_http_headers={
                'Accept-Language': get_accept_language(self.languages),
                'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,image/apng,*/*;q=0.8',
                'Upgrade-Insecure-Requests': '1',
            },
        )
        # Inject stealth scripts before any page loads
        await self._context.add_init_script(get_stealth_js(self.languages))
        return self

    async def new_page(self) -> Page:
        """Create a new stealth page."""
        if self._context is None:
            raise RuntimeError("StealthBrowser.new_page() called before launch()")
        page = await self._context.new_page()
        page.set_default_navigation_timeout(self.navigation_timeout_ms)
        page.set_default_timeout(self.default_timeout_ms)
        return page

    async def close(self):
        """Close context, browser and Playwright; safe to call twice."""
        if self._context:
            await self._context.close()
            self._context = None
        if self._browser:
            await self._browser.close()
            self._browser = None
        if self._playwright:
            await self._playwright.stop()
            self._playwright = None


__all__ = ['StealthBrowser', 'get_stealth_args', 'get_stealth_js', 'USER_AGENT']
