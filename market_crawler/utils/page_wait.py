"""
Page waiting utilities for reliable scraping.

Every pause the crawler makes against a marketplace goes through here:
fixed settle intervals, jittered delays between requests and the
scroll-and-wait cycles that trigger lazy-loaded listings.

Usage:
    from market_crawler.utils.page_wait import Delays, pause

    await page.goto(url)
    await pause(delays.item_settle)
"""

import asyncio
import random
from dataclasses import dataclass, field
from typing import Optional

from playwright.async_api import TimeoutError as PlaywrightTimeout

from ..logger import get_logger

log = get_logger('page_wait')


@dataclass(frozen=True)
class Jitter:
    """A delay of `base` seconds plus up to `spread` random seconds."""
    base: float = 0.0
    spread: float = 0.0

    def sample(self, rng: Optional[random.Random] = None) -> float:
        if self.spread <= 0:
            return self.base
        return self.base + (rng or random).uniform(0, self.spread)


@dataclass(frozen=True)
class Delays:
    """
    All pauses used by discovery and extraction.

    Tuning parameters, not correctness requirements: tests use Delays.none().
    """
    discovery_settle: Jitter = field(default_factory=lambda: Jitter(2.0, 2.0))
    scroll_cycle: Jitter = field(default_factory=lambda: Jitter(2.0, 1.0))
    scroll_top: Jitter = field(default_factory=lambda: Jitter(1.0))
    between_entry_points: Jitter = field(default_factory=lambda: Jitter(3.0, 2.0))
    item_settle: Jitter = field(default_factory=lambda: Jitter(1.5, 1.5))
    between_items: Jitter = field(default_factory=lambda: Jitter(3.0, 3.0))

    @classmethod
    def none(cls) -> 'Delays':
        zero = Jitter()
        return cls(
            discovery_settle=zero,
            scroll_cycle=zero,
            scroll_top=zero,
            between_entry_points=zero,
            item_settle=zero,
            between_items=zero,
        )


async def pause(delay: Jitter, rng: Optional[random.Random] = None) -> float:
    """Sleep for a sampled delay; returns the seconds slept."""
    seconds = delay.sample(rng)
    if seconds > 0:
        await asyncio.sleep(seconds)
    return seconds


async def wait_for_page_ready(page, timeout: int = 5000) -> None:
    """
    Wait for network idle, capped at `timeout` ms.

    Timeout is fine: marketplaces poll constantly and never go idle.
    """
    try:
        await page.wait_for_load_state('networkidle', timeout=timeout)
    except PlaywrightTimeout:
        log.debug("network idle not reached within %sms", timeout)


async def scroll_for_lazy_content(page, cycles: int, delays: Delays) -> None:
    """
    Scroll one viewport at a time to trigger lazy-loaded listings, then
    scroll back to the top.

    Scroll errors are ignored; a half-scrolled page still has anchors.
    """
    for _ in range(cycles):
        try:
            await page.evaluate('() => window.scrollBy(0, window.innerHeight)')
        except Exception as e:
            log.debug("scroll failed: %s", e)
        await pause(delays.scroll_cycle)

    try:
        await page.evaluate('() => window.scrollTo(0, 0)')
    except Exception as e:
        log.debug("scroll to top failed: %s", e)
    await pause(delays.scroll_top)
