"""
Crawl runner.

Wires one marketplace run together: settings -> stealth browser ->
URL discovery -> product pipeline -> catalog writer, and turns the outcome
into an exit code.
"""

from dataclasses import dataclass, field
from typing import Callable, List, Optional

import requests
from rich.console import Console
from rich.table import Table

from .config import Settings
from .errors import ConfigError, SupabaseError
from .logger import get_logger
from .marketplaces import get_marketplace
from .marketplaces.base import MarketplaceConfig
from .models import RunReport
from .page_loader import PageProvider
from .stages.discovery import UrlDiscoverer
from .stages.products import ProductPipeline
from .stealth import StealthBrowser
from .storage import CatalogWriter, SupabaseClient
from .utils.page_wait import Delays

log = get_logger('runner')

EXIT_OK = 0
EXIT_CONFIG = 1
EXIT_NO_URLS = 2


@dataclass
class RunOutcome:
    report: RunReport
    exit_code: int
    urls: List[str] = field(default_factory=list)


def default_browser(config: MarketplaceConfig, settings: Settings) -> StealthBrowser:
    return StealthBrowser(
        headless=settings.headless,
        languages=config.languages,
        timezone_id=config.timezone_id,
        navigation_timeout_ms=config.navigation_timeout_ms,
    )


def log_configuration(config: MarketplaceConfig, settings: Settings, mode: str) -> None:
    log.info("=" * 50)
    log.info("%s crawler", config.display_name)
    log.info("=" * 50)
    log.info("Mode: %s", mode)
    if settings.search_keyword:
        log.info("Keyword: %s", settings.search_keyword)
    if config.name == 'amazon':
        log.info("Category: %s", settings.category)
    log.info("Max products: %d", settings.max_products)
    log.info("Headless: %s", settings.headless)
    log.info("Rate: 1 %s = %s KRW", config.currency, config.rate_to_local)
    log.info("=" * 50)
    log.debug("settings: %s", settings.to_dict())


def render_summary(config: MarketplaceConfig, report: RunReport, console: Optional[Console] = None) -> None:
    """Final tally as a table."""
    table = Table(title=f"{config.display_name} crawl summary")
    table.add_column("Metric")
    table.add_column("Count", justify="right")
    table.add_row("Discovered", str(report.discovered))
    table.add_row("Attempted", str(report.attempted))
    table.add_row("Saved", str(report.succeeded))
    table.add_row("Discarded", str(report.discarded))
    table.add_row("Insert failures", str(report.failed_writes))
    table.add_row("Errors", str(report.errors))
    (console or Console()).print(table)


async def run_crawl(
    settings: Settings,
    marketplace: str,
    browser_factory: Optional[Callable[[MarketplaceConfig, Settings], object]] = None,
    client: Optional[SupabaseClient] = None,
    delays: Optional[Delays] = None,
    console: Optional[Console] = None,
) -> RunOutcome:
    """
    Run one crawl end to end.

    Configuration problems (missing credentials, unknown marketplace or
    mode, search without a keyword) abort before the browser starts.

    Returns:
        RunOutcome with exit code EXIT_OK, EXIT_CONFIG or EXIT_NO_URLS
    """
    try:
        settings.require_datastore()
        config = get_marketplace(marketplace)
        mode = config.resolve_mode(settings)
        entry_points = config.entry_points(settings)
    except ConfigError as e:
        log.error("%s", e)
        return RunOutcome(report=RunReport(), exit_code=EXIT_CONFIG)

    log_configuration(config, settings, mode)

    if client is None:
        client = SupabaseClient(settings.supabase_url, settings.supabase_key)
    writer = CatalogWriter(client)
    delays = delays or config.delays

    browser = (browser_factory or default_browser)(config, settings)
    pages = None
    try:
        try:
            await browser.launch()
        except Exception as e:
            log.error("Browser launch failed: %s", e)
            return RunOutcome(report=RunReport(), exit_code=EXIT_CONFIG)

        pages = PageProvider(browser, fresh_per_visit=config.fresh_page_per_visit)

        discoverer = UrlDiscoverer(pages, config, delays, screenshot_dir=settings.screenshot_dir)
        urls = await discoverer.discover(entry_points, settings.max_products)

        if not urls:
            log.warning("No product URLs found; nothing to crawl")
            return RunOutcome(report=RunReport(), exit_code=EXIT_NO_URLS)

        pipeline = ProductPipeline(pages, config, writer, delays)
        report = await pipeline.run(urls, discovered=len(urls))
    finally:
        if pages is not None:
            await pages.close()
        await browser.close()
        log.debug("browser closed")

    log.info("Completed: %s (%d not saved)", report.summary(), report.failed)
    render_summary(config, report, console)
    return RunOutcome(report=report, exit_code=EXIT_OK, urls=urls)


def check_connection(
    settings: Settings,
    platform: Optional[str] = None,
    client: Optional[SupabaseClient] = None,
) -> int:
    """
    Verify datastore credentials and access to the products table.

    Logs the total product count and, when `platform` is given, the count
    for that source platform. Returns an exit code.
    """
    log.info("SUPABASE_URL: %s", "set" if settings.supabase_url else "missing")
    log.info("SUPABASE_SERVICE_ROLE_KEY: %s", "set" if settings.supabase_key else "missing")
    try:
        settings.require_datastore()
    except ConfigError as e:
        log.error("%s", e)
        return EXIT_CONFIG

    if client is None:
        client = SupabaseClient(settings.supabase_url, settings.supabase_key)
    writer = CatalogWriter(client)

    try:
        sample = client.select(writer.table, columns='id,title,source_platform', limit=3)
        total = writer.count()
        platform_total = writer.count(platform) if platform else None
    except (SupabaseError, requests.RequestException) as e:
        log.error("Connection failed: %s", e)
        return EXIT_CONFIG

    log.info("Connected: %d products in %s", total, writer.table)
    for row in sample:
        log.info("  - %s (%s)", (row.get('title') or '')[:40], row.get('source_platform') or 'unknown')
    if platform:
        log.info("%s products: %d", platform, platform_total)
    return EXIT_OK
