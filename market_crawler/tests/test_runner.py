#!/usr/bin/env python3
"""
Runner and CLI Tests
====================

Whole-run behavior with a fake browser and a mocked datastore: exit codes,
browser lifecycle and the tally.

Run:
    python -m unittest market_crawler.tests.test_runner
"""

import io
import os
import tempfile
import unittest
from contextlib import redirect_stdout
from unittest import mock

from rich.console import Console

from market_crawler import cli
from market_crawler.config import Settings
from market_crawler.errors import SupabaseError
from market_crawler.runner import EXIT_CONFIG, EXIT_NO_URLS, EXIT_OK, check_connection, run_crawl
from market_crawler.tests.fakes import AMAZON_PRODUCT_HTML, FakeBrowser, listing_html
from market_crawler.utils.page_wait import Delays

BESTSELLERS_ELECTRONICS = 'https://www.amazon.com/Best-Sellers-Electronics/zgbs/electronics/'
PRODUCT_URL = 'https://www.amazon.com/dp/B0ABCDEFGH'


class BrowserFactory:
    """Hands out one FakeBrowser and remembers whether it was asked for."""

    def __init__(self, browser):
        self.browser = browser
        self.calls = 0

    def __call__(self, config, settings):
        self.calls += 1
        return self.browser


class TestRunCrawl(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.settings = Settings(
            supabase_url='https://p.supabase.co',
            supabase_key='service-key',
            max_products=1,
            screenshot_dir=self.tmp.name,
        )
        self.client = mock.MagicMock()
        self.client.insert.return_value = {'id': 'abc'}
        self.console = Console(file=io.StringIO(), width=100)

    def tearDown(self):
        self.tmp.cleanup()

    def amazon_browser(self):
        return FakeBrowser(sites={
            BESTSELLERS_ELECTRONICS: listing_html(['/Wireless-Earbuds-X1/dp/B0ABCDEFGH/ref=zg_bs_1']),
            PRODUCT_URL: AMAZON_PRODUCT_HTML,
        })

    async def crawl(self, factory, marketplace='amazon', settings=None):
        return await run_crawl(
            settings or self.settings,
            marketplace,
            browser_factory=factory,
            client=self.client,
            delays=Delays.none(),
            console=self.console,
        )

    async def test_successful_run(self):
        factory = BrowserFactory(self.amazon_browser())

        outcome = await self.crawl(factory)

        self.assertEqual(outcome.exit_code, EXIT_OK)
        self.assertEqual(outcome.urls, [PRODUCT_URL])
        self.assertEqual(outcome.report.summary(), "1/1 succeeded: 1")
        self.assertTrue(factory.browser.launched)
        self.assertTrue(factory.browser.closed)

        row = self.client.insert.call_args[0][1]
        self.assertEqual(row['price_krw'], 27986)
        self.assertEqual(row['external_rating'], 4.8)
        self.assertEqual(row['external_review_count'], 1234)
        self.assertTrue(row['is_featured'])
        self.assertIn('Saved', self.console.file.getvalue())

    async def test_insert_failure_still_completes(self):
        self.client.insert.side_effect = SupabaseError(
            'duplicate key value violates unique constraint "products_slug_key"', status_code=409)
        factory = BrowserFactory(self.amazon_browser())

        with self.assertLogs('market_crawler.storage.catalog', level='ERROR') as logs:
            outcome = await self.crawl(factory)

        self.assertEqual(outcome.exit_code, EXIT_OK)
        self.assertEqual(outcome.report.summary(), "1/1 succeeded: 0")
        self.assertEqual(outcome.report.failed_writes, 1)
        self.assertIn('duplicate key value violates unique constraint', logs.output[0])
        self.assertTrue(factory.browser.closed)

    async def test_missing_credentials_stop_before_browser(self):
        factory = BrowserFactory(self.amazon_browser())

        outcome = await self.crawl(factory, settings=Settings())

        self.assertEqual(outcome.exit_code, EXIT_CONFIG)
        self.assertEqual(factory.calls, 0)
        self.client.insert.assert_not_called()

    async def test_unknown_marketplace(self):
        factory = BrowserFactory(self.amazon_browser())
        outcome = await self.crawl(factory, marketplace='aliexpress')
        self.assertEqual(outcome.exit_code, EXIT_CONFIG)
        self.assertEqual(factory.calls, 0)

    async def test_search_without_keyword(self):
        factory = BrowserFactory(self.amazon_browser())
        settings = Settings(supabase_url='u', supabase_key='k', crawl_mode='search')
        outcome = await self.crawl(factory, settings=settings)
        self.assertEqual(outcome.exit_code, EXIT_CONFIG)
        self.assertEqual(factory.calls, 0)

    async def test_zero_urls(self):
        factory = BrowserFactory(FakeBrowser())

        outcome = await self.crawl(factory)

        self.assertEqual(outcome.exit_code, EXIT_NO_URLS)
        self.assertEqual(outcome.report.attempted, 0)
        self.assertTrue(factory.browser.closed)
        self.client.insert.assert_not_called()

    async def test_launch_failure(self):
        browser = FakeBrowser()
        browser.launch = mock.AsyncMock(side_effect=RuntimeError("Executable doesn't exist"))
        factory = BrowserFactory(browser)

        outcome = await self.crawl(factory)

        self.assertEqual(outcome.exit_code, EXIT_CONFIG)
        self.assertTrue(browser.closed)


class TestCheckConnection(unittest.TestCase):

    def test_reports_counts(self):
        client = mock.MagicMock()
        client.select.return_value = [{'title': 'Wireless Earbuds X1', 'source_platform': 'amazon'}]
        client.count.side_effect = [120, 45]
        settings = Settings(supabase_url='u', supabase_key='k')

        with self.assertLogs('market_crawler.runner', level='INFO') as logs:
            code = check_connection(settings, 'shopee', client=client)

        self.assertEqual(code, EXIT_OK)
        client.count.assert_any_call('products', None)
        client.count.assert_any_call('products', {'source_platform': 'shopee'})
        self.assertTrue(any('shopee products: 45' in line for line in logs.output))

    def test_store_error(self):
        client = mock.MagicMock()
        client.select.side_effect = SupabaseError('relation "public.products" does not exist', status_code=404)
        settings = Settings(supabase_url='u', supabase_key='k')

        self.assertEqual(check_connection(settings, client=client), EXIT_CONFIG)

    def test_missing_credentials(self):
        self.assertEqual(check_connection(Settings()), EXIT_CONFIG)


class TestCli(unittest.TestCase):

    def run_cli(self, *argv):
        out = io.StringIO()
        with redirect_stdout(out):
            code = cli.main(list(argv))
        return code, out.getvalue()

    def test_help(self):
        code, out = self.run_cli()
        self.assertEqual(code, EXIT_OK)
        self.assertIn('market-crawler crawl', out)

    def test_unknown_command(self):
        code, out = self.run_cli('scrape')
        self.assertEqual(code, EXIT_CONFIG)
        self.assertIn('Unknown command: scrape', out)

    def test_crawl_requires_marketplace(self):
        code, _ = self.run_cli('crawl')
        self.assertEqual(code, EXIT_CONFIG)

    @mock.patch('market_crawler.cli.load_settings', return_value=Settings())
    def test_crawl_without_credentials(self, _):
        code, _ = self.run_cli('crawl', 'shopee')
        self.assertEqual(code, EXIT_CONFIG)

    @mock.patch('market_crawler.config.load_dotenv')
    def test_invalid_log_level_is_a_config_error(self, _):
        with mock.patch.dict(os.environ, {'LOG_LEVEL': 'verbose'}):
            code, out = self.run_cli('crawl', 'amazon')
        self.assertEqual(code, EXIT_CONFIG)
        self.assertIn('LOG_LEVEL', out)

    def test_check_unknown_platform(self):
        code, _ = self.run_cli('check', '--platform', 'aliexpress')
        self.assertEqual(code, EXIT_CONFIG)

    @mock.patch('market_crawler.cli.check_connection', return_value=EXIT_OK)
    @mock.patch('market_crawler.cli.load_settings', return_value=Settings(supabase_url='u', supabase_key='k'))
    def test_check_platform_forms(self, _, check):
        self.assertEqual(self.run_cli('check', '--platform', 'ebay')[0], EXIT_OK)
        check.assert_called_with(mock.ANY, 'ebay')
        self.assertEqual(self.run_cli('check', 'shopee')[0], EXIT_OK)
        check.assert_called_with(mock.ANY, 'shopee')


if __name__ == '__main__':
    unittest.main()
