#!/usr/bin/env python3
"""
Marketplace Configuration Tests
===============================

Entry point resolution per mode, link canonicalization and the registry.

Run:
    python -m unittest market_crawler.tests.test_marketplaces
"""

import unittest

from market_crawler.config import Settings
from market_crawler.errors import ConfigError
from market_crawler.marketplaces import AMAZON, EBAY, SHOPEE, get_marketplace


class TestRegistry(unittest.TestCase):

    def test_lookup(self):
        self.assertIs(get_marketplace('shopee'), SHOPEE)
        self.assertIs(get_marketplace('Amazon'), AMAZON)
        self.assertIs(get_marketplace('ebay'), EBAY)

    def test_unknown(self):
        with self.assertRaises(ConfigError):
            get_marketplace('aliexpress')


class TestAmazonEntryPoints(unittest.TestCase):

    def test_default_is_bestsellers_all(self):
        points = AMAZON.entry_points(Settings())
        self.assertEqual([p.url for p in points], [
            'https://www.amazon.com/Best-Sellers-Electronics/zgbs/electronics/',
            'https://www.amazon.com/Best-Sellers-Beauty/zgbs/beauty/',
            'https://www.amazon.com/Best-Sellers-Home-Kitchen/zgbs/home-garden/',
        ])

    def test_single_category(self):
        points = AMAZON.entry_points(Settings(crawl_mode='new-releases', category='books'))
        self.assertEqual([p.url for p in points], ['https://www.amazon.com/gp/new-releases/books/'])

    def test_all_expands_to_departments(self):
        points = AMAZON.entry_points(Settings(crawl_mode='new-releases', category='all'))
        self.assertEqual([p.url for p in points], [
            'https://www.amazon.com/gp/new-releases/electronics/',
            'https://www.amazon.com/gp/new-releases/beauty/',
            'https://www.amazon.com/gp/new-releases/home-garden/',
        ])

    def test_movers_and_shakers(self):
        points = AMAZON.entry_points(Settings(crawl_mode='movers-shakers', category='toys'))
        self.assertEqual(points[0].url, 'https://www.amazon.com/gp/movers-and-shakers/toys-and-games/')

    def test_search_quotes_keyword(self):
        points = AMAZON.entry_points(Settings(crawl_mode='search', search_keyword='usb c hub'))
        self.assertEqual([p.url for p in points], ['https://www.amazon.com/s?k=usb+c+hub'])

    def test_search_without_keyword(self):
        with self.assertRaises(ConfigError):
            AMAZON.entry_points(Settings(crawl_mode='search'))

    def test_unknown_mode(self):
        with self.assertRaises(ConfigError):
            AMAZON.entry_points(Settings(crawl_mode='deals'))

    def test_unknown_category(self):
        with self.assertRaises(ConfigError) as ctx:
            AMAZON.entry_points(Settings(category='garden-gnomes'))
        self.assertIn('all', str(ctx.exception))


class TestKeywordEntryPoints(unittest.TestCase):

    def test_shopee_canned_keywords(self):
        points = SHOPEE.entry_points(Settings())
        self.assertEqual([p.url for p in points], [
            'https://shopee.co.th/search?keyword=electronics',
            'https://shopee.co.th/search?keyword=phone',
            'https://shopee.co.th/search?keyword=fashion',
            'https://shopee.co.th/search?keyword=beauty',
            'https://shopee.co.th/search?keyword=appliances',
        ])

    def test_shopee_keyword(self):
        points = SHOPEE.entry_points(Settings(crawl_mode='search', search_keyword='หูฟัง'))
        self.assertEqual(len(points), 1)
        self.assertEqual(points[0].url, 'https://shopee.co.th/search?keyword=%E0%B8%AB%E0%B8%B9%E0%B8%9F%E0%B8%B1%E0%B8%87')

    def test_shopee_search_without_keyword(self):
        with self.assertRaises(ConfigError):
            SHOPEE.entry_points(Settings(crawl_mode='search'))

    def test_ebay_keyword(self):
        points = EBAY.entry_points(Settings(search_keyword='film camera'))
        self.assertEqual([p.url for p in points], ['https://www.ebay.com/sch/i.html?_nkw=film+camera'])

    def test_ebay_rejects_ranking_modes(self):
        with self.assertRaises(ConfigError):
            EBAY.entry_points(Settings(crawl_mode='bestsellers'))


class TestCanonicalUrl(unittest.TestCase):

    def test_amazon_template(self):
        href = '/Wireless-Earbuds/dp/B0ABCDEFGH/ref=zg_bs_1?psc=1'
        self.assertEqual(AMAZON.canonical_url(href), 'https://www.amazon.com/dp/B0ABCDEFGH')

    def test_amazon_non_product(self):
        self.assertIsNone(AMAZON.canonical_url('/gp/help/customer/display.html'))

    def test_shopee_relative_link(self):
        href = '/Wireless-Earbuds-i.123456.7890123?sp_atk=abc#reviews'
        self.assertEqual(
            SHOPEE.canonical_url(href, 'https://shopee.co.th/search?keyword=phone'),
            'https://shopee.co.th/Wireless-Earbuds-i.123456.7890123',
        )

    def test_ebay_template(self):
        href = 'https://www.ebay.com/itm/123456789012?hash=item1c&var=0'
        self.assertEqual(EBAY.canonical_url(href), 'https://www.ebay.com/itm/123456789012')


class TestMarketplaceParameters(unittest.TestCase):

    def test_rates_and_currencies(self):
        self.assertEqual((SHOPEE.currency, SHOPEE.rate_to_local), ('THB', 40))
        self.assertEqual((AMAZON.currency, AMAZON.rate_to_local), ('USD', 1400))
        self.assertEqual((EBAY.currency, EBAY.rate_to_local), ('USD', 1400))

    def test_shopee_uses_fresh_tabs(self):
        self.assertTrue(SHOPEE.fresh_page_per_visit)
        self.assertFalse(AMAZON.fresh_page_per_visit)


if __name__ == '__main__':
    unittest.main()
