#!/usr/bin/env python3
"""
Normalization Tests
===================

Currency conversion, slugs and the numeric parsers used by every
marketplace.

Run:
    python -m unittest market_crawler.tests.test_normalize
"""

import re
import unittest

from market_crawler.normalize import (
    SlugDiscriminator,
    clean_text,
    convert,
    derive_discount,
    parse_count,
    parse_discount,
    parse_price,
    parse_rating,
    slugify,
)

SLUG_CHARSET = re.compile(r'^[a-z0-9가-힣ก-๙-]+$')


class TestConvert(unittest.TestCase):

    def test_usd_to_krw(self):
        self.assertEqual(convert(19.99, 1400), 27986)

    def test_thb_to_krw(self):
        self.assertEqual(convert(259, 40), 10360)

    def test_rounds_to_nearest(self):
        self.assertEqual(convert(0.01, 40), 0)
        self.assertEqual(convert(1.26, 40), 50)

    def test_missing_amount_stays_missing(self):
        self.assertIsNone(convert(None, 1400))

    def test_zero_is_not_missing(self):
        self.assertEqual(convert(0, 1400), 0)


class TestSlugify(unittest.TestCase):

    def test_basic(self):
        self.assertEqual(slugify("Wireless Earbuds X1!", discriminator=123), "wireless-earbuds-x1-123")

    def test_charset(self):
        titles = [
            "Héllo, World (2024 Edition) — 50% OFF",
            "무선 이어폰 블루투스 5.3",
            "หูฟังไร้สาย บลูทูธ",
            "  spaced   out\ttitle  ",
        ]
        for title in titles:
            with self.subTest(title=title):
                self.assertRegex(slugify(title, discriminator=1), SLUG_CHARSET)

    def test_korean_and_thai_survive(self):
        self.assertEqual(slugify("무선 이어폰", discriminator=7), "무선-이어폰-7")
        self.assertEqual(slugify("หูฟัง ไร้สาย", discriminator=7), "หูฟัง-ไร้สาย-7")

    def test_title_part_is_truncated(self):
        slug = slugify("a" * 200, max_length=80, discriminator=5)
        self.assertEqual(slug, "a" * 80 + "-5")

    def test_empty_title_falls_back_to_discriminator(self):
        self.assertEqual(slugify("!!!", discriminator=42), "42")

    def test_identical_titles_get_distinct_slugs(self):
        slugs = {slugify("Same Title") for _ in range(50)}
        self.assertEqual(len(slugs), 50)


class TestSlugDiscriminator(unittest.TestCase):

    def test_stalled_clock_still_increases(self):
        disc = SlugDiscriminator(clock=lambda: 1000)
        self.assertEqual([disc.next() for _ in range(3)], [1000, 1001, 1002])

    def test_follows_clock_when_it_moves(self):
        ticks = iter([1000, 5000])
        disc = SlugDiscriminator(clock=lambda: next(ticks))
        self.assertEqual(disc.next(), 1000)
        self.assertEqual(disc.next(), 5000)


class TestParsers(unittest.TestCase):

    def test_parse_price(self):
        self.assertEqual(parse_price("$1,299.99"), 1299.99)
        self.assertEqual(parse_price("฿ 259"), 259.0)
        self.assertEqual(parse_price("US $19.99/ea"), 19.99)
        self.assertIsNone(parse_price("Currently unavailable"))
        self.assertIsNone(parse_price(None))

    def test_parse_rating(self):
        self.assertEqual(parse_rating("4.8 out of 5 stars"), 4.8)
        self.assertEqual(parse_rating("4.5"), 4.5)
        self.assertIsNone(parse_rating("12 ratings"))
        self.assertIsNone(parse_rating("0"))
        self.assertIsNone(parse_rating(""))

    def test_parse_count_plain(self):
        self.assertEqual(parse_count("1,234 ratings"), 1234)
        self.assertEqual(parse_count("1234ratings"), 1234)
        self.assertEqual(parse_count("(87)"), 87)

    def test_parse_count_magnitudes(self):
        cases = {
            "1.2k sold": 1200,
            "1.25k": 1250,
            "10K+ bought in past month": 10000,
            "1.5m": 1500000,
            "ขายแล้ว 1.2พัน ชิ้น": 1200,
            "2.5 หมื่น": 25000,
            "3แสน": 300000,
            "1ล้าน": 1000000,
        }
        for text, expected in cases.items():
            with self.subTest(text=text):
                self.assertEqual(parse_count(text), expected)

    def test_parse_count_rounds_half_even(self):
        self.assertEqual(parse_count("1.0005k"), 1000)
        self.assertEqual(parse_count("1.0015k"), 1002)

    def test_parse_count_without_digits(self):
        self.assertEqual(parse_count("no reviews yet"), 0)
        self.assertEqual(parse_count(None), 0)

    def test_parse_discount(self):
        self.assertEqual(parse_discount("-35%"), 35)
        self.assertEqual(parse_discount("Save 20 % today"), 20)
        self.assertIsNone(parse_discount("Deal"))

    def test_derive_discount(self):
        self.assertEqual(derive_discount(75.0, 100.0), 25)
        self.assertIsNone(derive_discount(100.0, 100.0))
        self.assertIsNone(derive_discount(100.0, None))
        self.assertIsNone(derive_discount(None, 100.0))

    def test_clean_text(self):
        self.assertEqual(clean_text("  a \n\t b  "), "a b")
        self.assertEqual(clean_text(None), "")


if __name__ == '__main__':
    unittest.main()
