"""
Marketplace Crawler

Discovers product pages on Shopee, Amazon and eBay, extracts and normalizes
product fields, and appends them to the product catalog.
"""

__version__ = "0.3.0"
