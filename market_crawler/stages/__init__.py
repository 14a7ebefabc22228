"""
Crawl stages.

Stage 1: discovery  - product URLs from listing/search entry points
Stage 2: products   - extract, normalize and persist each URL
"""
