"""
Shopee Thailand product page lookup rules.

Shopee ships obfuscated class names that change between releases, so the
hashed classes come first and the generic substring selectors follow.
"""

from .base import FieldRules, LookupRule as R

SHOPEE_RULES = FieldRules(
    id_patterns=(
        r'-i\.(\d+)\.(\d+)',
        r'/product/(\d+)/(\d+)',
    ),
    title=(
        R('div[class*="product-title"]'),
        R('h1[class*="title"]'),
        R('span[class*="VhWBwF"]'),
        R('.product-info span'),
        R('div[data-sqe="name"]'),
        R('h1'),
    ),
    price=(
        R('div[class*="pqTWkA"]'),
        R('div[class*="price"]'),
        R('span[class*="price"]'),
        R('div[aria-label*="฿"]', ('aria-label',)),
    ),
    price_from_range=True,
    discount=(
        R('div[class*="percent"]'),
        R('span[class*="discount"]'),
    ),
    rating=(
        R('div[class*="rating"] span'),
        R('div[class*="star"] + span'),
        R('span[class*="rating"]'),
    ),
    review_count=(
        R('div[class*="rating-count"]'),
        R('span[class*="review"]'),
        R('a[href*="reviews"]'),
    ),
    sold_count=(
        R('div[class*="sold"]'),
        R('span[class*="sold"]'),
        R('div[class*="historical-sold"]'),
    ),
    thumbnail=(
        R('div[class*="image-carousel"] img', ('src', 'data-src'), pattern=r'.*(?:shopee|susercontent).*'),
        R('div[class*="product-image"] img', ('src', 'data-src'), pattern=r'.*(?:shopee|susercontent).*'),
        R('img[class*="main"]', ('src', 'data-src'), pattern=r'.*(?:shopee|susercontent).*'),
        R('img[src*="shopee"]', ('src',)),
        R('img[src*="susercontent"]', ('src',)),
    ),
    images=(
        R('div[class*="carousel"] img', ('src', 'data-src'), pattern=r'.*(?:shopee|susercontent).*'),
        R('div[class*="thumbnail"] img', ('src', 'data-src'), pattern=r'.*(?:shopee|susercontent).*'),
    ),
    video=(
        R('video source', ('src',)),
        R('video', ('src',)),
    ),
    description=(
        R('div[class*="product-detail"]'),
        R('div[class*="description"]'),
        R('div[class*="QN2lPu"]'),
    ),
    category=(
        R('nav[class*="breadcrumb"] a:nth-child(2)'),
        R('div[class*="category"]'),
    ),
    seller=(
        R('div[class*="shop-info"] span'),
        R('a[class*="shop-name"]'),
    ),
    free_shipping=(
        R('div[class*="free-shipping"]'),
        R('img[alt*="Free"]'),
    ),
)
