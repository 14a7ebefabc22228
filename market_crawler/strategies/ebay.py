"""
eBay item page lookup rules.
"""

from .base import FieldRules, LookupRule as R

EBAY_RULES = FieldRules(
    id_patterns=(
        r'/itm/(?:[^/?#]+/)?(\d{9,})',
        r'[?&]item=(\d{9,})',
    ),
    title=(
        R('h1.x-item-title__mainTitle span'),
        R('h1.x-item-title__mainTitle'),
        R('#itemTitle', pattern=r'(?:Details about\s*)?(.+)'),
        R('meta[property="og:title"]', ('content',)),
    ),
    price=(
        R('.x-price-primary span.ux-textspans'),
        R('.x-price-primary'),
        R('#prcIsum', ('content',)),
        R('#prcIsum'),
        R('[itemprop="price"]', ('content',)),
    ),
    original_price=(
        R('.x-additional-info__textual-display .ux-textspans--STRIKETHROUGH'),
        R('.ux-textspans--STRIKETHROUGH'),
        R('#orgPrc'),
    ),
    discount=(
        R('.x-additional-info__textual-display', pattern=r'\d+\s*%\s*off'),
        R('#youSaveSTP', pattern=r'\d+\s*%'),
    ),
    rating=(
        R('.x-star-rating .clipped'),
        R('[data-testid="review--start--rating"]'),
        R('.ebay-review-start-rating'),
    ),
    review_count=(
        R('a[href*="#rwid"]'),
        R('.x-star-rating + span'),
        R('.ebay-reviews-count'),
    ),
    sold_count=(
        R('.x-quantity__availability span', pattern=r'[\d,.]+\s*sold'),
        R('.d-quantity__availability span', pattern=r'[\d,.]+\s*sold'),
        R('a[href*="purchasehistory"]'),
    ),
    thumbnail=(
        R('.ux-image-carousel-item.active img', ('data-zoom-src', 'src')),
        R('.ux-image-carousel-item img', ('data-zoom-src', 'src')),
        R('#icImg', ('src',)),
        R('meta[property="og:image"]', ('content',)),
    ),
    images=(
        R('.ux-image-carousel-item img', ('data-zoom-src', 'data-src', 'src'), pattern=r'.*ebayimg.*'),
        R('.ux-image-filmstrip-carousel-item img', ('data-src', 'src'), pattern=r'.*ebayimg.*'),
    ),
    image_rewrite=(r's-l\d+\.', 's-l1600.'),
    video=(
        R('video source', ('src',)),
        R('video', ('src',)),
    ),
    description=(
        R('.x-item-description-child'),
        R('#viTabs_0_is'),
        R('meta[name="description"]', ('content',)),
    ),
    category=(
        R('.seo-breadcrumb-text span'),
        R('nav.breadcrumbs li a span'),
        R('#vi-VR-brumb-lnkLst a'),
    ),
    seller=(
        R('.x-sellercard-atf__info__about-seller span.ux-textspans--BOLD'),
        R('.x-sellercard-atf__info__about-seller a'),
        R('.mbg-nw'),
    ),
    availability=(
        R('.x-quantity__availability span'),
        R('.d-quantity__availability span'),
    ),
    default_availability='Unknown',
    free_shipping=(
        R('.ux-labels-values--shipping .ux-textspans--BOLD', pattern=r'free'),
        R('#fshippingCost', pattern=r'free'),
    ),
)
