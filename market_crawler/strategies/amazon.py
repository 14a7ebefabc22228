"""
Amazon product page lookup rules.
"""

from .base import FieldRules, LookupRule as R

AMAZON_RULES = FieldRules(
    id_patterns=(
        r'/dp/([A-Z0-9]{10})',
        r'/gp/product/([A-Z0-9]{10})',
    ),
    title=(
        R('#productTitle'),
        R('#title'),
        R('meta[name="title"]', ('content',)),
    ),
    price=(
        R('.a-price .a-offscreen'),
        R('#priceblock_ourprice'),
        R('#priceblock_dealprice'),
        R('.a-price-whole'),
    ),
    original_price=(
        R('.a-text-price .a-offscreen'),
        R('.a-price[data-a-strike] .a-offscreen'),
    ),
    discount=(
        R('.savingsPercentage', pattern=r'\d+\s*%'),
    ),
    rating=(
        R('#acrPopover', ('title',)),
        R('#acrPopover'),
        R('.a-icon-star-small'),
        R('[data-hook="rating-out-of-text"]'),
    ),
    review_count=(
        R('#acrCustomerReviewText'),
        R('[data-hook="total-review-count"]'),
    ),
    thumbnail=(
        R('#landingImage', ('data-old-hires', 'src')),
        R('#imgBlkFront', ('data-old-hires', 'src')),
        R('.a-dynamic-image', ('data-old-hires', 'src')),
    ),
    images=(
        R('#altImages img', ('src',), pattern=r'.*images.*'),
    ),
    image_rewrite=(r'\._[A-Z0-9_,]+_\.', '.'),
    video=(
        R('video source', ('src',)),
        R('video', ('src',)),
    ),
    description=(
        R('#productDescription p'),
        R('#feature-bullets'),
    ),
    category=(
        R('#wayfinding-breadcrumbs_feature_div a'),
    ),
    seller=(
        R('#bylineInfo'),
        R('.po-brand .po-break-word'),
    ),
    seller_noise=('Visit the', 'Store', 'Brand:'),
    availability=(
        R('#availability span'),
    ),
    default_availability='Unknown',
    is_prime=(
        R('.a-icon-prime'),
        R('#primeExclusiveBadge'),
    ),
)
