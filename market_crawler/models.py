"""
Data models for product extraction and the catalog row.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class SourcePlatform(Enum):
    """Marketplaces the crawler can read from."""
    SHOPEE = "shopee"
    AMAZON = "amazon"
    EBAY = "ebay"


@dataclass(frozen=True)
class EntryPoint:
    """A listing/search page used as a starting point for link discovery."""
    label: str
    url: str


@dataclass
class ExtractedFields:
    """Fields read off a product page, in source currency."""
    external_id: str = ""
    shop_or_seller_id: str = ""
    title: str = ""
    description: str = ""
    thumbnail_url: str = ""
    image_urls: List[str] = field(default_factory=list)
    video_url: Optional[str] = None
    price: Optional[float] = None
    original_price: Optional[float] = None
    discount_percent: Optional[int] = None
    rating: float = 0.0
    review_count: int = 0
    sold_count: int = 0
    category: str = ""
    seller_name: str = ""
    free_shipping: bool = False
    availability: str = ""
    is_prime: bool = False

    def is_usable(self) -> bool:
        """A page without a title or an id is discarded."""
        return bool(self.title) and bool(self.external_id)


class ProductInsert(BaseModel):
    """Row written to the `products` table."""
    title: str
    slug: str
    description: Optional[str] = None
    thumbnail_url: Optional[str] = None
    video_url: Optional[str] = None
    original_price: Optional[float] = None
    currency: str
    price_krw: Optional[int] = None
    discount_rate: Optional[int] = None
    source_platform: str
    source_url: str
    external_rating: Optional[float] = None
    external_review_count: int = 0
    purchase_count: int = 0
    category_id: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    is_featured: bool = False
    is_active: bool = True


@dataclass
class NormalizedProduct:
    """Canonical product record, independent of the source marketplace."""
    # Identity
    external_id: str
    shop_or_seller_id: str
    title: str
    slug: str
    description: str

    # Media
    thumbnail_url: str
    image_urls: List[str]
    video_url: Optional[str]

    # Price (source currency + converted)
    price: Optional[float]
    original_price: Optional[float]
    discount_percent: Optional[int]
    price_local: Optional[int]
    currency: str

    # Reputation
    rating: float
    review_count: int
    sold_count: int

    # Classification
    category: str
    seller_name: str
    free_shipping: bool
    availability: str
    is_prime: bool

    # Source metadata
    source_platform: SourcePlatform
    source_url: str
    tags: List[str] = field(default_factory=list)
    is_featured: bool = False
    is_active: bool = True
    crawled_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_row(self) -> ProductInsert:
        """Map onto the catalog's `products` columns."""
        return ProductInsert(
            title=self.title,
            slug=self.slug,
            description=self.description or None,
            thumbnail_url=self.thumbnail_url or None,
            video_url=self.video_url,
            original_price=self.original_price if self.original_price is not None else self.price,
            currency=self.currency,
            price_krw=self.price_local,
            discount_rate=self.discount_percent,
            source_platform=self.source_platform.value,
            source_url=self.source_url,
            external_rating=self.rating or None,
            external_review_count=self.review_count or 0,
            purchase_count=self.sold_count or 0,
            category_id=None,
            tags=list(self.tags),
            is_featured=self.is_featured,
            is_active=self.is_active,
        )


@dataclass
class RunReport:
    """Outcome of one pipeline pass."""
    discovered: int = 0
    attempted: int = 0
    succeeded: int = 0
    discarded: int = 0
    failed_writes: int = 0
    errors: int = 0

    @property
    def failed(self) -> int:
        return self.attempted - self.succeeded

    def summary(self) -> str:
        return f"{self.attempted}/{self.discovered} succeeded: {self.succeeded}"

    def to_dict(self) -> dict:
        return {
            "discovered": self.discovered,
            "attempted": self.attempted,
            "succeeded": self.succeeded,
            "discarded": self.discarded,
            "failed_writes": self.failed_writes,
            "errors": self.errors,
        }
