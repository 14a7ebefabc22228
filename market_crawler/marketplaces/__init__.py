"""
Marketplace registry.
"""

from typing import Dict

from ..errors import ConfigError
from .base import MarketplaceConfig, SEARCH_MODE
from .amazon import AMAZON
from .ebay import EBAY
from .shopee import SHOPEE

MARKETPLACES: Dict[str, MarketplaceConfig] = {
    SHOPEE.name: SHOPEE,
    AMAZON.name: AMAZON,
    EBAY.name: EBAY,
}


def get_marketplace(name: str) -> MarketplaceConfig:
    """Look up a marketplace by name (case-insensitive)."""
    config = MARKETPLACES.get((name or '').lower())
    if config is None:
        raise ConfigError(f"Unknown marketplace {name!r} (choose from: {', '.join(MARKETPLACES)})")
    return config


__all__ = ['MarketplaceConfig', 'MARKETPLACES', 'SEARCH_MODE', 'get_marketplace', 'AMAZON', 'SHOPEE', 'EBAY']
