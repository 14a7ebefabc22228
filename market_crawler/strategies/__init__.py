"""
Field lookup rules, one set per marketplace.
"""

from .base import FieldRules, LookupRule
from .amazon import AMAZON_RULES
from .shopee import SHOPEE_RULES
from .ebay import EBAY_RULES

__all__ = [
    'FieldRules',
    'LookupRule',
    'AMAZON_RULES',
    'SHOPEE_RULES',
    'EBAY_RULES',
]
