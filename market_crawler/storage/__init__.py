"""
Catalog persistence: Supabase REST client and the product writer.
"""

from .catalog import CatalogWriter
from .supabase_client import SupabaseClient

__all__ = ['CatalogWriter', 'SupabaseClient']
