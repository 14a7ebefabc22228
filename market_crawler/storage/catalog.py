"""
Catalog writer: one insert per normalized product.
"""

from typing import Optional

import requests

from ..errors import SupabaseError
from ..logger import get_logger
from ..models import NormalizedProduct
from .supabase_client import SupabaseClient

log = get_logger('storage.catalog')


class CatalogWriter:
    """
    Writes products to the catalog table.

    A rejected insert is logged with the store's message and reported as
    False; it never raises and never retries.
    """

    def __init__(self, client: SupabaseClient, table: str = 'products'):
        self.client = client
        self.table = table

    def write(self, product: NormalizedProduct) -> bool:
        row = product.to_row().model_dump()
        try:
            self.client.insert(self.table, row)
        except SupabaseError as e:
            log.error("Insert failed for %s: %s", product.source_url, e.message)
            return False
        except requests.RequestException as e:
            log.error("Insert failed for %s: %s", product.source_url, e)
            return False

        log.info("Saved: %s", product.slug)
        return True

    def count(self, platform: Optional[str] = None) -> int:
        filters = {'source_platform': platform} if platform else None
        return self.client.count(self.table, filters)
