"""
Lightweight client for the Supabase REST API (PostgREST).
"""

from typing import Any, Dict, List, Optional

import requests

from ..errors import SupabaseError
from ..logger import get_logger

log = get_logger('storage.supabase')

FILTER_OPERATORS = ('eq', 'neq', 'gt', 'lt', 'gte', 'lte', 'like', 'ilike', 'in', 'is')


def build_filters(filters: Optional[Dict[str, Any]]) -> Dict[str, str]:
    """PostgREST query params; bare values become `eq.` filters."""
    params = {}
    for key, val in (filters or {}).items():
        if isinstance(val, str) and '.' in val and val.split('.')[0] in FILTER_OPERATORS:
            params[key] = val
        else:
            params[key] = f"eq.{val}"
    return params


def parse_content_range(header: Optional[str]) -> int:
    """Total from a Content-Range header like '0-24/3573' or '*/0'."""
    if not header or '/' not in header:
        return 0
    total = header.rsplit('/', 1)[1]
    return int(total) if total.isdigit() else 0


class SupabaseClient:
    """
    Service-role client for one Supabase project.

    Usage:
        client = SupabaseClient(settings.supabase_url, settings.supabase_key)
        client.insert('products', row)
        client.count('products', {'source_platform': 'shopee'})
    """

    def __init__(self, url: str, key: str, session: Optional[requests.Session] = None, timeout: float = 30):
        self.url = url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            'apikey': key,
            'Authorization': f"Bearer {key}",
            'Content-Type': 'application/json',
        })

    def _endpoint(self, table: str) -> str:
        return f"{self.url}/rest/v1/{table}"

    def _check(self, response: requests.Response, action: str, table: str) -> None:
        if response.status_code < 400:
            return
        message, code = response.text or response.reason or 'request failed', None
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            message = body.get('message') or body.get('error') or message
            code = body.get('code')
        log.debug("%s on %s failed: %s %s", action, table, response.status_code, message)
        raise SupabaseError(message, status_code=response.status_code, code=code)

    def insert(self, table: str, record: Dict[str, Any]) -> Dict[str, Any]:
        """Insert one row; returns the stored row."""
        response = self.session.post(
            self._endpoint(table),
            json=record,
            headers={'Prefer': 'return=representation'},
            timeout=self.timeout,
        )
        self._check(response, 'insert', table)
        rows = response.json() if response.content else []
        if isinstance(rows, list):
            return rows[0] if rows else {}
        return rows

    def select(
        self,
        table: str,
        filters: Optional[Dict[str, Any]] = None,
        columns: str = '*',
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """Query a table."""
        params = {'select': columns}
        params.update(build_filters(filters))
        if limit:
            params['limit'] = str(limit)

        response = self.session.get(self._endpoint(table), params=params, timeout=self.timeout)
        self._check(response, 'select', table)
        return response.json()

    def count(self, table: str, filters: Optional[Dict[str, Any]] = None) -> int:
        """Exact row count without fetching rows."""
        params = {'select': 'id'}
        params.update(build_filters(filters))

        response = self.session.head(
            self._endpoint(table),
            params=params,
            headers={'Prefer': 'count=exact'},
            timeout=self.timeout,
        )
        self._check(response, 'count', table)
        return parse_content_range(response.headers.get('Content-Range'))
