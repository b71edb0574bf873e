"""Cursor-based (keyset) pagination over id-ordered stores.

- Stable: pages never overlap and never skip rows that existed for the whole scan
- Performant: ``WHERE id > :key ORDER BY id LIMIT n+1`` instead of OFFSET scans
- Lenient: an unreadable cursor restarts from the first page

Usage:
    paginator = CursorPaginator[Product](key=lambda p: p.id)
    page = await paginator.paginate(store.fetch_window, query, criteria)
"""

from catalog_service.core.pagination.cursor import CursorCodec, encode_cursor, parse_cursor
from catalog_service.core.pagination.engine import CursorPaginator, WindowFetcher
from catalog_service.core.pagination.schemas import (
    DEFAULT_LIMIT,
    MAX_LIMIT,
    MIN_LIMIT,
    PaginatedResult,
    PaginationQuery,
)

__all__ = [
    "DEFAULT_LIMIT",
    "MAX_LIMIT",
    "MIN_LIMIT",
    "CursorCodec",
    "CursorPaginator",
    "PaginatedResult",
    "PaginationQuery",
    "WindowFetcher",
    "encode_cursor",
    "parse_cursor",
]
