"""Cursor pagination engine shared by every store adapter.

Stores only implement the window primitive: "give me at most N rows whose id
lies strictly past the resume key, matching these criteria, in id order". The
engine turns that primitive into a page with look-ahead-by-one next-page
detection and cursor bookkeeping.

How it works:
    1. Decode the cursor (fail open: malformed means first page).
    2. Fetch ``limit + 1`` rows past the resume key.
    3. More than ``limit`` rows back means a next page exists; the extra
       look-ahead row is dropped from the output.
    4. ``has_previous`` is true exactly when a cursor decoded to a key.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
import logging
from typing import Generic, Protocol, TypeVar

from catalog_service.core.pagination.cursor import parse_cursor
from catalog_service.core.pagination.schemas import (
    DEFAULT_SORT_BY,
    PaginatedResult,
    PaginationQuery,
)
from catalog_service.infra.logging import get_lazy_logger

T = TypeVar("T")
C = TypeVar("C", contravariant=True)
T_co = TypeVar("T_co", covariant=True)

logger = logging.getLogger(__name__)
_lazy = get_lazy_logger(__name__)


class WindowFetcher(Protocol[C, T_co]):
    """Store primitive returning one id-ordered window.

    Implementations must return rows with ``id > resume_key`` (or
    ``id < resume_key`` when ``descending``), all matching ``criteria``,
    ordered by id, and no more than ``limit`` rows. A ``resume_key`` of None
    means "from the beginning".
    """

    async def __call__(
        self,
        resume_key: int | None,
        criteria: C,
        limit: int,
        *,
        descending: bool = False,
    ) -> Sequence[T_co]: ...


class CursorPaginator(Generic[T]):
    """Build cursor pages on top of a store's window primitive.

    Example:
        paginator = CursorPaginator[Product](key=lambda p: p.id)
        page = await paginator.paginate(store.fetch_window, query, criteria)
    """

    def __init__(self, key: Callable[[T], int | None]) -> None:
        self._key = key

    async def paginate(
        self,
        fetch_window: WindowFetcher[C, T],
        query: PaginationQuery,
        criteria: C,
    ) -> PaginatedResult[T]:
        """Fetch one page for ``query`` using ``fetch_window``.

        Args:
            fetch_window: Store window primitive.
            query: Cursor, limit and direction requested by the caller.
            criteria: Normalized filter passed through to the store.

        Returns:
            The page with cursors and navigation flags populated.
        """
        resume_key = parse_cursor(query.cursor)

        if query.sort_by != DEFAULT_SORT_BY:
            _lazy.debug(
                lambda: f"Sort field '{query.sort_by}' requested; ordering by id",
            )

        rows = list(
            await fetch_window(
                resume_key,
                criteria,
                query.limit + 1,
                descending=query.descending,
            )
        )

        has_next = len(rows) > query.limit
        content = rows[: query.limit]
        has_previous = resume_key is not None

        _lazy.debug(
            lambda: (
                f"Page fetched: resume_key={resume_key} limit={query.limit} "
                f"returned={len(rows)} has_next={has_next}"
            ),
        )

        return PaginatedResult.of(
            content,
            limit=query.limit,
            has_next=has_next,
            has_previous=has_previous,
            key=self._key,
        )
