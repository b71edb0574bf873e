"""Pagination value types.

``PaginationQuery`` is what a caller asks for; ``PaginatedResult`` is the page
a store hands back. Both are immutable.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

from catalog_service.core.exceptions import InvalidArgumentException
from catalog_service.core.pagination.cursor import encode_cursor

T = TypeVar("T")
U = TypeVar("U")

MIN_LIMIT = 1
MAX_LIMIT = 100
DEFAULT_LIMIT = 20
DEFAULT_SORT_BY = "id"
DEFAULT_SORT_DIR = "asc"

SortDirection = Literal["asc", "desc"]


class PaginationQuery(BaseModel):
    """Requested page window.

    Blank ``sort_by``/``sort_dir`` fall back to ``id``/``asc``. A ``limit``
    outside [1, 100] is rejected with InvalidArgumentException rather than
    clamped; clamping of raw request input happens before construction.

    Attributes:
        cursor: Opaque cursor from a previous page, or None for the first page.
        limit: Maximum number of items in the page.
        sort_by: Requested sort field. Ordering is always keyed on ``id``.
        sort_dir: ``asc`` (default) or ``desc``.
    """

    cursor: str | None = None
    limit: int = DEFAULT_LIMIT
    sort_by: str = DEFAULT_SORT_BY
    sort_dir: SortDirection = DEFAULT_SORT_DIR

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _apply_defaults(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        sort_by = data.get("sort_by")
        if sort_by is None or not str(sort_by).strip():
            data["sort_by"] = DEFAULT_SORT_BY
        else:
            data["sort_by"] = str(sort_by).strip()
        sort_dir = data.get("sort_dir")
        if sort_dir is None or not str(sort_dir).strip():
            data["sort_dir"] = DEFAULT_SORT_DIR
        else:
            normalized = str(sort_dir).strip().lower()
            if normalized not in ("asc", "desc"):
                msg = f"Invalid sort direction: {sort_dir}"
                raise InvalidArgumentException(
                    detail=msg, extra={"field": "sortDir", "value": sort_dir},
                )
            data["sort_dir"] = normalized
        return data

    @model_validator(mode="after")
    def _check_limit(self) -> PaginationQuery:
        if not MIN_LIMIT <= self.limit <= MAX_LIMIT:
            msg = f"Limit must be between {MIN_LIMIT} and {MAX_LIMIT}"
            raise InvalidArgumentException(
                detail=msg, extra={"field": "limit", "value": self.limit},
            )
        return self

    @property
    def descending(self) -> bool:
        return self.sort_dir == "desc"


class PaginatedResult(BaseModel, Generic[T]):
    """One page of a cursor-paginated scan.

    Invariants (established by :meth:`of`):
        - ``size == len(content)``
        - ``next_cursor`` is the key of the last item, None for an empty page
        - ``previous_cursor`` is the key of the first item, only when
          ``has_previous`` is set and the page is non-empty
    """

    content: list[T] = Field(default_factory=list)
    next_cursor: str | None = None
    previous_cursor: str | None = None
    has_next: bool = False
    has_previous: bool = False
    size: int = 0
    limit: int = DEFAULT_LIMIT

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @classmethod
    def of(
        cls,
        content: Sequence[T],
        *,
        limit: int,
        has_next: bool,
        has_previous: bool,
        key: Callable[[T], int | None],
    ) -> PaginatedResult[T]:
        """Build a page and derive its cursors from the content keys."""
        items = list(content)
        next_cursor = encode_cursor(key(items[-1])) if items else None
        previous_cursor = encode_cursor(key(items[0])) if has_previous and items else None
        return cls(
            content=items,
            next_cursor=next_cursor,
            previous_cursor=previous_cursor,
            has_next=has_next,
            has_previous=has_previous,
            size=len(items),
            limit=limit,
        )

    def map(self, func: Callable[[T], U]) -> PaginatedResult[U]:
        """Return the same page with every item converted by ``func``."""
        return PaginatedResult[Any](
            content=[func(item) for item in self.content],
            next_cursor=self.next_cursor,
            previous_cursor=self.previous_cursor,
            has_next=self.has_next,
            has_previous=self.has_previous,
            size=self.size,
            limit=self.limit,
        )
