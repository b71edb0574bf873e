"""Unit tests for cursor-based pagination."""
from __future__ import annotations

from dataclasses import dataclass

import pytest

from catalog_service.core.exceptions import InvalidArgumentException
from catalog_service.core.pagination import (
    CursorCodec,
    CursorPaginator,
    PaginatedResult,
    PaginationQuery,
    encode_cursor,
    parse_cursor,
)


@dataclass(frozen=True)
class Row:
    id: int
    active: bool = True


class InMemoryWindow:
    """Window primitive over a list of rows, recording each call."""

    def __init__(self, rows: list[Row]) -> None:
        self.rows = sorted(rows, key=lambda row: row.id)
        self.calls: list[tuple[int | None, int, bool]] = []

    async def __call__(self, resume_key, criteria, limit, *, descending=False):
        self.calls.append((resume_key, limit, descending))
        rows = [row for row in self.rows if row.active is criteria]
        if descending:
            rows = list(reversed(rows))
            if resume_key is not None:
                rows = [row for row in rows if row.id < resume_key]
        elif resume_key is not None:
            rows = [row for row in rows if row.id > resume_key]
        return rows[:limit]


# ──────────────────────────────────────────────────────────────
# Test CursorCodec
# ──────────────────────────────────────────────────────────────


class TestCursorCodec:
    """Tests for CursorCodec encode/decode."""

    def test_encode_is_decimal_id(self):
        assert CursorCodec.encode(42) == "42"

    def test_decode_ignores_surrounding_whitespace(self):
        assert CursorCodec.decode(" 17 ") == 17

    @pytest.mark.parametrize("cursor", ["abc", "1.5", "", "12abc", "9223372036854775808"])
    def test_decode_rejects_non_integer_or_out_of_range(self, cursor):
        with pytest.raises(ValueError):
            CursorCodec.decode(cursor)

    def test_encode_cursor_passes_none_through(self):
        assert encode_cursor(None) is None
        assert encode_cursor(5) == "5"


class TestParseCursor:
    """parse_cursor fails open to the first page."""

    @pytest.mark.parametrize("cursor", [None, "", "   "])
    def test_absent_cursor_means_first_page(self, cursor):
        assert parse_cursor(cursor) is None

    def test_malformed_cursor_means_first_page(self, caplog):
        with caplog.at_level("WARNING"):
            assert parse_cursor("not-a-number") is None
        assert "Invalid cursor format" in caplog.text

    def test_valid_cursor(self):
        assert parse_cursor("3") == 3


# ──────────────────────────────────────────────────────────────
# Test PaginationQuery
# ──────────────────────────────────────────────────────────────


class TestPaginationQuery:
    def test_defaults(self):
        query = PaginationQuery()

        assert query.cursor is None
        assert query.limit == 20
        assert query.sort_by == "id"
        assert query.sort_dir == "asc"
        assert query.descending is False

    def test_blank_sort_fields_fall_back_to_defaults(self):
        query = PaginationQuery(sort_by="  ", sort_dir="")

        assert query.sort_by == "id"
        assert query.sort_dir == "asc"

    def test_sort_direction_is_case_insensitive(self):
        assert PaginationQuery(sort_dir="DESC").descending is True

    def test_unknown_sort_direction_is_invalid_argument(self):
        with pytest.raises(InvalidArgumentException):
            PaginationQuery(sort_dir="sideways")

    @pytest.mark.parametrize("limit", [0, 101, -5])
    def test_limit_out_of_range_is_invalid_argument(self, limit):
        with pytest.raises(InvalidArgumentException):
            PaginationQuery(limit=limit)

    @pytest.mark.parametrize("limit", [1, 100])
    def test_limit_bounds_are_inclusive(self, limit):
        assert PaginationQuery(limit=limit).limit == limit


# ──────────────────────────────────────────────────────────────
# Test PaginatedResult
# ──────────────────────────────────────────────────────────────


class TestPaginatedResult:
    def test_of_derives_cursors_from_content(self):
        page = PaginatedResult.of(
            [Row(3), Row(4)], limit=2, has_next=True, has_previous=True, key=lambda r: r.id,
        )

        assert page.size == 2
        assert page.next_cursor == "4"
        assert page.previous_cursor == "3"

    def test_previous_cursor_only_when_has_previous(self):
        page = PaginatedResult.of(
            [Row(1)], limit=2, has_next=False, has_previous=False, key=lambda r: r.id,
        )

        assert page.previous_cursor is None
        assert page.next_cursor == "1"

    def test_empty_page_has_no_cursors(self):
        page = PaginatedResult.of(
            [], limit=2, has_next=False, has_previous=True, key=lambda r: r.id,
        )

        assert page.size == 0
        assert page.next_cursor is None
        assert page.previous_cursor is None

    def test_map_keeps_navigation(self):
        page = PaginatedResult.of(
            [Row(1), Row(2)], limit=2, has_next=True, has_previous=False, key=lambda r: r.id,
        )

        mapped = page.map(lambda row: row.id * 10)

        assert mapped.content == [10, 20]
        assert mapped.next_cursor == "2"
        assert mapped.has_next is True


# ──────────────────────────────────────────────────────────────
# Test CursorPaginator
# ──────────────────────────────────────────────────────────────


class TestCursorPaginator:
    @pytest.fixture
    def paginator(self) -> CursorPaginator[Row]:
        return CursorPaginator(key=lambda row: row.id)

    @pytest.fixture
    def window(self) -> InMemoryWindow:
        return InMemoryWindow([Row(i) for i in range(1, 6)])

    async def test_walks_five_rows_in_pages_of_two(self, paginator, window):
        first = await paginator.paginate(window, PaginationQuery(limit=2), True)
        assert [row.id for row in first.content] == [1, 2]
        assert first.has_next is True
        assert first.has_previous is False
        assert first.next_cursor == "2"

        second = await paginator.paginate(
            window, PaginationQuery(cursor=first.next_cursor, limit=2), True,
        )
        assert [row.id for row in second.content] == [3, 4]
        assert second.has_next is True
        assert second.has_previous is True
        assert second.previous_cursor == "3"

        third = await paginator.paginate(
            window, PaginationQuery(cursor=second.next_cursor, limit=2), True,
        )
        assert [row.id for row in third.content] == [5]
        assert third.has_next is False
        assert third.has_previous is True

    async def test_pages_never_overlap(self, paginator):
        window = InMemoryWindow([Row(i) for i in range(1, 24)])
        seen: list[int] = []
        cursor = None
        while True:
            page = await paginator.paginate(window, PaginationQuery(cursor=cursor, limit=5), True)
            seen.extend(row.id for row in page.content)
            if not page.has_next:
                break
            cursor = page.next_cursor

        assert seen == list(range(1, 24))

    async def test_fetches_one_extra_row(self, paginator, window):
        await paginator.paginate(window, PaginationQuery(limit=2), True)

        assert window.calls == [(None, 3, False)]

    async def test_exact_fit_has_no_next_page(self, paginator):
        window = InMemoryWindow([Row(1), Row(2)])

        page = await paginator.paginate(window, PaginationQuery(limit=2), True)

        assert page.size == 2
        assert page.has_next is False

    async def test_cursor_past_the_end_is_empty(self, paginator, window):
        page = await paginator.paginate(window, PaginationQuery(cursor="5", limit=2), True)

        assert page.content == []
        assert page.has_next is False
        assert page.has_previous is True
        assert page.next_cursor is None

    async def test_malformed_cursor_starts_over(self, paginator, window):
        page = await paginator.paginate(window, PaginationQuery(cursor="garbage", limit=2), True)

        assert [row.id for row in page.content] == [1, 2]
        assert page.has_previous is False

    async def test_criteria_reach_the_window(self, paginator):
        window = InMemoryWindow([Row(1), Row(2, active=False), Row(3)])

        page = await paginator.paginate(window, PaginationQuery(limit=10), False)

        assert [row.id for row in page.content] == [2]

    async def test_descending_seeks_below_the_cursor(self, paginator, window):
        page = await paginator.paginate(
            window, PaginationQuery(cursor="4", limit=2, sort_dir="desc"), True,
        )

        assert [row.id for row in page.content] == [3, 2]
        assert window.calls == [(4, 3, True)]
