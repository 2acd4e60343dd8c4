"""
Tests for lenient pagination parsing.
"""
import pytest

from jobtrack.core.pagination import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    MAX_PAGE,
    MAX_PAGE_SIZE,
    Pagination,
    calculate_offset,
    calculate_total_pages,
    parse_pagination,
)


def test_defaults_when_absent():
    pagination = parse_pagination()
    assert pagination == Pagination(page=DEFAULT_PAGE, limit=DEFAULT_PAGE_SIZE)
    assert pagination.offset == 0


@pytest.mark.parametrize("raw", ["", "abc", "0", "-3", "1.5", True])
def test_unusable_values_fall_back_to_defaults(raw):
    pagination = parse_pagination(page=raw, limit=raw)
    assert pagination.page == DEFAULT_PAGE
    assert pagination.limit == DEFAULT_PAGE_SIZE


def test_string_values_are_parsed():
    pagination = parse_pagination(page="3", limit=" 25 ")
    assert pagination.page == 3
    assert pagination.limit == 25
    assert pagination.offset == 50


def test_limit_is_clamped():
    assert parse_pagination(limit="1000").limit == MAX_PAGE_SIZE
    assert parse_pagination(limit=MAX_PAGE_SIZE).limit == MAX_PAGE_SIZE


def test_offset_floors_page_at_one():
    assert calculate_offset(0, 10) == 0
    assert calculate_offset(-5, 10) == 0
    assert calculate_offset(2, 10) == 10


@pytest.mark.parametrize(
    "total, limit, pages",
    [(0, 10, 0), (1, 10, 1), (10, 10, 1), (11, 10, 2), (15, 10, 2), (5, 0, 1)],
)
def test_total_pages(total, limit, pages):
    assert calculate_total_pages(total, limit) == pages


def test_meta():
    assert Pagination(page=2, limit=10).meta(15) == {
        "page": 2,
        "limit": 10,
        "total_count": 15,
        "total_pages": 2,
    }


@pytest.mark.parametrize("raw", ["99999999999999999999999", "9223372036854775807", str(MAX_PAGE + 1)])
def test_page_is_clamped(raw):
    pagination = parse_pagination(page=raw, limit="100")
    assert pagination.page == MAX_PAGE
    assert pagination.offset < 2 ** 63
