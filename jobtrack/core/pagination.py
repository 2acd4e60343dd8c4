"""
Pagination policy for list endpoints.

Page and limit come straight from query strings and are never a reason to
reject a request: anything unusable falls back to the defaults, limits
above MAX_PAGE_SIZE and pages above MAX_PAGE are clamped.
"""
import math
from dataclasses import dataclass
from typing import Any, Optional

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
# Largest page a client can ask for; keeps the offset within a signed 64-bit column
MAX_PAGE = 2_147_483_647


def _positive_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        return None
    return number if number > 0 else None


def calculate_offset(page: int, limit: int) -> int:
    if page < 1:
        page = 1
    return (page - 1) * limit


def calculate_total_pages(total_count: int, limit: int) -> int:
    if limit <= 0:
        return 1
    return math.ceil(total_count / limit)


@dataclass(frozen=True)
class Pagination:
    """Effective (post-clamp) page and limit."""

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_PAGE_SIZE

    @property
    def offset(self) -> int:
        return calculate_offset(self.page, self.limit)

    def meta(self, total_count: int) -> dict:
        return {
            "page": self.page,
            "limit": self.limit,
            "total_count": total_count,
            "total_pages": calculate_total_pages(total_count, self.limit),
        }


def parse_pagination(page: Any = None, limit: Any = None) -> Pagination:
    """
    Build a Pagination from untrusted page/limit values.

    Args:
        page: Requested page (str, int or None)
        limit: Requested page size (str, int or None)

    Returns:
        Pagination with the values that will actually be used
    """
    effective_page = _positive_int(page) or DEFAULT_PAGE
    effective_limit = _positive_int(limit) or DEFAULT_PAGE_SIZE
    if effective_limit > MAX_PAGE_SIZE:
        effective_limit = MAX_PAGE_SIZE
    if effective_page > MAX_PAGE:
        effective_page = MAX_PAGE
    return Pagination(page=effective_page, limit=effective_limit)
