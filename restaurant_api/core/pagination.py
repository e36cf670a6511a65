# restaurant_api/core/pagination.py

import math
from dataclasses import dataclass

from restaurant_api.core.errors import ValidationError

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 50


@dataclass(frozen=True)
class PageWindow:
    page: int
    offset: int
    safe_limit: int

    def total_pages(self, total_count: int) -> int:
        return total_pages(total_count, self.safe_limit)


def _positive_int(value, default: int, name: str) -> int:
    if value is None:
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be a positive integer")
    if number < 1:
        raise ValidationError(f"{name} must be a positive integer")
    return number


def paginate(page=DEFAULT_PAGE, limit=DEFAULT_LIMIT, max_limit: int = MAX_LIMIT) -> PageWindow:
    """
    Turn a 1-indexed page and a limit into an offset window.

    A limit above max_limit is refused instead of clamped, the clamp is
    only kept so offset arithmetic never sees an oversized window.
    """
    page = _positive_int(page, DEFAULT_PAGE, "page")
    limit = _positive_int(limit, DEFAULT_LIMIT, "limit")

    if limit > max_limit:
        raise ValidationError(f"Limit reached, maximum of {max_limit}")

    safe_limit = min(limit, max_limit)

    return PageWindow(page=page, offset=(page - 1) * safe_limit, safe_limit=safe_limit)


def total_pages(total_count: int, safe_limit: int) -> int:
    return math.ceil(total_count / safe_limit)
