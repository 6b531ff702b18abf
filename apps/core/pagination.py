"""Offset/limit pagination shared by the list endpoints."""
import math
from dataclasses import dataclass
from typing import Optional, Union

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
# Keeps (page - 1) * limit + limit inside a signed 64-bit OFFSET/LIMIT.
MAX_VALUE = 2 ** 31 - 1


def parse_positive_int(value: Union[str, int, None], default: int) -> int:
    """
    Lenient query-string integer parsing.

    Absent, non-numeric or non-positive values fall back to `default`, and
    values above MAX_VALUE are clamped to it. A clamped limit still covers
    every row, a clamped page is still past the last one.
    Leading digits are honoured ("3abc" -> 3), the same way browsers and
    most REST clients expect `?page=` to behave.
    """
    if value is None:
        return default
    if isinstance(value, int):
        return min(value, MAX_VALUE) if value > 0 else default

    text = str(value).strip()
    digits = ''
    for index, char in enumerate(text):
        if char.isdigit() or (index == 0 and char in '+-'):
            digits += char
        else:
            break
    try:
        number = int(digits)
    except ValueError:
        return default
    return min(number, MAX_VALUE) if number > 0 else default


@dataclass(frozen=True)
class Page:
    page: int
    limit: int

    @classmethod
    def from_query(cls, page: Optional[str] = None, limit: Optional[str] = None) -> "Page":
        return cls(
            page=parse_positive_int(page, DEFAULT_PAGE),
            limit=parse_positive_int(limit, DEFAULT_LIMIT),
        )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def slice(self, queryset):
        return queryset[self.offset:self.offset + self.limit]

    def total_pages(self, total: int) -> int:
        return math.ceil(total / self.limit)
