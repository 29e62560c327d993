# backend/services/pagination.py
import math
from dataclasses import dataclass
from typing import Any, Optional

from sqlalchemy import func

from config import settings

# largest OFFSET a 64-bit signed integer column type accepts
MAX_OFFSET = 2 ** 63 - 1


def coerce_positive_int(value: Any, default: int) -> int:
    """Lenient integer parsing for query strings: anything that is not a
    positive integer falls back to ``default``."""
    if value is None or isinstance(value, bool):
        return default
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


@dataclass(frozen=True)
class PageRequest:
    page: int
    limit: int

    @classmethod
    def from_query(cls, page: Any = None, limit: Any = None) -> "PageRequest":
        limit = min(coerce_positive_int(limit, settings.DEFAULT_PAGE_SIZE), settings.MAX_PAGE_SIZE)
        page = coerce_positive_int(page, settings.DEFAULT_PAGE)
        # pages past the last representable offset are empty anyway
        page = min(page, MAX_OFFSET // limit + 1)
        return cls(page=page, limit=limit)

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit

    def total_pages(self, total_count: int) -> int:
        return math.ceil(total_count / self.limit)


def normalize_search(search: Optional[str]) -> Optional[str]:
    if search is None:
        return None
    search = search.strip()
    return search or None


def contains_pattern(term: str) -> str:
    """LIKE pattern matching ``term`` anywhere, escaped with backslashes."""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def contains_filter(db, column, term: str):
    """Case-insensitive substring filter on ``column``.

    SQLite's LIKE only folds ASCII, so there both sides go through the
    ``casefold`` function that ``database.session`` registers on every
    connection. Other backends use ILIKE.
    """
    if db.get_bind().dialect.name == "sqlite":
        return func.casefold(column).like(contains_pattern(term.casefold()), escape="\\")
    return column.ilike(contains_pattern(term), escape="\\")
