"""
Filtering and ordering for the tables and charts of the dashboard.

Both operations work on any collection of records or metrics: pydantic
models, plain objects or mappings. The selected sort column and
direction are owned by the caller.
"""

import math
import re
from collections.abc import Iterable, Mapping
from datetime import date
from functools import cmp_to_key
from typing import Any, Literal, Optional, TypeVar
from unicodedata import combining, normalize

from .schemas import FilterState

T = TypeVar("T")

SortDirection = Literal["asc", "desc"]

# Fields compared by the number embedded in the name ("Item 2" < "Item 10").
NAME_FIELDS = frozenset({"item_name"})

_DIGITS = re.compile(r"\d+")


def _has_field(item: Any, field: str) -> bool:
    if isinstance(item, Mapping):
        return field in item
    return hasattr(item, field)


def _field_value(item: Any, field: str) -> Any:
    if isinstance(item, Mapping):
        return item.get(field)
    return getattr(item, field, None)


def _within_range(iso_date: str, start: Optional[date], end: Optional[date]) -> bool:
    day = date.fromisoformat(iso_date)
    if start is not None and day < start:
        return False
    if end is not None and day > end:
        return False
    return True


def matches_filters(item: Any, filters: FilterState) -> bool:
    """
    AND of every criterion that is set. A criterion only constrains items
    carrying the field it looks at, so one FilterState can drive every view.
    """
    if filters.item_name and _has_field(item, "item_name"):
        name = _field_value(item, "item_name") or ""
        if filters.item_name.lower() not in name.lower():
            return False

    for field in ("category", "abc_class", "item_id"):
        wanted = getattr(filters, field)
        if wanted and _has_field(item, field) and _field_value(item, field) != wanted:
            return False

    start, end = filters.date_range
    if (start is not None or end is not None) and _has_field(item, "date"):
        if not _within_range(_field_value(item, "date"), start, end):
            return False

    return True


def filter_items(items: Iterable[T], filters: Optional[FilterState] = None) -> list[T]:
    """Returns the items matching `filters`; with nothing set, every item in order."""
    if filters is None:
        return list(items)
    return [item for item in items if matches_filters(item, filters)]


def extract_product_number(name: Any) -> int:
    """First run of digits in the name, or 0 when it has none."""
    match = _DIGITS.search(str(name))
    return int(match.group(0)) if match else 0


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_nan(value: Any) -> bool:
    return isinstance(value, float) and math.isnan(value)


def collation_key(text: str) -> tuple[str, str, str]:
    """
    Multi-level sort key for display text: letters first (ignoring accents
    and case), then accents, then case with lowercase ahead of uppercase.
    So "apple" < "Apple" < "banana" < "Cherry" < "éclair" < "Fig".
    """
    decomposed = normalize("NFKD", text)
    base = "".join(ch for ch in decomposed if not combining(ch))
    return base.casefold(), decomposed.casefold(), decomposed.swapcase()


def _cmp(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


def _compare(value_a: Any, value_b: Any, field: str, sign: int) -> int:
    if field in NAME_FIELDS:
        return sign * _cmp(extract_product_number(value_a), extract_product_number(value_b))

    # NaN goes last whichever way the column is sorted, whatever it sits next to.
    a_nan, b_nan = _is_nan(value_a), _is_nan(value_b)
    if a_nan or b_nan:
        return a_nan - b_nan

    if _is_number(value_a) and _is_number(value_b):
        return sign * _cmp(value_a, value_b)

    text_a = "" if value_a is None else str(value_a)
    text_b = "" if value_b is None else str(value_b)
    return sign * _cmp(collation_key(text_a), collation_key(text_b))


def sort_items(items: Iterable[T], field: str, direction: SortDirection = "asc") -> list[T]:
    """
    Stable sort on one field. Item names sort by their embedded number,
    numbers numerically with NaN at the end, anything else as text in
    dictionary order (see `collation_key`).
    """
    if direction not in ("asc", "desc"):
        raise ValueError(f"Unknown sort direction: {direction!r}")
    sign = 1 if direction == "asc" else -1

    def comparator(a: T, b: T) -> int:
        return _compare(_field_value(a, field), _field_value(b, field), field, sign)

    return sorted(items, key=cmp_to_key(comparator))
