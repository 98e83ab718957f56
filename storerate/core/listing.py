# storerate/core/listing.py
"""
Search, filter and sort for list views.

Lists are fetched whole from Supabase and narrowed in memory. Sorting goes
through an explicit key table per list so every column has a well defined
ordering (strings compare by code point, missing numbers sort first).
"""
from datetime import datetime, timezone
from typing import Any, Callable, Iterable, Literal, Sequence, TypeVar

from storerate.models.store import Store
from storerate.models.user import User
from storerate.schemas.listing import SortConfig

T = TypeVar("T")

SortKey = Callable[[Any], Any]

ALL = "all"

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _text(value: str | None) -> str:
    return value or ""


def _number(value: float | int | None) -> float:
    return float("-inf") if value is None else float(value)


def _timestamp(value: datetime | None) -> datetime:
    if value is None:
        return _EPOCH
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


USER_SORT_KEYS: dict[str, SortKey] = {
    "name": lambda u: _text(u.name),
    "email": lambda u: _text(u.email),
    "address": lambda u: _text(u.address),
    "role": lambda u: u.role.value,
    "created_at": lambda u: _timestamp(u.created_at),
}

STORE_SORT_KEYS: dict[str, SortKey] = {
    "name": lambda s: _text(s.name),
    "email": lambda s: _text(s.email),
    "address": lambda s: _text(s.address),
    "average_rating": lambda s: _number(s.average_rating),
    "total_ratings": lambda s: _number(s.total_ratings),
    "created_at": lambda s: _timestamp(s.created_at),
}

UserSortKey = Literal["name", "email", "address", "role", "created_at"]
StoreSortKey = Literal[
    "name", "email", "address", "average_rating", "total_ratings", "created_at"
]


def _contains(term: str, *values: str | None) -> bool:
    return any(term in _text(v).lower() for v in values)


def filter_users(
    users: Iterable[User],
    search_term: str = "",
    filter_type: str = ALL,
) -> list[User]:
    """
    Keep users whose name, email or address contains `search_term`
    (case-insensitive) and, unless `filter_type` is "all", whose role
    equals `filter_type`.
    """
    term = search_term.lower()
    return [
        u
        for u in users
        if _contains(term, u.name, u.email, u.address)
        and (filter_type == ALL or u.role.value == filter_type)
    ]


def filter_stores(stores: Iterable[Store], search_term: str = "") -> list[Store]:
    """
    Keep stores whose name, email or address contains `search_term`.

    The admin store list shows a filter control too, but no category
    filter is applied to stores.
    """
    term = search_term.lower()
    return [s for s in stores if _contains(term, s.name, s.email, s.address)]


def search_stores_by(
    stores: Sequence[T],
    search_term: str,
    field: Literal["name", "address"] = "name",
) -> list[T]:
    """Store directory search: one field at a time, empty term keeps all."""
    if not search_term:
        return list(stores)
    term = search_term.lower()
    return [s for s in stores if term in _text(getattr(s, field)).lower()]


def sort_records(
    records: Iterable[T],
    sort: SortConfig | None,
    keys: dict[str, SortKey],
) -> list[T]:
    """
    Sort by `sort.key` using the list's key table.

    Stable: records that compare equal keep their incoming order.
    No sort config returns the records unchanged.
    """
    items = list(records)
    if sort is None:
        return items
    try:
        key = keys[sort.key]
    except KeyError:
        raise ValueError(f"Cannot sort by {sort.key!r}")
    return sorted(items, key=key, reverse=sort.direction == "desc")


def toggle_sort(current: SortConfig | None, key: str) -> SortConfig:
    """
    Sort a header click applies: a new column sorts ascending, the
    column already sorted ascending flips to descending.
    """
    if current is not None and current.key == key and current.direction == "asc":
        return SortConfig(key=key, direction="desc")
    return SortConfig(key=key, direction="asc")


def next_sorts(current: SortConfig | None, keys: Iterable[str]) -> dict[str, SortConfig]:
    return {key: toggle_sort(current, key) for key in keys}
