"""
Generic filter / sort / paginate engine.

The engine knows nothing about producers or companies. It works on any item
type through a ``CatalogAccessors`` set that says how to read the display name,
facet values, ratings and searchable text of an item, and which sort orders
are available. Sort orders are key builders: given the accessor set they return
a key function whose tuples encode the primary key and the tie-break chain.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Iterable, List, Mapping, Optional, Sequence, TypeVar

from services.catalog.collation import collation_key, fold
from services.catalog.dates import timestamp_or_earliest
from services.catalog.derivation import build_facet_options
from services.catalog.formatting import has_rating

logger = logging.getLogger(__name__)

T = TypeVar("T")
KeyFunc = Callable[[Any], tuple]
SortOrder = Callable[["CatalogAccessors"], KeyFunc]


def _no_identity(item: Any) -> str:
    return ""


@dataclass(frozen=True)
class CatalogAccessors(Generic[T]):
    name: Callable[[T], str]
    region: Callable[[T], str]
    department: Callable[[T], str]
    search_fields: Callable[[T], Sequence[str]]
    rating: Callable[[T], Optional[float]]
    rating_count: Callable[[T], Optional[int]]
    sort_orders: Mapping[str, SortOrder] = field(default_factory=dict)
    default_sort: str = "name"
    identity: Callable[[T], str] = _no_identity

    def resolve_sort(self, sort_key: Any) -> str:
        key = getattr(sort_key, "value", sort_key)
        if key in self.sort_orders:
            return key
        logger.debug(f"Unknown sort key {sort_key!r}, using {self.default_sort!r}")
        return self.default_sort


# Sort orders. Every key ends with the same tail (folded name, raw name,
# identity) so ties are broken the same way in every order and two distinct
# items never compare equal.

_MISSING_LAST = 1
_PRESENT = 0


def _tail(acc: CatalogAccessors, item: Any) -> tuple:
    name = acc.name(item)
    return (collation_key(name), name, acc.identity(item))


def by_name(acc: CatalogAccessors) -> KeyFunc:
    return lambda item: _tail(acc, item)


def by_text(extract: Callable[[Any], str]) -> SortOrder:
    def order(acc: CatalogAccessors) -> KeyFunc:
        return lambda item: (collation_key(extract(item)), *_tail(acc, item))

    return order


def by_facet(facet: str) -> SortOrder:
    """Ascending by ``region`` or ``department``; unknown values after all named ones."""

    def order(acc: CatalogAccessors) -> KeyFunc:
        getter = getattr(acc, facet)

        def key(item: Any) -> tuple:
            value = getter(item)
            bucket = _PRESENT if value else _MISSING_LAST
            return (bucket, collation_key(value), *_tail(acc, item))

        return key

    return order


def by_rating(descending: bool) -> SortOrder:
    """Average then count, in the same direction. Unrated items form the lowest bucket."""
    sign = -1 if descending else 1

    def order(acc: CatalogAccessors) -> KeyFunc:
        def key(item: Any) -> tuple:
            avg, count = acc.rating(item), acc.rating_count(item)
            if not has_rating(avg, count):
                return (-sign, 0.0, 0, *_tail(acc, item))
            return (sign, sign * avg, sign * count, *_tail(acc, item))

        return key

    return order


def newest_first(extract: Callable[[Any], Optional[str]]) -> SortOrder:
    def order(acc: CatalogAccessors) -> KeyFunc:
        return lambda item: (-timestamp_or_earliest(extract(item)), *_tail(acc, item))

    return order


def largest_first(extract: Callable[[Any], int]) -> SortOrder:
    def order(acc: CatalogAccessors) -> KeyFunc:
        return lambda item: (-extract(item), *_tail(acc, item))

    return order


def matches_query(item: Any, acc: CatalogAccessors, query: str) -> bool:
    needle = fold(query.strip())
    if not needle:
        return True
    return any(needle in fold(text) for text in acc.search_fields(item))


def filter_items(
    items: Iterable[T],
    acc: CatalogAccessors[T],
    query: str = "",
    region: str = "",
    departments: Sequence[str] = (),
) -> List[T]:
    result = [item for item in items if matches_query(item, acc, query or "")]
    if region:
        result = [item for item in result if acc.region(item) == region]
    if departments:
        wanted = set(departments)
        result = [item for item in result if acc.department(item) in wanted]
    return result


def sort_items(items: Iterable[T], acc: CatalogAccessors[T], sort_key: Any) -> List[T]:
    order = acc.sort_orders.get(acc.resolve_sort(sort_key))
    if order is None:
        return list(items)
    return sorted(items, key=order(acc))


def region_options(items: Iterable[T], acc: CatalogAccessors[T]) -> List[str]:
    return build_facet_options(items, acc.region)


def department_options(items: Iterable[T], acc: CatalogAccessors[T], region: str = "") -> List[str]:
    """Departments reachable under ``region``; every department when no region is set."""
    if region:
        items = [item for item in items if acc.region(item) == region]
    return build_facet_options(items, acc.department)


def prune_departments(selected: Sequence[str], options: Sequence[str]) -> List[str]:
    allowed = set(options)
    return [d for d in selected if d in allowed]


@dataclass(frozen=True)
class Page(Generic[T]):
    items: List[T]
    page: int
    total_pages: int
    total: int
    page_size: int

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


def count_pages(total: int, page_size: int) -> int:
    return max(1, math.ceil(total / page_size))


def paginate(items: Sequence[T], requested_page: int, page_size: int) -> Page[T]:
    if page_size < 1:
        raise ValueError(f"page_size must be positive, got {page_size}")
    total = len(items)
    pages = count_pages(total, page_size)
    page = min(max(1, int(requested_page)), pages)
    start = (page - 1) * page_size
    return Page(
        items=list(items[start:start + page_size]),
        page=page,
        total_pages=pages,
        total=total,
        page_size=page_size,
    )


@dataclass(frozen=True)
class QueryResult(Generic[T]):
    filtered: List[T]
    page: Page[T]
    sort_key: str


def run_query(
    items: Sequence[T],
    acc: CatalogAccessors[T],
    *,
    query: str = "",
    region: str = "",
    departments: Sequence[str] = (),
    sort_key: Any = None,
    page: int = 1,
    page_size: int = 12,
) -> QueryResult[T]:
    resolved = acc.resolve_sort(sort_key)
    filtered = sort_items(filter_items(items, acc, query, region, departments), acc, resolved)
    result = paginate(filtered, page, page_size)
    logger.debug(
        f"Query q={query!r} region={region!r} departments={list(departments)} sort={resolved}: "
        f"{len(filtered)}/{len(items)} items, page {result.page}/{result.total_pages}"
    )
    return QueryResult(filtered=filtered, page=result, sort_key=resolved)
