"""
View controller for the producers catalog.

The controller state is a frozen ``CatalogState``. State transitions are pure
functions (``switch_view``, ``select_region`` ...) and the rendered result is
``derive_view(catalog, state)``, so every UI binding only has to store a state
and call ``derive_view`` after each transition. ``CatalogController`` wraps
those functions for callers that prefer a mutable object with setters and
page-change listeners.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field, replace
from typing import Any, Callable, List, Optional, Sequence, Tuple

from config import settings
from models.domain import DEFAULT_SORT_KEYS, ViewMode
from models.schemas import CommerceRow, Producer
from services.catalog.accessors import COMMERCE_ACCESSORS, PRODUCER_ACCESSORS
from services.catalog.debounce import QueryDebouncer
from services.catalog.derivation import CatalogStats, catalog_stats, flatten
from services.catalog.engine import (
    CatalogAccessors,
    count_pages,
    department_options,
    filter_items,
    prune_departments,
    region_options,
    run_query,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Catalog:
    """Both views of one fetched producer collection, derived once."""

    producers: Tuple[Producer, ...] = ()
    rows: Tuple[CommerceRow, ...] = ()
    stats: CatalogStats = field(default_factory=lambda: CatalogStats(0, 0, 0, 0))

    @classmethod
    def build(cls, producers: Sequence[Producer]) -> "Catalog":
        producers = tuple(producers)
        return cls(producers=producers, rows=tuple(flatten(producers)), stats=catalog_stats(producers))

    def items(self, view: ViewMode) -> Sequence[Any]:
        return self.producers if view == ViewMode.PRODUCER else self.rows


def accessors_for(view: ViewMode) -> CatalogAccessors:
    return PRODUCER_ACCESSORS if view == ViewMode.PRODUCER else COMMERCE_ACCESSORS


@dataclass(frozen=True)
class CatalogState:
    view: ViewMode = ViewMode.PRODUCER
    query_input: str = ""
    query: str = ""
    region: str = ""
    departments: Tuple[str, ...] = ()
    producer_sort: str = DEFAULT_SORT_KEYS[ViewMode.PRODUCER].value
    commerce_sort: str = DEFAULT_SORT_KEYS[ViewMode.COMMERCE].value
    page: int = 1

    @property
    def sort_key(self) -> str:
        return self.producer_sort if self.view == ViewMode.PRODUCER else self.commerce_sort


def switch_view(state: CatalogState, view: ViewMode | str) -> CatalogState:
    view = ViewMode(view)
    if view == state.view:
        return state
    return replace(state, view=view, region="", departments=(), page=1)


def type_query(state: CatalogState, text: str) -> CatalogState:
    return replace(state, query_input=text)


def commit_query(state: CatalogState, text: str) -> CatalogState:
    if text == state.query:
        return replace(state, query_input=text)
    return replace(state, query_input=text, query=text, page=1)


def select_region(state: CatalogState, catalog: Catalog, region: str) -> CatalogState:
    region = region or ""
    options = department_options(catalog.items(state.view), accessors_for(state.view), region)
    kept = tuple(prune_departments(state.departments, options))
    dropped = [d for d in state.departments if d not in kept]
    if dropped:
        logger.debug(f"Region {region!r} drops departments {dropped}")
    return replace(state, region=region, departments=kept, page=1)


def select_departments(state: CatalogState, catalog: Catalog, departments: Sequence[str]) -> CatalogState:
    options = department_options(catalog.items(state.view), accessors_for(state.view), state.region)
    unique = list(dict.fromkeys(departments))
    return replace(state, departments=tuple(prune_departments(unique, options)), page=1)


def toggle_department(state: CatalogState, catalog: Catalog, department: str) -> CatalogState:
    if department in state.departments:
        return select_departments(state, catalog, [d for d in state.departments if d != department])
    return select_departments(state, catalog, [*state.departments, department])


def select_sort(state: CatalogState, sort_key: Any) -> CatalogState:
    resolved = accessors_for(state.view).resolve_sort(sort_key)
    if state.view == ViewMode.PRODUCER:
        return replace(state, producer_sort=resolved, page=1)
    return replace(state, commerce_sort=resolved, page=1)


def select_page(state: CatalogState, catalog: Catalog, page: int, page_size: int) -> CatalogState:
    total = len(_filtered(catalog, state))
    return replace(state, page=min(max(1, int(page)), count_pages(total, page_size)))


def _filtered(catalog: Catalog, state: CatalogState) -> List[Any]:
    return filter_items(
        catalog.items(state.view),
        accessors_for(state.view),
        state.query,
        state.region,
        state.departments,
    )


@dataclass(frozen=True)
class CatalogViewModel:
    view: ViewMode
    items: List[Any]
    total: int
    page: int
    total_pages: int
    regions: List[str]
    departments: List[str]
    selected_region: str
    selected_departments: List[str]
    sort_key: str
    query: str
    stats: CatalogStats

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


def derive_view(
    catalog: Catalog,
    state: CatalogState,
    page_size: int = settings.catalog_page_size,
) -> CatalogViewModel:
    acc = accessors_for(state.view)
    items = catalog.items(state.view)
    result = run_query(
        items,
        acc,
        query=state.query,
        region=state.region,
        departments=state.departments,
        sort_key=state.sort_key,
        page=state.page,
        page_size=page_size,
    )
    return CatalogViewModel(
        view=state.view,
        items=result.page.items,
        total=result.page.total,
        page=result.page.page,
        total_pages=result.page.total_pages,
        regions=region_options(items, acc),
        departments=department_options(items, acc, state.region),
        selected_region=state.region,
        selected_departments=list(state.departments),
        sort_key=result.sort_key,
        query=state.query,
        stats=catalog.stats,
    )


PageListener = Callable[[int], None]


class CatalogController:
    def __init__(
        self,
        catalog: Optional[Catalog] = None,
        state: Optional[CatalogState] = None,
        page_size: int = settings.catalog_page_size,
    ):
        self.catalog = catalog or Catalog()
        self.state = state or CatalogState()
        self.page_size = page_size
        self._listeners: List[PageListener] = []
        self._debouncer: Optional[QueryDebouncer] = None

    def on_page_change(self, listener: PageListener) -> None:
        self._listeners.append(listener)

    def enable_debounce(
        self,
        delay: Optional[float] = None,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> QueryDebouncer:
        self._debouncer = QueryDebouncer(self.commit_query, delay=delay, loop=loop)
        return self._debouncer

    def load(self, producers: Sequence[Producer]) -> None:
        self.catalog = Catalog.build(producers)
        self._apply(select_region(self.state, self.catalog, self.state.region))
        logger.info(
            f"Catalog loaded: {self.catalog.stats.producers} producers, "
            f"{len(self.catalog.rows)} active commerces"
        )

    def view(self) -> CatalogViewModel:
        return derive_view(self.catalog, self.state, self.page_size)

    def set_view(self, view: ViewMode | str) -> None:
        self._apply(switch_view(self.state, view))

    def set_query_input(self, text: str) -> None:
        if self._debouncer is None:
            self.commit_query(text)
            return
        self._apply(type_query(self.state, text))
        self._debouncer.submit(text)

    def commit_query(self, text: str) -> None:
        self._apply(commit_query(self.state, text))

    def set_region(self, region: str) -> None:
        self._apply(select_region(self.state, self.catalog, region))

    def set_departments(self, departments: Sequence[str]) -> None:
        self._apply(select_departments(self.state, self.catalog, departments))

    def toggle_department(self, department: str) -> None:
        self._apply(toggle_department(self.state, self.catalog, department))

    def set_sort(self, sort_key: Any) -> None:
        self._apply(select_sort(self.state, sort_key))

    def set_page(self, page: int) -> None:
        self._apply(select_page(self.state, self.catalog, page, self.page_size))

    def next_page(self) -> None:
        self.set_page(self.state.page + 1)

    def previous_page(self) -> None:
        self.set_page(self.state.page - 1)

    def _apply(self, new_state: CatalogState) -> None:
        previous_page = self.state.page
        self.state = new_state
        if new_state.page != previous_page:
            for listener in self._listeners:
                listener(new_state.page)
