"""
In-memory faceted catalog engine.

Derives producer-centric and commerce-centric views from the public producer
payload, then filters, sorts and paginates them locally. The same building
blocks back the blog listing and the producer public profile.
"""

from services.catalog.accessors import COMMERCE_ACCESSORS, PRODUCER_ACCESSORS
from services.catalog.collation import collation_key, compare, fold, sort_unique
from services.catalog.controller import (
    Catalog,
    CatalogController,
    CatalogState,
    CatalogViewModel,
    derive_view,
)
from services.catalog.debounce import QueryDebouncer
from services.catalog.derivation import (
    CatalogStats,
    build_facet_options,
    catalog_stats,
    certification_codes,
    effective_bio,
    effective_city,
    effective_department,
    effective_display_name,
    effective_region,
    flatten,
    normalize_certifications,
)
from services.catalog.engine import (
    CatalogAccessors,
    Page,
    QueryResult,
    department_options,
    filter_items,
    paginate,
    prune_departments,
    region_options,
    run_query,
    sort_items,
)

__all__ = [
    # Collation
    "collation_key",
    "compare",
    "fold",
    "sort_unique",

    # Derivation
    "CatalogStats",
    "build_facet_options",
    "catalog_stats",
    "certification_codes",
    "effective_bio",
    "effective_city",
    "effective_department",
    "effective_display_name",
    "effective_region",
    "flatten",
    "normalize_certifications",

    # Engine
    "CatalogAccessors",
    "COMMERCE_ACCESSORS",
    "PRODUCER_ACCESSORS",
    "Page",
    "QueryResult",
    "department_options",
    "filter_items",
    "paginate",
    "prune_departments",
    "region_options",
    "run_query",
    "sort_items",

    # View controller
    "Catalog",
    "CatalogController",
    "CatalogState",
    "CatalogViewModel",
    "QueryDebouncer",
    "derive_view",
]
