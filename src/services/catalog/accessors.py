from models.domain import CommerceSortKey, ProducerSortKey
from models.schemas import CommerceRow, Producer
from services.catalog.derivation import (
    effective_city,
    effective_department,
    effective_display_name,
    effective_region,
)
from services.catalog.engine import (
    CatalogAccessors,
    by_facet,
    by_name,
    by_rating,
    by_text,
    largest_first,
    newest_first,
)


def _producer_search_fields(producer: Producer) -> tuple[str, ...]:
    return (
        effective_display_name(producer),
        effective_city(producer),
        effective_region(producer),
        effective_department(producer),
    )


def _producer_identity(producer: Producer) -> str:
    return "" if producer.id is None else f"{producer.id:012d}"


def _commerce_search_fields(row: CommerceRow) -> tuple[str, ...]:
    return (
        effective_display_name(row.company),
        effective_city(row.company),
        effective_region(row.company),
        effective_department(row.company),
        effective_display_name(row.producer),
    )


PRODUCER_ACCESSORS: CatalogAccessors[Producer] = CatalogAccessors(
    name=effective_display_name,
    region=effective_region,
    department=effective_department,
    search_fields=_producer_search_fields,
    rating=lambda p: p.avg_rating,
    rating_count=lambda p: p.ratings_count,
    sort_orders={
        ProducerSortKey.RECENT.value: newest_first(lambda p: p.joined_at),
        ProducerSortKey.NAME.value: by_name,
        ProducerSortKey.COMMERCES.value: largest_first(lambda p: len(p.commerces)),
        ProducerSortKey.REGION.value: by_facet("region"),
        ProducerSortKey.DEPARTMENT.value: by_facet("department"),
        ProducerSortKey.RATING_DESC.value: by_rating(descending=True),
        ProducerSortKey.RATING_ASC.value: by_rating(descending=False),
    },
    default_sort=ProducerSortKey.RECENT.value,
    identity=_producer_identity,
)

COMMERCE_ACCESSORS: CatalogAccessors[CommerceRow] = CatalogAccessors(
    name=lambda row: effective_display_name(row.company),
    region=lambda row: effective_region(row.company),
    department=lambda row: effective_department(row.company),
    search_fields=_commerce_search_fields,
    rating=lambda row: row.company.avg_rating,
    rating_count=lambda row: row.company.ratings_count,
    sort_orders={
        CommerceSortKey.NAME.value: by_name,
        CommerceSortKey.PRODUCER.value: by_text(lambda row: effective_display_name(row.producer)),
        CommerceSortKey.REGION.value: by_facet("region"),
        CommerceSortKey.DEPARTMENT.value: by_facet("department"),
        CommerceSortKey.RATING_DESC.value: by_rating(descending=True),
        CommerceSortKey.RATING_ASC.value: by_rating(descending=False),
    },
    default_sort=CommerceSortKey.NAME.value,
    identity=lambda row: row.key,
)
