"""
Pure derivations over the producer graph.

Nothing here raises on missing or malformed nested data: unresolved attributes
come back as ``""`` and collections as empty lists.
"""

from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Sequence, Union

from models.schemas import (
    COMPANY_CITY_CHAIN,
    COMPANY_DEPARTMENT_CHAIN,
    COMPANY_FALLBACK_NAME,
    COMPANY_NAME_CHAIN,
    COMPANY_REGION_CHAIN,
    PRODUCER_BIO_CHAIN,
    PRODUCER_CITY_CHAIN,
    PRODUCER_DEPARTMENT_CHAIN,
    PRODUCER_FALLBACK_BIO,
    PRODUCER_FALLBACK_NAME,
    PRODUCER_NAME_CHAIN,
    PRODUCER_REGION_CHAIN,
    Certification,
    CommerceRow,
    Company,
    Producer,
    first_non_empty,
    normalize_certifications,
)
from services.catalog.collation import sort_unique
from services.catalog.formatting import format_city_name


Entity = Union[Producer, Company]

_NAME = {
    Producer: (PRODUCER_NAME_CHAIN, PRODUCER_FALLBACK_NAME),
    Company: (COMPANY_NAME_CHAIN, COMPANY_FALLBACK_NAME),
}
_REGION = {Producer: PRODUCER_REGION_CHAIN, Company: COMPANY_REGION_CHAIN}
_DEPARTMENT = {Producer: PRODUCER_DEPARTMENT_CHAIN, Company: COMPANY_DEPARTMENT_CHAIN}
_CITY = {Producer: PRODUCER_CITY_CHAIN, Company: COMPANY_CITY_CHAIN}


def effective_display_name(entity: Entity) -> str:
    chain, fallback = _NAME.get(type(entity), ((), ""))
    return first_non_empty(chain, entity) or fallback


def effective_region(entity: Entity) -> str:
    return first_non_empty(_REGION.get(type(entity), ()), entity)


def effective_department(entity: Entity) -> str:
    return first_non_empty(_DEPARTMENT.get(type(entity), ()), entity)


def effective_city(entity: Entity) -> str:
    return format_city_name(first_non_empty(_CITY.get(type(entity), ()), entity))


def effective_bio(producer: Producer) -> str:
    return first_non_empty(PRODUCER_BIO_CHAIN, producer) or PRODUCER_FALLBACK_BIO


def flatten(producers: Iterable[Producer]) -> List[CommerceRow]:
    rows: List[CommerceRow] = []
    for producer in producers:
        for company in producer.commerces:
            if not company.active:
                continue
            rows.append(CommerceRow(key=f"{producer.id}-{company.id}", company=company, producer=producer))
    return rows


def build_facet_options(items: Iterable[Any], extractor: Callable[[Any], str]) -> List[str]:
    return sort_unique(extractor(item) for item in items)


def certification_codes(entity: Entity) -> List[str]:
    """Unique, non-empty certification codes; producers aggregate over their companies."""
    if isinstance(entity, Producer):
        certs = [c for company in entity.commerces for c in company.certifications]
    else:
        certs = entity.certifications
    return list(dict.fromkeys(c.code for c in certs if c.code))


@dataclass(frozen=True)
class CatalogStats:
    producers: int
    commerces: int
    regions: int
    departments: int


def catalog_stats(producers: Sequence[Producer]) -> CatalogStats:
    companies = [c for p in producers for c in p.commerces]
    regions = set(build_facet_options(producers, effective_region))
    regions.update(build_facet_options(companies, effective_region))
    departments = set(build_facet_options(producers, effective_department))
    departments.update(build_facet_options(companies, effective_department))
    return CatalogStats(
        producers=len(producers),
        commerces=len(companies),
        regions=len(regions),
        departments=len(departments),
    )


__all__ = [
    "CatalogStats",
    "Certification",
    "catalog_stats",
    "build_facet_options",
    "certification_codes",
    "effective_bio",
    "effective_city",
    "effective_department",
    "effective_display_name",
    "effective_region",
    "flatten",
    "normalize_certifications",
]
