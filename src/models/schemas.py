"""
Typed models for the storefront's public producer payloads.

Upstream records are loosely shaped: nested objects may be missing, a city's
department may be a bare numeric id instead of an object, and certifications
arrive either as bare codes or as ``{code, label}`` pairs. Every model here
inherits from ``LenientModel`` so a malformed field degrades to its default
instead of rejecting the whole record.

The fallback chains used to resolve "effective" attributes (display name,
region, department, city, biography) are declared at the bottom of this module,
next to the types they read from.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional, Sequence, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    ValidationError,
    ValidationInfo,
    ValidatorFunctionWrapHandler,
    field_validator,
)

logger = logging.getLogger(__name__)


class LenientModel(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True, frozen=True)

    @field_validator("*", mode="wrap")
    @classmethod
    def _degrade_malformed(
        cls,
        value: Any,
        handler: ValidatorFunctionWrapHandler,
        info: ValidationInfo,
    ) -> Any:
        try:
            return handler(value)
        except ValidationError:
            logger.debug(f"Dropping malformed {cls.__name__}.{info.field_name}: {value!r}")
            return cls.model_fields[info.field_name].get_default(call_default_factory=True)


class RegionRef(LenientModel):
    code: Optional[str] = None
    name: Optional[str] = None


class DepartmentRef(LenientModel):
    code: Optional[str] = None
    name: Optional[str] = None
    region: Optional[RegionRef] = None


class City(LenientModel):
    name: Optional[str] = None
    postal_code: Optional[str] = None
    department: Union[DepartmentRef, int, None] = None
    department_data: Optional[DepartmentRef] = None
    region_data: Optional[RegionRef] = None

    @property
    def department_object(self) -> Optional[DepartmentRef]:
        return self.department if isinstance(self.department, DepartmentRef) else None


class Address(LenientModel):
    street_number: Optional[str] = None
    street_name: Optional[str] = None
    city: Optional[City] = None


class Certification(LenientModel):
    code: str = ""
    label: Optional[str] = None


def normalize_certifications(raw: Any) -> List[Certification]:
    """Map bare codes and ``{code, label}`` pairs onto ``Certification``."""
    if not isinstance(raw, (list, tuple)):
        return []
    normalized: List[Certification] = []
    for entry in raw:
        if isinstance(entry, Certification):
            normalized.append(entry)
        elif isinstance(entry, str):
            normalized.append(Certification(code=entry, label=entry))
        elif isinstance(entry, dict):
            normalized.append(Certification.model_validate(entry))
        else:
            logger.debug(f"Skipping certification entry of type {type(entry).__name__}")
    return normalized


class Company(LenientModel):
    id: Optional[int] = None
    name: Optional[str] = None
    description: Optional[str] = None
    logo: Optional[str] = None
    website: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    siret: Optional[str] = None
    siret_number: Optional[str] = None
    address: Optional[Address] = None
    certifications: List[Certification] = []
    region_data: Optional[RegionRef] = None
    department_data: Optional[DepartmentRef] = None
    is_active: Optional[bool] = None
    avg_rating: Optional[float] = None
    ratings_count: Optional[int] = None

    @field_validator("certifications", mode="before")
    @classmethod
    def _normalize_certifications(cls, value: Any) -> List[Certification]:
        return normalize_certifications(value)

    @property
    def active(self) -> bool:
        return self.is_active is not False


class Producer(LenientModel):
    id: Optional[int] = None
    public_display_name: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    avatar: Optional[str] = None
    bio: Optional[str] = None
    description: Optional[str] = None
    description_utilisateur: Optional[str] = None
    years_of_experience: Optional[int] = None
    joined_at: Optional[str] = None
    main_address: Optional[Address] = None
    main_region_data: Optional[RegionRef] = None
    main_department_data: Optional[DepartmentRef] = None
    avg_rating: Optional[float] = None
    ratings_count: Optional[int] = None
    commerces: List[Company] = []

    @field_validator("commerces", mode="before")
    @classmethod
    def _drop_non_object_commerces(cls, value: Any) -> Any:
        if not isinstance(value, (list, tuple)):
            return []
        return [c for c in value if isinstance(c, (dict, Company))]


@dataclass(frozen=True)
class CommerceRow:
    """One (producer, company) pair of the flattened "by commerce" view."""

    key: str
    company: Company
    producer: Producer


def parse_producers(payload: Any) -> List[Producer]:
    if not isinstance(payload, list):
        logger.warning(f"Expected a list of producers, got {type(payload).__name__}")
        return []
    producers = [Producer.model_validate(p) for p in payload if isinstance(p, dict)]
    skipped = len(payload) - len(producers)
    if skipped:
        logger.warning(f"Skipped {skipped} non-object producer entries")
    return producers


# Fallback chains. Each accessor returns a possibly empty string; the first
# non-empty result wins.

Accessor = Callable[[Any], str]


def first_non_empty(chain: Sequence[Accessor], obj: Any) -> str:
    for accessor in chain:
        value = accessor(obj)
        if value:
            return value
    return ""


def _text(value: Optional[str]) -> str:
    return value.strip() if isinstance(value, str) else ""


def _ref_name(ref: Optional[BaseModel]) -> str:
    return _text(getattr(ref, "name", None)) if ref is not None else ""


def _city(address: Optional[Address]) -> Optional[City]:
    return address.city if address is not None else None


def _city_department(address: Optional[Address]) -> Optional[DepartmentRef]:
    city = _city(address)
    return city.department_object if city is not None else None


def _company_region_data(company: Company) -> str:
    return _ref_name(company.region_data)


def _company_city_department_region(company: Company) -> str:
    department = _city_department(company.address)
    return _ref_name(department.region) if department is not None else ""


def _company_city_region_data(company: Company) -> str:
    city = _city(company.address)
    return _ref_name(city.region_data) if city is not None else ""


def _company_department_data(company: Company) -> str:
    return _ref_name(company.department_data)


def _company_city_department(company: Company) -> str:
    return _ref_name(_city_department(company.address))


def _company_city_department_data(company: Company) -> str:
    city = _city(company.address)
    return _ref_name(city.department_data) if city is not None else ""


def _company_city_name(company: Company) -> str:
    return _ref_name(_city(company.address))


def _company_name(company: Company) -> str:
    return _text(company.name)


COMPANY_NAME_CHAIN: tuple[Accessor, ...] = (_company_name,)

COMPANY_REGION_CHAIN: tuple[Accessor, ...] = (
    _company_region_data,
    _company_city_department_region,
    _company_city_region_data,
)

COMPANY_DEPARTMENT_CHAIN: tuple[Accessor, ...] = (
    _company_department_data,
    _company_city_department,
    _company_city_department_data,
)

COMPANY_CITY_CHAIN: tuple[Accessor, ...] = (_company_city_name,)


def _first_company(chain: Sequence[Accessor]) -> Accessor:
    def accessor(producer: Producer) -> str:
        return _first_in(producer.commerces, chain)

    return accessor


def _first_in(companies: Iterable[Company], chain: Sequence[Accessor]) -> str:
    for company in companies:
        value = first_non_empty(chain, company)
        if value:
            return value
    return ""


def _display_override(producer: Producer) -> str:
    return _text(producer.public_display_name)


def _full_name(producer: Producer) -> str:
    return f"{producer.first_name or ''} {producer.last_name or ''}".strip()


def _main_region(producer: Producer) -> str:
    return _ref_name(producer.main_region_data)


def _main_department(producer: Producer) -> str:
    return _ref_name(producer.main_department_data)


def _main_city(producer: Producer) -> str:
    return _ref_name(_city(producer.main_address))


def _first_company_city(producer: Producer) -> str:
    if not producer.commerces:
        return ""
    return _company_city_name(producer.commerces[0])


PRODUCER_NAME_CHAIN: tuple[Accessor, ...] = (_display_override, _full_name)

PRODUCER_REGION_CHAIN: tuple[Accessor, ...] = (
    _main_region,
    _first_company(COMPANY_REGION_CHAIN),
)

PRODUCER_DEPARTMENT_CHAIN: tuple[Accessor, ...] = (
    _main_department,
    _first_company(COMPANY_DEPARTMENT_CHAIN),
)

PRODUCER_CITY_CHAIN: tuple[Accessor, ...] = (_main_city, _first_company_city)

PRODUCER_BIO_CHAIN: tuple[Accessor, ...] = (
    lambda p: _text(p.description_utilisateur),
    lambda p: _text(p.bio),
    lambda p: _text(p.description),
)

PRODUCER_FALLBACK_NAME = "Producteur"
COMPANY_FALLBACK_NAME = "Commerce"
PRODUCER_FALLBACK_BIO = "Producteur local engagé dans la réduction du gaspillage."
