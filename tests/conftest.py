"""Shared fixtures: sample storefront payloads and parsed producers."""

import sys
from pathlib import Path

import pytest


def ensure_src_on_path() -> None:
    root = Path(__file__).resolve().parent.parent
    src_path = root / "src"
    if str(src_path) not in sys.path:
        sys.path.append(str(src_path))


ensure_src_on_path()

from models.schemas import Producer, parse_producers


def company_payload(
    company_id,
    name,
    region="",
    department="",
    city="",
    is_active=True,
    avg_rating=None,
    ratings_count=0,
    certifications=None,
):
    return {
        "id": company_id,
        "name": name,
        "is_active": is_active,
        "avg_rating": avg_rating,
        "ratings_count": ratings_count,
        "certifications": certifications or [],
        "region_data": {"code": region[:3].upper(), "name": region} if region else None,
        "department_data": {"code": department[:2].upper(), "name": department} if department else None,
        "address": {
            "street_number": "12",
            "street_name": "rue des Halles",
            "city": {"name": city, "postal_code": "30000"} if city else None,
        },
    }


def producer_payload(
    producer_id,
    name,
    region="",
    department="",
    city="",
    avg_rating=None,
    ratings_count=0,
    joined_at=None,
    commerces=None,
):
    return {
        "id": producer_id,
        "public_display_name": name,
        "main_region_data": {"name": region} if region else None,
        "main_department_data": {"name": department} if department else None,
        "main_address": {"city": {"name": city}} if city else None,
        "avg_rating": avg_rating,
        "ratings_count": ratings_count,
        "joined_at": joined_at,
        "commerces": commerces or [],
    }


def make_producer(*args, **kwargs) -> Producer:
    return Producer.model_validate(producer_payload(*args, **kwargs))


@pytest.fixture
def scenario_producers():
    """Dubois and Martin in Occitanie, Abel in Bretagne."""
    return [
        make_producer(
            1, "Dubois", region="Occitanie", department="Gard", city="nîmes",
            avg_rating=4.5, ratings_count=10, joined_at="2024-03-01T10:00:00Z",
        ),
        make_producer(
            2, "Martin", region="Occitanie", department="Hérault", city="montpellier",
            avg_rating=0, ratings_count=0, joined_at="2024-06-15T08:30:00Z",
        ),
        make_producer(
            3, "Abel", region="Bretagne", department="Finistère", city="quimper",
            avg_rating=5, ratings_count=2, joined_at="2023-11-20T12:00:00Z",
        ),
    ]


@pytest.fixture
def producers_payload():
    """Producers whose location lives on their companies rather than on themselves."""
    return [
        {
            "id": 10,
            "first_name": "Élodie",
            "last_name": "Roux",
            "joined_at": "2024-01-10T09:00:00Z",
            "avg_rating": 4.2,
            "ratings_count": 5,
            "commerces": [
                company_payload(
                    100, "La Ferme des Roux", region="Bretagne", department="Finistère",
                    city="saint-pol-de-léon", avg_rating=4.8, ratings_count=12,
                    certifications=["AB", {"code": "HVE", "label": "Haute Valeur Environnementale"}],
                ),
                company_payload(101, "Ancien étal", region="Bretagne", department="Morbihan", is_active=False),
            ],
        },
        {
            "id": 11,
            "first_name": " Luc ",
            "last_name": "",
            "joined_at": "pas une date",
            "commerces": [
                company_payload(110, "Œufs du Causse", region="Occitanie", department="Aveyron", city="rodez"),
                company_payload(111, "Marché de Luc", region="Occitanie", department="Lozère"),
            ],
        },
        {
            "id": 12,
            "public_display_name": "   ",
            "commerces": [],
        },
    ]


@pytest.fixture
def nested_producers(producers_payload):
    return parse_producers(producers_payload)


@pytest.fixture
def blog_payload():
    return [
        {
            "id": 1,
            "title": "Cuisiner les fanes",
            "slug": "cuisiner-les-fanes",
            "excerpt": "Recettes anti-gaspi",
            "author_name": "Claire",
            "published_at": "2024-05-01T08:00:00Z",
            "category": {"id": 2, "name": "Recettes", "order": 2},
        },
        {
            "id": 2,
            "title": "Pourquoi manger local",
            "slug": "pourquoi-manger-local",
            "excerpt": "Circuits courts",
            "author_name": "Hugo",
            "published_at": "2024-06-01T08:00:00Z",
            "category": {"id": 1, "name": "Conseils ", "order": 1},
        },
        {
            "id": 3,
            "title": "Portrait d'une maraîchère",
            "slug": "portrait-maraichere",
            "excerpt": "Rencontre",
            "author_name": "Claire",
            "published_at": "2024-04-01T08:00:00Z",
            "pinned": True,
            "category": {"id": 3, "name": "Portraits"},
        },
    ]


@pytest.fixture
def profile_payload():
    shared = {
        "order_id": 501,
        "ordered_at": "2024-05-02T10:00:00Z",
        "user_display_name": "Nadia",
        "rating": 5,
        "note": "Parfait",
        "rated_at": "2024-05-03T10:00:00Z",
    }
    return {
        "producer": producer_payload(
            10, "Ferme Roux", avg_rating=4.6, ratings_count=3,
        ) | {"years_of_experience": 7},
        "companies": [company_payload(100, "La Ferme des Roux", city="saint-pol-de-léon")],
        "featured_bundles": [
            {
                "id": 1,
                "title": "Panier légumes",
                "avg_rating": 5,
                "ratings_count": 1,
                "evaluations": [shared],
            },
        ],
        "recently_rated_bundles": [
            {
                "id": 1,
                "title": "Panier légumes",
                "avg_rating": 5,
                "ratings_count": 1,
                "last_rated_at": "2024-05-03T10:00:00Z",
                "evaluations": [shared],
            },
            {
                "id": 2,
                "title": "Panier fruits",
                "avg_rating": 3,
                "ratings_count": 2,
                "last_rated_at": "2024-06-10T10:00:00Z",
                "evaluations": [
                    {"order_id": 502, "rating": 2, "rated_at": "2024-06-10T10:00:00Z", "user_display_name": "Paul"},
                    {"order_id": 503, "rating": 4, "rated_at": "2024-01-10T10:00:00Z"},
                ],
            },
            {
                "id": 3,
                "title": "Panier oeufs",
                "avg_rating": 4,
                "ratings_count": 8,
                "last_rated_at": "2024-02-10T10:00:00Z",
                "evaluations": [],
            },
            {
                "id": 4,
                "title": "Panier fromages",
                "created_at": "2023-12-01T10:00:00Z",
                "evaluations": [],
            },
        ],
    }
