import pytest

from models.domain import EvaluationSortKey
from models.profile import ProducerDetail
from services.catalog.producer_profile import (
    best_top,
    collect_evaluations,
    derive_profile_view,
    recent_top,
    sort_evaluations,
)


@pytest.fixture
def detail(profile_payload):
    return ProducerDetail.model_validate(profile_payload)


def order_ids(evaluations):
    return [e.order_id for e in evaluations]


def test_collect_evaluations_deduplicates_across_groups(detail):
    evaluations = collect_evaluations(detail.featured_bundles, detail.recently_rated_bundles)

    assert order_ids(evaluations) == [501, 502, 503]
    assert evaluations[0].bundle_id == 1
    assert evaluations[0].bundle_title == "Panier légumes"
    assert evaluations[1].bundle_title == "Panier fruits"


@pytest.mark.parametrize(
    "sort_key,expected",
    [
        (EvaluationSortKey.RATED_DESC, [502, 501, 503]),
        (EvaluationSortKey.RATED_ASC, [503, 501, 502]),
        (EvaluationSortKey.RATING_DESC, [501, 503, 502]),
        (EvaluationSortKey.RATING_ASC, [502, 503, 501]),
        ("inconnu", [502, 501, 503]),
    ],
)
def test_sort_evaluations(detail, sort_key, expected):
    evaluations = collect_evaluations(detail.featured_bundles, detail.recently_rated_bundles)

    assert order_ids(sort_evaluations(evaluations, sort_key)) == expected


def test_recent_top(detail):
    assert [b.id for b in recent_top(detail.recently_rated_bundles)] == [2, 1, 3]


def test_best_top(detail):
    assert [b.id for b in best_top(detail.recently_rated_bundles)] == [1, 3, 2]


def test_derive_profile_view(detail):
    view = derive_profile_view(detail, EvaluationSortKey.RATED_DESC, page=2, page_size=2)

    assert view.name == "Ferme Roux"
    assert view.experience == "7 ans d’expérience"
    assert view.rating.has_rating
    assert view.rating.count == 3
    assert [c.id for c in view.companies] == [100]
    assert [b.id for b in view.featured] == [1]
    assert view.evaluations.page == 2
    assert view.evaluations.total == 3
    assert order_ids(view.evaluations.items) == [503]


def test_unknown_sort_key_is_reported_as_default(detail):
    assert derive_profile_view(detail, "n'importe").sort_key == "rated_desc"


def test_empty_detail():
    view = derive_profile_view(ProducerDetail())

    assert view.name == ""
    assert not view.rating.has_rating
    assert view.evaluations.items == []
    assert view.evaluations.total_pages == 1


def test_detail_ignores_non_object_entries(profile_payload):
    detail = ProducerDetail.model_validate({**profile_payload, "companies": ["x", {"id": 9}], "featured_bundles": None})

    assert [c.id for c in detail.companies] == [9]
    assert detail.featured_bundles == []
