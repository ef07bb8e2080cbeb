import math
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Sequence

from config import settings
from models.domain import EvaluationSortKey
from models.profile import Bundle, BundleEvaluation, ProducerDetail
from models.schemas import Company
from services.catalog.dates import timestamp_or_earliest
from services.catalog.derivation import effective_display_name
from services.catalog.engine import Page, paginate
from services.catalog.formatting import RatingDisplay, experience_text, rating_display


def _number(value: Optional[float]) -> float:
    return value if value is not None and math.isfinite(value) else 0.0


def _evaluation_key(evaluation: BundleEvaluation, bundle: Bundle) -> str:
    bundle_id = evaluation.bundle_id or bundle.id
    moment = evaluation.rated_at or evaluation.ordered_at or ""
    return f"{evaluation.order_id}|{bundle_id}|{moment}"


def collect_evaluations(*bundle_groups: Iterable[Bundle]) -> List[BundleEvaluation]:
    """Evaluations across bundle groups, deduplicated, tagged with their bundle."""
    seen: dict[str, BundleEvaluation] = {}
    for bundles in bundle_groups:
        for bundle in bundles:
            for evaluation in bundle.evaluations:
                key = _evaluation_key(evaluation, bundle)
                if key in seen:
                    continue
                seen[key] = evaluation.model_copy(
                    update={
                        "bundle_id": evaluation.bundle_id or bundle.id,
                        "bundle_title": evaluation.bundle_title or bundle.title,
                    }
                )
    return list(seen.values())


def _rated_time(evaluation: BundleEvaluation) -> float:
    return timestamp_or_earliest(evaluation.rated_at, evaluation.ordered_at)


def _evaluation_sort_key(sort_key: Any):
    key = getattr(sort_key, "value", sort_key)
    if key == EvaluationSortKey.RATING_DESC.value:
        return lambda e: (-_number(e.rating), -_rated_time(e))
    if key == EvaluationSortKey.RATING_ASC.value:
        return lambda e: (_number(e.rating), -_rated_time(e))
    if key == EvaluationSortKey.RATED_ASC.value:
        return lambda e: (_rated_time(e), -_number(e.rating))
    return lambda e: (-_rated_time(e), -_number(e.rating))


def sort_evaluations(
    evaluations: Sequence[BundleEvaluation],
    sort_key: Any = EvaluationSortKey.RATED_DESC,
) -> List[BundleEvaluation]:
    return sorted(evaluations, key=_evaluation_sort_key(sort_key))


def _bundle_time(bundle: Bundle) -> float:
    return timestamp_or_earliest(bundle.last_rated_at, bundle.created_at)


def recent_top(bundles: Sequence[Bundle], limit: int = 3) -> List[Bundle]:
    return sorted(bundles, key=lambda b: -_bundle_time(b))[:limit]


def best_top(bundles: Sequence[Bundle], limit: int = 3) -> List[Bundle]:
    ranked = sorted(
        bundles,
        key=lambda b: (-_number(b.avg_rating), -(b.ratings_count or 0), -_bundle_time(b)),
    )
    return ranked[:limit]


@dataclass(frozen=True)
class ProfileViewModel:
    name: str
    experience: str
    rating: RatingDisplay
    companies: List[Company]
    featured: List[Bundle]
    recent: List[Bundle]
    best: List[Bundle]
    evaluations: Page[BundleEvaluation]
    sort_key: str


def derive_profile_view(
    detail: ProducerDetail,
    sort_key: Any = EvaluationSortKey.RATED_DESC,
    page: int = 1,
    page_size: int = settings.evaluations_page_size,
) -> ProfileViewModel:
    producer = detail.producer
    evaluations = sort_evaluations(
        collect_evaluations(detail.featured_bundles, detail.recently_rated_bundles),
        sort_key,
    )
    resolved = getattr(sort_key, "value", sort_key)
    if resolved not in {k.value for k in EvaluationSortKey}:
        resolved = EvaluationSortKey.RATED_DESC.value
    return ProfileViewModel(
        name=effective_display_name(producer) if producer else "",
        experience=experience_text(producer.years_of_experience if producer else None),
        rating=rating_display(
            producer.avg_rating if producer else None,
            producer.ratings_count if producer else None,
        ),
        companies=list(detail.companies),
        featured=list(detail.featured_bundles)[:3],
        recent=recent_top(detail.recently_rated_bundles),
        best=best_top(detail.recently_rated_bundles),
        evaluations=paginate(evaluations, page, page_size),
        sort_key=resolved,
    )
