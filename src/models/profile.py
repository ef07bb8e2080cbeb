from typing import Any, List, Optional

from pydantic import field_validator

from models.schemas import Company, LenientModel, Producer


class BundleEvaluation(LenientModel):
    order_id: Optional[int] = None
    order_code: Optional[str] = None
    ordered_at: Optional[str] = None
    user_display_name: Optional[str] = None
    rating: Optional[float] = None
    note: Optional[str] = None
    rated_at: Optional[str] = None
    quantity: Optional[int] = None
    order_status: Optional[str] = None
    line_total: Optional[str] = None
    bundle_id: Optional[int] = None
    bundle_title: Optional[str] = None


class Bundle(LenientModel):
    id: Optional[int] = None
    title: str = ""
    discounted_price: Optional[str] = None
    original_price: Optional[str] = None
    discounted_percentage: Optional[float] = None
    stock: Optional[int] = None
    created_at: Optional[str] = None
    avg_rating: Optional[float] = None
    ratings_count: Optional[int] = None
    evaluations: List[BundleEvaluation] = []
    last_rated_at: Optional[str] = None


class ProducerDetail(LenientModel):
    """Payload of the public producer profile endpoint."""

    producer: Optional[Producer] = None
    companies: List[Company] = []
    featured_bundles: List[Bundle] = []
    recently_rated_bundles: List[Bundle] = []

    @field_validator("companies", "featured_bundles", "recently_rated_bundles", mode="before")
    @classmethod
    def _keep_objects(cls, value: Any) -> Any:
        if not isinstance(value, (list, tuple)):
            return []
        return [v for v in value if isinstance(v, (dict, LenientModel))]
