from models.domain import ViewMode
from services.catalog.formatting import RatingDisplay

_NOUNS = {ViewMode.PRODUCER: "producteur", ViewMode.COMMERCE: "commerce"}


def results_label(count: int, view: ViewMode) -> str:
    plural = "s" if count > 1 else ""
    return f"{count} {_NOUNS[ViewMode(view)]}{plural} trouvé{plural}."


def stars_text(rating: RatingDisplay) -> str:
    filled = int(round(rating.value))
    stars = "★" * filled + "☆" * (5 - filled)
    if not rating.has_rating:
        return f"{stars} Pas encore d’avis"
    return f"{stars} {rating.value:.1f} ({rating.count} avis)"


def certifications_text(preview: list[str], more: int) -> str:
    if not preview:
        return ""
    text = " · ".join(preview)
    return f"{text} +{more}" if more > 0 else text


def page_label(page: int, total_pages: int) -> str:
    return f"Page {page} / {total_pages}"
