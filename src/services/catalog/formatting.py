import math
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from models.schemas import Address
from services.catalog.dates import month_year_fr, parse_timestamp

_KEEP_LOWER = {"de", "du", "des", "la", "le", "les", "en", "sur", "sous", "aux", "au", "et"}
_ELIDED = re.compile(r"^[a-z][’']")


def format_city_name(raw: Optional[str]) -> str:
    """Title-case a city name the French way ("aix en provence" -> "Aix en Provence")."""
    if not raw:
        return ""
    words = str(raw).lower().split()
    return " ".join(_format_word(word, idx) for idx, word in enumerate(words))


def _format_word(word: str, idx: int) -> str:
    if _ELIDED.match(word):
        return word[0].upper() + word[1:]
    if idx and word in _KEEP_LOWER:
        return word
    return "-".join(seg[:1].upper() + seg[1:] for seg in word.split("-"))


def joined_text(iso: Optional[str]) -> str:
    joined = parse_timestamp(iso)
    if joined is None:
        return "Membre récent"
    return f"Membre depuis {month_year_fr(joined)}"


def experience_text(years: Optional[int]) -> str:
    if not isinstance(years, int) or years <= 0:
        return "Producteur local engagé"
    return f"{years} {'an' if years == 1 else 'ans'} d’expérience"


@dataclass(frozen=True)
class RatingDisplay:
    has_rating: bool
    value: float
    count: int


def has_rating(avg: Optional[float], count: Optional[int]) -> bool:
    return avg is not None and math.isfinite(avg) and (count or 0) >= 1


def rating_display(avg: Optional[float], count: Optional[int]) -> RatingDisplay:
    if not has_rating(avg, count):
        return RatingDisplay(has_rating=False, value=0.0, count=0)
    return RatingDisplay(has_rating=True, value=max(0.0, min(5.0, avg)), count=int(count))


def certification_preview(codes: Iterable[str], limit: int = 4) -> Tuple[List[str], int]:
    codes = list(codes)
    preview = codes[:limit]
    return preview, len(codes) - len(preview)


def format_address_lines(address: Optional[Address]) -> Tuple[str, str]:
    if address is None:
        return "", "France"
    street = " ".join(p for p in (address.street_number, address.street_name) if p).strip()
    city = address.city
    postal = (city.postal_code or "") if city else ""
    city_name = format_city_name(city.name) if city else ""
    core = " ".join(p for p in (postal, city_name) if p).strip()
    return street, f"{core}, France" if core else "France"
