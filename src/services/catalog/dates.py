from datetime import datetime, timezone
from typing import Optional

EARLIEST = float("-inf")

_MONTHS_FR = (
    "janvier", "février", "mars", "avril", "mai", "juin",
    "juillet", "août", "septembre", "octobre", "novembre", "décembre",
)


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 string; naive values are read as UTC."""
    if not value or not isinstance(value, str):
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def timestamp_or_earliest(*candidates: Optional[str]) -> float:
    """Epoch seconds of the first parsable candidate, else ``EARLIEST``."""
    for candidate in candidates:
        parsed = parse_timestamp(candidate)
        if parsed is not None:
            return parsed.timestamp()
    return EARLIEST


def month_year_fr(moment: datetime) -> str:
    return f"{_MONTHS_FR[moment.month - 1]} {moment.year}"


def format_date_fr(value: Optional[str]) -> str:
    parsed = parse_timestamp(value)
    return parsed.strftime("%d/%m/%Y") if parsed else "—"


def format_datetime_fr(value: Optional[str]) -> str:
    parsed = parse_timestamp(value)
    return parsed.strftime("%d/%m/%Y %H:%M") if parsed else "—"
