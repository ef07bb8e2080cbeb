import math

import pytest

from models.schemas import Address
from services.catalog.dates import (
    EARLIEST,
    format_date_fr,
    format_datetime_fr,
    parse_timestamp,
    timestamp_or_earliest,
)
from services.catalog.formatting import (
    certification_preview,
    experience_text,
    format_address_lines,
    format_city_name,
    joined_text,
    rating_display,
)


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("AIX EN PROVENCE", "Aix en Provence"),
        ("saint-étienne", "Saint-Étienne"),
        ("le puy-en-velay", "Le Puy-En-Velay"),
        ("l'isle-sur-la-sorgue", "L'isle-sur-la-sorgue"),
        ("  châlons   en  champagne ", "Châlons en Champagne"),
        ("", ""),
        (None, ""),
    ],
)
def test_format_city_name(raw, expected):
    assert format_city_name(raw) == expected


class TestDates:
    def test_zulu_suffix(self):
        parsed = parse_timestamp("2024-03-01T10:00:00Z")

        assert parsed.utcoffset().total_seconds() == 0
        assert parsed.hour == 10

    def test_naive_is_utc(self):
        assert parse_timestamp("2024-03-01T10:00:00") == parse_timestamp("2024-03-01T10:00:00+00:00")

    @pytest.mark.parametrize("value", [None, "", "pas une date", 42])
    def test_unparsable(self, value):
        assert parse_timestamp(value) is None

    def test_timestamp_or_earliest_uses_first_parsable(self):
        assert timestamp_or_earliest("bad", "1970-01-01T00:01:00Z") == 60
        assert timestamp_or_earliest(None, "bad") == EARLIEST
        assert math.isinf(EARLIEST) and EARLIEST < 0

    def test_french_formats(self):
        assert format_date_fr("2024-05-03T10:00:00Z") == "03/05/2024"
        assert format_datetime_fr("2024-05-03T10:07:00Z") == "03/05/2024 10:07"
        assert format_date_fr(None) == "—"


def test_joined_text():
    assert joined_text("2024-03-01T10:00:00Z") == "Membre depuis mars 2024"
    assert joined_text("2023-08-20") == "Membre depuis août 2023"
    assert joined_text(None) == "Membre récent"
    assert joined_text("jamais") == "Membre récent"


@pytest.mark.parametrize(
    "years,expected",
    [(1, "1 an d’expérience"), (7, "7 ans d’expérience"), (0, "Producteur local engagé"), (None, "Producteur local engagé")],
)
def test_experience_text(years, expected):
    assert experience_text(years) == expected


class TestRatingDisplay:
    def test_rated(self):
        rating = rating_display(4.5, 10)

        assert rating.has_rating
        assert rating.value == 4.5
        assert rating.count == 10

    def test_value_is_clamped(self):
        assert rating_display(7, 3).value == 5.0
        assert rating_display(-1, 3).value == 0.0

    @pytest.mark.parametrize("avg,count", [(4.5, 0), (None, 3), (float("nan"), 3), (4.0, None)])
    def test_unrated(self, avg, count):
        rating = rating_display(avg, count)

        assert not rating.has_rating
        assert rating.value == 0
        assert rating.count == 0


def test_certification_preview():
    assert certification_preview(["AB", "HVE", "Demeter", "Nature & Progrès", "Bleu-Blanc-Cœur"]) == (
        ["AB", "HVE", "Demeter", "Nature & Progrès"],
        1,
    )
    assert certification_preview(["AB"]) == (["AB"], 0)


class TestAddressLines:
    def test_full_address(self):
        address = Address.model_validate(
            {"street_number": 12, "street_name": "rue des Halles", "city": {"name": "NÎMES", "postal_code": "30000"}}
        )

        assert format_address_lines(address) == ("12 rue des Halles", "30000 Nîmes, France")

    def test_missing_address(self):
        assert format_address_lines(None) == ("", "France")

    def test_address_without_city(self):
        address = Address.model_validate({"street_name": "Chemin du Moulin"})

        assert format_address_lines(address) == ("Chemin du Moulin", "France")
