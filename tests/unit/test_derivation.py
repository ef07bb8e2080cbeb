from models.schemas import Company, Producer
from services.catalog.derivation import (
    build_facet_options,
    catalog_stats,
    certification_codes,
    effective_bio,
    effective_city,
    effective_department,
    effective_display_name,
    effective_region,
    flatten,
)


class TestDisplayName:
    def test_override_wins(self):
        producer = Producer.model_validate({"public_display_name": " Ferme Roux ", "first_name": "Élodie"})

        assert effective_display_name(producer) == "Ferme Roux"

    def test_falls_back_to_full_name(self, nested_producers):
        assert effective_display_name(nested_producers[0]) == "Élodie Roux"
        assert effective_display_name(nested_producers[1]) == "Luc"

    def test_blank_override_and_names_give_fallback(self, nested_producers):
        assert effective_display_name(nested_producers[2]) == "Producteur"

    def test_company_fallback(self):
        assert effective_display_name(Company.model_validate({"name": "  "})) == "Commerce"


class TestLocation:
    def test_producer_uses_main_location(self, scenario_producers):
        dubois = scenario_producers[0]

        assert effective_region(dubois) == "Occitanie"
        assert effective_department(dubois) == "Gard"
        assert effective_city(dubois) == "Nîmes"

    def test_producer_falls_back_to_companies(self, nested_producers):
        roux = nested_producers[0]

        assert effective_region(roux) == "Bretagne"
        assert effective_department(roux) == "Finistère"
        assert effective_city(roux) == "Saint-Pol-De-Léon"

    def test_unresolved_location_is_empty(self, nested_producers):
        anonymous = nested_producers[2]

        assert effective_region(anonymous) == ""
        assert effective_department(anonymous) == ""
        assert effective_city(anonymous) == ""

    def test_company_region_from_city_department(self):
        company = Company.model_validate(
            {"address": {"city": {"department": {"name": "Gard", "region": {"name": "Occitanie"}}}}}
        )

        assert effective_region(company) == "Occitanie"
        assert effective_department(company) == "Gard"

    def test_company_department_from_city_data_when_department_is_id(self):
        company = Company.model_validate(
            {
                "address": {
                    "city": {
                        "department": 30,
                        "department_data": {"name": "Gard"},
                        "region_data": {"name": "Occitanie"},
                    }
                }
            }
        )

        assert effective_department(company) == "Gard"
        assert effective_region(company) == "Occitanie"

    def test_missing_address_never_raises(self):
        company = Company.model_validate({"address": None})

        assert effective_region(company) == ""
        assert effective_city(company) == ""


def test_effective_bio_chain():
    producer = Producer.model_validate({"description_utilisateur": "  ", "bio": "Maraîchère bio", "description": "x"})

    assert effective_bio(producer) == "Maraîchère bio"
    assert effective_bio(Producer()) == "Producteur local engagé dans la réduction du gaspillage."


class TestFlatten:
    def test_skips_inactive_companies(self, nested_producers):
        rows = flatten(nested_producers)

        assert [row.key for row in rows] == ["10-100", "11-110", "11-111"]

    def test_count_matches_active_children(self, nested_producers):
        active = sum(1 for p in nested_producers for c in p.commerces if c.active)

        assert len(flatten(nested_producers)) == active

    def test_rows_keep_parent(self, nested_producers):
        row = flatten(nested_producers)[1]

        assert row.producer.id == 11
        assert row.company.name == "Œufs du Causse"


def test_build_facet_options_sorts_and_drops_unknown(nested_producers, scenario_producers):
    assert build_facet_options(scenario_producers, effective_region) == ["Bretagne", "Occitanie"]
    assert build_facet_options(nested_producers, effective_department) == ["Aveyron", "Finistère"]


def test_certification_codes(nested_producers):
    assert certification_codes(nested_producers[0]) == ["AB", "HVE"]
    assert certification_codes(nested_producers[0].commerces[1]) == []
    assert certification_codes(nested_producers[2]) == []


def test_catalog_stats(nested_producers):
    stats = catalog_stats(nested_producers)

    assert stats.producers == 3
    assert stats.commerces == 4
    assert stats.regions == 2
    assert stats.departments == 4
