"""
Tests for the design climate provider and the reference data loader.
"""

import json

import pytest

from hvacload import config
from hvacload.config import UnitSystem, Season
from hvacload.engine.climate import (
    list_cities,
    search_cities,
    latitude_band,
    get_outdoor_condition,
    list_indoor_categories,
    get_indoor_condition,
)
from hvacload.engine.errors import UnknownReference
from hvacload.engine.reference import (
    load_reference,
    clear_reference_cache,
    lookup,
    versions,
    CLIMATE_FILE,
)


def approx(value: float, rel_tol: float = 0.001, abs_tol: float = 0.05):
    return pytest.approx(value, rel=rel_tol, abs=abs_tol)


# ─── Cities ───


class TestCities:
    def test_list_cities(self):
        names = [c.name for c in list_cities()]
        assert len(names) == 10
        assert "Delhi" in names

    def test_search_by_prefix(self):
        results = search_cities("Pu")
        assert results[0].name == "Pune"

    def test_search_case_insensitive(self):
        results = search_cities("mumbai")
        assert results[0].name == "Mumbai"

    def test_search_by_state(self):
        results = search_cities("Maharashtra")
        assert {r.name for r in results} == {"Mumbai", "Pune"}

    def test_search_empty_returns_all(self):
        assert len(search_cities("", limit=3)) == 3

    def test_search_no_match(self):
        assert search_cities("Atlantis") == []


class TestLatitudeBand:
    def test_nearest_band(self):
        assert latitude_band(13.1) == "13N"
        assert latitude_band(19.1) == "20N"
        assert latitude_band(28.6) == "28N"

    def test_tie_resolves_to_lower_band_name(self):
        assert latitude_band(24.0) == "20N"


# ─── Outdoor conditions ───


class TestOutdoorCondition:
    def setup_method(self):
        self.result = get_outdoor_condition("Delhi")

    def test_stored_values_preserved(self):
        assert self.result.condition.Tdb == 113.0
        assert self.result.condition.Twb == 84.2

    def test_rh_derived(self):
        assert self.result.condition.converged
        assert 0.0 < self.result.condition.RH < 50.0

    def test_pressure_from_elevation(self):
        assert self.result.condition.pressure == approx(98.76, abs_tol=0.05)

    def test_location_fields(self):
        assert self.result.season == Season.SUMMER
        assert self.result.latitude_band == "28N"
        assert self.result.elevation_m == 216

    def test_pressure_override(self):
        result = get_outdoor_condition("Delhi", pressure_override=101.325)
        assert result.condition.pressure == 101.325

    def test_monsoon_more_humid(self):
        summer = get_outdoor_condition("Mumbai", Season.SUMMER)
        monsoon = get_outdoor_condition("Mumbai", Season.MONSOON)
        assert monsoon.condition.RH > summer.condition.RH

    def test_si(self):
        result = get_outdoor_condition("Delhi", unit_system=UnitSystem.SI)
        assert result.condition.unit_system == UnitSystem.SI
        assert result.condition.Tdb == approx(45.0)
        assert result.condition.Twb == approx(29.0)

    def test_unknown_city(self):
        with pytest.raises(UnknownReference, match="Unknown city 'Atlantis'"):
            get_outdoor_condition("Atlantis")

    def test_unknown_reference_is_lookup_error(self):
        with pytest.raises(LookupError):
            get_outdoor_condition("Atlantis")


# ─── Indoor presets ───


class TestIndoorCondition:
    def test_categories(self):
        categories = list_indoor_categories()
        assert "GENERAL_COMFORT" in categories
        assert "DATA_CENTER" in categories

    def test_general_comfort_summer(self):
        result = get_indoor_condition("GENERAL_COMFORT")
        assert result.condition.Tdb == 75.2
        assert result.condition.RH == 50.0
        assert result.condition.pressure == config.DEFAULT_PRESSURE_KPA
        assert result.condition.Twb < result.condition.Tdb

    def test_winter(self):
        result = get_indoor_condition("GENERAL_COMFORT", Season.WINTER)
        assert result.condition.Tdb == 71.6

    def test_pressure(self):
        result = get_indoor_condition("DATA_CENTER", pressure=95.0)
        assert result.condition.pressure == 95.0

    def test_season_not_defined(self):
        with pytest.raises(UnknownReference, match="season"):
            get_indoor_condition("GENERAL_COMFORT", Season.MONSOON)

    def test_unknown_category(self):
        with pytest.raises(UnknownReference):
            get_indoor_condition("SPACESHIP")


# ─── Reference data ───


class TestReferenceData:
    def teardown_method(self):
        clear_reference_cache()

    def test_versions(self):
        tags = versions()
        assert tags[CLIMATE_FILE] == "2024.1"
        assert len(tags) == 6

    def test_lookup_lists_known_keys(self):
        with pytest.raises(UnknownReference, match="Known values: a, b"):
            lookup({"b": 1, "a": 2}, "c", "thing")

    def test_data_directory_override(self, tmp_path, monkeypatch):
        data = {
            "version": "test",
            "cities": {
                "Testville": {
                    "state": "Nowhere",
                    "elevation_m": 0,
                    "latitude": 13.0,
                    "longitude": 80.0,
                    "seasons": {"summer": {"Tdb": 100.0, "Twb": 80.0, "RH": 40}},
                }
            },
            "indoor_presets": {},
        }
        (tmp_path / CLIMATE_FILE).write_text(json.dumps(data))
        monkeypatch.setattr(config, "DATA_DIR", str(tmp_path))
        clear_reference_cache()

        assert load_reference(CLIMATE_FILE)["version"] == "test"
        assert [c.name for c in list_cities()] == ["Testville"]
