"""
Design climate data provider.

Outdoor design conditions are keyed by city and season, indoor presets by
usage category. Both are resolved to full psychrometric states on request.
Station pressure comes from the city's elevation unless overridden.
"""

from typing import Optional

from hvacload.config import UnitSystem, Season
from hvacload.engine.psychrometrics import (
    resolve_condition,
    pressure_from_elevation,
    f_to_c,
)
from hvacload.engine.reference import (
    load_reference,
    lookup,
    load_tables,
    CLIMATE_FILE,
)
from hvacload.models.climate import (
    CitySummary,
    OutdoorDesignCondition,
    IndoorDesignCondition,
)


def load_climate_data() -> dict:
    return load_reference(CLIMATE_FILE)


def _summary(name: str, city: dict) -> CitySummary:
    return CitySummary(
        name=name,
        state=city["state"],
        elevation_m=city["elevation_m"],
        latitude=city["latitude"],
        longitude=city["longitude"],
    )


def list_cities() -> list[CitySummary]:
    cities = load_climate_data()["cities"]
    return [_summary(name, city) for name, city in cities.items()]


def search_cities(query: str, limit: int = 20) -> list[CitySummary]:
    """
    Search cities by name or state, case-insensitive partial match.
    Results are sorted by relevance (exact prefix first).
    """
    cities = load_climate_data()["cities"]
    query_lower = query.lower().strip()
    if not query_lower:
        return list_cities()[:limit]

    results = []
    for name, city in cities.items():
        name_lower = name.lower()
        state_lower = city["state"].lower()

        if name_lower.startswith(query_lower):
            results.append((0, name))
        elif query_lower in name_lower:
            results.append((1, name))
        elif state_lower == query_lower:
            results.append((2, name))
        elif query_lower in state_lower:
            results.append((3, name))

    results.sort(key=lambda x: x[0])
    return [_summary(name, cities[name]) for _, name in results[:limit]]


def latitude_band(latitude: float) -> str:
    """Nearest solar-table latitude band for a latitude in degrees north."""
    bands = load_tables()["latitude_bands"]
    return min(bands, key=lambda band: (abs(bands[band] - latitude), band))


def _temps(values: dict, unit_system: UnitSystem) -> dict:
    """Convert a stored °F record into the requested unit system."""
    if unit_system == UnitSystem.IP:
        return values
    return {
        key: f_to_c(value) if key in ("Tdb", "Twb") else value
        for key, value in values.items()
    }


def get_outdoor_condition(
    city: str,
    season: Season = Season.SUMMER,
    unit_system: UnitSystem = UnitSystem.IP,
    pressure_override: Optional[float] = None,
) -> OutdoorDesignCondition:
    """
    Resolve the outdoor design condition for a city and season.

    The stored dry-bulb and wet-bulb pair is authoritative; RH is derived.

    Raises:
        UnknownReference: if the city or season is not in the dataset
    """
    cities = load_climate_data()["cities"]
    data = lookup(cities, city, "city")
    season = Season(season)
    values = _temps(lookup(data["seasons"], season.value, "season"), unit_system)

    if pressure_override is not None:
        pressure = pressure_override
    else:
        pressure = pressure_from_elevation(data["elevation_m"])

    condition = resolve_condition(
        Tdb=values["Tdb"],
        Twb=values["Twb"],
        pressure=pressure,
        unit_system=unit_system,
    )
    return OutdoorDesignCondition(
        city=city,
        season=season,
        elevation_m=data["elevation_m"],
        latitude=data["latitude"],
        longitude=data["longitude"],
        latitude_band=latitude_band(data["latitude"]),
        condition=condition,
    )


def list_indoor_categories() -> dict[str, str]:
    presets = load_climate_data()["indoor_presets"]
    return {name: preset["description"] for name, preset in presets.items()}


def get_indoor_condition(
    category: str,
    season: Season = Season.SUMMER,
    unit_system: UnitSystem = UnitSystem.IP,
    pressure: Optional[float] = None,
) -> IndoorDesignCondition:
    """
    Resolve a standard indoor design preset.

    Raises:
        UnknownReference: if the category or season is not defined
    """
    presets = load_climate_data()["indoor_presets"]
    preset = lookup(presets, category, "indoor category")
    season = Season(season)
    values = _temps(lookup(preset["seasons"], season.value, "season"), unit_system)

    kwargs = {} if pressure is None else {"pressure": pressure}
    condition = resolve_condition(
        Tdb=values["Tdb"],
        RH=values["RH"],
        unit_system=unit_system,
        **kwargs,
    )
    return IndoorDesignCondition(
        category=category,
        description=preset["description"],
        season=season,
        condition=condition,
    )
