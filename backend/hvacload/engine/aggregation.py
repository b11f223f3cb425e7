"""
Floor and building load aggregation with diversity.

A diversity factor is looked up once per aggregate from its space type and
member count, and applied to the aggregate sum only. The building factor is
applied to the floors' raw sums, so floor and building discounts never
compound. Both raw and adjusted totals are kept.
"""

import logging
from typing import Optional

from hvacload.config import BTU_PER_TON
from hvacload.engine.reference import load_reference, DIVERSITY_FILE
from hvacload.models.aggregation import FloorAggregate, BuildingAggregate
from hvacload.models.room_load import RoomLoadResult

logger = logging.getLogger(__name__)


def _base_factor(space_type: str, bases: dict) -> Optional[float]:
    if space_type in bases:
        return bases[space_type]
    lowered = space_type.lower()
    for key, factor in bases.items():
        if key.lower() in lowered:
            return factor
    return None


def diversity_factor(
    space_type: str, member_count: int, defaults: Optional[list[str]] = None
) -> float:
    """
    Diversity factor for an aggregate of ``member_count`` rooms.

    A single member has no diversity (1.0). Otherwise the space type's base
    factor is reduced by the band the count falls in, never below the
    configured minimum. The space type matches a table key exactly or by
    case-insensitive containment ("Open Office" → Office); anything else
    takes the default base, recorded in ``defaults``.
    """
    if member_count <= 1:
        return 1.0

    table = load_reference(DIVERSITY_FILE)
    factor = _base_factor(space_type, table["base_factors"])
    if factor is None:
        factor = table["default_base"]
        if defaults is not None:
            defaults.append(
                f"diversity base {factor} (unknown space type '{space_type}')"
            )

    for band in sorted(table["count_bands"], key=lambda b: b["above"], reverse=True):
        if member_count > band["above"]:
            factor -= band["reduction"]
            break

    return round(min(max(factor, table["minimum_factor"]), 1.0), 4)


def _totals(sensible: float, latent: float, factor: float) -> dict:
    total = sensible + latent
    return {
        "sensible_raw": round(sensible, 2),
        "latent_raw": round(latent, 2),
        "total_raw": round(total, 2),
        "tonnage_raw": round(total / BTU_PER_TON, 4),
        "diversity_factor": factor,
        "sensible_adjusted": round(sensible * factor, 2),
        "latent_adjusted": round(latent * factor, 2),
        "total_adjusted": round(total * factor, 2),
        "tonnage": round(total * factor / BTU_PER_TON, 4),
    }


def aggregate_floor(
    name: str, rooms: list[RoomLoadResult], space_type: str = "Office"
) -> FloorAggregate:
    """Sum room results (weighted by quantity) into a floor aggregate."""
    room_count = sum(room.quantity for room in rooms)
    sensible = sum(room.sensible_total * room.quantity for room in rooms)
    latent = sum(room.latent_total * room.quantity for room in rooms)
    defaults: list[str] = []
    factor = diversity_factor(space_type, room_count, defaults)

    logger.debug("Floor %s: %d rooms, diversity %.2f", name, room_count, factor)

    return FloorAggregate(
        name=name,
        space_type=space_type,
        room_count=room_count,
        area=round(sum(room.area * room.quantity for room in rooms), 2),
        supply_cfm=round(sum(room.supply_cfm * room.quantity for room in rooms), 1),
        fresh_air_cfm=round(sum(room.fresh_air_cfm * room.quantity for room in rooms), 1),
        rooms=rooms,
        defaults_used=defaults,
        **_totals(sensible, latent, factor),
    )


def aggregate_building(
    name: str, floors: list[FloorAggregate], building_type: str = "Office"
) -> BuildingAggregate:
    """Sum floor aggregates into a building aggregate."""
    room_count = sum(floor.room_count for floor in floors)
    sensible = sum(floor.sensible_raw for floor in floors)
    latent = sum(floor.latent_raw for floor in floors)
    defaults: list[str] = []
    factor = diversity_factor(building_type, room_count, defaults)

    logger.debug("Building %s: %d floors, diversity %.2f", name, len(floors), factor)

    return BuildingAggregate(
        name=name,
        building_type=building_type,
        room_count=room_count,
        area=round(sum(floor.area for floor in floors), 2),
        supply_cfm=round(sum(floor.supply_cfm for floor in floors), 1),
        fresh_air_cfm=round(sum(floor.fresh_air_cfm for floor in floors), 1),
        floors=floors,
        defaults_used=defaults,
        **_totals(sensible, latent, factor),
    )
