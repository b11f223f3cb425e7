"""
Equipment selection: maps room and aggregate loads onto catalog equipment.

Two stages, both required for a result:

1. Indoor units, per room. The tier's preferred mounting type is tried first;
   the smallest model whose capacity covers the room's requirement (rounded
   up to 0.1 TR) is chosen. Rooms with no preferred-type match fall back to
   any mounting type. A room no model can serve raises SizingImpossible.

2. Outdoor units, for the aggregate. Required tonnage becomes an HP
   requirement through the tier's HP-per-ton ratio, then a pluggable
   strategy picks units from the catalog entries that satisfy the piping
   and height limits. Repeated picks are consolidated into quantities.

Afterwards the indoor/outdoor connection ratio is checked against the
configured bound. A violation is a warning, not an error.
"""

import logging
import math
from collections import Counter
from typing import Optional, Union

from hvacload.config import (
    SelectionTier,
    SelectionStrategyName,
    CAPACITY_STEP_TONS,
)
from hvacload.engine.catalog import load_catalog, get_tier, max_connection_ratio
from hvacload.engine.errors import SizingImpossible
from hvacload.engine.strategies import OutdoorSelectionStrategy, get_strategy
from hvacload.models.aggregation import FloorAggregate, BuildingAggregate
from hvacload.models.catalog import (
    EquipmentCatalog,
    IndoorUnitModel,
    OutdoorUnitModel,
    SelectionTierConfig,
)
from hvacload.models.room_load import RoomLoadResult
from hvacload.models.selection import (
    SelectionOptions,
    IndoorAssignment,
    OutdoorAssignment,
    BillOfMaterialsLine,
    EquipmentCost,
    SelectionResult,
    TierComparison,
)

logger = logging.getLogger(__name__)

Aggregate = Union[FloorAggregate, BuildingAggregate]


def round_up_capacity(tons: float, step: float = CAPACITY_STEP_TONS) -> float:
    """Round a tonnage up to the catalog step (0.1 TR)."""
    steps = math.ceil(round(tons / step, 6))
    return round(steps * step, 4)


def _smallest(units: list[IndoorUnitModel], required: float) -> Optional[IndoorUnitModel]:
    fitting = [u for u in units if u.capacity_tons >= required]
    if not fitting:
        return None
    return min(fitting, key=lambda u: (u.capacity_tons, u.price, u.model))


def select_indoor_unit(
    required_tons: float,
    units: list[IndoorUnitModel],
    preferred_mounting: str,
    max_units: int = 1,
) -> tuple[IndoorUnitModel, int, bool]:
    """
    Choose the indoor unit for one room.

    Returns (model, units per room, preferred mounting used). Splitting over
    several identical units is only tried when a single unit is too small.

    Raises:
        SizingImpossible: if no catalog model covers the requirement
    """
    preferred = [u for u in units if u.mounting == preferred_mounting]
    for pool, is_preferred in ((preferred, True), (units, False)):
        for count in range(1, max_units + 1):
            unit = _smallest(pool, round_up_capacity(required_tons / count))
            if unit is not None:
                return unit, count, is_preferred

    largest = max((u.capacity_tons for u in units), default=0.0)
    raise SizingImpossible(
        f"No indoor unit covers {required_tons:g} TR "
        f"(largest {largest:g} TR, up to {max_units} per room)"
    )


def filter_outdoor_units(
    units: list[OutdoorUnitModel], options: SelectionOptions
) -> list[OutdoorUnitModel]:
    """Drop outdoor units whose piping or height limits the project exceeds."""
    result = units
    if options.piping_length_m is not None:
        result = [u for u in result if u.max_piping_length_m >= options.piping_length_m]
    if options.height_difference_m is not None:
        result = [u for u in result if u.max_height_difference_m >= options.height_difference_m]
    return result


def _rooms(aggregate: Aggregate) -> list[RoomLoadResult]:
    if isinstance(aggregate, BuildingAggregate):
        return [room for floor in aggregate.floors for room in floor.rooms]
    return list(aggregate.rooms)


def _redundancy(outdoor_count: int) -> str:
    if outdoor_count <= 1:
        return "None"
    return f"N+{outdoor_count - 1}"


def _select_indoor_units(
    rooms: list[RoomLoadResult],
    catalog: EquipmentCatalog,
    preferred_mounting: str,
    options: SelectionOptions,
    warnings: list[str],
) -> list[IndoorAssignment]:
    assignments = []
    for index, room in enumerate(rooms):
        label = room.name or f"Room {index + 1}"
        required = round_up_capacity(room.tonnage)
        if required <= 0:
            warnings.append(f"{label} has no cooling load; no indoor unit assigned")
            continue

        unit, count, is_preferred = select_indoor_unit(
            required, catalog.indoor_units, preferred_mounting, options.max_units_per_room
        )
        if not is_preferred:
            warnings.append(
                f"{label}: no {preferred_mounting} unit covers {required:g} TR; "
                f"using {unit.mounting}"
            )

        quantity = count * room.quantity
        selected = unit.capacity_tons * count
        assignments.append(IndoorAssignment(
            room=label,
            room_index=index,
            room_quantity=room.quantity,
            required_tons=required,
            model=unit.model,
            mounting=unit.mounting,
            capacity_tons=unit.capacity_tons,
            units_per_room=count,
            quantity=quantity,
            oversizing_pct=round((selected - required) / required * 100.0, 1),
            preferred_mounting=is_preferred,
            unit_price=unit.price,
            total_price=unit.price * quantity,
        ))
    return assignments


def _consolidate(picks: list[OutdoorUnitModel]) -> list[OutdoorAssignment]:
    by_model = {u.model: u for u in picks}
    counts = Counter(u.model for u in picks)
    ordered = sorted(counts, key=lambda m: (-by_model[m].capacity_hp, m))
    return [
        OutdoorAssignment(
            model=model,
            capacity_hp=by_model[model].capacity_hp,
            max_indoor_units=by_model[model].max_indoor_units,
            quantity=counts[model],
            unit_price=by_model[model].price,
            total_price=by_model[model].price * counts[model],
        )
        for model in ordered
    ]


def _bill_of_materials(
    indoor: list[IndoorAssignment], outdoor: list[OutdoorAssignment]
) -> list[BillOfMaterialsLine]:
    lines = []
    indoor_counts: Counter = Counter()
    indoor_info = {}
    for a in indoor:
        indoor_counts[a.model] += a.quantity
        indoor_info[a.model] = a
    for model in sorted(indoor_counts):
        a = indoor_info[model]
        lines.append(BillOfMaterialsLine(
            item=model,
            description=f"{a.mounting} indoor unit, {a.capacity_tons:g} TR",
            category="indoor unit",
            quantity=indoor_counts[model],
            unit_price=a.unit_price,
            total_price=a.unit_price * indoor_counts[model],
        ))
    for a in outdoor:
        lines.append(BillOfMaterialsLine(
            item=a.model,
            description=f"VRF outdoor unit, {a.capacity_hp:g} HP",
            category="outdoor unit",
            quantity=a.quantity,
            unit_price=a.unit_price,
            total_price=a.total_price,
        ))
    return lines


def select_equipment(
    aggregate: Aggregate,
    tier: Union[SelectionTier, str, SelectionTierConfig] = SelectionTier.BALANCED,
    strategy: Optional[Union[SelectionStrategyName, OutdoorSelectionStrategy]] = None,
    options: Optional[SelectionOptions] = None,
    catalog: Optional[EquipmentCatalog] = None,
) -> SelectionResult:
    """
    Select indoor and outdoor equipment for a floor or building aggregate.

    Args:
        aggregate: Floor or building aggregate; its rooms drive indoor
            selection and its diversity-adjusted tonnage drives outdoor
            selection
        tier: economy, balanced or premium, or an explicit tier config
        strategy: Strategy name or instance (default: fewest units)
        options: Piping/height limits, units per room, ratio override
        catalog: Catalog override (default: bundled catalog)

    Raises:
        SizingImpossible: a room or the aggregate cannot be served
        UnknownReference: unknown tier
    """
    options = options or SelectionOptions()
    catalog = catalog or load_catalog()
    if isinstance(tier, SelectionTierConfig):
        tier_config = tier
    else:
        tier_config = get_tier(tier)
    if strategy is None or isinstance(strategy, (str, SelectionStrategyName)):
        strategy = get_strategy(
            strategy or SelectionStrategyName.MIN_UNITS, options.max_iterations
        )

    warnings: list[str] = []

    indoor = _select_indoor_units(
        _rooms(aggregate), catalog, tier_config.preferred_mounting, options, warnings
    )
    indoor_count = sum(a.quantity for a in indoor)
    total_indoor_tons = sum(a.capacity_tons * a.quantity for a in indoor)

    required_tons = round_up_capacity(aggregate.tonnage)
    required_hp = math.ceil(round(required_tons * tier_config.hp_per_ton, 6))

    candidates = filter_outdoor_units(catalog.outdoor_units, options)
    if required_hp > 0 and not candidates:
        raise SizingImpossible(
            "No outdoor unit supports the requested piping length / height difference"
        )

    picks = strategy.select(required_hp, candidates, indoor_count, tier_config.max_outdoor_hp)
    outdoor = _consolidate(picks)
    outdoor_count = sum(a.quantity for a in outdoor)
    total_outdoor_hp = sum(a.capacity_hp * a.quantity for a in outdoor)

    logger.debug(
        "Selection (%s/%s): %d IDU, %g HP required, %d ODU (%g HP)",
        tier_config.name, strategy.name.value, indoor_count,
        required_hp, outdoor_count, total_outdoor_hp,
    )

    if total_outdoor_hp < required_hp:
        raise SizingImpossible(
            f"Selected outdoor capacity {total_outdoor_hp:g} HP is below "
            f"the required {required_hp:g} HP"
        )

    slots = sum(a.max_indoor_units * a.quantity for a in outdoor)
    if indoor_count > slots:
        warnings.append(
            f"{indoor_count} indoor units exceed the {slots} connections "
            f"of the selected outdoor units"
        )

    if total_outdoor_hp > 0:
        ratio = total_indoor_tons * tier_config.hp_per_ton / total_outdoor_hp
    else:
        ratio = 0.0
    bound = max_connection_ratio(options.max_connection_ratio)
    if ratio > bound:
        warnings.append(
            f"Connection ratio {ratio:.2f} exceeds the maximum {bound:.2f}; "
            f"consider more outdoor capacity"
        )

    indoor_cost = sum(a.total_price for a in indoor)
    outdoor_cost = sum(a.total_price for a in outdoor)

    return SelectionResult(
        tier=tier_config.name,
        strategy=strategy.name,
        hp_per_ton=tier_config.hp_per_ton,
        required_tons=required_tons,
        required_hp=required_hp,
        indoor_units=indoor,
        outdoor_units=outdoor,
        indoor_unit_count=indoor_count,
        outdoor_unit_count=outdoor_count,
        total_indoor_tons=round(total_indoor_tons, 2),
        total_outdoor_hp=total_outdoor_hp,
        connection_ratio=round(ratio, 3),
        redundancy=_redundancy(outdoor_count),
        bill_of_materials=_bill_of_materials(indoor, outdoor),
        cost=EquipmentCost(
            indoor_units=indoor_cost,
            outdoor_units=outdoor_cost,
            total=indoor_cost + outdoor_cost,
        ),
        warnings=warnings,
    )


def compare_tiers(
    aggregate: Aggregate,
    strategy: Optional[SelectionStrategyName] = None,
    options: Optional[SelectionOptions] = None,
    catalog: Optional[EquipmentCatalog] = None,
) -> TierComparison:
    """Run the selection once per tier. Tiers that cannot be sized are listed with the reason."""
    comparison = TierComparison()
    for tier in SelectionTier:
        try:
            comparison.options[tier.value] = select_equipment(
                aggregate, tier, strategy, options, catalog
            )
        except SizingImpossible as e:
            comparison.unavailable[tier.value] = str(e)
    return comparison
