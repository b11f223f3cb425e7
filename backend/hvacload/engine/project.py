"""
Project pipeline: room loads → floor and building aggregates → equipment
selection → materials → cost summary.

Each stage is one of the standalone engines; this module only wires their
outputs together and collects warnings and default markers from every
stage, prefixed with where they came from.
"""

import logging

from hvacload.engine.aggregation import aggregate_floor, aggregate_building
from hvacload.engine.materials import estimate_for_selection
from hvacload.engine.reference import versions
from hvacload.engine.room_load import calculate_room_load
from hvacload.engine.selection import select_equipment
from hvacload.models.project import ProjectInput, ProjectResult, CostSummary

logger = logging.getLogger(__name__)


def calculate_project(data: ProjectInput) -> ProjectResult:
    """
    Run the full calculation for a building.

    Raises:
        InputError: invalid room input
        SizingImpossible: the catalog cannot serve a room or the building
        UnknownReference: unknown tier or table key
    """
    warnings: list[str] = []
    defaults_used: list[str] = []

    floors = []
    for floor in data.floors:
        results = []
        for index, room in enumerate(floor.rooms):
            result = calculate_room_load(room)
            label = f"{floor.name}/{result.name or f'Room {index + 1}'}"
            defaults_used.extend(f"{label}: {marker}" for marker in result.defaults_used)
            warnings.extend(f"{label}: {warning}" for warning in result.warnings)
            results.append(result)
        aggregate = aggregate_floor(floor.name, results, floor.space_type)
        defaults_used.extend(f"{floor.name}: {marker}" for marker in aggregate.defaults_used)
        floors.append(aggregate)

    building = aggregate_building(data.name, floors, data.building_type)
    defaults_used.extend(f"building: {marker}" for marker in building.defaults_used)

    selection = select_equipment(building, data.tier, data.strategy, data.selection)
    warnings.extend(f"selection: {warning}" for warning in selection.warnings)

    materials = estimate_for_selection(selection, data.materials)

    # Tax is charged on equipment and materials together at the materials rate
    subtotal = round(selection.cost.total + materials.subtotal, 2)
    tax = round(subtotal * materials.tax_rate, 2)
    cost = CostSummary(
        currency=materials.currency,
        equipment=selection.cost.total,
        materials=materials.subtotal,
        subtotal=subtotal,
        tax_rate=materials.tax_rate,
        tax=tax,
        grand_total=round(subtotal + tax, 2),
    )

    logger.info(
        "Project %s: %d rooms, %.2f TR, %d IDU / %d ODU, total %.2f",
        data.name, building.room_count, building.tonnage,
        selection.indoor_unit_count, selection.outdoor_unit_count, cost.grand_total,
    )

    return ProjectResult(
        name=data.name,
        building=building,
        selection=selection,
        materials=materials,
        cost=cost,
        reference_versions=versions(),
        defaults_used=defaults_used,
        warnings=warnings,
    )
