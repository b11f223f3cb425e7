"""
Pydantic models for equipment selection input/output.
"""

from typing import Optional

from pydantic import BaseModel, Field

from hvacload.config import (
    SelectionStrategyName,
    SELECTION_MAX_ITERATIONS,
)


class SelectionOptions(BaseModel):
    """Knobs for a selection run. All optional."""

    max_units_per_room: int = Field(
        default=1, ge=1, description="Allow a room to be split over N identical indoor units"
    )
    piping_length_m: Optional[float] = Field(
        default=None, description="Longest refrigerant run; filters outdoor units"
    )
    height_difference_m: Optional[float] = Field(
        default=None, description="Indoor/outdoor level difference; filters outdoor units"
    )
    max_connection_ratio: Optional[float] = Field(
        default=None, description="Override for the indoor/outdoor capacity bound"
    )
    max_iterations: int = Field(default=SELECTION_MAX_ITERATIONS, ge=1)


class IndoorAssignment(BaseModel):
    """Indoor units chosen for one room (all identical rooms included)."""

    room: str
    room_index: int
    room_quantity: int = 1
    required_tons: float
    model: str
    mounting: str
    capacity_tons: float
    units_per_room: int = 1
    quantity: int
    oversizing_pct: float
    preferred_mounting: bool = True
    unit_price: float
    total_price: float


class OutdoorAssignment(BaseModel):
    model: str
    capacity_hp: float
    max_indoor_units: int
    quantity: int
    unit_price: float
    total_price: float


class BillOfMaterialsLine(BaseModel):
    item: str
    description: str
    category: str
    quantity: float
    unit: str = "nos"
    unit_price: float
    total_price: float


class EquipmentCost(BaseModel):
    indoor_units: float
    outdoor_units: float
    total: float


class SelectionResult(BaseModel):
    tier: str
    strategy: SelectionStrategyName
    hp_per_ton: float

    required_tons: float
    required_hp: float

    indoor_units: list[IndoorAssignment]
    outdoor_units: list[OutdoorAssignment]

    indoor_unit_count: int
    outdoor_unit_count: int
    total_indoor_tons: float
    total_outdoor_hp: float
    connection_ratio: float = Field(
        ..., description="Indoor capacity (HP-equivalent) ÷ outdoor capacity"
    )
    redundancy: str

    bill_of_materials: list[BillOfMaterialsLine]
    cost: EquipmentCost
    warnings: list[str] = Field(default_factory=list)


class TierComparison(BaseModel):
    """Selection run once per tier for side-by-side comparison."""

    options: dict[str, SelectionResult] = Field(default_factory=dict)
    unavailable: dict[str, str] = Field(
        default_factory=dict, description="Tier → reason the tier could not be sized"
    )
