"""
Pydantic models for a complete project calculation: rooms through cost.
"""

from pydantic import BaseModel, Field

from hvacload.config import SelectionTier, SelectionStrategyName
from hvacload.models.aggregation import BuildingAggregate
from hvacload.models.materials import MaterialsOptions, MaterialsEstimate
from hvacload.models.room_load import RoomLoadInput
from hvacload.models.selection import SelectionOptions, SelectionResult


class ProjectFloor(BaseModel):
    name: str
    space_type: str = "Office"
    rooms: list[RoomLoadInput] = Field(..., min_length=1)


class ProjectInput(BaseModel):
    """A building as floors of rooms, plus the selection and pricing choices."""

    name: str = "Project"
    building_type: str = "Office"
    floors: list[ProjectFloor] = Field(..., min_length=1)

    tier: SelectionTier = SelectionTier.BALANCED
    strategy: SelectionStrategyName = SelectionStrategyName.MIN_UNITS
    selection: SelectionOptions = Field(default_factory=SelectionOptions)
    materials: MaterialsOptions = Field(default_factory=MaterialsOptions)


class CostSummary(BaseModel):
    currency: str = "INR"
    equipment: float
    materials: float
    subtotal: float
    tax_rate: float
    tax: float
    grand_total: float


class ProjectResult(BaseModel):
    name: str
    building: BuildingAggregate
    selection: SelectionResult
    materials: MaterialsEstimate
    cost: CostSummary

    reference_versions: dict[str, str] = Field(default_factory=dict)
    defaults_used: list[str] = Field(
        default_factory=list, description="Room and aggregate defaults, prefixed with where they apply"
    )
    warnings: list[str] = Field(default_factory=list)
