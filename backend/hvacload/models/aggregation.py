"""
Pydantic models for floor and building load aggregation.
"""

from pydantic import BaseModel, Field

from hvacload.models.room_load import RoomLoadResult


class LoadTotals(BaseModel):
    """Raw and diversity-adjusted totals shared by every aggregate level."""

    room_count: int = Field(..., description="Rooms counted with their quantities")
    area: float

    sensible_raw: float
    latent_raw: float
    total_raw: float
    tonnage_raw: float

    diversity_factor: float = Field(..., gt=0, le=1)

    sensible_adjusted: float
    latent_adjusted: float
    total_adjusted: float
    tonnage: float

    supply_cfm: float
    fresh_air_cfm: float

    defaults_used: list[str] = Field(default_factory=list)


class FloorAggregate(LoadTotals):
    name: str
    space_type: str
    rooms: list[RoomLoadResult] = Field(default_factory=list)


class BuildingAggregate(LoadTotals):
    name: str
    building_type: str
    floors: list[FloorAggregate] = Field(default_factory=list)
