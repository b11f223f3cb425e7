"""
Pydantic models for room heat-load input/output.

All loads are BTU/hr, areas sqft, lengths ft, airflow cfm, temperatures °F.
"""

from typing import Optional

from pydantic import BaseModel, Field

from hvacload.config import (
    ComponentKind,
    DEFAULT_SAFETY_FACTOR,
    DEFAULT_SUPPLY_AIR_RISE_F,
    DEFAULT_SOLAR_HOUR,
    DEFAULT_EQUIPMENT_USE_FACTOR,
    DEFAULT_EQUIPMENT_DIVERSITY,
)
from hvacload.models.psychrometrics import ClimateCondition


class RoomGeometry(BaseModel):
    """Room dimensions. Area is length × width unless given directly."""

    length: Optional[float] = None
    width: Optional[float] = None
    height: float = 10.0
    area: Optional[float] = None


class EnvelopeComponent(BaseModel):
    """One envelope surface contributing transmission and/or solar gain."""

    kind: ComponentKind
    area: float
    label: str = ""
    orientation: Optional[str] = Field(
        default=None,
        description="North, Northeast, ... Northwest, or Horizontal",
    )

    # Transmission
    construction: Optional[str] = Field(
        default=None, description="U-factor table key for the component kind"
    )
    u_factor: Optional[float] = Field(
        default=None, description="Explicit U-factor (BTU/hr·sqft·°F), overrides construction"
    )
    wall_weight: str = "Medium"  # Light / Medium / Heavy
    roof_surface: Optional[str] = None
    cltd: Optional[float] = Field(default=None, description="Explicit CLTD override (°F)")
    adjacent_temp: Optional[float] = Field(
        default=None, description="Adjacent space dry-bulb for partitions and floors (°F)"
    )

    # Glazing
    glass_type: str = "Single Clear 6mm"
    shading: str = "none"  # none / inside / outside


class InternalLoadSource(BaseModel):
    """Occupants, lighting, equipment and motors."""

    occupants: int = 0
    activity: Optional[str] = None

    lighting_watts: Optional[float] = None
    lighting_w_per_sqft: Optional[float] = None
    lighting_use_factor: float = 1.0
    ballast_factor: float = 1.0

    equipment_watts: Optional[float] = None
    equipment_w_per_sqft: Optional[float] = None
    equipment_profile: Optional[str] = Field(
        default=None, description="Equipment density table key, e.g. 'Server Room'"
    )
    equipment_use_factor: float = DEFAULT_EQUIPMENT_USE_FACTOR
    equipment_diversity: float = DEFAULT_EQUIPMENT_DIVERSITY

    motor_hp: float = 0.0


class VentilationSpec(BaseModel):
    """Outdoor air entering the room. Missing values come from tables."""

    fresh_air_cfm: Optional[float] = None
    infiltration_cfm: Optional[float] = None
    space_type: Optional[str] = Field(
        default=None, description="Ventilation-rate table key; defaults to the room type"
    )


class RoomLoadInput(BaseModel):
    """Everything needed to compute one room's cooling load."""

    name: str = ""
    room_type: str = "Office"
    quantity: int = Field(default=1, ge=1, description="Number of identical rooms")

    geometry: RoomGeometry
    outside: ClimateCondition
    inside: ClimateCondition

    envelope: list[EnvelopeComponent] = Field(default_factory=list)
    internal: InternalLoadSource = Field(default_factory=InternalLoadSource)
    ventilation: VentilationSpec = Field(default_factory=VentilationSpec)

    safety_factor: float = DEFAULT_SAFETY_FACTOR
    sensible_safety_factor: Optional[float] = None
    latent_safety_factor: Optional[float] = None
    supply_air_rise: float = Field(
        default=DEFAULT_SUPPLY_AIR_RISE_F,
        description="Room minus supply air dry-bulb (°F)",
    )

    adp: Optional[float] = Field(
        default=None, description="Apparatus dew point (°F); enables the coil analysis"
    )
    bypass_factor: Optional[float] = Field(
        default=None, description="Coil bypass factor, 0 ≤ BF < 1 (default 0.1 with an ADP)"
    )

    latitude_band: Optional[str] = Field(default=None, description="13N, 20N or 28N")
    latitude: Optional[float] = None
    solar_hour: str = Field(default=DEFAULT_SOLAR_HOUR, description="9, 12, 15 or peak")


class SensibleComponents(BaseModel):
    solar_glass: float = 0.0
    glass_conduction: float = 0.0
    walls: float = 0.0
    roof: float = 0.0
    floor: float = 0.0
    partitions: float = 0.0
    occupants: float = 0.0
    lighting: float = 0.0
    equipment: float = 0.0
    motors: float = 0.0
    ventilation: float = 0.0
    infiltration: float = 0.0


class LatentComponents(BaseModel):
    occupants: float = 0.0
    ventilation: float = 0.0
    infiltration: float = 0.0


class CoilAnalysis(BaseModel):
    """Effective-heat coil figures for a bypass factor and apparatus dew point."""

    bypass_factor: float
    adp: float

    # Room heat without ventilation air, safety-adjusted
    effective_room_sensible: float
    effective_room_latent: float
    effective_room_total: float

    # Ventilation heat reaching the coil, × (1 − BF)
    outside_air_sensible: float
    outside_air_latent: float
    outside_air_total: float

    grand_sensible: float
    grand_latent: float
    grand_total: float
    tonnage: float

    eshf: float = Field(..., description="Effective sensible heat factor")
    room_shr: float = Field(..., description="Room sensible heat ratio before safety factors")
    grand_shr: float

    dehumidified_rise: float = Field(..., description="(1 − BF) × (room − ADP), °F")
    dehumidified_cfm: float
    coil_leaving_temp: float
    supply_air_temp: float
    return_air_cfm: float
    return_air_percent: float
    outside_air_percent: float
    mixed_air_temp: float
    cfm_per_ton: float
    btu_per_cfm: float


class RoomLoadResult(BaseModel):
    """Itemized and safety-adjusted cooling load for one room."""

    name: str = ""
    room_type: str = ""
    quantity: int = 1
    area: float
    volume: float

    sensible: SensibleComponents
    latent: LatentComponents

    # Raw subtotals before the safety factor
    sensible_subtotal: float
    latent_subtotal: float

    sensible_safety_factor: float
    latent_safety_factor: float

    # Safety-adjusted totals
    sensible_total: float
    latent_total: float
    grand_total: float
    tonnage: float

    supply_cfm: float
    fresh_air_cfm: float
    infiltration_cfm: float
    shf: float = Field(..., description="Sensible heat factor (0 when the total is 0)")
    btu_per_sqft: float
    sqft_per_ton: float

    coil: Optional[CoilAnalysis] = None

    defaults_used: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
