"""
Pydantic models for psychrometric state input/output.
"""

from typing import Optional

from pydantic import BaseModel, Field

from hvacload.config import UnitSystem, DEFAULT_PRESSURE_KPA


class RootResult(BaseModel):
    """Outcome of a bracketed root search."""

    root: float
    residual: float
    iterations: int
    converged: bool


class ConditionInput(BaseModel):
    """Any two or three of Tdb, Twb and RH, plus pressure."""

    Tdb: Optional[float] = Field(default=None, description="Dry-bulb (°F or °C)")
    Twb: Optional[float] = Field(default=None, description="Wet-bulb (°F or °C)")
    RH: Optional[float] = Field(default=None, description="Relative humidity (0-100%)")
    pressure: float = Field(
        default=DEFAULT_PRESSURE_KPA,
        description="Atmospheric pressure in kPa",
    )
    unit_system: UnitSystem = UnitSystem.IP


class ClimateCondition(BaseModel):
    """Fully resolved moist-air state."""

    unit_system: UnitSystem = UnitSystem.IP
    pressure: float = Field(..., description="Atmospheric pressure in kPa")

    Tdb: float = Field(..., description="Dry-bulb temperature")
    Twb: float = Field(..., description="Wet-bulb temperature")
    Tdp: float = Field(..., description="Dew point temperature")
    RH: float = Field(..., description="Relative humidity (0-100%)")
    W: float = Field(..., description="Humidity ratio (lb_w/lb_da or kg_w/kg_da)")
    W_display: float = Field(
        ...,
        description="Humidity ratio for display (grains/lb for IP, g/kg for SI)",
    )
    h: float = Field(..., description="Specific enthalpy (BTU/lb_da or kJ/kg_da)")
    v: float = Field(..., description="Specific volume (ft³/lb_da or m³/kg_da)")

    # Solver diagnostics (only meaningful when RH was derived from Twb)
    converged: bool = True
    iterations: int = 0
    warnings: list[str] = Field(default_factory=list)
