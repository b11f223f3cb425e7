"""
Pydantic models for the installation materials take-off.
"""

from typing import Optional

from pydantic import BaseModel, Field


class MaterialsOptions(BaseModel):
    """Overrides for the take-off parameters. Unset values come from the price list."""

    piping_run_m_per_idu: Optional[float] = Field(default=None, gt=0)
    drain_run_m_per_idu: Optional[float] = Field(default=None, gt=0)
    cable_run_m_per_unit: Optional[float] = Field(default=None, gt=0)
    drain_pump_fan_out: Optional[int] = Field(
        default=None, ge=1, description="Indoor units served by one drain pump"
    )
    branch_box_fan_out: Optional[int] = Field(
        default=None, ge=1, description="Indoor units served by one branch box"
    )
    refrigerant_kg_per_ton: Optional[float] = Field(default=None, ge=0)
    tax_rate: Optional[float] = Field(default=None, ge=0, le=1)


class MaterialsInput(BaseModel):
    indoor_count: int = Field(..., ge=0)
    outdoor_count: int = Field(..., ge=0)
    total_indoor_tons: float = Field(default=0.0, ge=0)
    options: MaterialsOptions = Field(default_factory=MaterialsOptions)


class MaterialLine(BaseModel):
    item: str
    name: str
    category: str
    quantity: float
    unit: str
    unit_price: float
    total_price: float


class MaterialsEstimate(BaseModel):
    """Priced installation materials for one selection."""

    currency: str = "INR"
    lines: list[MaterialLine] = Field(default_factory=list)
    category_totals: dict[str, float] = Field(default_factory=dict)
    subtotal: float
    tax_rate: float
    tax: float
    total: float
