"""
Pydantic models for equipment catalog entries and selection tiers.
"""

from pydantic import BaseModel


class IndoorUnitModel(BaseModel):
    model: str
    capacity_tons: float
    mounting: str
    price: float
    brand: str = ""


class OutdoorUnitModel(BaseModel):
    model: str
    capacity_hp: float
    max_indoor_units: int
    max_piping_length_m: float
    max_height_difference_m: float
    price: float
    brand: str = ""
    efficiency: str = ""


class EquipmentCatalog(BaseModel):
    version: str = ""
    indoor_units: list[IndoorUnitModel]
    outdoor_units: list[OutdoorUnitModel]


class SelectionTierConfig(BaseModel):
    name: str
    preferred_mounting: str
    max_outdoor_hp: float
    hp_per_ton: float
    description: str = ""
