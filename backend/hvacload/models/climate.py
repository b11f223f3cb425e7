"""
Pydantic models for design climate lookups.
"""

from pydantic import BaseModel

from hvacload.config import Season
from hvacload.models.psychrometrics import ClimateCondition


class CitySummary(BaseModel):
    """Abbreviated city record for search results."""

    name: str
    state: str
    elevation_m: float
    latitude: float
    longitude: float


class OutdoorDesignCondition(BaseModel):
    """Outdoor design state for a city and season."""

    city: str
    season: Season
    elevation_m: float
    latitude: float
    longitude: float
    latitude_band: str
    condition: ClimateCondition


class IndoorDesignCondition(BaseModel):
    """Indoor design preset for a usage category."""

    category: str
    description: str
    season: Season
    condition: ClimateCondition
