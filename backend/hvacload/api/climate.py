"""
API routes for design climate lookups.
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from hvacload.config import UnitSystem, Season
from hvacload.engine.climate import (
    search_cities,
    list_indoor_categories,
    get_outdoor_condition,
    get_indoor_condition,
)
from hvacload.engine.errors import UnknownReference
from hvacload.models.climate import (
    CitySummary,
    OutdoorDesignCondition,
    IndoorDesignCondition,
)

router = APIRouter(prefix="/api/v1", tags=["climate"])


@router.get("/climate/cities", response_model=list[CitySummary])
def search_climate_cities(
    q: str = Query("", description="Search query (city or state)"),
    limit: int = Query(20, ge=1, le=100),
):
    """Search the cities in the climate dataset."""
    return search_cities(q, limit=limit)


@router.get("/climate/indoor", response_model=dict[str, str])
def indoor_categories():
    """Indoor design categories with their descriptions."""
    return list_indoor_categories()


@router.get("/climate/outdoor/{city}", response_model=OutdoorDesignCondition)
def outdoor_condition(
    city: str,
    season: Season = Season.SUMMER,
    unit_system: UnitSystem = UnitSystem.IP,
    pressure: Optional[float] = Query(None, gt=0, description="Override in kPa"),
):
    """Outdoor design condition of a city for one season."""
    try:
        return get_outdoor_condition(city, season, unit_system, pressure)
    except UnknownReference as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/climate/indoor/{category}", response_model=IndoorDesignCondition)
def indoor_condition(
    category: str,
    season: Season = Season.SUMMER,
    unit_system: UnitSystem = UnitSystem.IP,
    pressure: Optional[float] = Query(None, gt=0, description="Override in kPa"),
):
    """Indoor design preset for a usage category."""
    try:
        return get_indoor_condition(category, season, unit_system, pressure)
    except UnknownReference as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
