"""
API routes for equipment selection.
"""

from typing import Optional, Union

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from hvacload.config import SelectionTier, SelectionStrategyName
from hvacload.engine.catalog import list_tiers
from hvacload.engine.errors import SizingImpossible, UnknownReference
from hvacload.engine.selection import select_equipment, compare_tiers
from hvacload.models.aggregation import FloorAggregate, BuildingAggregate
from hvacload.models.catalog import SelectionTierConfig
from hvacload.models.selection import SelectionOptions, SelectionResult, TierComparison

router = APIRouter(prefix="/api/v1", tags=["equipment"])


class EquipmentSelectInput(BaseModel):
    aggregate: Union[BuildingAggregate, FloorAggregate]
    tier: SelectionTier = SelectionTier.BALANCED
    strategy: Optional[SelectionStrategyName] = None
    options: SelectionOptions = Field(default_factory=SelectionOptions)


@router.get("/equipment/tiers", response_model=list[SelectionTierConfig])
def equipment_tiers():
    """Configured selection tiers."""
    return list_tiers()


@router.post("/equipment/select", response_model=SelectionResult)
async def equipment_select(data: EquipmentSelectInput) -> SelectionResult:
    """
    Select indoor units per room and outdoor units for the aggregate.

    A connection ratio above the configured bound is reported as a warning.
    """
    try:
        return select_equipment(data.aggregate, data.tier, data.strategy, data.options)
    except UnknownReference as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (SizingImpossible, ValueError) as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Selection error: {str(e)}")


@router.post("/equipment/compare", response_model=TierComparison)
async def equipment_compare(data: EquipmentSelectInput) -> TierComparison:
    """Run the selection for every tier side by side."""
    try:
        return compare_tiers(data.aggregate, data.strategy, data.options)
    except UnknownReference as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Selection error: {str(e)}")
