"""
API routes for psychrometric condition resolution.
"""

from fastapi import APIRouter, HTTPException

from hvacload.engine.psychrometrics import resolve_condition
from hvacload.models.psychrometrics import ConditionInput, ClimateCondition

router = APIRouter(prefix="/api/v1", tags=["psychrometrics"])


@router.post("/psychrometrics", response_model=ClimateCondition)
async def create_condition(data: ConditionInput) -> ClimateCondition:
    """
    Resolve a full climate condition from any two of dry-bulb, wet-bulb and RH.

    When the inversion solver stops at its iteration cap the best estimate is
    returned with converged=false and a warning.
    """
    try:
        return resolve_condition(
            Tdb=data.Tdb,
            Twb=data.Twb,
            RH=data.RH,
            pressure=data.pressure,
            unit_system=data.unit_system,
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Calculation error: {str(e)}")
