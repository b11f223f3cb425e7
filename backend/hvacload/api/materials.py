"""
API routes for the installation materials estimate.
"""

from fastapi import APIRouter, HTTPException

from hvacload.engine.errors import UnknownReference
from hvacload.engine.materials import estimate_materials
from hvacload.models.materials import MaterialsInput, MaterialsEstimate

router = APIRouter(prefix="/api/v1", tags=["materials"])


@router.post("/materials/estimate", response_model=MaterialsEstimate)
async def materials_estimate(data: MaterialsInput) -> MaterialsEstimate:
    """Priced take-off of piping, drainage, electrical, mounting and control items."""
    try:
        return estimate_materials(
            data.indoor_count, data.outdoor_count, data.total_indoor_tons, data.options
        )
    except UnknownReference as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Calculation error: {str(e)}")
