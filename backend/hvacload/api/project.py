"""
API routes for the full project calculation.
"""

from fastapi import APIRouter, HTTPException

from hvacload.engine.errors import SizingImpossible, UnknownReference
from hvacload.engine.project import calculate_project
from hvacload.models.project import ProjectInput, ProjectResult

router = APIRouter(prefix="/api/v1", tags=["project"])


@router.post("/projects/calculate", response_model=ProjectResult)
async def project_calculate(data: ProjectInput) -> ProjectResult:
    """
    Rooms → floors → building → equipment → materials → cost, in one call.
    """
    try:
        return calculate_project(data)
    except UnknownReference as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (SizingImpossible, ValueError) as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Calculation error: {str(e)}")
