"""
Top-level API router that aggregates all sub-routers.
"""

from fastapi import APIRouter

from hvacload.api.psychrometrics import router as psychrometrics_router
from hvacload.api.climate import router as climate_router
from hvacload.api.loads import router as loads_router
from hvacload.api.equipment import router as equipment_router
from hvacload.api.materials import router as materials_router
from hvacload.api.project import router as project_router

router = APIRouter()
router.include_router(psychrometrics_router)
router.include_router(climate_router)
router.include_router(loads_router)
router.include_router(equipment_router)
router.include_router(materials_router)
router.include_router(project_router)
