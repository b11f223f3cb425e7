"""
API routes for room loads and floor aggregation.
"""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from hvacload.engine.aggregation import aggregate_floor
from hvacload.engine.errors import UnknownReference
from hvacload.engine.room_load import calculate_room_load
from hvacload.models.aggregation import FloorAggregate
from hvacload.models.room_load import RoomLoadInput, RoomLoadResult

router = APIRouter(prefix="/api/v1", tags=["loads"])


class FloorAggregateInput(BaseModel):
    name: str
    space_type: str = "Office"
    rooms: list[RoomLoadInput] = Field(..., min_length=1)


@router.post("/rooms/load", response_model=RoomLoadResult)
async def room_load(data: RoomLoadInput) -> RoomLoadResult:
    """
    Itemized cooling load of one room.

    Table fallbacks are listed in defaults_used; clamped negative components
    are listed in warnings.
    """
    try:
        return calculate_room_load(data)
    except UnknownReference as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Calculation error: {str(e)}")


@router.post("/floors/aggregate", response_model=FloorAggregate)
async def floor_aggregate(data: FloorAggregateInput) -> FloorAggregate:
    """Compute every room and sum them into a diversity-adjusted floor total."""
    try:
        rooms = [calculate_room_load(room) for room in data.rooms]
        return aggregate_floor(data.name, rooms, data.space_type)
    except UnknownReference as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Calculation error: {str(e)}")
