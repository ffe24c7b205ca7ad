"""
Seat (asiento) API endpoints.
"""

from typing import Annotated, List

from fastapi import APIRouter, Body, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from geventos_platform.database import get_db
from geventos_platform.schemas.common import ERROR_RESPONSES, MessageResponse
from geventos_platform.schemas.layout import SeatOut
from geventos_platform.schemas.seat import BulkSeatCreateResponse, SeatCreate, SeatUpdate
from geventos_platform.services.seat_service import SeatService
from geventos_platform.utils.auth import TokenData
from geventos_platform.utils.dependencies import require_any_role, require_staff


router = APIRouter(prefix="/asientos", tags=["seats"])

SeatId = Annotated[int, Path(gt=0, alias="asientoID", description="Seat ID")]
AreaId = Annotated[int, Path(gt=0, alias="areaID", description="Area ID")]


def get_seat_service(db: AsyncSession = Depends(get_db)) -> SeatService:
    """Dependency to get seat service instance."""
    return SeatService(db)


@router.get("/areas/{areaID}/asientos", response_model=List[SeatOut], responses=ERROR_RESPONSES)
async def list_area_seats(
    area_id: AreaId,
    current_user: TokenData = Depends(require_any_role),
    seat_service: SeatService = Depends(get_seat_service)
):
    """List the seats of an area ordered by row and column."""
    seats = await seat_service.list_seats(area_id)
    return [SeatOut.from_seat(seat) for seat in seats]


@router.post(
    "/areas/{areaID}/asientos",
    response_model=BulkSeatCreateResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES
)
async def create_area_seats(
    area_id: AreaId,
    seats_data: List[SeatCreate] = Body(..., min_length=1),
    current_user: TokenData = Depends(require_staff),
    seat_service: SeatService = Depends(get_seat_service)
):
    """Create several seats in an area in one transaction."""
    seat_ids = await seat_service.create_seats(area_id, seats_data)
    return BulkSeatCreateResponse(
        message=f"{len(seat_ids)} asientos creados exitosamente.",
        seat_ids=seat_ids
    )


@router.get("/{asientoID}", response_model=SeatOut, responses=ERROR_RESPONSES)
async def get_seat(
    seat_id: SeatId,
    current_user: TokenData = Depends(require_any_role),
    seat_service: SeatService = Depends(get_seat_service)
):
    seat = await seat_service.get_seat(seat_id)
    return SeatOut.from_seat(seat)


@router.put("/{asientoID}", response_model=SeatOut, responses=ERROR_RESPONSES)
async def update_seat(
    seat_data: SeatUpdate,
    seat_id: SeatId,
    current_user: TokenData = Depends(require_staff),
    seat_service: SeatService = Depends(get_seat_service)
):
    """Partially update a seat. Its area cannot change."""
    seat = await seat_service.update_seat(seat_id, seat_data)
    return SeatOut.from_seat(seat)


@router.delete("/{asientoID}", response_model=MessageResponse, responses=ERROR_RESPONSES)
async def delete_seat(
    seat_id: SeatId,
    current_user: TokenData = Depends(require_staff),
    seat_service: SeatService = Depends(get_seat_service)
):
    await seat_service.delete_seat(seat_id)
    return MessageResponse(message="Asiento eliminado exitosamente.")
