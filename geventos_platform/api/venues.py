"""
Venue (lugar) API endpoints.
"""

from typing import Annotated, List

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from geventos_platform.database import get_db
from geventos_platform.schemas.common import ERROR_RESPONSES, MessageResponse
from geventos_platform.schemas.venue import VenueCreate, VenueResponse, VenueUpdate
from geventos_platform.services.venue_service import VenueService
from geventos_platform.utils.auth import TokenData
from geventos_platform.utils.dependencies import require_admin, require_any_role


router = APIRouter(prefix="/lugares", tags=["venues"])

VenueId = Annotated[int, Path(gt=0, alias="lugarID", description="Venue ID")]


def get_venue_service(db: AsyncSession = Depends(get_db)) -> VenueService:
    """Dependency to get venue service instance."""
    return VenueService(db)


@router.get("", response_model=List[VenueResponse], responses=ERROR_RESPONSES)
async def list_venues(
    current_user: TokenData = Depends(require_any_role),
    venue_service: VenueService = Depends(get_venue_service)
):
    venues = await venue_service.list_venues()
    return [VenueResponse.from_venue(venue) for venue in venues]


@router.get("/{lugarID}", response_model=VenueResponse, responses=ERROR_RESPONSES)
async def get_venue(
    venue_id: VenueId,
    current_user: TokenData = Depends(require_any_role),
    venue_service: VenueService = Depends(get_venue_service)
):
    venue = await venue_service.get_venue(venue_id)
    return VenueResponse.from_venue(venue)


@router.post(
    "",
    response_model=VenueResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES
)
async def create_venue(
    venue_data: VenueCreate,
    current_user: TokenData = Depends(require_admin),
    venue_service: VenueService = Depends(get_venue_service)
):
    """Create a venue. Admin only."""
    venue = await venue_service.create_venue(venue_data)
    return VenueResponse.from_venue(venue)


@router.put("/{lugarID}", response_model=VenueResponse, responses=ERROR_RESPONSES)
async def update_venue(
    venue_data: VenueUpdate,
    venue_id: VenueId,
    current_user: TokenData = Depends(require_admin),
    venue_service: VenueService = Depends(get_venue_service)
):
    """Partially update a venue. Admin only."""
    venue = await venue_service.update_venue(venue_id, venue_data)
    return VenueResponse.from_venue(venue)


@router.delete("/{lugarID}", response_model=MessageResponse, responses=ERROR_RESPONSES)
async def delete_venue(
    venue_id: VenueId,
    current_user: TokenData = Depends(require_admin),
    venue_service: VenueService = Depends(get_venue_service)
):
    """
    Delete a venue with its areas and seats. Admin only.

    Fails with 400 while any event takes place at the venue.
    """
    await venue_service.delete_venue(venue_id)
    return MessageResponse(message="Lugar eliminado exitosamente.")
