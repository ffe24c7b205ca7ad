"""
Area API endpoints.
"""

from typing import Annotated, List

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from geventos_platform.database import get_db
from geventos_platform.schemas.area import (
    AreaCreate,
    AreaCreatedResponse,
    AreaResponse,
    AreaUpdate,
)
from geventos_platform.schemas.common import ERROR_RESPONSES, MessageResponse
from geventos_platform.services.area_service import AreaService
from geventos_platform.utils.auth import TokenData
from geventos_platform.utils.dependencies import require_any_role, require_staff


router = APIRouter(prefix="/areas", tags=["areas"])

AreaId = Annotated[int, Path(gt=0, alias="areaID", description="Area ID")]
VenueId = Annotated[int, Path(gt=0, alias="lugarID", description="Venue ID")]


def get_area_service(db: AsyncSession = Depends(get_db)) -> AreaService:
    """Dependency to get area service instance."""
    return AreaService(db)


@router.get("/lugares/{lugarID}/areas", response_model=List[AreaResponse], responses=ERROR_RESPONSES)
async def list_venue_areas(
    venue_id: VenueId,
    current_user: TokenData = Depends(require_any_role),
    area_service: AreaService = Depends(get_area_service)
):
    """List the areas of a venue ordered by name."""
    areas = await area_service.list_areas(venue_id)
    return [AreaResponse.from_area(area) for area in areas]


@router.post(
    "/lugares/{lugarID}/areas",
    response_model=AreaCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES
)
async def create_area(
    area_data: AreaCreate,
    venue_id: VenueId,
    current_user: TokenData = Depends(require_staff),
    area_service: AreaService = Depends(get_area_service)
):
    area = await area_service.create_area(venue_id, area_data)
    return AreaCreatedResponse(message="Área creada exitosamente.", area_id=area.id)


@router.get("/{areaID}", response_model=AreaResponse, responses=ERROR_RESPONSES)
async def get_area(
    area_id: AreaId,
    current_user: TokenData = Depends(require_any_role),
    area_service: AreaService = Depends(get_area_service)
):
    area = await area_service.get_area(area_id)
    return AreaResponse.from_area(area)


@router.put("/{areaID}", response_model=AreaResponse, responses=ERROR_RESPONSES)
async def update_area(
    area_data: AreaUpdate,
    area_id: AreaId,
    current_user: TokenData = Depends(require_staff),
    area_service: AreaService = Depends(get_area_service)
):
    """Partially update an area. Its venue cannot change."""
    area = await area_service.update_area(area_id, area_data)
    return AreaResponse.from_area(area)


@router.delete("/{areaID}", response_model=MessageResponse, responses=ERROR_RESPONSES)
async def delete_area(
    area_id: AreaId,
    current_user: TokenData = Depends(require_staff),
    area_service: AreaService = Depends(get_area_service)
):
    """Delete an area and all its seats."""
    await area_service.delete_area(area_id)
    return MessageResponse(message="Área y sus asientos eliminados exitosamente.")
