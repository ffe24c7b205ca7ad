"""
Event management and event layout API endpoints.
"""

from typing import Annotated, List

from fastapi import APIRouter, Depends, Path, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from geventos_platform.database import get_db
from geventos_platform.schemas.common import ERROR_RESPONSES, MessageResponse
from geventos_platform.schemas.event import (
    EventCreate,
    EventCreatedResponse,
    EventResponse,
    EventUpdate,
)
from geventos_platform.schemas.layout import (
    AreaDeleteResponse,
    LayoutResponse,
    LayoutSaveRequest,
    LayoutSaveResponse,
    SeatOut,
)
from geventos_platform.schemas.seat import EventSeatCreate
from geventos_platform.services.event_service import EventService
from geventos_platform.services.layout_service import LayoutService
from geventos_platform.utils.auth import TokenData
from geventos_platform.utils.dependencies import get_client_ip, require_any_role, require_staff


router = APIRouter(prefix="/eventos", tags=["events"])

EventId = Annotated[int, Path(gt=0, alias="eventoID", description="Event ID")]
AreaId = Annotated[int, Path(gt=0, alias="areaID", description="Area ID")]


def get_event_service(db: AsyncSession = Depends(get_db)) -> EventService:
    """Dependency to get event service instance."""
    return EventService(db)


def get_layout_service(db: AsyncSession = Depends(get_db)) -> LayoutService:
    """Dependency to get layout service instance."""
    return LayoutService(db)


@router.get("", response_model=List[EventResponse], responses=ERROR_RESPONSES)
async def list_events(
    current_user: TokenData = Depends(require_any_role),
    event_service: EventService = Depends(get_event_service)
):
    """List every event ordered by date and start time."""
    events = await event_service.list_events()
    return [EventResponse.from_event(event, venue_name) for event, venue_name in events]


@router.post(
    "",
    response_model=EventCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES
)
async def create_event(
    event_data: EventCreate,
    request: Request,
    current_user: TokenData = Depends(require_staff),
    event_service: EventService = Depends(get_event_service)
):
    """
    Create a new event. The caller becomes its organizer.
    """
    event = await event_service.create_event(
        event_data,
        organizer_id=current_user.user_id,
        ip_address=get_client_ip(request)
    )
    return EventCreatedResponse(message="Evento creado exitosamente.", event_id=event.id)


@router.get("/{eventoID}", response_model=EventResponse, responses=ERROR_RESPONSES)
async def get_event(
    event_id: EventId,
    current_user: TokenData = Depends(require_any_role),
    event_service: EventService = Depends(get_event_service)
):
    event, venue_name = await event_service.get_event(event_id)
    return EventResponse.from_event(event, venue_name)


@router.put("/{eventoID}", response_model=EventResponse, responses=ERROR_RESPONSES)
async def update_event(
    event_data: EventUpdate,
    request: Request,
    event_id: EventId,
    current_user: TokenData = Depends(require_staff),
    event_service: EventService = Depends(get_event_service)
):
    """Partially update an event."""
    await event_service.update_event(
        event_id,
        event_data,
        user_id=current_user.user_id,
        ip_address=get_client_ip(request)
    )
    event, venue_name = await event_service.get_event(event_id)
    return EventResponse.from_event(event, venue_name)


@router.delete("/{eventoID}", response_model=MessageResponse, responses=ERROR_RESPONSES)
async def delete_event(
    request: Request,
    event_id: EventId,
    current_user: TokenData = Depends(require_staff),
    event_service: EventService = Depends(get_event_service)
):
    """Delete an event and its layout. The venue's areas and seats are kept."""
    await event_service.delete_event(
        event_id,
        user_id=current_user.user_id,
        ip_address=get_client_ip(request)
    )
    return MessageResponse(message="Evento eliminado exitosamente.")


@router.get("/{eventoID}/layout", response_model=LayoutResponse, responses=ERROR_RESPONSES)
async def get_event_layout(
    event_id: EventId,
    current_user: TokenData = Depends(require_any_role),
    layout_service: LayoutService = Depends(get_layout_service)
):
    """
    Get the event's layout document and every seat of its venue.

    `layoutConfig` is null until the layout is saved for the first time.
    """
    return await layout_service.get_layout(event_id)


@router.put("/{eventoID}/layout", response_model=LayoutSaveResponse, responses=ERROR_RESPONSES)
async def save_event_layout(
    payload: LayoutSaveRequest,
    request: Request,
    event_id: EventId,
    current_user: TokenData = Depends(require_staff),
    layout_service: LayoutService = Depends(get_layout_service)
):
    """
    Save the event's layout and seats in one transaction.

    Tables and seats may refer to areas and seats that do not exist yet:
    - a table whose `id` or `areaid` starts with `new-table-`, or whose
      `areaid` is a number above the placeholder ceiling, gets a new area;
      any other string `areaid` is kept as sent and creates nothing;
    - a seat flagged `isNew`, or without a numeric `asientoID`, is created in
      the area its `areaID` names, placeholders included.

    Seats that point outside the event's venue are skipped and reported in
    `skipped`. Send the `version` from the last read to reject concurrent edits.
    """
    return await layout_service.save_layout(
        event_id,
        payload,
        user_id=current_user.user_id,
        ip_address=get_client_ip(request)
    )


@router.delete(
    "/{eventoID}/areas/{areaID}",
    response_model=AreaDeleteResponse,
    responses=ERROR_RESPONSES
)
async def delete_event_area(
    request: Request,
    event_id: EventId,
    area_id: AreaId,
    current_user: TokenData = Depends(require_staff),
    layout_service: LayoutService = Depends(get_layout_service)
):
    """Delete an area of the event's venue, its seats, and its tables in the layout."""
    return await layout_service.delete_area(
        event_id,
        area_id,
        user_id=current_user.user_id,
        ip_address=get_client_ip(request)
    )


@router.post(
    "/{eventoID}/asientos",
    response_model=SeatOut,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES
)
async def add_event_seat(
    seat_data: EventSeatCreate,
    event_id: EventId,
    current_user: TokenData = Depends(require_staff),
    layout_service: LayoutService = Depends(get_layout_service)
):
    """Add one seat to an area of the event's venue."""
    return await layout_service.add_seat(event_id, seat_data)
