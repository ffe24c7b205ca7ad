"""
Event service for managing events and their operations.
"""

import logging
from typing import List, Optional, Tuple

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from geventos_platform.cache import CacheInvalidator
from geventos_platform.models import ActivityKind, Event, LayoutDocument, Ticket, Venue
from geventos_platform.schemas.event import EventCreate, EventUpdate
from geventos_platform.services.activity_service import ActivityService
from geventos_platform.utils.exceptions import (
    EventNotFoundError,
    ValidationError,
    VenueNotFoundError,
)

logger = logging.getLogger(__name__)


class EventService:
    """Service class for event management operations."""

    def __init__(self, db: AsyncSession):
        """Initialize the event service with database session."""
        self.db = db
        self.activities = ActivityService(db)

    async def list_events(self) -> List[Tuple[Event, Optional[str]]]:
        """
        List every event with the name of its venue.

        Returns:
            (event, venue name) pairs ordered by date then start time
        """
        result = await self.db.execute(
            select(Event, Venue.name)
            .outerjoin(Venue, Event.venue_id == Venue.id)
            .order_by(Event.event_date, Event.start_time, Event.id)
        )
        return [(event, venue_name) for event, venue_name in result.all()]

    async def get_event(self, event_id: int) -> Tuple[Event, Optional[str]]:
        """
        Get event by ID with its venue name.

        Raises:
            EventNotFoundError: If event is not found
        """
        result = await self.db.execute(
            select(Event, Venue.name)
            .outerjoin(Venue, Event.venue_id == Venue.id)
            .where(Event.id == event_id)
        )
        row = result.one_or_none()
        if row is None:
            raise EventNotFoundError(event_id)
        return row[0], row[1]

    async def _require_venue(self, venue_id: int) -> None:
        result = await self.db.execute(select(Venue.id).where(Venue.id == venue_id))
        if result.scalar_one_or_none() is None:
            raise VenueNotFoundError(venue_id)

    async def create_event(
        self,
        event_data: EventCreate,
        organizer_id: Optional[int] = None,
        ip_address: Optional[str] = None
    ) -> Event:
        """
        Create a new event.

        Args:
            event_data: Event creation data
            organizer_id: The creating user, taken from the token

        Raises:
            VenueNotFoundError: If the venue does not exist
        """
        await self._require_venue(event_data.venue_id)

        event = Event(
            name=event_data.name,
            description=event_data.description,
            event_date=event_data.event_date,
            start_time=event_data.start_time,
            end_time=event_data.end_time,
            price=event_data.price,
            capacity=event_data.capacity,
            tickets_sold=0,
            status=event_data.status,
            event_type=event_data.event_type,
            image=event_data.image,
            venue_id=event_data.venue_id,
            organizer_id=organizer_id
        )
        self.db.add(event)

        try:
            await self.db.flush()
            self.activities.record(
                ActivityKind.EVENT_CREATED,
                f"Evento {event.id} creado: {event.name}",
                user_id=organizer_id,
                ip_address=ip_address
            )
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise ValidationError(f"Failed to create event: {e.orig}") from e

        logger.info(f"Event {event.id} created by user {organizer_id}")
        return event

    async def update_event(
        self,
        event_id: int,
        event_data: EventUpdate,
        user_id: Optional[int] = None,
        ip_address: Optional[str] = None
    ) -> Event:
        """
        Apply a partial update to an event.

        Raises:
            EventNotFoundError: If event is not found
            VenueNotFoundError: If a new venue does not exist
            ValidationError: If no fields were provided or the times are inverted
        """
        changes = event_data.model_dump(exclude_unset=True)
        if not changes:
            raise ValidationError("No fields provided to update")

        event, _ = await self.get_event(event_id)

        start = changes.get("start_time", event.start_time)
        end = changes.get("end_time", event.end_time)
        if start is not None and end is not None and end <= start:
            raise ValidationError("horaFin must be later than horaInicio")

        if changes.get("venue_id") is not None and changes["venue_id"] != event.venue_id:
            await self._require_venue(changes["venue_id"])

        for field, value in changes.items():
            setattr(event, field, value)

        self.activities.record(
            ActivityKind.EVENT_MODIFIED,
            f"Evento {event_id} actualizado",
            details=", ".join(sorted(changes)),
            user_id=user_id,
            ip_address=ip_address
        )
        await self.db.commit()

        # A venue change moves the event to another seat map
        await CacheInvalidator.invalidate_event_layout(event_id)
        return event

    async def delete_event(
        self,
        event_id: int,
        user_id: Optional[int] = None,
        ip_address: Optional[str] = None
    ) -> None:
        """
        Delete an event with its layout document and tickets. Venue areas and seats stay.

        Raises:
            EventNotFoundError: If event is not found
        """
        await self.get_event(event_id)

        await self.db.execute(delete(LayoutDocument).where(LayoutDocument.event_id == event_id))
        await self.db.execute(delete(Ticket).where(Ticket.event_id == event_id))
        await self.db.execute(delete(Event).where(Event.id == event_id))
        self.activities.record(
            ActivityKind.EVENT_MODIFIED,
            f"Evento {event_id} eliminado",
            user_id=user_id,
            ip_address=ip_address
        )
        await self.db.commit()

        await CacheInvalidator.invalidate_event_layout(event_id)
        logger.info(f"Event {event_id} deleted by user {user_id}")
