"""
Event to venue lookup.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from geventos_platform.models import Event
from geventos_platform.utils.exceptions import EventNotFoundError


class VenueResolver:
    """Maps an event to the venue it takes place in. Read-only."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def resolve_venue(self, event_id: int) -> Optional[int]:
        """
        Look up the venue of an event.

        Args:
            event_id: Event ID

        Returns:
            The venue ID, or None when the event row has no venue

        Raises:
            EventNotFoundError: If the event does not exist
        """
        result = await self.db.execute(
            select(Event.id, Event.venue_id).where(Event.id == event_id)
        )
        row = result.one_or_none()
        if row is None:
            raise EventNotFoundError(event_id)
        return row.venue_id
