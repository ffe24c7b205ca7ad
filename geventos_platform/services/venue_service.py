"""
Venue service for managing physical locations.
"""

import logging
from typing import List

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from geventos_platform.cache import CacheInvalidator
from geventos_platform.models import Event, Venue
from geventos_platform.schemas.venue import VenueCreate, VenueUpdate
from geventos_platform.utils.exceptions import (
    ValidationError,
    VenueInUseError,
    VenueNotFoundError,
)

logger = logging.getLogger(__name__)


class VenueService:
    """Service class for venue management operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_venues(self) -> List[Venue]:
        result = await self.db.execute(select(Venue).order_by(Venue.name, Venue.id))
        return list(result.scalars().all())

    async def get_venue(self, venue_id: int) -> Venue:
        """
        Get venue by ID.

        Raises:
            VenueNotFoundError: If venue is not found
        """
        result = await self.db.execute(select(Venue).where(Venue.id == venue_id))
        venue = result.scalar_one_or_none()
        if not venue:
            raise VenueNotFoundError(venue_id)
        return venue

    async def create_venue(self, venue_data: VenueCreate) -> Venue:
        venue = Venue(
            name=venue_data.name,
            address=venue_data.address,
            max_capacity=venue_data.max_capacity,
            description=venue_data.description
        )
        self.db.add(venue)
        await self.db.commit()

        logger.info(f"Venue {venue.id} created: {venue.name}")
        return venue

    async def update_venue(self, venue_id: int, venue_data: VenueUpdate) -> Venue:
        """
        Apply a partial update to a venue.

        Raises:
            VenueNotFoundError: If venue is not found
            ValidationError: If no fields were provided
        """
        changes = venue_data.model_dump(exclude_unset=True)
        if not changes:
            raise ValidationError("No fields provided to update")

        venue = await self.get_venue(venue_id)
        for field, value in changes.items():
            setattr(venue, field, value)
        await self.db.commit()

        return venue

    async def delete_venue(self, venue_id: int) -> None:
        """
        Delete a venue together with its areas and seats.

        Raises:
            VenueNotFoundError: If venue is not found
            VenueInUseError: If events still take place at the venue
        """
        await self.get_venue(venue_id)

        event_count = (
            await self.db.execute(
                select(func.count(Event.id)).where(Event.venue_id == venue_id)
            )
        ).scalar()
        if event_count:
            raise VenueInUseError(venue_id, event_count)

        try:
            await self.db.execute(delete(Venue).where(Venue.id == venue_id))
            await self.db.commit()
        except IntegrityError as e:
            # An event was attached between the count and the delete
            await self.db.rollback()
            raise VenueInUseError(venue_id, event_count or 1) from e

        await CacheInvalidator.invalidate_all_layouts()
        logger.info(f"Venue {venue_id} deleted")
