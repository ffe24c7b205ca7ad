"""
Activity log service.
"""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from geventos_platform.models import Activity, ActivityKind

logger = logging.getLogger(__name__)

DESCRIPTION_MAX_LENGTH = 100


class ActivityService:
    """Records and lists audit trail entries."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def record(
        self,
        kind: ActivityKind,
        description: str,
        details: Optional[str] = None,
        user_id: Optional[int] = None,
        ip_address: Optional[str] = None
    ) -> Activity:
        """
        Add an activity row to the caller's transaction.

        The row is written when the caller commits, so it shares the fate of
        the change it describes.
        """
        activity = Activity(
            kind=kind,
            description=description[:DESCRIPTION_MAX_LENGTH],
            details=details,
            user_id=user_id,
            ip_address=ip_address
        )
        self.db.add(activity)
        return activity

    async def list_activities(self, limit: int = 100) -> List[Activity]:
        """Most recent activities first."""
        result = await self.db.execute(
            select(Activity)
            .order_by(Activity.created_at.desc(), Activity.id.desc())
            .limit(limit)
        )
        return list(result.scalars().all())
