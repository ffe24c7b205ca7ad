"""
Activity log API endpoints.
"""

from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from geventos_platform.config import settings
from geventos_platform.database import get_db
from geventos_platform.schemas.activity import ActivityResponse
from geventos_platform.schemas.common import ERROR_RESPONSES
from geventos_platform.services.activity_service import ActivityService
from geventos_platform.utils.auth import TokenData
from geventos_platform.utils.dependencies import get_current_user


router = APIRouter(prefix="/activities", tags=["activities"])


def get_activity_service(db: AsyncSession = Depends(get_db)) -> ActivityService:
    """Dependency to get activity service instance."""
    return ActivityService(db)


@router.get("", response_model=List[ActivityResponse], responses=ERROR_RESPONSES)
async def list_activities(
    limit: int = Query(100, ge=1, le=settings.activity_page_limit, description="Maximum entries to return"),
    current_user: TokenData = Depends(get_current_user),
    activity_service: ActivityService = Depends(get_activity_service)
):
    """List activity log entries, newest first."""
    activities = await activity_service.list_activities(limit)
    return [ActivityResponse.from_activity(activity) for activity in activities]
