"""API endpoints for the GEventos platform."""

from fastapi import APIRouter
from .events import router as events_router
from .venues import router as venues_router
from .areas import router as areas_router
from .seats import router as seats_router
from .activities import router as activities_router
from .config import router as config_router
from .tickets import router as tickets_router

# Create main API router
api_router = APIRouter(prefix="/api")

# Include all routers
api_router.include_router(events_router)
api_router.include_router(venues_router)
api_router.include_router(areas_router)
api_router.include_router(seats_router)
api_router.include_router(activities_router)
api_router.include_router(config_router)
api_router.include_router(tickets_router)

__all__ = ["api_router"]
