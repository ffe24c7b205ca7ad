"""Business logic services for the GEventos platform."""

from .activity_service import ActivityService
from .area_service import AreaService
from .config_service import ConfigService
from .event_service import EventService
from .layout_service import LayoutService
from .seat_service import SeatService
from .ticket_service import TicketService
from .venue_service import VenueService

__all__ = [
    "ActivityService",
    "AreaService",
    "ConfigService",
    "EventService",
    "LayoutService",
    "SeatService",
    "TicketService",
    "VenueService",
]
