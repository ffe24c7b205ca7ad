"""
Database models for the GEventos platform.
"""

from .base import Base
from .venue import Venue
from .event import Event, EventStatus, EventType
from .area import Area, AreaType
from .seat import Seat, SeatState
from .layout import LayoutDocument
from .activity import Activity, ActivityKind
from .app_config import AppConfig
from .ticket import Ticket, TicketState

__all__ = [
    "Base",
    "Venue",
    "Event",
    "EventStatus",
    "EventType",
    "Area",
    "AreaType",
    "Seat",
    "SeatState",
    "LayoutDocument",
    "Activity",
    "ActivityKind",
    "AppConfig",
    "Ticket",
    "TicketState",
]
