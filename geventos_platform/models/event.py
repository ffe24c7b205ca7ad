"""
Event model for scheduled events held at a venue.
"""

import enum
from datetime import date, time
from decimal import Decimal
from typing import Optional, TYPE_CHECKING

from sqlalchemy import (
    CheckConstraint, Date, Enum, ForeignKey, Integer, Numeric, String, Text, Time
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base

if TYPE_CHECKING:
    from .layout import LayoutDocument
    from .venue import Venue


class EventStatus(enum.Enum):
    """Enumeration for event status."""
    ACTIVE = "ACTIVO"
    COMPLETED = "COMPLETADO"
    CANCELLED = "CANCELADO"
    DRAFT = "BORRADOR"


class EventType(enum.Enum):
    """Enumeration for event type."""
    CONFERENCE = "CONFERENCIA"
    WORKSHOP = "TALLER"
    CEREMONY = "CEREMONIA"
    SEMINAR = "SEMINARIO"
    OTHER = "OTRO"


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class Event(Base):
    """Event model. Each event takes place at one venue and owns at most one layout."""

    __tablename__ = "events"

    # Event basic information
    name: Mapped[str] = mapped_column(String(150), nullable=False, index=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Event timing
    event_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    start_time: Mapped[time] = mapped_column(Time, nullable=False)
    end_time: Mapped[time] = mapped_column(Time, nullable=False)

    # Pricing and capacity
    price: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
        default=Decimal('0.00')
    )
    capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    tickets_sold: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    status: Mapped[EventStatus] = mapped_column(
        Enum(EventStatus, name="event_status", values_callable=_enum_values),
        default=EventStatus.DRAFT,
        nullable=False
    )
    event_type: Mapped[EventType] = mapped_column(
        Enum(EventType, name="event_type", values_callable=_enum_values),
        default=EventType.OTHER,
        nullable=False
    )
    image: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    # Venue may be missing on legacy rows; the layout reconciler treats that as a data fault
    venue_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("venues.id"),
        nullable=True,
        index=True
    )
    organizer_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, index=True)

    # Relationships
    venue: Mapped[Optional["Venue"]] = relationship("Venue", back_populates="events")

    layout: Mapped[Optional["LayoutDocument"]] = relationship(
        "LayoutDocument",
        back_populates="event",
        cascade="all, delete-orphan",
        passive_deletes=True,
        uselist=False
    )

    __table_args__ = (
        CheckConstraint("capacity > 0", name="ck_events_capacity_positive"),
        CheckConstraint("tickets_sold >= 0", name="ck_events_tickets_sold_non_negative"),
        CheckConstraint("price >= 0", name="ck_events_price_non_negative"),
    )

    def __repr__(self) -> str:
        return (
            f"<Event(id={self.id}, name='{self.name}', "
            f"date={self.event_date}, venue_id={self.venue_id})>"
        )
