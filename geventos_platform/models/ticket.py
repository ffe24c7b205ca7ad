"""
Ticket (boleto) model: an admission to an event, identified at the door by its QR code.
"""

import enum
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import CheckConstraint, DateTime, Enum, ForeignKey, Integer, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class TicketState(enum.Enum):
    """Enumeration for ticket state."""
    ACTIVE = "ACTIVO"
    USED = "USADO"
    CANCELLED = "CANCELADO"
    EXPIRED = "EXPIRADO"


class Ticket(Base):
    """Ticket model. Issued by the payment flow; checked in once at the event."""

    __tablename__ = "tickets"

    qr_code: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)

    state: Mapped[TicketState] = mapped_column(
        Enum(TicketState, name="ticket_state", values_callable=lambda e: [m.value for m in e]),
        default=TicketState.ACTIVE,
        nullable=False,
        index=True
    )
    price: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
        default=Decimal('0.00')
    )
    purchased_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )

    event_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("events.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    # Seat rows can be redrawn by the layout editor; the ticket outlives them
    seat_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("seats.id", ondelete="SET NULL"),
        nullable=True
    )
    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    payment_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_tickets_price_non_negative"),
    )

    def __repr__(self) -> str:
        return f"<Ticket(id={self.id}, event_id={self.event_id}, state={self.state.value})>"
