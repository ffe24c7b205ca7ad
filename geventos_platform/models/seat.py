"""
Seat model for individual spots inside an area.
"""

import enum
from typing import Optional, TYPE_CHECKING

from sqlalchemy import Enum, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base

if TYPE_CHECKING:
    from .area import Area


class SeatState(enum.Enum):
    """Enumeration for seat state."""
    AVAILABLE = "DISPONIBLE"
    OCCUPIED = "OCUPADO"
    RESERVED = "RESERVADO"
    BLOCKED = "BLOQUEADO"


class Seat(Base):
    """A seat or spot inside an area, with a mutable state."""

    __tablename__ = "seats"

    area_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("areas.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    # Human readable label, e.g. "A1" or "mesa-1-silla-5"
    code: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    row: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    column: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    state: Mapped[SeatState] = mapped_column(
        Enum(SeatState, name="seat_state", values_callable=lambda e: [m.value for m in e]),
        default=SeatState.AVAILABLE,
        nullable=False,
        index=True
    )

    # Relationships
    area: Mapped["Area"] = relationship("Area", back_populates="seats")

    def __repr__(self) -> str:
        return (
            f"<Seat(id={self.id}, area_id={self.area_id}, "
            f"code='{self.code}', state={self.state.value})>"
        )
