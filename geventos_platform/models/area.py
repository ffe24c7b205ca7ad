"""
Area model for named zones inside a venue.
"""

import enum
from typing import List, TYPE_CHECKING

from sqlalchemy import CheckConstraint, Enum, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base

if TYPE_CHECKING:
    from .seat import Seat
    from .venue import Venue


class AreaType(enum.Enum):
    """Enumeration for area type."""
    GENERAL = "GENERAL"
    VIP = "VIP"
    STAGE = "ESCENARIO"
    RESERVED = "RESERVADO"


class Area(Base):
    """A zone inside a venue (a table, a section, the stage)."""

    __tablename__ = "areas"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    area_type: Mapped[AreaType] = mapped_column(
        Enum(AreaType, name="area_type", values_callable=lambda e: [m.value for m in e]),
        default=AreaType.GENERAL,
        nullable=False
    )

    venue_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("venues.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    # Relationships
    venue: Mapped["Venue"] = relationship("Venue", back_populates="areas")

    seats: Mapped[List["Seat"]] = relationship(
        "Seat",
        back_populates="area",
        cascade="all, delete-orphan",
        passive_deletes=True
    )

    __table_args__ = (
        CheckConstraint("capacity > 0", name="ck_areas_capacity_positive"),
    )

    def __repr__(self) -> str:
        return (
            f"<Area(id={self.id}, name='{self.name}', "
            f"venue_id={self.venue_id}, type={self.area_type.value})>"
        )
