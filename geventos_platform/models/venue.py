"""
Venue model for physical locations that host events.
"""

from typing import List, Optional, TYPE_CHECKING

from sqlalchemy import CheckConstraint, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base

if TYPE_CHECKING:
    from .area import Area
    from .event import Event


class Venue(Base):
    """A physical location. Areas belong to it, events take place in it."""

    __tablename__ = "venues"

    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    address: Mapped[str] = mapped_column(String(255), nullable=False)
    max_capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Relationships
    areas: Mapped[List["Area"]] = relationship(
        "Area",
        back_populates="venue",
        cascade="all, delete-orphan",
        passive_deletes=True
    )

    events: Mapped[List["Event"]] = relationship("Event", back_populates="venue")

    __table_args__ = (
        CheckConstraint("max_capacity > 0", name="ck_venues_max_capacity_positive"),
    )

    def __repr__(self) -> str:
        return f"<Venue(id={self.id}, name='{self.name}')>"
