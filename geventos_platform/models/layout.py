"""
Layout document model: the per-event seating sketch stored as JSON.
"""

from typing import Any, Dict, Optional, TYPE_CHECKING

from sqlalchemy import JSON, CheckConstraint, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base

if TYPE_CHECKING:
    from .event import Event


class LayoutDocument(Base):
    """Denormalized layout of an event. One row per event."""

    __tablename__ = "layouts"

    event_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("events.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True
    )

    configuration: Mapped[Optional[Dict[str, Any]]] = mapped_column(JSON, nullable=True)

    # Optimistic locking for concurrent layout edits
    version: Mapped[int] = mapped_column(Integer, default=1, nullable=False)

    # Relationships
    event: Mapped["Event"] = relationship("Event", back_populates="layout")

    __table_args__ = (
        CheckConstraint("version > 0", name="ck_layouts_version_positive"),
    )

    def __repr__(self) -> str:
        return f"<LayoutDocument(id={self.id}, event_id={self.event_id}, version={self.version})>"
