"""
Activity log model.
"""

import enum
from typing import Optional

from sqlalchemy import Enum, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class ActivityKind(enum.Enum):
    """Enumeration for activity kinds."""
    LOGIN = "INICIO_SESION"
    PURCHASE = "COMPRA"
    EVENT_CREATED = "CREACION_EVENTO"
    EVENT_MODIFIED = "MODIFICACION_EVENTO"
    ATTENDANCE_CHECK = "VERIFICACION_ASISTENCIA"
    OTHER = "OTRO"


class Activity(Base):
    """Audit trail entry. ``created_at`` is the moment the activity happened."""

    __tablename__ = "activities"

    # Null for system activity
    user_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, index=True)

    kind: Mapped[ActivityKind] = mapped_column(
        Enum(ActivityKind, name="activity_kind", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        index=True
    )
    description: Mapped[str] = mapped_column(String(100), nullable=False)
    details: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    ip_address: Mapped[Optional[str]] = mapped_column(String(45), nullable=True)

    def __repr__(self) -> str:
        return f"<Activity(id={self.id}, kind={self.kind.value}, user_id={self.user_id})>"
