"""
Activity log schemas.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..models.activity import Activity, ActivityKind


class ActivityResponse(BaseModel):
    """Schema for one activity log entry."""

    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(..., alias="actividadID")
    user_id: Optional[int] = Field(None, alias="usuarioID")
    kind: ActivityKind = Field(..., alias="tipo")
    description: str = Field(..., alias="descripcion")
    details: Optional[str] = Field(None, alias="detalles")
    occurred_at: datetime = Field(..., alias="fecha")
    ip_address: Optional[str] = Field(None, alias="direccionIP")

    @classmethod
    def from_activity(cls, activity: Activity) -> "ActivityResponse":
        return cls(
            id=activity.id,
            user_id=activity.user_id,
            kind=activity.kind,
            description=activity.description,
            details=activity.details,
            occurred_at=activity.created_at,
            ip_address=activity.ip_address,
        )
