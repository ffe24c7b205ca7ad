"""
Seat (asiento) schemas for the direct CRUD endpoints.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .common import PartialUpdate
from ..models.seat import SeatState


def _upper(v: Any) -> Any:
    return v.strip().upper() if isinstance(v, str) else v


class SeatCreate(BaseModel):
    """Schema for one seat in a bulk creation request."""

    model_config = ConfigDict(populate_by_name=True)

    code: str = Field(..., alias="codigo", min_length=1, max_length=20)
    state: SeatState = Field(..., alias="estado")
    row: Optional[int] = Field(None, alias="fila")
    column: Optional[int] = Field(None, alias="columna")

    @field_validator("state", mode="before")
    @classmethod
    def normalize_state(cls, v):
        return _upper(v)

    @field_validator("code")
    @classmethod
    def strip_code(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("codigo must not be blank")
        return v


class EventSeatCreate(SeatCreate):
    """Schema for adding one seat to an event's venue."""

    area_id: int = Field(..., alias="areaID", gt=0)


class SeatUpdate(PartialUpdate):
    """Schema for a partial seat update. Seats cannot move between areas."""

    nullable_fields = {"code", "row", "column"}

    code: Optional[str] = Field(None, alias="codigo", min_length=1, max_length=20)
    row: Optional[int] = Field(None, alias="fila", gt=0)
    column: Optional[int] = Field(None, alias="columna", gt=0)
    state: Optional[SeatState] = Field(None, alias="estado")
    area_id: Optional[Any] = Field(None, alias="areaID", description="Rejected when present")

    @field_validator("state", mode="before")
    @classmethod
    def normalize_state(cls, v):
        return _upper(v)

    @field_validator("area_id")
    @classmethod
    def area_is_immutable(cls, v):
        raise ValueError("Cannot change the area (areaID) of a seat via this route")


class BulkSeatCreateResponse(BaseModel):
    """Schema returned after creating seats in bulk."""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    seat_ids: List[int] = Field(..., alias="asientoIds")
