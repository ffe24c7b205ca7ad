"""
Area schemas.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .common import PartialUpdate
from ..models.area import Area, AreaType


def _upper(v: Any) -> Any:
    return v.strip().upper() if isinstance(v, str) else v


class AreaCreate(BaseModel):
    """Schema for creating an area inside a venue."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., alias="nombre", min_length=1, max_length=100)
    capacity: int = Field(..., alias="capacidad", gt=0)
    area_type: AreaType = Field(..., alias="tipo")

    @field_validator("area_type", mode="before")
    @classmethod
    def normalize_type(cls, v):
        return _upper(v)


class AreaUpdate(PartialUpdate):
    """Schema for a partial area update. Areas cannot move between venues."""

    name: Optional[str] = Field(None, alias="nombre", min_length=1, max_length=100)
    capacity: Optional[int] = Field(None, alias="capacidad", gt=0)
    area_type: Optional[AreaType] = Field(None, alias="tipo")
    venue_id: Optional[Any] = Field(None, alias="lugarID", description="Rejected when present")

    @field_validator("area_type", mode="before")
    @classmethod
    def normalize_type(cls, v):
        return _upper(v)

    @field_validator("venue_id")
    @classmethod
    def venue_is_immutable(cls, v):
        raise ValueError("Cannot change the location (lugarID) of an area via this route")


class AreaResponse(BaseModel):
    """Schema for area responses."""

    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(..., alias="areaID")
    name: str = Field(..., alias="nombre")
    capacity: int = Field(..., alias="capacidad")
    area_type: AreaType = Field(..., alias="tipo")
    venue_id: int = Field(..., alias="lugarID")

    @classmethod
    def from_area(cls, area: Area) -> "AreaResponse":
        return cls(
            id=area.id,
            name=area.name,
            capacity=area.capacity,
            area_type=area.area_type,
            venue_id=area.venue_id,
        )


class AreaCreatedResponse(BaseModel):
    """Schema returned after creating an area."""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    area_id: int = Field(..., alias="areaId")
