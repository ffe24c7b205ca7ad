"""
Venue (lugar) schemas.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .common import PartialUpdate
from ..models.venue import Venue


class VenueCreate(BaseModel):
    """Schema for creating a venue."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., alias="nombre", min_length=1, max_length=100)
    address: str = Field(..., alias="direccion", min_length=1, max_length=255)
    max_capacity: int = Field(..., alias="capacidadMaxima", gt=0)
    description: Optional[str] = Field(None, alias="descripcion")


class VenueUpdate(PartialUpdate):
    """Schema for a partial venue update."""

    nullable_fields = {"description"}

    name: Optional[str] = Field(None, alias="nombre", min_length=1, max_length=100)
    address: Optional[str] = Field(None, alias="direccion", min_length=1, max_length=255)
    max_capacity: Optional[int] = Field(None, alias="capacidadMaxima", gt=0)
    description: Optional[str] = Field(None, alias="descripcion")


class VenueResponse(BaseModel):
    """Schema for venue responses."""

    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(..., alias="lugarID")
    name: str = Field(..., alias="nombre")
    address: str = Field(..., alias="direccion")
    max_capacity: int = Field(..., alias="capacidadMaxima")
    description: Optional[str] = Field(None, alias="descripcion")

    @classmethod
    def from_venue(cls, venue: Venue) -> "VenueResponse":
        return cls(
            id=venue.id,
            name=venue.name,
            address=venue.address,
            max_capacity=venue.max_capacity,
            description=venue.description,
        )
