"""
Event schemas for request/response validation.
"""

from datetime import date, time
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .common import PartialUpdate
from ..models.event import Event, EventStatus, EventType


def _upper(v: Any) -> Any:
    return v.strip().upper() if isinstance(v, str) else v


class EventCreate(BaseModel):
    """Schema for creating a new event."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., alias="nombre", min_length=1, max_length=150, description="Event name")
    description: Optional[str] = Field(None, alias="descripcion", description="Event description")
    event_date: date = Field(..., alias="fecha", description="Event date")
    start_time: time = Field(..., alias="horaInicio", description="Start time")
    end_time: time = Field(..., alias="horaFin", description="End time")
    price: Decimal = Field(..., alias="precio", ge=0, description="Ticket price")
    capacity: int = Field(..., alias="capacidad", gt=0, description="Ticket capacity")
    status: EventStatus = Field(EventStatus.DRAFT, alias="estado")
    event_type: EventType = Field(EventType.OTHER, alias="tipo")
    image: Optional[str] = Field(None, alias="imagen", max_length=255)
    venue_id: int = Field(..., alias="lugarID", gt=0, description="Venue hosting the event")

    @field_validator("status", "event_type", mode="before")
    @classmethod
    def normalize_enums(cls, v):
        return _upper(v)

    @model_validator(mode="after")
    def end_after_start(self):
        if self.end_time <= self.start_time:
            raise ValueError("horaFin must be later than horaInicio")
        return self


class EventUpdate(PartialUpdate):
    """Schema for a partial event update."""

    nullable_fields = {"description", "image"}

    name: Optional[str] = Field(None, alias="nombre", min_length=1, max_length=150)
    description: Optional[str] = Field(None, alias="descripcion")
    event_date: Optional[date] = Field(None, alias="fecha")
    start_time: Optional[time] = Field(None, alias="horaInicio")
    end_time: Optional[time] = Field(None, alias="horaFin")
    price: Optional[Decimal] = Field(None, alias="precio", ge=0)
    capacity: Optional[int] = Field(None, alias="capacidad", gt=0)
    status: Optional[EventStatus] = Field(None, alias="estado")
    event_type: Optional[EventType] = Field(None, alias="tipo")
    image: Optional[str] = Field(None, alias="imagen", max_length=255)
    venue_id: Optional[int] = Field(None, alias="lugarID", gt=0)

    @field_validator("status", "event_type", mode="before")
    @classmethod
    def normalize_enums(cls, v):
        return _upper(v)


class EventResponse(BaseModel):
    """Schema for event responses."""

    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(..., alias="eventoID")
    name: str = Field(..., alias="nombre")
    description: Optional[str] = Field(None, alias="descripcion")
    event_date: date = Field(..., alias="fecha")
    start_time: time = Field(..., alias="horaInicio")
    end_time: time = Field(..., alias="horaFin")
    price: Decimal = Field(..., alias="precio")
    capacity: int = Field(..., alias="capacidad")
    tickets_sold: int = Field(..., alias="boletosVendidos")
    status: EventStatus = Field(..., alias="estado")
    event_type: EventType = Field(..., alias="tipo")
    image: Optional[str] = Field(None, alias="imagen")
    venue_id: Optional[int] = Field(None, alias="lugarID")
    venue_name: Optional[str] = Field(None, alias="lugarNombre")
    organizer_id: Optional[int] = Field(None, alias="organizadorID")

    @classmethod
    def from_event(cls, event: Event, venue_name: Optional[str] = None) -> "EventResponse":
        return cls(
            id=event.id,
            name=event.name,
            description=event.description,
            event_date=event.event_date,
            start_time=event.start_time,
            end_time=event.end_time,
            price=event.price,
            capacity=event.capacity,
            tickets_sold=event.tickets_sold,
            status=event.status,
            event_type=event.event_type,
            image=event.image,
            venue_id=event.venue_id,
            venue_name=venue_name,
            organizer_id=event.organizer_id,
        )


class EventCreatedResponse(BaseModel):
    """Schema returned after creating an event."""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    event_id: int = Field(..., alias="eventId")
