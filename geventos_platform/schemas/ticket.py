"""
Ticket (boleto) schemas.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..models.ticket import Ticket, TicketState


class TicketResponse(BaseModel):
    """Schema for a ticket looked up by its QR code."""

    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(..., alias="boletoID")
    qr_code: str = Field(..., alias="codigoQR")
    state: TicketState = Field(..., alias="estado")
    price: Decimal = Field(..., alias="precio")
    purchased_at: datetime = Field(..., alias="fechaCompra")
    event_id: int = Field(..., alias="eventoID")
    event_name: Optional[str] = Field(None, alias="nombreEvento")
    seat_id: Optional[int] = Field(None, alias="asientoID")
    user_id: int = Field(..., alias="usuarioID")
    payment_id: Optional[int] = Field(None, alias="pagoID")

    @classmethod
    def from_ticket(cls, ticket: Ticket, event_name: Optional[str] = None) -> "TicketResponse":
        return cls(
            id=ticket.id,
            qr_code=ticket.qr_code,
            state=ticket.state,
            price=ticket.price,
            purchased_at=ticket.purchased_at,
            event_id=ticket.event_id,
            event_name=event_name,
            seat_id=ticket.seat_id,
            user_id=ticket.user_id,
            payment_id=ticket.payment_id,
        )


class TicketCheckInResponse(BaseModel):
    """Schema returned after checking a ticket in."""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    ticket_id: int = Field(..., alias="boletoID")
    state: TicketState = Field(..., alias="estado")
