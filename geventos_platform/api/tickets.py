"""
Ticket (boleto) API endpoints.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Request
from sqlalchemy.ext.asyncio import AsyncSession

from geventos_platform.database import get_db
from geventos_platform.schemas.common import ERROR_RESPONSES
from geventos_platform.schemas.ticket import TicketCheckInResponse, TicketResponse
from geventos_platform.services.ticket_service import TicketService
from geventos_platform.utils.auth import TokenData
from geventos_platform.utils.dependencies import get_client_ip, require_any_role


router = APIRouter(prefix="/boletos", tags=["tickets"])

TicketId = Annotated[int, Path(gt=0, alias="boletoID", description="Ticket ID")]
QrCode = Annotated[str, Path(min_length=1, max_length=255, alias="codigoQR", description="QR code payload")]


def get_ticket_service(db: AsyncSession = Depends(get_db)) -> TicketService:
    """Dependency to get ticket service instance."""
    return TicketService(db)


@router.get("/{codigoQR}", response_model=TicketResponse, responses=ERROR_RESPONSES)
async def get_ticket_by_qr_code(
    qr_code: QrCode,
    current_user: TokenData = Depends(require_any_role),
    ticket_service: TicketService = Depends(get_ticket_service)
):
    """Look a ticket up by the code scanned from its QR image."""
    ticket, event_name = await ticket_service.get_by_qr_code(qr_code)
    return TicketResponse.from_ticket(ticket, event_name)


@router.put("/{boletoID}/verify", response_model=TicketCheckInResponse, responses=ERROR_RESPONSES)
async def check_in_ticket(
    ticket_id: TicketId,
    request: Request,
    current_user: TokenData = Depends(require_any_role),
    ticket_service: TicketService = Depends(get_ticket_service)
):
    """Check an active ticket in. Used, cancelled and expired tickets are rejected."""
    ticket = await ticket_service.check_in(
        ticket_id,
        user_id=current_user.user_id,
        ip_address=get_client_ip(request)
    )
    return TicketCheckInResponse(
        message="Boleto verificado exitosamente.",
        ticket_id=ticket.id,
        state=ticket.state
    )
