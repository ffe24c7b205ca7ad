"""
Ticket service: QR lookup and attendance check-in.
"""

import logging
from typing import Optional, Tuple

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from geventos_platform.models import ActivityKind, Event, Ticket, TicketState
from geventos_platform.services.activity_service import ActivityService
from geventos_platform.utils.exceptions import InvalidTicketStateError, TicketNotFoundError
from geventos_platform.utils.logging_config import log_business_event

logger = logging.getLogger(__name__)


class TicketService:
    """Service class for ticket verification at the venue door."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.activities = ActivityService(db)

    async def get_by_qr_code(self, qr_code: str) -> Tuple[Ticket, Optional[str]]:
        """
        Find a ticket by its QR code, with the name of its event.

        Raises:
            TicketNotFoundError: If no ticket carries the code
        """
        result = await self.db.execute(
            select(Ticket, Event.name)
            .join(Event, Ticket.event_id == Event.id)
            .where(Ticket.qr_code == qr_code)
        )
        row = result.one_or_none()
        if row is None:
            raise TicketNotFoundError(qr_code)
        return row[0], row[1]

    async def check_in(
        self,
        ticket_id: int,
        user_id: Optional[int] = None,
        ip_address: Optional[str] = None
    ) -> Ticket:
        """
        Mark an active ticket as used and record the attendance.

        The state change is conditional on the ticket still being active, so
        two scanners racing on the same ticket admit it once.

        Args:
            ticket_id: Ticket ID
            user_id: Staff member scanning the ticket
            ip_address: Scanner address, for the activity log

        Returns:
            The checked-in ticket

        Raises:
            TicketNotFoundError: If the ticket does not exist
            InvalidTicketStateError: If the ticket is already used, cancelled or expired
        """
        ticket = await self._get_ticket(ticket_id)

        result = await self.db.execute(
            update(Ticket)
            .where(Ticket.id == ticket_id, Ticket.state == TicketState.ACTIVE)
            .values(state=TicketState.USED)
        )
        if result.rowcount == 0:
            await self.db.rollback()
            current = await self._get_ticket(ticket_id)
            raise InvalidTicketStateError(ticket_id, current.state.value)

        self.activities.record(
            ActivityKind.ATTENDANCE_CHECK,
            f"Boleto verificado (ID: {ticket_id})",
            details=f"ticket_id={ticket_id} attendee_id={ticket.user_id} event_id={ticket.event_id}",
            user_id=user_id,
            ip_address=ip_address
        )
        await self.db.commit()

        log_business_event(
            "ticket_checked_in",
            {"ticket_id": ticket_id, "event_id": ticket.event_id, "attendee_id": ticket.user_id},
            user_id=user_id
        )
        return await self._get_ticket(ticket_id)

    async def _get_ticket(self, ticket_id: int) -> Ticket:
        result = await self.db.execute(
            select(Ticket)
            .where(Ticket.id == ticket_id)
            .execution_options(populate_existing=True)
        )
        ticket = result.scalar_one_or_none()
        if ticket is None:
            raise TicketNotFoundError(ticket_id)
        return ticket
