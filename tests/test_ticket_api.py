"""API tests for ticket QR lookup and attendance check-in."""

from decimal import Decimal

from sqlalchemy import func, select

from geventos_platform.models import Activity, ActivityKind, Ticket, TicketState

from conftest import create_seat, create_ticket


class TestTicketLookup:

    async def test_get_ticket_by_qr_code(self, async_client, async_session, event_id, attendee_headers):
        ticket_id = await create_ticket(async_session, event_id, "QR-0001", user_id=3)

        response = await async_client.get("/api/boletos/QR-0001", headers=attendee_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["boletoID"] == ticket_id
        assert data["codigoQR"] == "QR-0001"
        assert data["estado"] == "ACTIVO"
        assert data["eventoID"] == event_id
        assert data["nombreEvento"] == "Congreso Anual"
        assert data["usuarioID"] == 3
        assert data["asientoID"] is None
        assert Decimal(str(data["precio"])) == Decimal("25")

    async def test_unknown_qr_code_is_not_found(self, async_client, attendee_headers):
        response = await async_client.get("/api/boletos/QR-NOPE", headers=attendee_headers)

        assert response.status_code == 404
        assert response.json()["error"]["error_code"] == "NOT_FOUND"

    async def test_lookup_requires_token(self, async_client, async_session, event_id):
        await create_ticket(async_session, event_id, "QR-0002")

        response = await async_client.get("/api/boletos/QR-0002")

        assert response.status_code == 401


class TestTicketCheckIn:

    async def test_check_in_marks_ticket_used_and_records_attendance(
        self, async_client, async_session, event_id, organizer_headers
    ):
        ticket_id = await create_ticket(async_session, event_id, "QR-0100", user_id=3)

        response = await async_client.put(f"/api/boletos/{ticket_id}/verify", headers=organizer_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["boletoID"] == ticket_id
        assert data["estado"] == "USADO"
        assert await async_session.scalar(select(Ticket.state).where(Ticket.id == ticket_id)) == TicketState.USED

        activities = (
            await async_session.execute(
                select(Activity).where(Activity.kind == ActivityKind.ATTENDANCE_CHECK)
            )
        ).scalars().all()
        assert len(activities) == 1
        assert activities[0].user_id == 1
        assert f"event_id={event_id}" in activities[0].details
        assert "attendee_id=3" in activities[0].details

    async def test_second_check_in_is_rejected(self, async_client, async_session, event_id, organizer_headers):
        ticket_id = await create_ticket(async_session, event_id, "QR-0101")

        first = await async_client.put(f"/api/boletos/{ticket_id}/verify", headers=organizer_headers)
        second = await async_client.put(f"/api/boletos/{ticket_id}/verify", headers=organizer_headers)

        assert first.status_code == 200
        assert second.status_code == 400
        error = second.json()["error"]
        assert error["error_code"] == "INVALID_TICKET_STATE"
        assert error["details"]["current_state"] == "USADO"

        attendance = await async_session.scalar(
            select(func.count(Activity.id)).where(Activity.kind == ActivityKind.ATTENDANCE_CHECK)
        )
        assert attendance == 1

    async def test_cancelled_ticket_cannot_be_checked_in(
        self, async_client, async_session, event_id, organizer_headers
    ):
        ticket_id = await create_ticket(async_session, event_id, "QR-0102", state=TicketState.CANCELLED)

        response = await async_client.put(f"/api/boletos/{ticket_id}/verify", headers=organizer_headers)

        assert response.status_code == 400
        assert response.json()["error"]["details"]["current_state"] == "CANCELADO"
        assert await async_session.scalar(select(Ticket.state).where(Ticket.id == ticket_id)) == TicketState.CANCELLED

    async def test_unknown_ticket_is_not_found(self, async_client, organizer_headers):
        response = await async_client.put("/api/boletos/999/verify", headers=organizer_headers)

        assert response.status_code == 404

    async def test_invalid_ticket_id_is_bad_request(self, async_client, organizer_headers):
        response = await async_client.put("/api/boletos/0/verify", headers=organizer_headers)

        assert response.status_code == 400
        assert response.json()["error"]["error_code"] == "VALIDATION_ERROR"


class TestTicketLifecycle:

    async def test_deleting_event_removes_its_tickets(self, async_client, async_session, event_id, organizer_headers):
        await create_ticket(async_session, event_id, "QR-0200")

        response = await async_client.delete(f"/api/eventos/{event_id}", headers=organizer_headers)

        assert response.status_code == 200
        assert await async_session.scalar(select(func.count(Ticket.id))) == 0

    async def test_deleting_seat_keeps_ticket(self, async_client, async_session, event_id, area_id, organizer_headers):
        seat_id = await create_seat(async_session, area_id, "A1")
        ticket_id = await create_ticket(async_session, event_id, "QR-0201", seat_id=seat_id)

        response = await async_client.delete(f"/api/asientos/{seat_id}", headers=organizer_headers)

        assert response.status_code == 200
        assert await async_session.scalar(select(Ticket.seat_id).where(Ticket.id == ticket_id)) is None
