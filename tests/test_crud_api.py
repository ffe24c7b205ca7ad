"""API tests for venues, areas, seats, events, configuration and activities."""

from sqlalchemy import func, select

from geventos_platform.models import Activity, ActivityKind, AppConfig, Area, LayoutDocument, Seat

from conftest import create_area, create_event, create_seat, create_venue


EVENT_BODY = {
    "nombre": "Taller de Python",
    "descripcion": "Introducción práctica",
    "fecha": "2030-06-01",
    "horaInicio": "10:00:00",
    "horaFin": "12:00:00",
    "precio": "15.50",
    "capacidad": 40,
    "tipo": "taller",
}


class TestVenues:
    async def test_admin_creates_and_reads_venue(self, async_client, admin_headers, attendee_headers):
        created = await async_client.post(
            "/api/lugares",
            json={"nombre": "Teatro Municipal", "direccion": "Calle 5", "capacidadMaxima": 300},
            headers=admin_headers
        )

        assert created.status_code == 201
        venue = created.json()
        assert venue["nombre"] == "Teatro Municipal"
        assert venue["descripcion"] is None

        fetched = await async_client.get(f"/api/lugares/{venue['lugarID']}", headers=attendee_headers)
        assert fetched.status_code == 200
        assert fetched.json() == venue

    async def test_organizer_cannot_create_venue(self, async_client, organizer_headers):
        response = await async_client.post(
            "/api/lugares",
            json={"nombre": "Teatro", "direccion": "Calle 5", "capacidadMaxima": 300},
            headers=organizer_headers
        )

        assert response.status_code == 403

    async def test_venue_capacity_must_be_positive(self, async_client, admin_headers):
        response = await async_client.post(
            "/api/lugares",
            json={"nombre": "Teatro", "direccion": "Calle 5", "capacidadMaxima": 0},
            headers=admin_headers
        )

        assert response.status_code == 400

    async def test_list_venues_ordered_by_name(self, async_client, async_session, attendee_headers):
        await create_venue(async_session, name="Zócalo")
        await create_venue(async_session, name="Arena")

        response = await async_client.get("/api/lugares", headers=attendee_headers)

        assert [venue["nombre"] for venue in response.json()] == ["Arena", "Zócalo"]

    async def test_partial_update(self, async_client, venue_id, admin_headers):
        response = await async_client.put(
            f"/api/lugares/{venue_id}",
            json={"descripcion": "Renovado"},
            headers=admin_headers
        )

        assert response.status_code == 200
        assert response.json()["descripcion"] == "Renovado"
        assert response.json()["nombre"] == "Auditorio Central"

    async def test_empty_update_is_rejected(self, async_client, venue_id, admin_headers):
        response = await async_client.put(f"/api/lugares/{venue_id}", json={}, headers=admin_headers)

        assert response.status_code == 400

    async def test_delete_venue_in_use_is_rejected(self, async_client, event_id, venue_id, admin_headers):
        response = await async_client.delete(f"/api/lugares/{venue_id}", headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["error"]["error_code"] == "VENUE_IN_USE"

    async def test_delete_venue_cascades_to_areas_and_seats(self, async_client, async_session, admin_headers):
        venue_id = await create_venue(async_session, name="Temporal")
        area_id = await create_area(async_session, venue_id)
        await create_seat(async_session, area_id, "A1")

        response = await async_client.delete(f"/api/lugares/{venue_id}", headers=admin_headers)

        assert response.status_code == 200
        assert await async_session.scalar(select(func.count(Area.id))) == 0
        assert await async_session.scalar(select(func.count(Seat.id))) == 0

    async def test_unknown_venue_is_not_found(self, async_client, attendee_headers):
        response = await async_client.get("/api/lugares/4242", headers=attendee_headers)

        assert response.status_code == 404


class TestAreas:
    async def test_create_and_list_areas(self, async_client, venue_id, organizer_headers):
        created = await async_client.post(
            f"/api/areas/lugares/{venue_id}/areas",
            json={"nombre": "VIP", "capacidad": 20, "tipo": "vip"},
            headers=organizer_headers
        )
        await async_client.post(
            f"/api/areas/lugares/{venue_id}/areas",
            json={"nombre": "General", "capacidad": 200, "tipo": "GENERAL"},
            headers=organizer_headers
        )

        assert created.status_code == 201
        assert created.json()["areaId"] > 0

        listed = await async_client.get(f"/api/areas/lugares/{venue_id}/areas", headers=organizer_headers)
        assert [area["nombre"] for area in listed.json()] == ["General", "VIP"]
        assert listed.json()[1]["tipo"] == "VIP"
        assert listed.json()[1]["lugarID"] == venue_id

    async def test_list_areas_of_unknown_venue(self, async_client, organizer_headers):
        response = await async_client.get("/api/areas/lugares/999/areas", headers=organizer_headers)

        assert response.status_code == 404

    async def test_invalid_area_type_is_rejected(self, async_client, venue_id, organizer_headers):
        response = await async_client.post(
            f"/api/areas/lugares/{venue_id}/areas",
            json={"nombre": "Palco", "capacidad": 5, "tipo": "PALCO"},
            headers=organizer_headers
        )

        assert response.status_code == 400

    async def test_update_area(self, async_client, area_id, organizer_headers):
        response = await async_client.put(
            f"/api/areas/{area_id}",
            json={"capacidad": 80, "tipo": "reservado"},
            headers=organizer_headers
        )

        assert response.status_code == 200
        assert response.json()["capacidad"] == 80
        assert response.json()["tipo"] == "RESERVADO"

    async def test_moving_area_to_another_venue_is_rejected(self, async_client, area_id, organizer_headers):
        response = await async_client.put(
            f"/api/areas/{area_id}",
            json={"nombre": "Otra", "lugarID": 2},
            headers=organizer_headers
        )

        assert response.status_code == 400

    async def test_empty_area_update_is_rejected(self, async_client, area_id, organizer_headers):
        response = await async_client.put(f"/api/areas/{area_id}", json={}, headers=organizer_headers)

        assert response.status_code == 400

    async def test_delete_area_removes_seats(self, async_client, async_session, area_id, organizer_headers):
        await create_seat(async_session, area_id, "A1")

        response = await async_client.delete(f"/api/areas/{area_id}", headers=organizer_headers)

        assert response.status_code == 200
        assert await async_session.scalar(select(func.count(Seat.id))) == 0
        missing = await async_client.get(f"/api/areas/{area_id}", headers=organizer_headers)
        assert missing.status_code == 404


class TestSeats:
    async def test_bulk_create_and_list_by_row_and_column(self, async_client, area_id, organizer_headers):
        created = await async_client.post(
            f"/api/asientos/areas/{area_id}/asientos",
            json=[
                {"codigo": "B1", "estado": "DISPONIBLE", "fila": 2, "columna": 1},
                {"codigo": "A2", "estado": "DISPONIBLE", "fila": 1, "columna": 2},
                {"codigo": "A1", "estado": "bloqueado", "fila": 1, "columna": 1},
            ],
            headers=organizer_headers
        )

        assert created.status_code == 201
        assert len(created.json()["asientoIds"]) == 3

        listed = await async_client.get(f"/api/asientos/areas/{area_id}/asientos", headers=organizer_headers)
        assert [seat["codigo"] for seat in listed.json()] == ["A1", "A2", "B1"]
        assert listed.json()[0]["estado"] == "BLOQUEADO"

    async def test_bulk_create_is_all_or_nothing(self, async_client, async_session, area_id, organizer_headers):
        response = await async_client.post(
            f"/api/asientos/areas/{area_id}/asientos",
            json=[
                {"codigo": "A1", "estado": "DISPONIBLE"},
                {"codigo": "A2", "estado": "INEXISTENTE"},
            ],
            headers=organizer_headers
        )

        assert response.status_code == 400
        assert await async_session.scalar(select(func.count(Seat.id))) == 0

    async def test_empty_bulk_create_is_rejected(self, async_client, area_id, organizer_headers):
        response = await async_client.post(
            f"/api/asientos/areas/{area_id}/asientos",
            json=[],
            headers=organizer_headers
        )

        assert response.status_code == 400

    async def test_seats_of_unknown_area(self, async_client, organizer_headers):
        response = await async_client.get("/api/asientos/areas/321/asientos", headers=organizer_headers)

        assert response.status_code == 404

    async def test_update_seat(self, async_client, async_session, area_id, organizer_headers):
        seat_id = await create_seat(async_session, area_id, "A1")

        response = await async_client.put(
            f"/api/asientos/{seat_id}",
            json={"estado": "ocupado", "fila": None},
            headers=organizer_headers
        )

        assert response.status_code == 200
        assert response.json()["estado"] == "OCUPADO"
        assert response.json()["fila"] is None
        assert response.json()["columna"] == 1

    async def test_seat_coordinates_must_be_positive(self, async_client, async_session, area_id, organizer_headers):
        seat_id = await create_seat(async_session, area_id, "A1")

        response = await async_client.put(f"/api/asientos/{seat_id}", json={"fila": 0}, headers=organizer_headers)

        assert response.status_code == 400

    async def test_moving_seat_to_another_area_is_rejected(self, async_client, async_session, area_id, organizer_headers):
        seat_id = await create_seat(async_session, area_id, "A1")

        response = await async_client.put(
            f"/api/asientos/{seat_id}",
            json={"areaID": area_id + 1},
            headers=organizer_headers
        )

        assert response.status_code == 400

    async def test_delete_seat(self, async_client, async_session, area_id, organizer_headers):
        seat_id = await create_seat(async_session, area_id, "A1")

        deleted = await async_client.delete(f"/api/asientos/{seat_id}", headers=organizer_headers)
        again = await async_client.delete(f"/api/asientos/{seat_id}", headers=organizer_headers)

        assert deleted.status_code == 200
        assert again.status_code == 404

    async def test_attendee_cannot_create_seats(self, async_client, area_id, attendee_headers):
        response = await async_client.post(
            f"/api/asientos/areas/{area_id}/asientos",
            json=[{"codigo": "A1", "estado": "DISPONIBLE"}],
            headers=attendee_headers
        )

        assert response.status_code == 403


class TestEvents:
    async def test_create_event_sets_organizer_and_logs_activity(
        self, async_client, async_session, venue_id, organizer_headers
    ):
        response = await async_client.post(
            "/api/eventos",
            json={**EVENT_BODY, "lugarID": venue_id},
            headers=organizer_headers
        )

        assert response.status_code == 201
        event_id = response.json()["eventId"]

        fetched = await async_client.get(f"/api/eventos/{event_id}", headers=organizer_headers)
        event = fetched.json()
        assert event["organizadorID"] == 1
        assert event["lugarNombre"] == "Auditorio Central"
        assert event["estado"] == "BORRADOR"
        assert event["tipo"] == "TALLER"
        assert event["boletosVendidos"] == 0

        kinds = (await async_session.execute(select(Activity.kind))).scalars().all()
        assert kinds == [ActivityKind.EVENT_CREATED]

    async def test_create_event_requires_existing_venue(self, async_client, organizer_headers):
        response = await async_client.post(
            "/api/eventos",
            json={**EVENT_BODY, "lugarID": 555},
            headers=organizer_headers
        )

        assert response.status_code == 404

    async def test_end_must_follow_start(self, async_client, venue_id, organizer_headers):
        response = await async_client.post(
            "/api/eventos",
            json={**EVENT_BODY, "horaFin": "09:00:00", "lugarID": venue_id},
            headers=organizer_headers
        )

        assert response.status_code == 400

    async def test_list_events_ordered_by_date(self, async_client, async_session, venue_id, organizer_headers):
        await create_event(async_session, venue_id, name="Posterior")
        await async_client.post(
            "/api/eventos",
            json={**EVENT_BODY, "fecha": "2029-01-01", "lugarID": venue_id},
            headers=organizer_headers
        )

        response = await async_client.get("/api/eventos", headers=organizer_headers)

        assert [event["nombre"] for event in response.json()] == ["Taller de Python", "Posterior"]

    async def test_update_event(self, async_client, event_id, organizer_headers):
        response = await async_client.put(
            f"/api/eventos/{event_id}",
            json={"precio": "30.00", "estado": "cancelado"},
            headers=organizer_headers
        )

        assert response.status_code == 200
        assert response.json()["estado"] == "CANCELADO"
        assert float(response.json()["precio"]) == 30.0

    async def test_update_event_rejects_inverted_times(self, async_client, event_id, organizer_headers):
        response = await async_client.put(
            f"/api/eventos/{event_id}",
            json={"horaFin": "08:00:00"},
            headers=organizer_headers
        )

        assert response.status_code == 400

    async def test_update_event_rejects_null_name(self, async_client, event_id, organizer_headers):
        response = await async_client.put(
            f"/api/eventos/{event_id}",
            json={"nombre": None},
            headers=organizer_headers
        )

        assert response.status_code == 400

    async def test_delete_event_removes_layout_but_keeps_areas(
        self, async_client, async_session, event_id, area_id, organizer_headers
    ):
        await async_client.put(
            f"/api/eventos/{event_id}/layout",
            json={"configuracionCroquis": {"tables": []}, "asientos": []},
            headers=organizer_headers
        )

        response = await async_client.delete(f"/api/eventos/{event_id}", headers=organizer_headers)

        assert response.status_code == 200
        assert await async_session.scalar(select(func.count(LayoutDocument.id))) == 0
        assert await async_session.scalar(select(func.count(Area.id))) == 1
        missing = await async_client.get(f"/api/eventos/{event_id}", headers=organizer_headers)
        assert missing.status_code == 404


class TestConfig:
    async def test_missing_config_is_not_found(self, async_client, attendee_headers):
        response = await async_client.get("/api/config", headers=attendee_headers)

        assert response.status_code == 404

    async def test_admin_updates_config(self, async_client, async_session, admin_headers):
        async_session.add(AppConfig(app_name="GEventos", contact_email="info@geventos.com", version="1.0"))
        await async_session.commit()

        response = await async_client.put(
            "/api/config",
            json={"contactoEmail": "soporte@geventos.com"},
            headers=admin_headers
        )

        assert response.status_code == 200
        assert response.json()["contactoEmail"] == "soporte@geventos.com"
        assert response.json()["nombreAplicacion"] == "GEventos"

        activities = await async_client.get("/api/activities", headers=admin_headers)
        assert activities.json()[0]["tipo"] == "OTRO"
        assert activities.json()[0]["usuarioID"] == 2

    async def test_invalid_email_is_rejected(self, async_client, async_session, admin_headers):
        async_session.add(AppConfig(app_name="GEventos", contact_email="info@geventos.com", version="1.0"))
        await async_session.commit()

        response = await async_client.put("/api/config", json={"contactoEmail": "no-es-correo"}, headers=admin_headers)

        assert response.status_code == 400

    async def test_organizer_cannot_update_config(self, async_client, organizer_headers):
        response = await async_client.put("/api/config", json={"version": "2.0"}, headers=organizer_headers)

        assert response.status_code == 403


class TestActivities:
    async def test_requires_authentication(self, async_client):
        response = await async_client.get("/api/activities")

        assert response.status_code == 401

    async def test_limit_is_bounded(self, async_client, attendee_headers):
        response = await async_client.get("/api/activities?limit=501", headers=attendee_headers)

        assert response.status_code == 400

    async def test_newest_first_with_limit(self, async_client, event_id, organizer_headers):
        for price in ("10.00", "20.00", "30.00"):
            await async_client.put(f"/api/eventos/{event_id}", json={"precio": price}, headers=organizer_headers)

        response = await async_client.get("/api/activities?limit=2", headers=organizer_headers)

        entries = response.json()
        assert len(entries) == 2
        assert entries[0]["actividadID"] > entries[1]["actividadID"]


async def test_health_endpoints(async_client):
    root = await async_client.get("/")
    health = await async_client.get("/health")

    assert root.status_code == 200
    assert health.json() == {"status": "healthy", "service": "geventos-platform"}
