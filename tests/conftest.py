"""
Test configuration and fixtures.

Every test gets a fresh in-memory SQLite database shared by the test and the
application through ``app.dependency_overrides[get_db]``. Redis is never
initialized, so the layout cache behaves as a permanent miss unless a test
attaches a fake client.
"""

from datetime import date, time
from decimal import Decimal
from typing import Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event as sa_event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from geventos_platform.database import get_db
from geventos_platform.main import app
from geventos_platform.models import (
    Area,
    AreaType,
    Base,
    Event,
    EventStatus,
    EventType,
    Seat,
    SeatState,
    Ticket,
    TicketState,
    Venue,
)
from geventos_platform.utils.auth import Role, create_access_token


DATABASE_URL = "sqlite+aiosqlite://"


@pytest_asyncio.fixture(scope="function")
async def async_engine():
    """Create an in-memory engine with foreign keys enforced."""
    engine = create_async_engine(
        DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @sa_event.listens_for(engine.sync_engine, "connect")
    def enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def async_session(async_engine):
    session_maker = async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False
    )

    async with session_maker() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def async_client(async_session):
    """Create async test client bound to the test session."""
    async def override_get_db():
        yield async_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


def auth_headers(role: Role = Role.ORGANIZER, user_id: int = 1) -> dict:
    token = create_access_token({"sub": user_id, "role": role.value})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def organizer_headers():
    return auth_headers(Role.ORGANIZER, user_id=1)


@pytest.fixture
def admin_headers():
    return auth_headers(Role.ADMINISTRATOR, user_id=2)


@pytest.fixture
def attendee_headers():
    return auth_headers(Role.ATTENDEE, user_id=3)


async def create_venue(session: AsyncSession, name: str = "Auditorio Central") -> int:
    venue = Venue(name=name, address="Av. Principal 123", max_capacity=500)
    session.add(venue)
    await session.commit()
    return venue.id


async def create_event(session: AsyncSession, venue_id, name: str = "Congreso Anual") -> int:
    event = Event(
        name=name,
        event_date=date(2030, 5, 20),
        start_time=time(9, 0),
        end_time=time(18, 0),
        price=Decimal("25.00"),
        capacity=200,
        tickets_sold=0,
        status=EventStatus.ACTIVE,
        event_type=EventType.CONFERENCE,
        venue_id=venue_id,
        organizer_id=1
    )
    session.add(event)
    await session.commit()
    return event.id


async def create_area(session: AsyncSession, venue_id: int, name: str = "Platea") -> int:
    area = Area(name=name, capacity=100, area_type=AreaType.GENERAL, venue_id=venue_id)
    session.add(area)
    await session.commit()
    return area.id


async def create_seat(
    session: AsyncSession,
    area_id: int,
    code: str,
    row: int = 1,
    column: int = 1,
    state: SeatState = SeatState.AVAILABLE
) -> int:
    seat = Seat(area_id=area_id, code=code, row=row, column=column, state=state)
    session.add(seat)
    await session.commit()
    return seat.id


async def create_ticket(
    session: AsyncSession,
    event_id: int,
    qr_code: str,
    user_id: int = 3,
    seat_id: Optional[int] = None,
    state: TicketState = TicketState.ACTIVE
) -> int:
    ticket = Ticket(
        qr_code=qr_code,
        state=state,
        price=Decimal("25.00"),
        event_id=event_id,
        seat_id=seat_id,
        user_id=user_id
    )
    session.add(ticket)
    await session.commit()
    return ticket.id


@pytest_asyncio.fixture
async def venue_id(async_session):
    return await create_venue(async_session)


@pytest_asyncio.fixture
async def event_id(async_session, venue_id):
    return await create_event(async_session, venue_id)


@pytest_asyncio.fixture
async def area_id(async_session, venue_id):
    return await create_area(async_session, venue_id)
