"""
Layout service: reads, saves and edits event seating layouts.

Saving a layout reconciles the client's layout document and seat list with
the area and seat rows of the event's venue in a single transaction:

1. resolve the event's venue;
2. create an area for every table that refers to a pending area, and map
   each of the table's local tokens to the new area ID;
3. upsert the layout document, guarded by its version when the client sent one;
4. create pending seats and update the state of existing ones, skipping
   seats whose references do not belong to the venue.

Any failure rolls back every step.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from geventos_platform.cache import CacheInvalidator, CacheKeyBuilder, get_cache
from geventos_platform.config import get_settings
from geventos_platform.models import ActivityKind, AreaType, LayoutDocument
from geventos_platform.schemas.layout import (
    AreaDeleteResponse,
    ExistingRef,
    LayoutDocumentIn,
    LayoutResponse,
    LayoutSaveRequest,
    LayoutSaveResponse,
    PendingRef,
    SeatIn,
    SeatOut,
    SkippedSeat,
    parse_area_ref,
)
from geventos_platform.schemas.seat import EventSeatCreate
from geventos_platform.services.activity_service import ActivityService
from geventos_platform.services.area_store import AreaStore
from geventos_platform.services.seat_store import SeatStore
from geventos_platform.services.venue_resolver import VenueResolver
from geventos_platform.utils.exceptions import (
    AreaNotFoundError,
    AreaNotInVenueError,
    ConcurrencyError,
    GeventosError,
    IntegrityFaultError,
    OptimisticLockError,
)
from geventos_platform.utils.logging_config import log_business_event, log_performance

logger = logging.getLogger(__name__)

LAYOUT_SAVED_MESSAGE = "Layout y asientos guardados exitosamente."

# Skip reasons reported back to the client
SKIP_MISSING_AREA = "missing_area"
SKIP_AREA_NOT_IN_VENUE = "area_not_in_venue"
SKIP_SEAT_NOT_IN_VENUE = "seat_not_in_venue"


@dataclass
class _SeatOutcome:
    created: int = 0
    updated: int = 0
    skipped: List[SkippedSeat] = field(default_factory=list)


class LayoutService:
    """Service class for event layout operations."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.cache = get_cache()
        self.settings = get_settings()
        self.resolver = VenueResolver(db)
        self.areas = AreaStore(db)
        self.seats = SeatStore(db)
        self.activities = ActivityService(db)

    @property
    def ceiling(self) -> int:
        return self.settings.temp_id_ceiling

    async def get_layout(self, event_id: int) -> LayoutResponse:
        """
        Get the layout document and the venue's seats for an event.

        Args:
            event_id: Event ID

        Returns:
            Layout configuration (None if never saved), seats ordered by ID, and version

        Raises:
            EventNotFoundError: If the event does not exist
            IntegrityFaultError: If the event has no venue
        """
        cache_key = CacheKeyBuilder.event_layout(event_id)
        cached = await self.cache.get(cache_key)
        if cached:
            return LayoutResponse.model_validate(cached)

        venue_id = await self._require_venue(event_id)
        response = await self._read_layout(event_id, venue_id)

        await self.cache.set(
            cache_key,
            response.model_dump(mode="json", by_alias=True),
            ttl=self.settings.layout_cache_ttl
        )
        return response

    async def save_layout(
        self,
        event_id: int,
        request: LayoutSaveRequest,
        user_id: Optional[int] = None,
        ip_address: Optional[str] = None
    ) -> LayoutSaveResponse:
        """
        Reconcile a submitted layout and seat list with the stored rows.

        Args:
            event_id: Event ID
            request: Validated layout document, seat list and optional version
            user_id: Caller, for the activity log
            ip_address: Caller address, for the activity log

        Returns:
            The stored layout, every seat of the venue, and the seats that were skipped

        Raises:
            EventNotFoundError: If the event does not exist
            OptimisticLockError: If ``request.version`` is stale
            IntegrityFaultError: If the event has no venue or the write fails
        """
        started = time.perf_counter()
        venue_id = await self._require_venue(event_id)

        try:
            token_map = await self._create_pending_areas(venue_id, request.layout)
            await self._write_document(
                event_id,
                request.layout.to_document() if request.layout is not None else None,
                request.version
            )
            outcome = await self._apply_seats(venue_id, request.seats, token_map)
            areas_created = len(set(token_map.values()))

            self.activities.record(
                ActivityKind.EVENT_MODIFIED,
                f"Croquis del evento {event_id} actualizado",
                details=(
                    f"areas_created={areas_created} seats_created={outcome.created} "
                    f"seats_updated={outcome.updated} skipped={len(outcome.skipped)}"
                ),
                user_id=user_id,
                ip_address=ip_address
            )
            await self.db.commit()

        except GeventosError:
            await self.db.rollback()
            raise
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Layout save failed for event {event_id}: {e}", exc_info=True)
            raise IntegrityFaultError(f"Failed to save layout for event {event_id}") from e

        # Seat rows belong to the venue, so every event held there shows them
        await CacheInvalidator.invalidate_all_layouts()

        log_business_event(
            "layout_saved",
            {
                "event_id": event_id,
                "venue_id": venue_id,
                "areas_created": areas_created,
                "seats_created": outcome.created,
                "seats_updated": outcome.updated,
                "seats_skipped": len(outcome.skipped),
            },
            user_id=user_id
        )
        log_performance("layout_save", time.perf_counter() - started, event_id=event_id)

        current = await self._read_layout(event_id, venue_id)
        return LayoutSaveResponse(
            message=LAYOUT_SAVED_MESSAGE,
            layout_config=current.layout_config,
            seats=current.seats,
            version=current.version,
            skipped=outcome.skipped
        )

    async def delete_area(
        self,
        event_id: int,
        area_id: int,
        user_id: Optional[int] = None,
        ip_address: Optional[str] = None
    ) -> AreaDeleteResponse:
        """
        Delete an area of the event's venue and drop it from the layout document.

        Args:
            event_id: Event ID
            area_id: Area ID

        Returns:
            The updated layout and remaining seats

        Raises:
            EventNotFoundError: If the event does not exist
            AreaNotFoundError: If the area does not exist or belongs to another venue
        """
        venue_id = await self.resolver.resolve_venue(event_id)
        if venue_id is None or await self.areas.get_area_in_venue(area_id, venue_id) is None:
            raise AreaNotFoundError(area_id, event_id=event_id)

        try:
            if not await self.areas.delete_area(area_id):
                raise AreaNotFoundError(area_id, event_id=event_id)

            layout = await self._get_layout_row(event_id)
            if layout is not None:
                configuration = self._without_area(layout.configuration, area_id)
                await self.db.execute(
                    update(LayoutDocument)
                    .where(LayoutDocument.id == layout.id)
                    .values(configuration=configuration, version=LayoutDocument.version + 1)
                )

            self.activities.record(
                ActivityKind.EVENT_MODIFIED,
                f"Área {area_id} eliminada del evento {event_id}",
                user_id=user_id,
                ip_address=ip_address
            )
            await self.db.commit()

        except GeventosError:
            await self.db.rollback()
            raise
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Area {area_id} deletion failed for event {event_id}: {e}", exc_info=True)
            raise IntegrityFaultError(f"Failed to delete area {area_id}") from e

        # Other events at the same venue show the same seats
        await CacheInvalidator.invalidate_all_layouts()
        logger.info(f"Area {area_id} and its seats deleted from venue {venue_id} (event {event_id})")

        current = await self._read_layout(event_id, venue_id)
        return AreaDeleteResponse(
            message=f"Área {area_id} y sus asientos asociados eliminados exitosamente.",
            layout_config=current.layout_config if current.layout_config is not None else {"tables": []},
            seats=current.seats,
            version=current.version
        )

    async def add_seat(self, event_id: int, payload: EventSeatCreate) -> SeatOut:
        """
        Add one seat to an area of the event's venue.

        Raises:
            EventNotFoundError: If the event does not exist
            AreaNotInVenueError: If the area is not part of the event's venue
        """
        venue_id = await self._require_venue(event_id)
        if await self.areas.get_area_in_venue(payload.area_id, venue_id) is None:
            raise AreaNotInVenueError(payload.area_id, venue_id)

        try:
            seat = await self.seats.create_seat(
                payload.area_id,
                payload.code,
                payload.state,
                row=payload.row,
                column=payload.column
            )
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise IntegrityFaultError(f"Failed to create seat for event {event_id}") from e

        await CacheInvalidator.invalidate_all_layouts()
        return SeatOut.from_seat(seat)

    async def _require_venue(self, event_id: int) -> int:
        venue_id = await self.resolver.resolve_venue(event_id)
        if venue_id is None:
            logger.error(f"Event {event_id} has no venue; refusing to touch its layout")
            raise IntegrityFaultError(f"Event {event_id} has no venue")
        return venue_id

    async def _create_pending_areas(
        self,
        venue_id: int,
        layout: Optional[LayoutDocumentIn]
    ) -> Dict[str, int]:
        """
        Create an area for each table that refers to a pending one.

        Tables are rewritten in place to point at the new area. Tables sharing
        a local token share one area.

        Returns:
            Mapping of every local token to the ID of the area created for it
        """
        token_map: Dict[str, int] = {}
        if layout is None or not layout.tables:
            return token_map

        existing_refs: Set[int] = set()

        for table in layout.tables:
            ref = table.area_ref(self.ceiling)
            if isinstance(ref, ExistingRef):
                existing_refs.add(ref.id)
                continue
            if ref is None:
                if table.areaid is not None:
                    logger.warning(f"Layout table {table.id} has stale area reference {table.areaid!r}; keeping entry as sent")
                continue

            tokens = table.pending_tokens(self.ceiling)
            area_id = next((token_map[token] for token in tokens if token in token_map), None)
            if area_id is None:
                label = table.nombre or table.id or ref.token
                area = await self.areas.create_area(
                    venue_id,
                    name=f"Área {label}"[:100],
                    capacity=table.capacidad or self.settings.default_area_capacity,
                    area_type=table.tipo or AreaType.GENERAL
                )
                area_id = area.id
                logger.info(f"Created area {area_id} for pending table {ref.token} in venue {venue_id}")

            for token in tokens:
                token_map[token] = area_id
            table.areaid = area_id
            table.id = f"area-{area_id}"

        foreign = existing_refs - await self.areas.ids_in_venue(existing_refs, venue_id)
        for area_id in sorted(foreign):
            logger.warning(f"Layout table references area {area_id} outside venue {venue_id}; keeping entry as sent")

        return token_map

    async def _write_document(
        self,
        event_id: int,
        document: Optional[Dict[str, Any]],
        expected_version: Optional[int]
    ) -> None:
        """
        Insert or update the event's layout row.

        ``document`` None keeps the stored configuration; the version is still
        checked and bumped when ``expected_version`` is given.
        """
        layout = await self._get_layout_row(event_id)

        if layout is None:
            if expected_version is not None:
                raise OptimisticLockError("layout", event_id, expected_version=expected_version)
            if document is None:
                return
            self.db.add(LayoutDocument(event_id=event_id, configuration=document, version=1))
            try:
                await self.db.flush()
            except IntegrityError as e:
                raise ConcurrencyError(f"Layout for event {event_id} was created concurrently") from e
            return

        if document is None and expected_version is None:
            return

        values: Dict[str, Any] = {"version": LayoutDocument.version + 1}
        if document is not None:
            values["configuration"] = document

        stmt = update(LayoutDocument).where(LayoutDocument.id == layout.id)
        if expected_version is not None:
            stmt = stmt.where(LayoutDocument.version == expected_version)

        result = await self.db.execute(stmt.values(**values))
        if result.rowcount == 0:
            raise OptimisticLockError("layout", event_id, expected_version=expected_version)

    async def _apply_seats(
        self,
        venue_id: int,
        seats: List[SeatIn],
        token_map: Dict[str, int]
    ) -> _SeatOutcome:
        outcome = _SeatOutcome()

        existing_seat_ids = set()
        new_seat_area_ids = set()
        for seat in seats:
            seat_ref = seat.seat_ref(self.ceiling)
            if isinstance(seat_ref, ExistingRef):
                existing_seat_ids.add(seat_ref.id)
            else:
                area_ref = seat.area_ref(self.ceiling)
                if isinstance(area_ref, ExistingRef):
                    new_seat_area_ids.add(area_ref.id)

        owned_seats = await self.seats.ids_in_venue(existing_seat_ids, venue_id)
        venue_areas = await self.areas.ids_in_venue(new_seat_area_ids, venue_id)
        venue_areas.update(token_map.values())

        for seat in seats:
            seat_ref = seat.seat_ref(self.ceiling)

            if isinstance(seat_ref, ExistingRef):
                if seat_ref.id not in owned_seats:
                    logger.warning(f"Seat {seat_ref.id} does not belong to venue {venue_id}; skipping")
                    outcome.skipped.append(self._skip(seat, SKIP_SEAT_NOT_IN_VENUE))
                    continue
                await self.seats.update_seat_state(seat_ref.id, seat.state)
                outcome.updated += 1
                continue

            area_id = self._resolve_area(seat, token_map)
            if area_id is None:
                logger.warning(f"New seat {seat.code} has no valid area ({seat.area_id}); skipping")
                outcome.skipped.append(self._skip(seat, SKIP_MISSING_AREA))
                continue
            if area_id not in venue_areas:
                logger.warning(f"New seat {seat.code} targets area {area_id} outside venue {venue_id}; skipping")
                outcome.skipped.append(self._skip(seat, SKIP_AREA_NOT_IN_VENUE))
                continue

            await self.seats.create_seat(
                area_id,
                seat.code,
                seat.state,
                row=seat.row,
                column=seat.column
            )
            outcome.created += 1

        return outcome

    def _resolve_area(self, seat: SeatIn, token_map: Dict[str, int]) -> Optional[int]:
        ref = seat.area_ref(self.ceiling)
        if isinstance(ref, ExistingRef):
            return ref.id
        if isinstance(ref, PendingRef):
            return token_map.get(ref.token)
        return None

    @staticmethod
    def _skip(seat: SeatIn, reason: str) -> SkippedSeat:
        return SkippedSeat(code=seat.code, seat_id=seat.seat_id, reason=reason)

    def _without_area(self, configuration: Optional[Dict[str, Any]], area_id: int) -> Optional[Dict[str, Any]]:
        """Copy of the layout document without the tables that reference ``area_id``."""
        if not isinstance(configuration, dict) or not isinstance(configuration.get("tables"), list):
            return configuration

        target = ExistingRef(area_id)
        tables = [
            table for table in configuration["tables"]
            if not (isinstance(table, dict) and parse_area_ref(table.get("areaid"), self.ceiling) == target)
        ]
        return {**configuration, "tables": tables}

    async def _get_layout_row(self, event_id: int) -> Optional[LayoutDocument]:
        result = await self.db.execute(
            select(LayoutDocument)
            .where(LayoutDocument.event_id == event_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def _read_layout(self, event_id: int, venue_id: int) -> LayoutResponse:
        result = await self.db.execute(
            select(LayoutDocument.configuration, LayoutDocument.version)
            .where(LayoutDocument.event_id == event_id)
        )
        row = result.one_or_none()
        seats = await self.seats.list_by_venue(venue_id)

        return LayoutResponse(
            layout_config=row.configuration if row else None,
            seats=[SeatOut.from_seat(seat) for seat in seats],
            version=row.version if row else None
        )
