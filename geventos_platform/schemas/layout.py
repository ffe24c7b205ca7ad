"""
Pydantic schemas and reference types for event layouts.

A layout request carries two structures that point at each other: the layout
document (a list of tables, each describing an area) and a flat seat list.
Either side may refer to rows that do not exist yet. Client-side placeholders
are parsed here, once, into ``ExistingRef`` or ``PendingRef`` so the
reconciler never inspects raw identifiers.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..config import get_settings
from ..models.area import AreaType
from ..models.seat import Seat, SeatState

# Table ids with this prefix mark areas drawn in the editor but not saved yet
NEW_TABLE_PREFIX = "new-table-"

RawId = Union[int, str]


@dataclass(frozen=True)
class ExistingRef:
    """Reference to a persisted row."""
    id: int


@dataclass(frozen=True)
class PendingRef:
    """Reference to a row the client created locally; ``token`` is its local name."""
    token: str


Ref = Union[ExistingRef, PendingRef]


def parse_area_ref(value: Optional[RawId], ceiling: Optional[int] = None) -> Optional[Ref]:
    """
    Classify a raw area identifier.

    Integers (or digit strings) up to ``ceiling`` (``temp_id_ceiling`` from the
    settings by default) are existing area ids. Larger integers and
    ``new-table-`` ids are local tokens. Any other value carries no reference.
    """
    if ceiling is None:
        ceiling = get_settings().temp_id_ceiling
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.isdigit():
            return parse_area_ref(int(text), ceiling)
        if text.startswith(NEW_TABLE_PREFIX):
            return PendingRef(text)
        return None
    if value <= 0:
        return None
    if value > ceiling:
        return PendingRef(str(value))
    return ExistingRef(value)


def parse_seat_ref(value: Optional[RawId], is_new: bool = False, ceiling: Optional[int] = None) -> Ref:
    """
    Classify a raw seat identifier.

    A seat is pending when flagged new, when it has no id, when its id is a
    string, or when its numeric id is above ``ceiling``.
    """
    if ceiling is None:
        ceiling = get_settings().temp_id_ceiling
    if is_new or value is None or isinstance(value, (str, bool)):
        return PendingRef("" if value is None else str(value))
    if value > ceiling or value <= 0:
        return PendingRef(str(value))
    return ExistingRef(value)


class LayoutTableIn(BaseModel):
    """One table/area descriptor of the layout document. Visual metadata passes through untouched."""

    model_config = ConfigDict(extra="allow")

    id: Optional[RawId] = Field(None, description="Editor identifier, e.g. 'area-12' or 'new-table-3'")
    areaid: Optional[RawId] = Field(None, description="Area the table represents, real or placeholder")
    nombre: Optional[str] = Field(None, max_length=100, description="Display name")
    capacidad: Optional[int] = Field(None, gt=0, description="Area capacity")
    tipo: Optional[AreaType] = Field(None, description="Area type")

    @field_validator("tipo", mode="before")
    @classmethod
    def normalize_tipo(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v

    def area_ref(self, ceiling: Optional[int] = None) -> Optional[Ref]:
        """The area this table stands for, or a pending ref when it is new."""
        ref = parse_area_ref(self.areaid, ceiling)
        if isinstance(ref, ExistingRef) and not self.is_new_table:
            return ref
        tokens = self.pending_tokens(ceiling)
        return PendingRef(tokens[0]) if tokens else ref

    def pending_tokens(self, ceiling: Optional[int] = None) -> List[str]:
        """Every local name under which seats may refer to this table's new area."""
        tokens = []
        ref = parse_area_ref(self.areaid, ceiling)
        if isinstance(ref, PendingRef):
            tokens.append(ref.token)
        if self.is_new_table:
            tokens.append(str(self.id))
        return tokens

    @property
    def is_new_table(self) -> bool:
        return isinstance(self.id, str) and self.id.startswith(NEW_TABLE_PREFIX)


class LayoutDocumentIn(BaseModel):
    """The layout document. ``tables`` is the only recognized node list."""

    model_config = ConfigDict(extra="allow")

    tables: Optional[List[LayoutTableIn]] = None

    def to_document(self) -> Dict[str, Any]:
        """Serialize back to the JSON stored in the database, keeping client-only keys."""
        return self.model_dump(mode="json", exclude_unset=True)


class SeatIn(BaseModel):
    """A seat descriptor submitted with a layout."""

    model_config = ConfigDict(populate_by_name=True)

    seat_id: Optional[RawId] = Field(None, alias="asientoID")
    code: str = Field(..., alias="codigo", min_length=1, max_length=20)
    state: SeatState = Field(..., alias="estado")
    row: Optional[int] = Field(None, alias="fila")
    column: Optional[int] = Field(None, alias="columna")
    area_id: Optional[RawId] = Field(None, alias="areaID")
    is_new: bool = Field(False, alias="isNew")

    @model_validator(mode="before")
    @classmethod
    def accept_lowercase_keys(cls, data):
        # Seat lists read back from the API use lower-case id keys
        if isinstance(data, dict):
            data = dict(data)
            if "asientoID" not in data and "asientoid" in data:
                data["asientoID"] = data.pop("asientoid")
            if "areaID" not in data and "areaid" in data:
                data["areaID"] = data.pop("areaid")
        return data

    @field_validator("state", mode="before")
    @classmethod
    def normalize_state(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v

    def seat_ref(self, ceiling: Optional[int] = None) -> Ref:
        return parse_seat_ref(self.seat_id, self.is_new, ceiling)

    def area_ref(self, ceiling: Optional[int] = None) -> Optional[Ref]:
        return parse_area_ref(self.area_id, ceiling)


class LayoutSaveRequest(BaseModel):
    """Body of PUT /eventos/{eventoID}/layout."""

    model_config = ConfigDict(populate_by_name=True)

    layout: Optional[LayoutDocumentIn] = Field(
        None,
        alias="configuracionCroquis",
        description="Layout document; omit to leave the stored one untouched"
    )
    seats: List[SeatIn] = Field(..., alias="asientos", description="Seats to create or update")
    version: Optional[int] = Field(
        None,
        ge=1,
        description="Layout version the client edited; a stale value is rejected with 409"
    )

    @field_validator("layout", mode="before")
    @classmethod
    def reject_null_layout(cls, v):
        if v is None:
            raise ValueError("configuracionCroquis must be an object when provided")
        return v


class SeatOut(BaseModel):
    """Seat as returned with a layout."""

    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(..., alias="asientoid")
    code: Optional[str] = Field(None, alias="codigo")
    row: Optional[int] = Field(None, alias="fila")
    column: Optional[int] = Field(None, alias="columna")
    state: SeatState = Field(..., alias="estado")
    area_id: int = Field(..., alias="areaid")

    @classmethod
    def from_seat(cls, seat: Seat) -> "SeatOut":
        return cls(
            id=seat.id,
            code=seat.code,
            row=seat.row,
            column=seat.column,
            state=seat.state,
            area_id=seat.area_id,
        )


class SkippedSeat(BaseModel):
    """A seat descriptor the reconciler left out, with the reason."""

    model_config = ConfigDict(populate_by_name=True)

    code: Optional[str] = Field(None, alias="codigo")
    seat_id: Optional[RawId] = Field(None, alias="asientoid")
    reason: str


class LayoutResponse(BaseModel):
    """Layout document plus every seat of the event's venue."""

    model_config = ConfigDict(populate_by_name=True)

    layout_config: Optional[Dict[str, Any]] = Field(None, alias="layoutConfig")
    seats: List[SeatOut] = Field(default_factory=list)
    version: Optional[int] = Field(None, description="Current layout version, null before the first save")


class LayoutSaveResponse(LayoutResponse):
    """Result of a layout save."""

    message: str
    skipped: List[SkippedSeat] = Field(default_factory=list)


class AreaDeleteResponse(LayoutResponse):
    """Result of deleting an area from an event layout."""

    message: str
