"""Tests for parsing client area and seat references."""

import pytest
from pydantic import ValidationError

from geventos_platform.config import get_settings
from geventos_platform.models import AreaType, SeatState
from geventos_platform.schemas.layout import (
    ExistingRef,
    LayoutDocumentIn,
    LayoutSaveRequest,
    LayoutTableIn,
    PendingRef,
    SeatIn,
    parse_area_ref,
    parse_seat_ref,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        (12, ExistingRef(12)),
        ("12", ExistingRef(12)),
        (1111111111, PendingRef("1111111111")),
        ("new-table-2", PendingRef("new-table-2")),
        ("temp-3", None),
        ("mesa", None),
        (None, None),
        ("", None),
        (0, None),
        (-4, None),
        (True, None),
    ],
)
def test_parse_area_ref(raw, expected):
    assert parse_area_ref(raw) == expected


def test_parse_area_ref_respects_ceiling():
    assert parse_area_ref(500, ceiling=100) == PendingRef("500")
    assert parse_area_ref(100, ceiling=100) == ExistingRef(100)


@pytest.mark.parametrize(
    "raw, is_new, expected",
    [
        (7, False, ExistingRef(7)),
        (7, True, PendingRef("7")),
        (None, False, PendingRef("")),
        ("tmp-1", False, PendingRef("tmp-1")),
        (2000000000, False, PendingRef("2000000000")),
    ],
)
def test_parse_seat_ref(raw, is_new, expected):
    assert parse_seat_ref(raw, is_new) == expected


def test_new_table_prefix_makes_table_pending_with_both_tokens():
    table = LayoutTableIn(id="new-table-1", areaid=1111111111, nombre="Mesa 1", capacidad=8, tipo="general")

    assert table.is_new_table
    assert table.tipo is AreaType.GENERAL
    assert table.area_ref() == PendingRef("1111111111")
    assert table.pending_tokens() == ["1111111111", "new-table-1"]


def test_saved_table_refers_to_existing_area():
    table = LayoutTableIn(id="area-4", areaid=4)

    assert not table.is_new_table
    assert table.area_ref() == ExistingRef(4)
    assert table.pending_tokens() == []


def test_layout_document_keeps_visual_metadata():
    document = LayoutDocumentIn.model_validate(
        {"tables": [{"id": "area-4", "areaid": 4, "x": 10, "y": 20, "shape": "round"}], "zoom": 1.5}
    )

    dumped = document.to_document()

    assert dumped["zoom"] == 1.5
    assert dumped["tables"][0]["shape"] == "round"
    assert "nombre" not in dumped["tables"][0]


def test_seat_accepts_lowercase_id_keys_and_state():
    seat = SeatIn.model_validate({"asientoid": 9, "areaid": 4, "codigo": "B2", "estado": "ocupado"})

    assert seat.seat_ref() == ExistingRef(9)
    assert seat.area_ref() == ExistingRef(4)
    assert seat.state is SeatState.OCCUPIED


def test_seat_rejects_unknown_state():
    with pytest.raises(ValidationError):
        SeatIn.model_validate({"codigo": "A1", "estado": "ROTO"})


def test_save_request_rejects_explicit_null_layout():
    with pytest.raises(ValidationError):
        LayoutSaveRequest.model_validate({"configuracionCroquis": None, "asientos": []})


def test_save_request_allows_missing_layout():
    request = LayoutSaveRequest.model_validate({"asientos": []})

    assert request.layout is None
    assert request.version is None


def test_save_request_requires_seat_list():
    with pytest.raises(ValidationError):
        LayoutSaveRequest.model_validate({"configuracionCroquis": {"tables": []}})


def test_parse_area_ref_defaults_to_configured_ceiling(monkeypatch):
    monkeypatch.setattr(get_settings(), "temp_id_ceiling", 100)

    assert parse_area_ref(500) == PendingRef("500")
    assert parse_seat_ref(500) == PendingRef("500")
    assert parse_area_ref(99) == ExistingRef(99)


def test_table_with_stray_string_area_is_not_pending():
    table = LayoutTableIn(id="area-7", areaid="mesa", nombre="X")

    assert table.area_ref() is None
    assert table.pending_tokens() == []
