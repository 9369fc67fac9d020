"""
Tests unitarios para el mapeo columna de hoja <-> atributo interno.
"""
import pytest

from backoffice.infrastructure.external.sheets_sync.field_mapper import FieldMapper
from backoffice.infrastructure.external.sheets_sync.registry import HOME_VISITS, REGISTRY
from backoffice.infrastructure.external.sheets_sync.types import (
    INTEGER,
    NUMBER,
    YES_NO,
    FieldMapping,
    generate_sheet_id,
    integer_to_internal,
    number_to_external,
    number_to_internal,
    text_to_internal,
    yes_no_to_external,
    yes_no_to_internal,
)


@pytest.fixture
def mapper() -> FieldMapper:
    return FieldMapper([
        FieldMapping("ID", "sheet_id"),
        FieldMapping("Name", "name"),
        FieldMapping("Agreement", "agreement", YES_NO),
        FieldMapping("Amount", "amount", NUMBER),
        FieldMapping("Students", "students", INTEGER),
    ])


# =========================================================================
# Coerciones
# =========================================================================

@pytest.mark.parametrize("raw,expected", [
    ("Yes", "Y"), ("y", "Y"), ("TRUE", "Y"), ("1", "Y"), (True, "Y"),
    ("No", "N"), ("n", "N"), ("false", "N"), (False, "N"),
    ("Pending", "Pending"), ("", None), (None, None),
])
def test_yes_no_to_internal(raw, expected):
    assert yes_no_to_internal(raw) == expected


def test_yes_no_to_external():
    assert yes_no_to_external("Y") == "Yes"
    assert yes_no_to_external("N") == "No"
    assert yes_no_to_external(None) == ""
    assert yes_no_to_external("Pending") == "Pending"


@pytest.mark.parametrize("raw,expected", [
    ("1,500", 1500.0),
    ("KES 2,750.50", 2750.5),
    (" 42 ", 42.0),
    (12, 12.0),
    ("-3.5", -3.5),
    ("1.50E+03", 1500.0),
    ("2.5e-4", 0.00025),
    ("KES 1.2E+05", 120000.0),
    ("n/a", None),
    ("-", None),
    ("inf", None),
    ("", None),
    (None, None),
])
def test_number_to_internal(raw, expected):
    assert number_to_internal(raw) == expected


def test_number_to_external_drops_trailing_zero():
    assert number_to_external(1500.0) == "1500"
    assert number_to_external(0.15) == "0.15"
    assert number_to_external(None) == ""
    assert number_to_external(float("nan")) == ""


def test_number_to_external_never_uses_exponent():
    assert number_to_external(0.00005) == "0.00005"
    assert number_to_external(1.5e-7) == "0.00000015"
    assert number_to_external(1e21) == "1000000000000000000000"
    assert number_to_external(float("inf")) == ""


@pytest.mark.parametrize("value", [0.00005, 1.5e-7, 1234.5678, 1e21])
def test_small_and_large_numbers_survive_the_sheet(mapper, value):
    record = {"sheet_id": "B-1", "amount": value}
    assert mapper.to_internal(mapper.to_external(record)) == record


def test_integer_to_internal_truncates():
    assert integer_to_internal("12") == 12
    assert integer_to_internal("3.0") == 3
    assert integer_to_internal("abc") is None


def test_text_blank_is_none():
    assert text_to_internal("   ") is None
    assert text_to_internal("  Nairobi ") == "Nairobi"


def test_generate_sheet_id_format():
    assert generate_sheet_id("HV", now_ms=1718000000000, suffix="a3f9") == "HV-1718000000000-a3f9"
    generated = generate_sheet_id("B")
    prefix, millis, suffix = generated.split("-")
    assert prefix == "B"
    assert millis.isdigit()
    assert len(suffix) == 4


# =========================================================================
# FieldMapper
# =========================================================================

def test_to_internal_ignores_unmapped_columns(mapper):
    internal = mapper.to_internal({"ID": "B-1", "Name": "Ana", "Unknown Column": "x"})
    assert internal == {"sheet_id": "B-1", "name": "Ana"}


def test_to_internal_only_copies_present_keys(mapper):
    internal = mapper.to_internal({"Agreement": "yes"})
    assert internal == {"agreement": "Y"}


def test_to_external_ignores_audit_columns(mapper):
    external = mapper.to_external({
        "id": 7,
        "sheet_id": "B-1",
        "synced": True,
        "sync_attempted_at": None,
        "name": "Ana",
        "amount": 1500.0,
    })
    assert external == {"ID": "B-1", "Name": "Ana", "Amount": "1500"}


def test_round_trip_preserves_mapped_values(mapper):
    record = {"sheet_id": "B-1", "name": "Ana", "agreement": "N", "amount": 0.25, "students": 40}
    assert mapper.to_internal(mapper.to_external(record)) == record


def test_round_trip_none_values(mapper):
    record = {"sheet_id": "B-1", "name": None, "agreement": None, "amount": None, "students": None}
    assert mapper.to_internal(mapper.to_external(record)) == record


def test_home_visits_keeps_trailing_space_headers():
    internal = HOME_VISITS.mapper.to_internal({
        "ID": "HV-1",
        "Address Details ": "Plot 4",
        "If yes, how much per month? ": "KES 12,000",
        "Is the director a trained educator?": "Yes",
    })
    assert internal == {
        "sheet_id": "HV-1",
        "address_details": "Plot 4",
        "if_yes_how_much_per_month": 12000.0,
        "is_director_trained_educator": "Y",
    }


@pytest.mark.parametrize("config", REGISTRY, ids=lambda c: c.slug)
def test_registry_mappings_are_bijective(config):
    columns = [m.sheet_column for m in config.field_mappings]
    fields = [m.field for m in config.field_mappings]
    assert len(columns) == len(set(columns))
    assert len(fields) == len(set(fields))
