"""
Tests unitarios para EntitySyncService (hoja <-> base de datos).
"""
from datetime import timedelta

import pytest

from backoffice.infrastructure.database.models import (
    BorrowerModel,
    HomeVisitModel,
    RestructuringModel,
)
from backoffice.infrastructure.external.sheets_sync.registry import (
    BORROWERS,
    HOME_VISITS,
    RESTRUCTURINGS,
)
from backoffice.infrastructure.external.sheets_sync.sync_service import (
    EMPTY_MARKER,
    EntitySyncService,
)
from backoffice.infrastructure.external.sheets_sync.types import utc_now
from backoffice.infrastructure.repositories.sync_record_repository import SyncRecordRepository
from backoffice.shared.exceptions.domain import RecordNotFoundException, ValidationException

from conftest import FakeSheetsGateway


# =========================================================================
# Helpers
# =========================================================================

def make_service(db_session, config, gateway, **kwargs) -> EntitySyncService:
    return EntitySyncService(db_session, config, gateway, **kwargs)


async def seed(db_session, model, **values):
    """Crea un registro local pendiente de sincronizar."""
    values.setdefault("synced", False)
    record = await SyncRecordRepository(db_session, model).create(values)
    await db_session.commit()
    return record


async def load(session_factory, model, sheet_id):
    """Lee el registro con una sesion nueva (sin cache de identidad)."""
    async with session_factory() as session:
        return await SyncRecordRepository(session, model).get_by_sheet_id(sheet_id)


async def count(session_factory, model) -> int:
    async with session_factory() as session:
        return await SyncRecordRepository(session, model).count()


# =========================================================================
# Importacion
# =========================================================================

class TestImportFromSheets:
    """Tests para import_from_sheets."""

    @pytest.mark.asyncio
    async def test_skips_empty_and_duplicates(self, db_session, session_factory):
        gateway = FakeSheetsGateway({
            "Borrowers": [
                {},
                {"ID": "B-1", "Name": "Sunrise Academy"},
                {"ID": "B-1", "Name": "Sunrise Academy (duplicada)"},
            ]
        })
        service = make_service(db_session, BORROWERS, gateway)

        result = await service.import_from_sheets()

        assert result.total_rows == 3
        assert result.imported == 1
        assert result.skipped == 2
        assert result.errors == 0
        assert [d.reason for d in result.skipped_details] == ["empty record", "already exists"]

        record = await load(session_factory, BorrowerModel, "B-1")
        assert record.name == "Sunrise Academy"
        assert record.synced is True

    @pytest.mark.asyncio
    async def test_skips_rows_without_id(self, db_session, session_factory):
        gateway = FakeSheetsGateway({"Borrowers": [{"Name": "Sin ID"}]})
        service = make_service(db_session, BORROWERS, gateway)

        result = await service.import_from_sheets()

        assert result.imported == 0
        assert result.skipped == 1
        assert result.skipped_details[0].reason == "missing external id"
        assert await count(session_factory, BorrowerModel) == 0

    @pytest.mark.asyncio
    async def test_reimport_is_idempotent(self, db_session, session_factory):
        gateway = FakeSheetsGateway({
            "Borrowers": [{"ID": "B-1", "Name": "A"}, {"ID": "B-2", "Name": "B"}]
        })
        service = make_service(db_session, BORROWERS, gateway)

        first = await service.import_from_sheets()
        second = await service.import_from_sheets()

        assert first.imported == 2
        assert second.imported == 0
        assert second.skipped == 2
        assert await count(session_factory, BorrowerModel) == 2

    @pytest.mark.asyncio
    async def test_applies_coercions(self, db_session, session_factory):
        gateway = FakeSheetsGateway({
            "Home Visits": [{
                "ID": "HV-1",
                "Credit Application ID": "CA-7",
                "Address Details ": "  Plot 12, Kitengela ",
                "How many years have they stayed there?": "6",
                "Is the spouse involved in running school?": "yes",
                "Does the spouse have other income?": "No",
                "If yes, how much per month? ": "KES 15,000",
                "Unmapped Column": "ignorada",
            }]
        })
        service = make_service(db_session, HOME_VISITS, gateway)

        result = await service.import_from_sheets()

        assert result.imported == 1
        record = await load(session_factory, HomeVisitModel, "HV-1")
        assert record.credit_application_id == "CA-7"
        assert record.address_details == "Plot 12, Kitengela"
        assert record.how_many_years_stayed == 6
        assert record.is_spouse_involved_in_school == "Y"
        assert record.does_spouse_have_other_income == "N"
        assert record.if_yes_how_much_per_month == 15000.0

    @pytest.mark.asyncio
    async def test_row_error_does_not_abort_pass(self, db_session, session_factory):
        gateway = FakeSheetsGateway({
            "Borrowers": [
                {"ID": "B-1", "Name": "A"},
                {"ID": "B-2", "Name": "B"},
                {"ID": "B-3", "Name": "C"},
            ]
        })
        service = make_service(db_session, BORROWERS, gateway)
        original_create = service._repo.create

        async def flaky_create(values):
            if values["sheet_id"] == "B-2":
                raise RuntimeError("violacion de constraint")
            return await original_create(values)

        service._repo.create = flaky_create

        result = await service.import_from_sheets()

        assert result.imported == 2
        assert result.errors == 1
        assert result.error_details[0].sheet_id == "B-2"
        assert "constraint" in result.error_details[0].reason
        assert await load(session_factory, BorrowerModel, "B-2") is None
        assert await load(session_factory, BorrowerModel, "B-3") is not None

    @pytest.mark.asyncio
    async def test_gateway_failure_propagates(self, db_session):
        gateway = FakeSheetsGateway()
        gateway.fail_reads = True
        service = make_service(db_session, BORROWERS, gateway)

        with pytest.raises(Exception) as exc_info:
            await service.import_from_sheets()

        assert exc_info.value.status_code == 502


class TestRestructuringsUpsert:
    """Restructurings actualiza registros existentes y acepta 'Sheet ID'."""

    @pytest.mark.asyncio
    async def test_updates_existing_record(self, db_session, session_factory):
        gateway = FakeSheetsGateway({
            "Restructurings": [{"ID": "RS-1", "Loan ID": "L-1", "New Principal Amount": "100,000"}]
        })
        service = make_service(db_session, RESTRUCTURINGS, gateway)

        first = await service.import_from_sheets()
        gateway.sheets["Restructurings"][0]["New Principal Amount"] = "120,000"
        second = await service.import_from_sheets()

        assert first.imported == 1
        assert second.imported == 0
        assert second.updated == 1
        record = await load(session_factory, RestructuringModel, "RS-1")
        assert record.new_principal_amount == 120000.0
        assert await count(session_factory, RestructuringModel) == 1

    @pytest.mark.asyncio
    async def test_sheet_id_column_fallback(self, db_session, session_factory):
        gateway = FakeSheetsGateway({
            "Restructurings": [{"Sheet ID": "RS-9", "Loan ID": "L-2", "Reason": "Sequia"}]
        })
        service = make_service(db_session, RESTRUCTURINGS, gateway)

        result = await service.import_from_sheets()

        assert result.imported == 1
        record = await load(session_factory, RestructuringModel, "RS-9")
        assert record.reason == "Sequia"

    @pytest.mark.asyncio
    async def test_filter_by_loan_id(self, db_session, session_factory):
        gateway = FakeSheetsGateway({
            "Restructurings": [
                {"ID": "RS-1", "Loan ID": "L-1"},
                {"ID": "RS-2", "Loan ID": "L-2"},
            ]
        })
        service = make_service(db_session, RESTRUCTURINGS, gateway)

        result = await service.import_from_sheets(filter_value="L-2")

        assert result.imported == 1
        assert result.skipped_details[0].reason == "filtered"
        assert await load(session_factory, RestructuringModel, "RS-1") is None
        assert await load(session_factory, RestructuringModel, "RS-2") is not None


# =========================================================================
# Sincronizacion hacia la hoja
# =========================================================================

class TestSyncToSheets:
    """Tests para sync_to_sheets."""

    @pytest.mark.asyncio
    async def test_appends_new_records(self, db_session, session_factory, fake_gateway):
        await seed(db_session, BorrowerModel, sheet_id="B-10", name="Hope School", moe_certified="Y")
        service = make_service(db_session, BORROWERS, fake_gateway)

        result = await service.sync_to_sheets()

        assert result.success_count == 1
        assert result.created_count == 1
        assert fake_gateway.sheets["Borrowers"] == [
            {"ID": "B-10", "Name": "Hope School", "Certified by the MOE?": "Yes"}
        ]
        record = await load(session_factory, BorrowerModel, "B-10")
        assert record.synced is True
        assert record.sync_attempted_at is None

    @pytest.mark.asyncio
    async def test_failure_does_not_stop_other_records(self, db_session, session_factory, fake_gateway):
        await seed(db_session, BorrowerModel, sheet_id="B-1", name="Ok")
        await seed(db_session, BorrowerModel, sheet_id="B-2", name="Falla")
        fake_gateway.fail_ids.add("B-2")
        service = make_service(db_session, BORROWERS, fake_gateway)

        result = await service.sync_to_sheets()

        assert result.total_records == 2
        assert result.success_count == 1
        assert result.error_count == 1
        assert result.error_details[0].sheet_id == "B-2"
        assert (await load(session_factory, BorrowerModel, "B-1")).synced is True
        failed = await load(session_factory, BorrowerModel, "B-2")
        assert failed.synced is False
        # La marca en vuelo se conserva tras el fallo
        assert failed.sync_attempted_at is not None

    @pytest.mark.asyncio
    async def test_updates_existing_row(self, db_session, session_factory):
        gateway = FakeSheetsGateway({"Borrowers": [{"ID": "B-5", "Name": "Nombre viejo", "County": "Kiambu"}]})
        await seed(db_session, BorrowerModel, sheet_id="B-5", name="Nombre nuevo")
        service = make_service(db_session, BORROWERS, gateway)

        result = await service.sync_to_sheets()

        assert result.updated_count == 1
        assert result.created_count == 0
        assert gateway.sheets["Borrowers"] == [{"ID": "B-5", "Name": "Nombre nuevo", "County": "Kiambu"}]
        assert gateway.calls_named("append_row") == []

    @pytest.mark.asyncio
    async def test_generates_and_persists_sheet_id(self, db_session, session_factory, fake_gateway):
        await seed(db_session, HomeVisitModel, county="Machakos")
        service = make_service(
            db_session, HOME_VISITS, fake_gateway, id_factory=lambda prefix: f"{prefix}-1718000000000-a3f9"
        )

        result = await service.sync_to_sheets()

        assert result.created_count == 1
        assert fake_gateway.sheets["Home Visits"][0]["ID"] == "HV-1718000000000-a3f9"
        record = await load(session_factory, HomeVisitModel, "HV-1718000000000-a3f9")
        assert record is not None
        assert record.synced is True

    @pytest.mark.asyncio
    async def test_skips_record_in_flight(self, db_session, session_factory, fake_gateway):
        now = utc_now()
        await seed(db_session, BorrowerModel, sheet_id="B-1", sync_attempted_at=now - timedelta(seconds=30))
        await seed(db_session, BorrowerModel, sheet_id="B-2", sync_attempted_at=now - timedelta(hours=1))
        service = make_service(db_session, BORROWERS, fake_gateway, in_flight_window_s=300, clock=lambda: now)

        result = await service.sync_to_sheets()

        assert result.skipped_count == 1
        assert result.skipped_details[0].sheet_id == "B-1"
        assert result.skipped_details[0].reason == "sync already in flight"
        assert result.success_count == 1
        assert [c[2] for c in fake_gateway.calls_named("append_row")] == ["B-2"]
        assert (await load(session_factory, BorrowerModel, "B-1")).synced is False

    @pytest.mark.asyncio
    async def test_lookup_failure_waits_out_window_then_retries(self, db_session, session_factory, fake_gateway):
        clock = {"now": utc_now()}
        await seed(db_session, BorrowerModel, sheet_id="B-7", name="Baraka Academy")
        fake_gateway.fail_finds.add("B-7")
        service = make_service(
            db_session, BORROWERS, fake_gateway, in_flight_window_s=300, clock=lambda: clock["now"]
        )

        first = await service.sync_to_sheets()

        assert first.error_count == 1
        assert first.error_details[0].sheet_id == "B-7"
        assert fake_gateway.calls_named("append_row") == []
        stuck = await load(session_factory, BorrowerModel, "B-7")
        assert stuck.synced is False
        assert stuck.sync_attempted_at is not None

        clock["now"] += timedelta(seconds=60)
        second = await service.sync_to_sheets()

        assert second.skipped_count == 1
        assert second.skipped_details[0].reason == "sync already in flight"
        assert len(fake_gateway.calls_named("find_row")) == 1

        fake_gateway.fail_finds.clear()
        clock["now"] += timedelta(minutes=10)
        third = await service.sync_to_sheets()

        assert third.success_count == 1
        assert third.created_count == 1
        assert fake_gateway.sheets["Borrowers"] == [{"ID": "B-7", "Name": "Baraka Academy"}]
        record = await load(session_factory, BorrowerModel, "B-7")
        assert record.synced is True
        assert record.sync_attempted_at is None

    @pytest.mark.asyncio
    async def test_generated_id_is_reused_after_failed_lookup(self, db_session, session_factory, fake_gateway):
        clock = {"now": utc_now()}
        generated = []

        def id_factory(prefix):
            generated.append(prefix)
            return f"{prefix}-1718000000000-b001"

        await seed(db_session, HomeVisitModel, county="Nakuru")
        fake_gateway.fail_finds.add("HV-1718000000000-b001")
        service = make_service(
            db_session, HOME_VISITS, fake_gateway,
            id_factory=id_factory, in_flight_window_s=300, clock=lambda: clock["now"],
        )

        first = await service.sync_to_sheets()

        assert first.error_count == 1
        pending = await load(session_factory, HomeVisitModel, "HV-1718000000000-b001")
        assert pending is not None
        assert pending.synced is False

        fake_gateway.fail_finds.clear()
        clock["now"] += timedelta(minutes=10)
        second = await service.sync_to_sheets()

        assert second.success_count == 1
        assert generated == ["HV"]
        assert [row["ID"] for row in fake_gateway.sheets["Home Visits"]] == ["HV-1718000000000-b001"]

    @pytest.mark.asyncio
    async def test_nothing_pending(self, db_session, fake_gateway):
        service = make_service(db_session, BORROWERS, fake_gateway)

        result = await service.sync_to_sheets()

        assert result.total_records == 0
        assert fake_gateway.calls == []


class TestSyncRecord:
    """Tests para sync_record."""

    @pytest.mark.asyncio
    async def test_invalid_operation(self, db_session, fake_gateway):
        service = make_service(db_session, BORROWERS, fake_gateway)

        with pytest.raises(ValidationException):
            await service.sync_record(1, "delete")

    @pytest.mark.asyncio
    async def test_record_not_found(self, db_session, fake_gateway):
        service = make_service(db_session, BORROWERS, fake_gateway)

        with pytest.raises(RecordNotFoundException) as exc_info:
            await service.sync_record(999)

        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_create_appends_even_if_row_exists(self, db_session):
        gateway = FakeSheetsGateway({"Borrowers": [{"ID": "B-1", "Name": "Original"}]})
        record = await seed(db_session, BorrowerModel, sheet_id="B-1", name="Copia")
        service = make_service(db_session, BORROWERS, gateway)

        outcome = await service.sync_record(record.id, "create")

        assert outcome == "create"
        assert len(gateway.sheets["Borrowers"]) == 2

    @pytest.mark.asyncio
    async def test_without_operation_updates_existing_row(self, db_session):
        gateway = FakeSheetsGateway({"Borrowers": [{"ID": "B-1", "Name": "Original"}]})
        record = await seed(db_session, BorrowerModel, sheet_id="B-1", name="Editado")
        service = make_service(db_session, BORROWERS, gateway)

        outcome = await service.sync_record(record.id)

        assert outcome == "update"
        assert gateway.sheets["Borrowers"] == [{"ID": "B-1", "Name": "Editado"}]


class TestFullMigration:
    """Tests para full_migration."""

    @pytest.mark.asyncio
    async def test_import_failure_still_syncs(self, db_session, session_factory, fake_gateway):
        await seed(db_session, BorrowerModel, sheet_id="B-1", name="Local")
        fake_gateway.fail_reads = True
        service = make_service(db_session, BORROWERS, fake_gateway)

        result = await service.full_migration()

        assert result.import_result is None
        assert result.import_error is not None
        assert result.sync_result.success_count == 1
        assert result.success is False
        assert (await load(session_factory, BorrowerModel, "B-1")).synced is True

    @pytest.mark.asyncio
    async def test_both_phases(self, db_session, fake_gateway):
        fake_gateway.sheets["Borrowers"] = [{"ID": "B-1", "Name": "Desde la hoja"}]
        await seed(db_session, BorrowerModel, sheet_id="B-2", name="Desde la base")
        service = make_service(db_session, BORROWERS, fake_gateway)

        result = await service.full_migration()

        assert result.success is True
        assert result.import_result.imported == 1
        assert result.sync_result.success_count == 1
        assert result.to_dict()["import"]["imported"] == 1
        assert len(fake_gateway.sheets["Borrowers"]) == 2


# =========================================================================
# Diagnostico
# =========================================================================

class TestDiagnostics:
    """Tests para status, sheet_headers y compare_record."""

    @pytest.mark.asyncio
    async def test_status_counts(self, db_session):
        gateway = FakeSheetsGateway({"Borrowers": [{"ID": "B-1"}, {}, {"ID": "B-2"}]})
        await seed(db_session, BorrowerModel, sheet_id="B-1", synced=True)
        await seed(db_session, BorrowerModel, sheet_id="B-2", synced=True)
        await seed(db_session, BorrowerModel, sheet_id="B-3")
        service = make_service(db_session, BORROWERS, gateway)

        status = await service.status()

        assert status.total_in_database == 3
        assert status.total_in_sheets == 2
        assert status.synced_in_database + status.unsynced_in_database == status.total_in_database
        assert status.unsynced_in_database == 1
        assert status.sync_status == "Out of sync"

    @pytest.mark.asyncio
    async def test_status_synced(self, db_session):
        gateway = FakeSheetsGateway({"Borrowers": [{"ID": "B-1"}]})
        await seed(db_session, BorrowerModel, sheet_id="B-1", synced=True)
        service = make_service(db_session, BORROWERS, gateway)

        status = await service.status()

        assert status.to_dict()["sync_status"] == "Synced"

    @pytest.mark.asyncio
    async def test_sheet_headers_samples(self, db_session):
        long_value = "x" * 150
        gateway = FakeSheetsGateway({
            "Borrowers": [
                {"ID": "B-1", "Name": long_value},
                {"ID": "B-2", "Extra": "sin mapeo"},
                {"ID": "B-3", "Name": "C"},
                {"ID": "B-4", "Name": "D"},
            ]
        })
        service = make_service(db_session, BORROWERS, gateway)

        info = await service.sheet_headers()

        assert info["sheet_name"] == "Borrowers"
        assert info["headers"] == ["ID", "Name", "Extra"]
        assert info["unmapped_headers"] == ["Extra"]
        assert info["total_records"] == 4
        assert info["sample_count"] == 3
        assert len(info["samples"][0]["Name"]) == 100
        assert info["samples"][0]["Extra"] == EMPTY_MARKER
        assert info["samples"][1]["Name"] == EMPTY_MARKER

    @pytest.mark.asyncio
    async def test_compare_record_requires_sheet_id(self, db_session, fake_gateway):
        service = make_service(db_session, BORROWERS, fake_gateway)

        with pytest.raises(ValidationException) as exc_info:
            await service.compare_record("  ")

        assert exc_info.value.message == "sheetId is required"
        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_compare_record_both_sides(self, db_session):
        gateway = FakeSheetsGateway({"Borrowers": [{"ID": "B-1", "Name": "En la hoja"}]})
        await seed(db_session, BorrowerModel, sheet_id="B-1", name="En la base", year_founded=2004)
        service = make_service(db_session, BORROWERS, gateway)

        comparison = await service.compare_record("B-1")

        assert comparison["exists"] == {"in_database": True, "in_sheet": True}
        assert comparison["database"]["name"] == "En la base"
        assert comparison["database_as_sheet"]["Year Founded"] == "2004"
        assert comparison["sheet"] == {"ID": "B-1", "Name": "En la hoja"}

    @pytest.mark.asyncio
    async def test_compare_record_missing_everywhere(self, db_session, fake_gateway):
        service = make_service(db_session, BORROWERS, fake_gateway)

        comparison = await service.compare_record("B-404")

        assert comparison["database"] is None
        assert comparison["sheet"] is None
        assert comparison["exists"] == {"in_database": False, "in_sheet": False}
