"""
Tests unitarios para el registro de entidades migrables.
"""
import pytest

from backoffice.infrastructure.external.sheets_sync.registry import (
    BORROWERS,
    REGISTRY,
    RESTRUCTURINGS,
    MigrationEntity,
    available_names,
)
from backoffice.infrastructure.external.sheets_sync.sync_config import (
    IMPORT_POLICY_SKIP,
    EntitySyncConfig,
    slugify,
)
from backoffice.infrastructure.external.sheets_sync.types import YES_NO, FieldMapping
from backoffice.infrastructure.database.models import BorrowerModel
from backoffice.shared.exceptions.domain import MigrationNotFoundException


EXPECTED_ORDER = [
    "Borrowers",
    "Directors",
    "CRB Consents",
    "Referrers",
    "Credit Applications",
    "Active Debts",
    "Fee Plans",
    "Payroll",
    "Enrollment Verification",
    "Mpesa Bank Statements",
    "Audited Financials",
    "Student Breakdown",
    "Other Supporting Docs",
    "Investment Committee",
    "Vendor Disbursement Details",
    "Financial Surveys",
    "Home Visits",
    "Asset Titles",
    "Contract Details",
    "Credit Application Comments",
    "Direct Payment Schedules",
    "Principal Tranches",
    "Direct Lending Processing",
    "Impact Survey",
    "Loans",
    "Write Offs",
    "Restructurings",
]


class TestRegistry:
    """Orden y contenido del registro."""

    def test_fixed_order(self):
        assert available_names() == EXPECTED_ORDER

    def test_slugs_are_unique(self):
        slugs = [config.slug for config in REGISTRY]
        assert len(slugs) == len(set(slugs))
        assert "credit-application-comments" in slugs

    def test_upserting_entities(self):
        upserting = [config.display_name for config in REGISTRY if config.upserts]
        assert upserting == [
            "Direct Payment Schedules",
            "Principal Tranches",
            "Direct Lending Processing",
            "Restructurings",
        ]

    def test_restructurings_id_fallback_and_filter(self):
        assert RESTRUCTURINGS.id_columns == ("ID", "Sheet ID")
        assert RESTRUCTURINGS.primary_id_column == "ID"
        assert RESTRUCTURINGS.filter_column == "Loan ID"

    @pytest.mark.parametrize("config", REGISTRY, ids=lambda c: c.slug)
    def test_mapped_fields_exist_on_model(self, config):
        columns = set(config.model.__table__.columns.keys())
        missing = [field for field in config.mapper.fields if field not in columns]
        assert missing == []

    def test_enum_matches_registry(self):
        assert [entity.value for entity in MigrationEntity] == [c.slug for c in REGISTRY]
        assert MigrationEntity.HOME_VISITS.config.display_name == "Home Visits"


class TestMigrationEntity:
    """Conversion de nombres libres al enum de entidades."""

    @pytest.mark.parametrize(
        "name",
        ["Home Visits", "home visits", "HOME VISITS", "home-visits", " Home Visits "],
    )
    def test_parse_is_case_insensitive(self, name):
        assert MigrationEntity.parse(name) is MigrationEntity.HOME_VISITS

    @pytest.mark.parametrize("name", ["Mpesa Bank Statements", "mpesa-bank-statement"])
    def test_parse_by_display_name_or_slug(self, name):
        entity = MigrationEntity.parse(name)

        assert entity is MigrationEntity.MPESA_BANK_STATEMENTS
        assert entity.display_name == "Mpesa Bank Statements"
        assert entity.config.sheet_name == "Mpesa Bank Statements"

    def test_parse_unknown_name(self):
        with pytest.raises(MigrationNotFoundException) as exc_info:
            MigrationEntity.parse("Payments")

        assert exc_info.value.status_code == 404
        assert exc_info.value.message == 'Migration "Payments" not found'
        assert exc_info.value.details["available_migrations"] == EXPECTED_ORDER

    def test_parse_empty_name(self):
        with pytest.raises(MigrationNotFoundException):
            MigrationEntity.parse("")

    def test_every_member_has_config(self):
        for entity in MigrationEntity:
            assert entity.config.slug == entity.value


YES_NO_COLUMNS = [
    (config, mapping)
    for config in REGISTRY
    for mapping in config.field_mappings
    if mapping.coercion is YES_NO
]


class TestYesNoColumns:
    """Las celdas si/no que no son Yes/No se guardan tal cual."""

    @pytest.mark.parametrize(
        "config,mapping",
        YES_NO_COLUMNS,
        ids=[f"{c.slug}.{m.field}" for c, m in YES_NO_COLUMNS],
    )
    def test_column_fits_free_text(self, config, mapping):
        column = config.model.__table__.columns[mapping.field]
        assert column.type.length is None or column.type.length >= 255

    def test_free_text_answer_is_kept(self):
        values = BORROWERS.mapper.to_internal(
            {"ID": "B-1", "Certified by the MOE?": "Yes, certified in 2019"}
        )

        assert values["moe_certified"] == "Yes, certified in 2019"
        column = BorrowerModel.__table__.columns["moe_certified"]
        assert column.type.length >= len(values["moe_certified"])


class TestEntitySyncConfig:
    """Validaciones del descriptor."""

    def test_slugify(self):
        assert slugify("CRB Consents") == "crb-consents"

    def test_requires_sheet_id_mapping(self):
        with pytest.raises(ValueError):
            EntitySyncConfig(
                display_name="Broken",
                sheet_name="Broken",
                model=BorrowerModel,
                field_mappings=(FieldMapping("Name", "name"),),
            )

    def test_rejects_unknown_policy(self):
        with pytest.raises(ValueError):
            EntitySyncConfig(
                display_name="Broken",
                sheet_name="Broken",
                model=BorrowerModel,
                field_mappings=(FieldMapping("ID", "sheet_id"),),
                import_policy="merge",
            )

    def test_defaults(self):
        config = EntitySyncConfig(
            display_name="Test Entity",
            sheet_name="Test",
            model=BorrowerModel,
            field_mappings=(FieldMapping("ID", "sheet_id"),),
        )
        assert config.slug == "test-entity"
        assert config.import_policy == IMPORT_POLICY_SKIP
        assert config.id_columns == ("ID",)
