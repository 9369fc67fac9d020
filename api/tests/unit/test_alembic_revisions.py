"""
Tests de coherencia entre las revisiones de Alembic y los modelos.
"""
import importlib.util
from pathlib import Path

import pytest

from backoffice.infrastructure.external.sheets_sync.registry import REGISTRY
from backoffice.infrastructure.external.sheets_sync.types import YES_NO


VERSIONS = Path(__file__).resolve().parents[2] / "alembic" / "versions"


def _load(filename: str):
    spec = importlib.util.spec_from_file_location(filename[:-3], VERSIONS / filename)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


initial = _load("001_create_sheet_sync_tables.py")
loan_pipeline = _load("002_add_loan_pipeline_tables.py")

MODELS = {config.model.__tablename__: config.model for config in REGISTRY}
SYNC_COLUMNS = {column.name for column in loan_pipeline._sync_columns()}


def test_revisions_are_chained():
    assert loan_pipeline.down_revision == initial.revision


def test_every_model_has_a_table():
    assert set(initial.TABLES) | set(loan_pipeline.TABLES) == set(MODELS)
    assert not set(initial.TABLES) & set(loan_pipeline.TABLES)


@pytest.mark.parametrize("table", sorted(loan_pipeline.TABLES))
def test_new_table_matches_model(table):
    columns = {column.name for column in loan_pipeline.TABLES[table]()}
    model_columns = set(MODELS[table].__table__.columns.keys()) - SYNC_COLUMNS

    assert columns == model_columns
    assert loan_pipeline.INDEXES[table]


def test_yes_no_columns_of_initial_tables_are_widened():
    expected = {
        (config.model.__tablename__, mapping.field)
        for config in REGISTRY
        for mapping in config.field_mappings
        if mapping.coercion is YES_NO and config.model.__tablename__ in initial.TABLES
    }
    widened = {
        (table, column)
        for table, columns in loan_pipeline.YES_NO_COLUMNS.items()
        for column in columns
    }

    assert widened == expected
