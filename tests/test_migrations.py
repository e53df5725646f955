import importlib.util
from pathlib import Path

from alembic.migration import MigrationContext
from alembic.operations import Operations
from sqlalchemy import create_engine, inspect

from villagestay.db.base import Base
from villagestay.db import models  # noqa: F401

MIGRATION = Path(__file__).resolve().parents[1] / "alembic" / "versions" / "0001_initial.py"


def _load_migration():
    spec = importlib.util.spec_from_file_location("initial_migration", MIGRATION)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_initial_migration_matches_models(tmp_path):
    migration = _load_migration()
    engine = create_engine(f"sqlite:///{tmp_path / 'migrated.db'}")

    with engine.begin() as conn:
        ctx = MigrationContext.configure(conn)
        with Operations.context(ctx):
            migration.upgrade()

    inspector = inspect(engine)
    assert set(inspector.get_table_names()) == set(Base.metadata.tables)

    for name, table in Base.metadata.tables.items():
        migrated = {c["name"] for c in inspector.get_columns(name)}
        assert migrated == {c.name for c in table.columns}, name

    with engine.begin() as conn:
        ctx = MigrationContext.configure(conn)
        with Operations.context(ctx):
            migration.downgrade()

    assert inspect(engine).get_table_names() == []
    engine.dispose()
