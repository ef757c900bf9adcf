# tests/test_migrations.py
"""The Alembic history builds the same schema as the ORM models."""

from __future__ import annotations

from alembic import command
from sqlalchemy import create_engine, inspect

from pulse_feed.db.session import Base
from pulse_feed.scripts.migrate import build_config


def test_upgrade_head_creates_model_tables(tmp_path) -> None:
    url = f"sqlite:///{tmp_path / 'migrated.db'}"
    cfg = build_config()
    cfg.set_main_option("sqlalchemy.url", url)

    command.upgrade(cfg, "head")

    engine = create_engine(url)
    try:
        inspector = inspect(engine)
        tables = set(inspector.get_table_names())
        assert set(Base.metadata.tables) <= tables
        for name, table in Base.metadata.tables.items():
            migrated = {column["name"] for column in inspector.get_columns(name)}
            assert migrated == {column.name for column in table.columns}
    finally:
        engine.dispose()


def test_build_config_defaults_to_application_database(test_settings) -> None:
    cfg = build_config()
    assert cfg.get_main_option("sqlalchemy.url") == test_settings.database_url
