"""Tests for engine creation and table setup."""

from __future__ import annotations

from pathlib import Path

from sqlalchemy import inspect, text

from edgy.infrastructure.database.engine import create_db_engine, init_database


class TestCreateEngine:
    def test_sqlite_foreign_keys_enabled(self, tmp_path: Path) -> None:
        engine = create_db_engine(f"sqlite:///{tmp_path / 'fk.db'}")
        with engine.connect() as conn:
            assert conn.execute(text("PRAGMA foreign_keys")).scalar_one() == 1
        engine.dispose()

    def test_file_database_uses_wal(self, tmp_path: Path) -> None:
        engine = create_db_engine(f"sqlite:///{tmp_path / 'wal.db'}")
        with engine.connect() as conn:
            assert conn.execute(text("PRAGMA journal_mode")).scalar_one().lower() == "wal"
        engine.dispose()

    def test_memory_database_skips_wal(self) -> None:
        engine = create_db_engine("sqlite://")
        with engine.connect() as conn:
            assert conn.execute(text("PRAGMA journal_mode")).scalar_one().lower() == "memory"
            assert conn.execute(text("PRAGMA foreign_keys")).scalar_one() == 1
        engine.dispose()


class TestInitDatabase:
    def test_creates_tables_and_indexes(self, tmp_path: Path) -> None:
        engine = init_database(create_db_engine(f"sqlite:///{tmp_path / 'init.db'}"))
        insp = inspect(engine)
        assert {"edgy_graphs", "edgy_nodes", "edgy_edges"} <= set(insp.get_table_names())
        edge_indexes = {ix["name"] for ix in insp.get_indexes("edgy_edges")}
        assert {"ix_edgy_edges_from_id", "ix_edgy_edges_to_id"} <= edge_indexes
        unique = [ix for ix in insp.get_indexes("edgy_graphs") if ix["unique"]]
        assert [ix["column_names"] for ix in unique] == [["name"]]
        engine.dispose()

    def test_idempotent(self, tmp_path: Path) -> None:
        engine = create_db_engine(f"sqlite:///{tmp_path / 'twice.db'}")
        init_database(engine)
        init_database(engine)
        assert "edgy_nodes" in inspect(engine).get_table_names()
        engine.dispose()
