"""
Integration tests for the Alembic migrations and the manage_db CLI.
"""

from alembic import command
from sqlalchemy import create_engine, inspect

import manage_db


def alembic_config(database_url):
    config = manage_db.get_alembic_config()
    config.set_main_option("sqlalchemy.url", database_url)
    return config


class TestMigrations:
    """Test cases for the schema migration."""

    def test_upgrade_and_downgrade(self, tmp_path):
        database_url = f"sqlite:///{tmp_path / 'migrations.db'}"
        config = alembic_config(database_url)
        engine = create_engine(database_url)

        try:
            command.upgrade(config, "head")
            inspector = inspect(engine)
            tables = set(inspector.get_table_names())
            assert {"time_entries", "audit_logs"} <= tables

            columns = {c["name"] for c in inspector.get_columns("time_entries")}
            assert {"date", "year", "month", "week", "hours"} <= columns
            index_columns = [i["column_names"] for i in inspector.get_indexes("audit_logs")]
            assert ["time_entry_id", "timestamp"] in index_columns

            command.downgrade(config, "base")
            assert "time_entries" not in inspect(engine).get_table_names()
        finally:
            engine.dispose()


class TestManageDb:
    """Test cases for the manage_db command table."""

    def test_usage_without_command(self, capsys):
        assert manage_db.main([]) == 1
        assert "create-tables" in capsys.readouterr().out

    def test_unknown_command(self, capsys):
        assert manage_db.main(["seed"]) == 1
        assert "Unknown command: seed" in capsys.readouterr().out

    def test_dispatch(self, monkeypatch):
        calls = []
        monkeypatch.setitem(manage_db.COMMANDS, "create", (lambda message="": calls.append(message), ""))

        assert manage_db.main(["create", "add", "index"]) == 0
        assert calls == ["add index"]
