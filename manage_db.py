#!/usr/bin/env python3
"""
Database management script for the time tracking backend.
Handles migrations and table creation.
"""

import sys
from pathlib import Path

# Add the project root to the path
sys.path.insert(0, str(Path(__file__).parent))

from alembic.config import Config
from alembic import command
from app.infrastructure.db.database import engine
from app.infrastructure.db.models import create_all_tables

ALEMBIC_INI = str(Path(__file__).parent / "app/infrastructure/db/migrations/alembic.ini")


def get_alembic_config() -> Config:
    return Config(ALEMBIC_INI)


def create_migration(message: str = "Auto-generated migration"):
    """Create a new migration."""
    print(f"Creating migration: {message}")
    command.revision(get_alembic_config(), message=message, autogenerate=True)


def run_migrations():
    """Run pending migrations."""
    print("Running migrations...")
    command.upgrade(get_alembic_config(), "head")


def rollback_migration():
    """Rollback last migration."""
    print("Rolling back migration...")
    command.downgrade(get_alembic_config(), "-1")


def reset_database():
    """Reset database - WARNING: This will drop all data!"""
    response = input("This will drop ALL data. Type 'yes' to continue: ")
    if response.lower() == 'yes':
        alembic_cfg = get_alembic_config()
        print("Resetting database...")
        command.downgrade(alembic_cfg, "base")
        command.upgrade(alembic_cfg, "head")
    else:
        print("Database reset cancelled.")


def show_current_revision():
    """Show current database revision."""
    command.current(get_alembic_config())


def show_history():
    """Show migration history."""
    command.history(get_alembic_config())


def create_tables():
    """Create tables straight from the models, without migrations."""
    print("Creating tables...")
    create_all_tables(engine)


COMMANDS = {
    "create": (create_migration, "create [msg]   - Create new migration"),
    "migrate": (run_migrations, "migrate        - Run pending migrations"),
    "rollback": (rollback_migration, "rollback       - Rollback last migration"),
    "reset": (reset_database, "reset          - Reset database (WARNING: drops all data)"),
    "current": (show_current_revision, "current        - Show current revision"),
    "history": (show_history, "history        - Show migration history"),
    "create-tables": (create_tables, "create-tables  - Create tables without migrations"),
}


def main(argv=None) -> int:
    """Main CLI function."""
    args = sys.argv[1:] if argv is None else argv
    if not args:
        print("Usage: python manage_db.py [command]")
        print("Commands:")
        for _, usage in COMMANDS.values():
            print(f"  {usage}")
        return 1

    command_name, rest = args[0], args[1:]
    if command_name not in COMMANDS:
        print(f"Unknown command: {command_name}")
        return 1

    handler, _ = COMMANDS[command_name]
    if command_name == "create" and rest:
        handler(" ".join(rest))
    else:
        handler()
    return 0


if __name__ == "__main__":
    sys.exit(main())
