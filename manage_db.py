#!/usr/bin/env python3
"""
Database management script for the BuildTrack backend.
Handles database initialization and migrations.
"""

import sys
from pathlib import Path

# Add the project root to the path
sys.path.insert(0, str(Path(__file__).parent))

from alembic.config import Config
from alembic import command
from buildtrack.infrastructure.db.database import create_tables

ALEMBIC_INI = Path(__file__).parent / "buildtrack" / "infrastructure" / "db" / "migrations" / "alembic.ini"


def get_alembic_config() -> Config:
    return Config(str(ALEMBIC_INI))


def init_database():
    """Create all tables directly from the ORM metadata and mark them current."""
    print("Creating tables...")
    create_tables()
    command.stamp(get_alembic_config(), "head")


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


def main():
    """Main CLI function."""
    if len(sys.argv) < 2:
        print("Usage: python manage_db.py [command]")
        print("Commands:")
        print("  init           - Create tables from the models and stamp head")
        print("  create [msg]   - Create new migration")
        print("  migrate        - Run pending migrations")
        print("  rollback       - Rollback last migration")
        print("  reset          - Reset database (WARNING: drops all data)")
        print("  current        - Show current revision")
        print("  history        - Show migration history")
        return

    command_name = sys.argv[1]

    if command_name == "init":
        init_database()
    elif command_name == "create":
        message = " ".join(sys.argv[2:]) if len(sys.argv) > 2 else "Auto-generated migration"
        create_migration(message)
    elif command_name == "migrate":
        run_migrations()
    elif command_name == "rollback":
        rollback_migration()
    elif command_name == "reset":
        reset_database()
    elif command_name == "current":
        show_current_revision()
    elif command_name == "history":
        show_history()
    else:
        print(f"Unknown command: {command_name}")


if __name__ == "__main__":
    main()
