"""Record store factory functions."""

import os
from pathlib import Path
from typing import Optional

from finplan.database.sqlalchemy_db import DEFAULT_OWNER, SQLAlchemyRecordStore


def create_sqlite_database(
    database_path: Optional[str] = None, owner: Optional[str] = None
) -> SQLAlchemyRecordStore:
    """Create a SQLite-backed record store.

    Args:
        database_path: Path to SQLite database file. If None, checks FINPLAN_DB_PATH
            environment variable, then defaults to ~/.finplan/finplan.db
        owner: Client namespace. If None, checks FINPLAN_CLIENT environment
            variable, then defaults to "default"

    Returns:
        SQLAlchemyRecordStore instance configured for SQLite
    """
    if database_path is None:
        # Check environment variable
        database_path = os.environ.get("FINPLAN_DB_PATH")

    if database_path is None:
        # Default to ~/.finplan/finplan.db
        home = Path.home()
        db_dir = home / ".finplan"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "finplan.db")

    if owner is None:
        owner = os.environ.get("FINPLAN_CLIENT", DEFAULT_OWNER)

    database_url = f"sqlite:///{database_path}"
    return SQLAlchemyRecordStore(database_url, owner=owner)
