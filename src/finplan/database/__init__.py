"""Record store layer for finplan application."""

from finplan.database.base import RecordStore
from finplan.database.factories import create_sqlite_database

__all__ = ["RecordStore", "create_sqlite_database"]
