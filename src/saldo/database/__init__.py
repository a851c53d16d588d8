"""Record store layer for saldo application."""

from saldo.database.base import RecordStore
from saldo.database.factories import create_sqlite_store

__all__ = ["RecordStore", "create_sqlite_store"]
