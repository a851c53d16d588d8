"""Store factory functions for creating record store instances."""

import os
from pathlib import Path
from typing import Optional

from saldo.database.sqlalchemy_db import SQLAlchemyRecordStore


def create_sqlite_store(database_path: Optional[str] = None) -> SQLAlchemyRecordStore:
    """Create a SQLite record store instance.

    Args:
        database_path: Path to SQLite database file. If None, checks SALDO_DB_PATH
            environment variable, then defaults to ~/.saldo/saldo.db

    Returns:
        SQLAlchemyRecordStore instance configured for SQLite
    """
    if database_path is None:
        database_path = os.environ.get("SALDO_DB_PATH")

    if database_path is None:
        home = Path.home()
        db_dir = home / ".saldo"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "saldo.db")

    database_url = f"sqlite:///{database_path}"
    return SQLAlchemyRecordStore(database_url)
