"""
FastAPI dependency functions

This module provides the shared repository dependency used by every router,
plus the factory that builds the repository from settings.
"""
import logging

from .config import Settings
from .database import Database
from .storage.base import Storage
from .storage.memory import MemStorage
from .storage.sql import SQLStorage

logger = logging.getLogger(__name__)

# Module-level repository instance - initialized by app.py
_storage: Storage = None


def build_storage(settings: Settings) -> Storage:
    """
    Create the configured storage backend.

    For the SQL backend the tables are created if missing and, for SQLite
    files, the data directory is created too.
    """
    if settings.storage_backend == "memory":
        logger.info("Using in-memory storage")
        return MemStorage(currency_symbol=settings.currency_symbol)

    url = settings.database_url
    if url.startswith("sqlite:///") and url != "sqlite:///:memory:":
        settings.data_dir.mkdir(parents=True, exist_ok=True)
    database = Database(url, echo=settings.db_echo)
    database.init_db()
    return SQLStorage(database, currency_symbol=settings.currency_symbol)


def init_storage(storage: Storage):
    """
    Initialize the module-level repository instance.

    This must be called from app.py before any routes are accessed.

    Args:
        storage: The Storage instance used by all routes
    """
    global _storage
    _storage = storage


def get_storage() -> Storage:
    """
    FastAPI dependency that provides the repository.

    Example:
        @router.get("/items")
        def list_items(storage: Storage = Depends(get_storage)):
            return storage.get_all_positions()
    """
    if _storage is None:
        raise RuntimeError("Storage has not been initialized")
    return _storage
