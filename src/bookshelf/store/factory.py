"""Factory for creating the configured store backend."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..logging import get_logger
from .base import Store
from .implementations.memory import MemoryStore

if TYPE_CHECKING:
    from ..config import Settings

logger = get_logger(__name__)


def create_store(settings: Settings, database_url: str | None = None) -> Store:
    """Create a store instance from configuration.

    Args:
        settings: Application settings
        database_url: Overrides the configured database URL (postgres backend only)

    Raises:
        ValueError: If the backend name is unknown
    """
    backend = settings.store_backend.lower()

    if backend == "memory":
        logger.info("Using in-memory store")
        return MemoryStore(password_hash_rounds=settings.password_hash_rounds)

    elif backend in ("postgres", "postgresql"):
        from ..database.connection import create_engine
        from .implementations.sql import SqlStore

        return SqlStore(
            create_engine(database_url or settings.database_url),
            password_hash_rounds=settings.password_hash_rounds,
        )

    else:
        raise ValueError(f"Unsupported store backend: {settings.store_backend}")
