"""Persistence layer for users and their saved books."""

from .base import (
    BookRecord,
    DuplicateRecordError,
    RecordValidationError,
    Store,
    StoreError,
    UserRecord,
)
from .factory import create_store

__all__ = [
    "BookRecord",
    "DuplicateRecordError",
    "RecordValidationError",
    "Store",
    "StoreError",
    "UserRecord",
    "create_store",
]
