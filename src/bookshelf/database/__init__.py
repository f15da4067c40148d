"""
Database module for the Bookshelf API
"""

from .connection import (
    check_database_connection,
    create_engine,
    create_schema,
    create_session_factory,
    get_database_url,
    session_scope,
)

__all__ = [
    "check_database_connection",
    "create_engine",
    "create_schema",
    "create_session_factory",
    "get_database_url",
    "session_scope",
]
