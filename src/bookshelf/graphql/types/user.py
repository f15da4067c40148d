"""
User GraphQL type definitions
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

import strawberry

from .book import Book

if TYPE_CHECKING:
    from ...store.base import UserRecord


@strawberry.type
class User:
    """User type for GraphQL API. The password hash is never exposed."""

    id: UUID
    username: str
    email: str
    saved_books: list[Book]

    @strawberry.field
    def book_count(self) -> int:
        """Number of books in the user's saved list."""
        return len(self.saved_books)

    @classmethod
    def from_record(cls, record: UserRecord) -> User:
        return cls(
            id=record.id,
            username=record.username,
            email=record.email,
            saved_books=[Book.from_record(book) for book in record.saved_books],
        )
