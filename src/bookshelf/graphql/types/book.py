"""
Book GraphQL type definitions
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

import strawberry

if TYPE_CHECKING:
    from ...store.base import BookRecord


@strawberry.type
class Book:
    """A saved-book record."""

    id: UUID
    book_id: str
    title: str | None
    authors: list[str]
    description: str | None
    image: str | None
    link: str | None

    @classmethod
    def from_record(cls, record: BookRecord) -> Book:
        return cls(
            id=record.id,
            book_id=record.book_id,
            title=record.title,
            authors=list(record.authors),
            description=record.description,
            image=record.image,
            link=record.link,
        )
