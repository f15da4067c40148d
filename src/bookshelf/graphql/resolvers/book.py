from __future__ import annotations

from uuid import UUID

from ...logging import get_logger
from ...store.base import Store
from ..types.book import Book
from ..types.user import User

logger = get_logger(__name__)


# Query resolvers
async def resolve_books(store: Store, user_id: UUID | None = None) -> list[Book]:
    """
    Resolve books.

    With ``user_id`` only the books saved by that user are returned,
    otherwise every known book.
    """
    books = await store.list_books(user_id)
    return [Book.from_record(book) for book in books]


async def resolve_book(store: Store, book_id: str) -> Book | None:
    """Resolve a book by its application-level id."""
    book = await store.get_book(book_id)
    return Book.from_record(book) if book else None


# Mutation resolvers
async def save_book(store: Store, user_id: UUID, book_id: str) -> User | None:
    """Add a book to the user's saved list. Saving an already saved book is a no-op."""
    user = await store.add_saved_book(user_id, book_id)
    if user is None:
        logger.info("Cannot save book for unknown user", user_id=str(user_id), book_id=book_id)
        return None

    logger.info("Book saved", user_id=str(user_id), book_id=book_id)
    return User.from_record(user)


async def delete_book(store: Store, user_id: UUID, book_id: str) -> User | None:
    """Remove a book from the user's saved list. Removing an absent book is a no-op."""
    user = await store.remove_saved_book(user_id, book_id)
    if user is None:
        logger.info("Cannot remove book for unknown user", user_id=str(user_id), book_id=book_id)
        return None

    logger.info("Book removed", user_id=str(user_id), book_id=book_id)
    return User.from_record(user)
