"""Core store interface, records and errors."""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID

from ..auth.passwords import verify_password
from ..errors import BookshelfError

EMAIL_PATTERN = re.compile(r".+@.+\..+")


class StoreError(BookshelfError):
    """Base exception for store operations."""

    pass


class DuplicateRecordError(StoreError):
    """A unique constraint (username, email, bookId) was violated."""

    pass


class RecordValidationError(StoreError):
    """A record failed validation before being persisted."""

    pass


@dataclass
class BookRecord:
    """A saved-book record, keyed by its application-level ``book_id``."""

    id: UUID
    book_id: str
    title: str | None = None
    authors: list[str] = field(default_factory=list)
    description: str | None = None
    image: str | None = None
    link: str | None = None


@dataclass
class UserRecord:
    """A user account with its saved books expanded."""

    id: UUID
    username: str
    email: str
    password_hash: str
    saved_books: list[BookRecord] = field(default_factory=list)
    created_at: datetime | None = None

    def __post_init__(self):
        if self.created_at is None:
            self.created_at = datetime.now(UTC)

    @property
    def saved_book_ids(self) -> list[str]:
        return [book.book_id for book in self.saved_books]

    def is_correct_password(self, password: str) -> bool:
        """Check a plaintext password against the stored hash."""
        return verify_password(password, self.password_hash)


def validate_new_user(username: str, email: str, password: str) -> str:
    """Validate user fields and return the normalized username.

    Raises:
        RecordValidationError: If any field is invalid
    """
    username = (username or "").strip()
    if not username:
        raise RecordValidationError("Path `username` is required.")
    if not email:
        raise RecordValidationError("Path `email` is required.")
    if not EMAIL_PATTERN.fullmatch(email):
        raise RecordValidationError("Must use a valid email address")
    if not password:
        raise RecordValidationError("Path `password` is required.")
    return username


def validate_book_id(book_id: str) -> str:
    """Validate a book id before it is added to a saved-book set."""
    if not isinstance(book_id, str) or not book_id.strip():
        raise RecordValidationError("Path `bookId` is required.")
    return book_id


class Store(ABC):
    """Abstract base class for user and book persistence.

    Lookups return ``None`` (or an empty list) when nothing matches. Every
    failure is raised as a :class:`StoreError`.
    """

    @abstractmethod
    async def list_users(self) -> list[UserRecord]:
        """Return every user."""
        pass

    @abstractmethod
    async def get_user(self, user_id: UUID, username: str) -> UserRecord | None:
        """Return the user matching both id and username."""
        pass

    @abstractmethod
    async def find_user_by_email(self, email: str) -> UserRecord | None:
        """Return the user registered with this email address."""
        pass

    @abstractmethod
    async def create_user(self, username: str, email: str, password: str) -> UserRecord:
        """Validate, hash the password and persist a new user.

        Raises:
            RecordValidationError: On invalid fields
            DuplicateRecordError: If username or email is already taken
        """
        pass

    @abstractmethod
    async def list_books(self, user_id: UUID | None = None) -> list[BookRecord]:
        """Return all books, or only those saved by ``user_id``."""
        pass

    @abstractmethod
    async def get_book(self, book_id: str) -> BookRecord | None:
        """Return the book with this application-level id."""
        pass

    @abstractmethod
    async def ensure_book(self, book_id: str, **fields) -> BookRecord:
        """Return the book with this id, creating it with ``fields`` if missing."""
        pass

    @abstractmethod
    async def add_saved_book(self, user_id: UUID, book_id: str) -> UserRecord | None:
        """Set-add a book to the user's saved books and return the updated user.

        Returns ``None`` if no user has ``user_id``.
        """
        pass

    @abstractmethod
    async def remove_saved_book(self, user_id: UUID, book_id: str) -> UserRecord | None:
        """Set-remove a book from the user's saved books and return the updated user.

        Returns ``None`` if no user has ``user_id``.
        """
        pass

    async def close(self) -> None:
        """Release any resources held by the store."""
        return None
