"""In-process store for development and tests."""

import asyncio
import copy
from uuid import UUID, uuid4

from ...auth.passwords import hash_password
from ...logging import get_logger
from ..base import (
    BookRecord,
    DuplicateRecordError,
    Store,
    UserRecord,
    validate_book_id,
    validate_new_user,
)

logger = get_logger(__name__)


class MemoryStore(Store):
    """Dictionary-backed store. State lives only as long as the process."""

    def __init__(self, password_hash_rounds: int = 10):
        self.password_hash_rounds = password_hash_rounds
        self._users: dict[UUID, UserRecord] = {}
        # user id -> ordered book ids
        self._saved: dict[UUID, list[str]] = {}
        self._books: dict[str, BookRecord] = {}
        self._lock = asyncio.Lock()

    def _snapshot(self, user: UserRecord) -> UserRecord:
        snapshot = copy.deepcopy(user)
        snapshot.saved_books = [
            copy.deepcopy(self._books[book_id]) for book_id in self._saved[user.id]
        ]
        return snapshot

    async def list_users(self) -> list[UserRecord]:
        async with self._lock:
            return [self._snapshot(user) for user in self._users.values()]

    async def get_user(self, user_id: UUID, username: str) -> UserRecord | None:
        async with self._lock:
            user = self._users.get(user_id)
            if user is None or user.username != username:
                return None
            return self._snapshot(user)

    async def find_user_by_email(self, email: str) -> UserRecord | None:
        async with self._lock:
            for user in self._users.values():
                if user.email == email:
                    return self._snapshot(user)
            return None

    async def create_user(self, username: str, email: str, password: str) -> UserRecord:
        username = validate_new_user(username, email, password)
        password_hash = hash_password(password, rounds=self.password_hash_rounds)

        async with self._lock:
            for existing in self._users.values():
                if existing.username == username:
                    raise DuplicateRecordError(f"Username '{username}' is already taken")
                if existing.email == email:
                    raise DuplicateRecordError(f"Email '{email}' is already registered")

            user = UserRecord(
                id=uuid4(),
                username=username,
                email=email,
                password_hash=password_hash,
            )
            self._users[user.id] = user
            self._saved[user.id] = []
            logger.debug("User stored", user_id=str(user.id))
            return self._snapshot(user)

    async def list_books(self, user_id: UUID | None = None) -> list[BookRecord]:
        async with self._lock:
            if user_id is None:
                return [copy.deepcopy(book) for book in self._books.values()]
            return [copy.deepcopy(self._books[book_id]) for book_id in self._saved.get(user_id, [])]

    async def get_book(self, book_id: str) -> BookRecord | None:
        async with self._lock:
            book = self._books.get(book_id)
            return copy.deepcopy(book) if book else None

    async def ensure_book(self, book_id: str, **fields) -> BookRecord:
        validate_book_id(book_id)
        async with self._lock:
            book = self._books.get(book_id)
            if book is None:
                book = BookRecord(id=uuid4(), book_id=book_id, **fields)
                self._books[book_id] = book
            return copy.deepcopy(book)

    async def add_saved_book(self, user_id: UUID, book_id: str) -> UserRecord | None:
        validate_book_id(book_id)
        async with self._lock:
            user = self._users.get(user_id)
            if user is None:
                return None
            if book_id not in self._books:
                self._books[book_id] = BookRecord(id=uuid4(), book_id=book_id)
            saved = self._saved[user_id]
            if book_id not in saved:
                saved.append(book_id)
            return self._snapshot(user)

    async def remove_saved_book(self, user_id: UUID, book_id: str) -> UserRecord | None:
        async with self._lock:
            user = self._users.get(user_id)
            if user is None:
                return None
            saved = self._saved[user_id]
            if book_id in saved:
                saved.remove(book_id)
            return self._snapshot(user)
