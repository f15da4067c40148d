"""PostgreSQL store backed by SQLAlchemy's async ORM."""

from collections.abc import Iterator
from contextlib import contextmanager
from uuid import UUID, uuid4

import asyncpg
from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession
from sqlalchemy.orm import joinedload, selectinload

from ...auth.passwords import hash_password
from ...database.connection import create_session_factory, session_scope
from ...dbmodels import Books, UserSavedBooks, Users
from ...logging import get_logger
from ..base import (
    BookRecord,
    DuplicateRecordError,
    Store,
    StoreError,
    UserRecord,
    validate_book_id,
    validate_new_user,
)

logger = get_logger(__name__)


def _book_record(book: Books) -> BookRecord:
    return BookRecord(
        id=book.id,
        book_id=book.book_id,
        title=book.title,
        authors=list(book.authors or []),
        description=book.description,
        image=book.image,
        link=book.link,
    )


def _user_record(user: Users, saved_books: list[BookRecord] | None = None) -> UserRecord:
    if saved_books is None:
        saved_books = [_book_record(link.book) for link in user.saved_book_links]
    return UserRecord(
        id=user.id,
        username=user.username,
        email=user.email,
        password_hash=user.password,
        saved_books=saved_books,
        created_at=user.created_at,
    )


@contextmanager
def _translate_errors() -> Iterator[None]:
    """Re-raise driver failures as store errors, keeping the original as the cause."""
    try:
        yield
    except IntegrityError as e:
        detail = str(e.orig)
        if "users_username_key" in detail:
            raise DuplicateRecordError("Username is already taken") from e
        if "users_email_key" in detail:
            raise DuplicateRecordError("Email is already registered") from e
        raise StoreError(f"Integrity error: {detail}") from e
    except SQLAlchemyError as e:
        raise StoreError(str(e)) from e
    except (OSError, asyncpg.PostgresError, asyncpg.InterfaceError) as e:
        # asyncpg errors raised while connecting are not wrapped by SQLAlchemy
        logger.error("Database unavailable", error=str(e))
        raise StoreError(f"Database unavailable: {e}") from e


class SqlStore(Store):
    """Store implementation over PostgreSQL."""

    def __init__(self, engine: AsyncEngine, password_hash_rounds: int = 10):
        self.engine = engine
        self.password_hash_rounds = password_hash_rounds
        self._session_factory = create_session_factory(engine)

    async def _load_user(self, session: AsyncSession, *criteria) -> Users | None:
        stmt = (
            select(Users)
            .where(*criteria)
            .options(selectinload(Users.saved_book_links).joinedload(UserSavedBooks.book))
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_users(self) -> list[UserRecord]:
        with _translate_errors():
            async with session_scope(self._session_factory) as session:
                stmt = (
                    select(Users)
                    .options(
                        selectinload(Users.saved_book_links).joinedload(UserSavedBooks.book)
                    )
                    .order_by(Users.created_at)
                )
                result = await session.execute(stmt)
                return [_user_record(user) for user in result.scalars().all()]

    async def get_user(self, user_id: UUID, username: str) -> UserRecord | None:
        with _translate_errors():
            async with session_scope(self._session_factory) as session:
                user = await self._load_user(
                    session, Users.id == user_id, Users.username == username
                )
                return _user_record(user) if user else None

    async def find_user_by_email(self, email: str) -> UserRecord | None:
        with _translate_errors():
            async with session_scope(self._session_factory) as session:
                user = await self._load_user(session, Users.email == email)
                return _user_record(user) if user else None

    async def create_user(self, username: str, email: str, password: str) -> UserRecord:
        username = validate_new_user(username, email, password)
        password_hash = hash_password(password, rounds=self.password_hash_rounds)

        with _translate_errors():
            async with session_scope(self._session_factory) as session:
                user = Users(id=uuid4(), username=username, email=email, password=password_hash)
                session.add(user)
                await session.flush()
                await session.refresh(user, attribute_names=["created_at"])
                logger.debug("User stored", user_id=str(user.id))
                return _user_record(user, saved_books=[])

    async def list_books(self, user_id: UUID | None = None) -> list[BookRecord]:
        with _translate_errors():
            async with session_scope(self._session_factory) as session:
                if user_id is None:
                    stmt = select(Books).order_by(Books.created_at)
                else:
                    stmt = (
                        select(Books)
                        .join(UserSavedBooks, UserSavedBooks.book_id == Books.book_id)
                        .where(UserSavedBooks.user_id == user_id)
                        .order_by(UserSavedBooks.saved_at)
                    )
                result = await session.execute(stmt)
                return [_book_record(book) for book in result.scalars().all()]

    async def get_book(self, book_id: str) -> BookRecord | None:
        with _translate_errors():
            async with session_scope(self._session_factory) as session:
                result = await session.execute(select(Books).where(Books.book_id == book_id))
                book = result.scalar_one_or_none()
                return _book_record(book) if book else None

    async def ensure_book(self, book_id: str, **fields) -> BookRecord:
        validate_book_id(book_id)
        with _translate_errors():
            async with session_scope(self._session_factory) as session:
                await session.execute(
                    pg_insert(Books)
                    .values(id=uuid4(), book_id=book_id, **fields)
                    .on_conflict_do_nothing(index_elements=[Books.book_id])
                )
                result = await session.execute(select(Books).where(Books.book_id == book_id))
                return _book_record(result.scalar_one())

    async def add_saved_book(self, user_id: UUID, book_id: str) -> UserRecord | None:
        validate_book_id(book_id)
        with _translate_errors():
            async with session_scope(self._session_factory) as session:
                exists = await session.execute(select(Users.id).where(Users.id == user_id))
                if exists.scalar_one_or_none() is None:
                    return None

                await session.execute(
                    pg_insert(Books)
                    .values(id=uuid4(), book_id=book_id)
                    .on_conflict_do_nothing(index_elements=[Books.book_id])
                )
                await session.execute(
                    pg_insert(UserSavedBooks)
                    .values(user_id=user_id, book_id=book_id)
                    .on_conflict_do_nothing()
                )

                user = await self._load_user(session, Users.id == user_id)
                return _user_record(user) if user else None

    async def remove_saved_book(self, user_id: UUID, book_id: str) -> UserRecord | None:
        with _translate_errors():
            async with session_scope(self._session_factory) as session:
                await session.execute(
                    delete(UserSavedBooks).where(
                        UserSavedBooks.user_id == user_id, UserSavedBooks.book_id == book_id
                    )
                )
                user = await self._load_user(session, Users.id == user_id)
                return _user_record(user) if user else None

    async def close(self) -> None:
        await self.engine.dispose()
