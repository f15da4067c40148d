"""
Tests for how the PostgreSQL store classifies driver failures (no server needed)
"""

import asyncpg
import pytest
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError

from bookshelf.database.connection import create_engine
from bookshelf.store.base import DuplicateRecordError, StoreError
from bookshelf.store.implementations.sql import SqlStore, _translate_errors


def unique_violation(constraint: str) -> IntegrityError:
    orig = Exception(f'duplicate key value violates unique constraint "{constraint}"')
    return IntegrityError("INSERT INTO users ...", {}, orig)


class TestTranslateErrors:
    @pytest.mark.parametrize(
        "constraint,message",
        [
            ("users_username_key", "Username is already taken"),
            ("users_email_key", "Email is already registered"),
        ],
    )
    def test_unique_violation_becomes_duplicate_record(self, constraint, message):
        error = unique_violation(constraint)

        with pytest.raises(DuplicateRecordError, match=message) as exc_info:
            with _translate_errors():
                raise error

        assert exc_info.value.__cause__ is error

    def test_other_integrity_error_is_plain_store_error(self):
        error = unique_violation("user_saved_books_pkey")

        with pytest.raises(StoreError, match="Integrity error") as exc_info:
            with _translate_errors():
                raise error

        assert type(exc_info.value) is StoreError
        assert exc_info.value.__cause__ is error

    def test_sqlalchemy_error_is_plain_store_error(self):
        error = OperationalError("SELECT 1", {}, Exception("server closed the connection"))

        with pytest.raises(StoreError) as exc_info:
            with _translate_errors():
                raise error

        assert type(exc_info.value) is StoreError
        assert isinstance(exc_info.value.__cause__, SQLAlchemyError)

    @pytest.mark.parametrize(
        "error",
        [
            ConnectionRefusedError(111, "Connect call failed"),
            TimeoutError(),
            asyncpg.InterfaceError("connection is closed"),
            asyncpg.PostgresError("password authentication failed"),
        ],
    )
    def test_connection_failure_is_plain_store_error(self, error):
        with pytest.raises(StoreError, match="Database unavailable") as exc_info:
            with _translate_errors():
                raise error

        assert type(exc_info.value) is StoreError
        assert exc_info.value.__cause__ is error

    def test_programming_errors_pass_through(self):
        with pytest.raises(KeyError):
            with _translate_errors():
                raise KeyError("book_id")


@pytest.mark.asyncio
async def test_unreachable_server_raises_store_error():
    # Nothing listens on port 1, so connecting is refused straight away
    store = SqlStore(create_engine("postgresql://u:p@127.0.0.1:1/db"), password_hash_rounds=4)

    try:
        with pytest.raises(StoreError) as exc_info:
            await store.list_users()
    finally:
        await store.close()

    assert isinstance(exc_info.value.__cause__, OSError)
