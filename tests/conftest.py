"""
Shared pytest fixtures and configuration for all tests.
"""

import os
from collections.abc import Generator
from typing import Any
from unittest.mock import MagicMock

import pytest
import strawberry

from bookshelf.auth.tokens import TokenIssuer
from bookshelf.graphql.schema import build_context
from bookshelf.store.implementations.memory import MemoryStore

# Lowest cost bcrypt accepts; keeps hashing fast in tests
TEST_HASH_ROUNDS = 4


@pytest.fixture
def memory_store() -> MemoryStore:
    """A fresh, empty in-memory store."""
    return MemoryStore(password_hash_rounds=TEST_HASH_ROUNDS)


@pytest.fixture
def token_issuer() -> TokenIssuer:
    return TokenIssuer(
        secret_key="test-secret-key-for-testing-only",
        algorithm="HS256",
        issuer="test-bookshelf",
        audience="test-api",
    )


@pytest.fixture
def graphql_context(memory_store: MemoryStore, token_issuer: TokenIssuer) -> dict[str, Any]:
    """Context dict as the GraphQL router would build it."""
    return build_context(memory_store, token_issuer)


@pytest.fixture
def mock_info(graphql_context: dict[str, Any]) -> MagicMock:
    """Create a mock GraphQL info object carrying the store and token issuer."""
    info = MagicMock(spec=strawberry.Info)
    info.context = graphql_context
    return info


@pytest.fixture(autouse=True)
def reset_environment() -> Generator[None, None, None]:
    """Reset environment variables for each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


def pytest_configure(config: Any) -> None:
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "requires_db: mark test as requiring a PostgreSQL server"
    )
    config.addinivalue_line("markers", "slow: mark test as slow running")
    config.addinivalue_line("markers", "integration: mark test as integration test")
    config.addinivalue_line("markers", "unit: mark test as unit test")
