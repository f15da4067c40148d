"""Tests for reading collaborators out of the GraphQL context."""

from bookshelf.graphql.context import get_store, get_token_issuer


def test_context_exposes_injected_collaborators(mock_info, memory_store, token_issuer):
    assert get_store(mock_info) is memory_store
    assert get_token_issuer(mock_info) is token_issuer
