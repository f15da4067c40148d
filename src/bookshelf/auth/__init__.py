"""Authentication helpers: password hashing and token issuance."""

from .base import AuthenticationError, Principal
from .passwords import hash_password, verify_password
from .tokens import TokenIssuer, create_token_issuer

__all__ = [
    "AuthenticationError",
    "Principal",
    "TokenIssuer",
    "create_token_issuer",
    "hash_password",
    "verify_password",
]
