"""Authentication types and errors."""

from __future__ import annotations

from typing import NotRequired, TypedDict

from ..errors import BookshelfError


class Principal(TypedDict):
    """Identity decoded from a signed token."""

    subject: str  # user id (sub)
    username: NotRequired[str]
    email: NotRequired[str]
    claims: NotRequired[dict]


class AuthenticationError(BookshelfError):
    """Raised when authentication fails."""

    pass
