"""JWT issuance for authenticated users."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

import jwt
from jwt.exceptions import InvalidTokenError

from ..logging import get_logger
from .base import AuthenticationError, Principal

if TYPE_CHECKING:
    from ..config import Settings
    from ..store.base import UserRecord

logger = get_logger(__name__)


class TokenIssuer:
    """Signs and decodes self-issued JWTs carrying a user's identity."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        issuer: str = "bookshelf",
        audience: str = "bookshelf-api",
        token_expiry_hours: int = 2,
    ):
        if not secret_key:
            raise ValueError("A JWT secret key is required")
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.issuer = issuer
        self.audience = audience
        self.token_expiry_hours = token_expiry_hours

    def issue_token(self, user: UserRecord) -> str:
        """Sign a token for the given user."""
        now = datetime.now(UTC)

        payload = {
            "iss": self.issuer,
            "aud": self.audience,
            "iat": now,
            "nbf": now,
            "exp": now + timedelta(hours=self.token_expiry_hours),
            "sub": str(user.id),
            "username": user.username,
            "email": user.email,
        }

        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def verify_token(self, token: str) -> Principal:
        """Verify a token and return the identity it carries.

        Raises:
            AuthenticationError: If the token is invalid or expired
        """
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                issuer=self.issuer,
                audience=self.audience,
                options={
                    "verify_exp": True,
                    "verify_nbf": True,
                    "verify_iat": True,
                },
            )
        except InvalidTokenError as e:
            logger.warning("JWT token validation failed", error=str(e))
            raise AuthenticationError("Invalid token") from e

        subject = payload.get("sub")
        if not subject:
            raise AuthenticationError("Missing 'sub' claim in token")

        principal = Principal(subject=subject)
        if username := payload.get("username"):
            principal["username"] = username
        if email := payload.get("email"):
            principal["email"] = email
        principal["claims"] = payload

        return principal


def create_token_issuer(settings: Settings) -> TokenIssuer:
    """Build the token issuer from application settings."""
    return TokenIssuer(
        secret_key=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        issuer=settings.jwt_issuer,
        audience=settings.jwt_audience,
        token_expiry_hours=settings.token_expiry_hours,
    )
