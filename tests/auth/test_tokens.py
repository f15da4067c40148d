"""Unit tests for the JWT token issuer."""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

import jwt
import pytest

from bookshelf.auth.base import AuthenticationError
from bookshelf.auth.tokens import TokenIssuer, create_token_issuer
from bookshelf.config import Settings
from bookshelf.store.base import UserRecord

EXPIRY_SECRET = "expiry-secret-key-used-only-in-tests"


@pytest.fixture
def user():
    return UserRecord(
        id=uuid4(),
        username="amy",
        email="amy@example.com",
        password_hash="$2b$04$unused",
    )


class TestTokenIssuer:
    """Test issuing and verifying tokens."""

    def test_issue_and_verify_round_trip(self, token_issuer, user):
        token = token_issuer.issue_token(user)

        principal = token_issuer.verify_token(token)

        assert principal["subject"] == str(user.id)
        assert principal["username"] == "amy"
        assert principal["email"] == "amy@example.com"
        assert principal["claims"]["iss"] == "test-bookshelf"
        assert principal["claims"]["aud"] == "test-api"

    def test_token_expiry_follows_configuration(self, user):
        issuer = TokenIssuer(secret_key=EXPIRY_SECRET, token_expiry_hours=2)

        token = issuer.issue_token(user)
        payload = jwt.decode(token, EXPIRY_SECRET, algorithms=["HS256"], audience="bookshelf-api")

        assert payload["exp"] - payload["iat"] == 2 * 60 * 60

    def test_verify_rejects_wrong_secret(self, token_issuer, user):
        other = TokenIssuer(
            secret_key="another-secret-key-used-only-in-tests",
            issuer="test-bookshelf",
            audience="test-api",
        )
        token = other.issue_token(user)

        with pytest.raises(AuthenticationError, match="Invalid token"):
            token_issuer.verify_token(token)

    def test_verify_rejects_expired_token(self, token_issuer):
        past = datetime.now(UTC) - timedelta(hours=3)
        token = jwt.encode(
            {
                "iss": "test-bookshelf",
                "aud": "test-api",
                "sub": "someone",
                "iat": past,
                "exp": past + timedelta(hours=1),
            },
            "test-secret-key-for-testing-only",
            algorithm="HS256",
        )

        with pytest.raises(AuthenticationError, match="Invalid token"):
            token_issuer.verify_token(token)

    def test_verify_requires_subject(self, token_issuer):
        now = datetime.now(UTC)
        token = jwt.encode(
            {"iss": "test-bookshelf", "aud": "test-api", "iat": now, "exp": now + timedelta(hours=1)},
            "test-secret-key-for-testing-only",
            algorithm="HS256",
        )

        with pytest.raises(AuthenticationError, match="Missing 'sub' claim"):
            token_issuer.verify_token(token)

    def test_empty_secret_is_rejected(self):
        with pytest.raises(ValueError, match="secret key is required"):
            TokenIssuer(secret_key="")

    def test_create_from_settings(self, user):
        settings = Settings(
            jwt_secret="settings-secret-key-used-only-in-tests", jwt_issuer="iss", jwt_audience="aud"
        )

        issuer = create_token_issuer(settings)

        assert issuer.issuer == "iss"
        assert issuer.audience == "aud"
        assert issuer.verify_token(issuer.issue_token(user))["subject"] == str(user.id)
