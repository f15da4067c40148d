from __future__ import annotations

from ...auth.base import AuthenticationError
from ...auth.tokens import TokenIssuer
from ...logging import bind_user_context, get_logger
from ...store.base import Store
from ..types.auth import Auth
from ..types.user import User

logger = get_logger(__name__)


async def create_user(
    store: Store, token_issuer: TokenIssuer, username: str, email: str, password: str
) -> Auth:
    """
    Register a user and log them in straight away.

    Store failures (taken username or email, invalid fields) propagate unchanged.
    """
    user = await store.create_user(username, email, password)
    token = token_issuer.issue_token(user)

    bind_user_context(user.id)
    logger.info("User created", username=user.username)
    return Auth(token=token, user=User.from_record(user))


async def login(store: Store, token_issuer: TokenIssuer, email: str, password: str) -> Auth:
    """
    Authenticate by email and password.

    Raises:
        AuthenticationError: If no user has this email or the password is wrong
    """
    user = await store.find_user_by_email(email)
    if user is None:
        logger.info("Login failed", reason="unknown_email")
        raise AuthenticationError("No user found with this email address")

    if not user.is_correct_password(password):
        logger.info("Login failed", reason="incorrect_password", user_id=str(user.id))
        raise AuthenticationError("Incorrect credentials")

    token = token_issuer.issue_token(user)

    bind_user_context(user.id)
    logger.info("User logged in")
    return Auth(token=token, user=User.from_record(user))
