from __future__ import annotations

from uuid import UUID

from ...logging import get_logger
from ...store.base import Store
from ..types.user import User

logger = get_logger(__name__)


async def resolve_users(store: Store) -> list[User]:
    """Resolve every user."""
    users = await store.list_users()
    return [User.from_record(user) for user in users]


async def resolve_user(store: Store, username: str, user_id: UUID) -> User | None:
    """Resolve the user matching both id and username, with saved books expanded."""
    user = await store.get_user(user_id, username)
    if user is None:
        logger.info("User not found", user_id=str(user_id), username=username)
        return None
    return User.from_record(user)
