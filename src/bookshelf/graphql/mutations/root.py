"""
Root GraphQL mutation definitions
"""

from uuid import UUID

import strawberry

from ..context import get_store, get_token_issuer
from ..types.auth import Auth
from ..types.user import User


@strawberry.type
class Mutation:
    """Root GraphQL mutation type."""

    # Account mutations
    @strawberry.mutation(name="createUser")
    async def create_user(
        self, info: strawberry.Info, username: str, email: str, password: str
    ) -> Auth:
        """Register a new user and return a signed token."""
        from ..resolvers.auth import create_user

        return await create_user(get_store(info), get_token_issuer(info), username, email, password)

    @strawberry.mutation
    async def login(self, info: strawberry.Info, email: str, password: str) -> Auth:
        """Log in with email and password."""
        from ..resolvers.auth import login

        return await login(get_store(info), get_token_issuer(info), email, password)

    # Saved book mutations
    @strawberry.mutation(name="saveBook")
    async def save_book(self, info: strawberry.Info, user_id: UUID, book_id: str) -> User | None:
        """Add a book to a user's saved list."""
        from ..resolvers.book import save_book

        return await save_book(get_store(info), user_id, book_id)

    @strawberry.mutation(name="deleteBook")
    async def delete_book(
        self, info: strawberry.Info, user_id: UUID, book_id: str
    ) -> User | None:
        """Remove a book from a user's saved list."""
        from ..resolvers.book import delete_book

        return await delete_book(get_store(info), user_id, book_id)
