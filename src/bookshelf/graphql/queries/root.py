"""
Root GraphQL query definitions
"""

from uuid import UUID

import strawberry

from ..context import get_store
from ..types.book import Book
from ..types.user import User


@strawberry.type
class Query:
    """Root GraphQL query type."""

    @strawberry.field
    async def users(self, info: strawberry.Info) -> list[User]:
        """Get all users."""
        from ..resolvers.user import resolve_users

        return await resolve_users(get_store(info))

    @strawberry.field
    async def user(self, info: strawberry.Info, username: str, user_id: UUID) -> User | None:
        """Get a user by ID and username, with saved books."""
        from ..resolvers.user import resolve_user

        return await resolve_user(get_store(info), username, user_id)

    @strawberry.field
    async def books(self, info: strawberry.Info, user_id: UUID | None = None) -> list[Book]:
        """Get all books, or the books saved by a user."""
        from ..resolvers.book import resolve_books

        return await resolve_books(get_store(info), user_id)

    @strawberry.field
    async def book(self, info: strawberry.Info, book_id: str) -> Book | None:
        """Get a book by its book ID."""
        from ..resolvers.book import resolve_book

        return await resolve_book(get_store(info), book_id)
