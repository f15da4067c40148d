"""
Auth payload returned by registration and login
"""

import strawberry

from .user import User


@strawberry.type
class Auth:
    """A signed token together with the user it identifies."""

    token: str
    user: User
