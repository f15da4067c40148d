"""Access to the request-scoped collaborators held in the GraphQL context."""

from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry

if TYPE_CHECKING:
    from ..auth.tokens import TokenIssuer
    from ..store.base import Store


def get_store(info: strawberry.Info) -> Store:
    """Return the store handle injected into the request context."""
    return info.context["store"]


def get_token_issuer(info: strawberry.Info) -> TokenIssuer:
    """Return the token issuer injected into the request context."""
    return info.context["token_issuer"]
