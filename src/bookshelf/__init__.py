"""
Bookshelf API
GraphQL service for user accounts and saved-book lists
"""

__version__ = "0.1.0"

from .config import settings

__all__ = ["settings", "__version__"]
