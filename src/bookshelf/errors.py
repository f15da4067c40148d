"""Base exception for errors classified by the Bookshelf API."""


class BookshelfError(Exception):
    """Base class for classified (expected) failures."""

    pass
