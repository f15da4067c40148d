"""
Sample catalogue used to seed a fresh database.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..logging import get_logger

if TYPE_CHECKING:
    from ..store.base import BookRecord, Store

logger = get_logger(__name__)

SAMPLE_BOOKS: list[dict[str, Any]] = [
    {
        "book_id": "wrOQLV6xB-wC",
        "title": "Harry Potter and the Sorcerer's Stone",
        "authors": ["J.K. Rowling"],
        "description": "Turning the envelope over, his hand trembling, Harry saw a purple "
        "wax seal.",
        "image": "http://books.google.com/books/content?id=wrOQLV6xB-wC&printsec=frontcover&img=1",
        "link": "http://books.google.com/books?id=wrOQLV6xB-wC",
    },
    {
        "book_id": "5NomkK4EV68C",
        "title": "The Hobbit",
        "authors": ["J.R.R. Tolkien"],
        "description": "In a hole in the ground there lived a hobbit.",
        "image": "http://books.google.com/books/content?id=5NomkK4EV68C&printsec=frontcover&img=1",
        "link": "http://books.google.com/books?id=5NomkK4EV68C",
    },
    {
        "book_id": "PGR2AwAAQBAJ",
        "title": "To Kill a Mockingbird",
        "authors": ["Harper Lee"],
        "description": "A gripping, heart-wrenching tale of coming-of-age in a South poisoned by "
        "virulent prejudice.",
        "image": "http://books.google.com/books/content?id=PGR2AwAAQBAJ&printsec=frontcover&img=1",
        "link": "http://books.google.com/books?id=PGR2AwAAQBAJ",
    },
]


async def seed_books(store: Store, books: list[dict[str, Any]] | None = None) -> list[BookRecord]:
    """
    Ensure each sample book exists in the store.

    Books already present (matched by book_id) are left as they are, so
    seeding twice is harmless.

    Returns:
        The stored records, in input order
    """
    if books is None:
        books = SAMPLE_BOOKS

    seeded = []
    for entry in books:
        fields = dict(entry)
        book_id = fields.pop("book_id")
        seeded.append(await store.ensure_book(book_id, **fields))

    logger.info("Seeded books", count=len(seeded))
    return seeded
