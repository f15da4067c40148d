"""
Database models for the Bookshelf API (authoritative ORM definitions).

This module defines the SQLAlchemy Base with a naming convention for stable
constraint names, and exposes `target_metadata` for schema creation.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import (
    ARRAY,
    DateTime,
    ForeignKeyConstraint,
    MetaData,
    PrimaryKeyConstraint,
    String,
    Text,
    UniqueConstraint,
    Uuid,
    text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

# Naming convention for deterministic constraint/index names
naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Base class for all database models with type checking support."""

    metadata = MetaData(naming_convention=naming_convention)


class Users(Base):
    __tablename__ = "users"
    __table_args__ = (
        PrimaryKeyConstraint("id", name="users_pkey"),
        UniqueConstraint("username", name="users_username_key"),
        UniqueConstraint("email", name="users_email_key"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, default=uuid4)
    username: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(True), server_default=text("CURRENT_TIMESTAMP")
    )

    saved_book_links: Mapped[list["UserSavedBooks"]] = relationship(
        "UserSavedBooks",
        uselist=True,
        back_populates="user",
        order_by="UserSavedBooks.saved_at",
        cascade="all, delete-orphan",
    )


class Books(Base):
    __tablename__ = "books"
    __table_args__ = (
        PrimaryKeyConstraint("id", name="books_pkey"),
        UniqueConstraint("book_id", name="books_book_id_key"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, default=uuid4)
    book_id: Mapped[str] = mapped_column(String(255), nullable=False)
    title: Mapped[str | None] = mapped_column(String(500))
    authors: Mapped[list[str]] = mapped_column(
        ARRAY(String), server_default=text("'{}'::varchar[]")
    )
    description: Mapped[str | None] = mapped_column(Text)
    image: Mapped[str | None] = mapped_column(Text)
    link: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(True), server_default=text("CURRENT_TIMESTAMP")
    )


class UserSavedBooks(Base):
    """Set membership of a book in a user's saved list.

    The composite primary key makes (user, book) pairs unique, which is what
    gives saved books their set semantics.
    """

    __tablename__ = "user_saved_books"
    __table_args__ = (
        ForeignKeyConstraint(
            ["user_id"],
            ["users.id"],
            ondelete="CASCADE",
            name="user_saved_books_user_id_fkey",
        ),
        ForeignKeyConstraint(
            ["book_id"],
            ["books.book_id"],
            ondelete="CASCADE",
            name="user_saved_books_book_id_fkey",
        ),
        PrimaryKeyConstraint("user_id", "book_id", name="user_saved_books_pkey"),
    )

    user_id: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    book_id: Mapped[str] = mapped_column(String(255), nullable=False)
    saved_at: Mapped[datetime] = mapped_column(
        DateTime(True), server_default=text("clock_timestamp()")
    )

    user: Mapped["Users"] = relationship("Users", back_populates="saved_book_links")
    book: Mapped["Books"] = relationship("Books", lazy="joined")


target_metadata = Base.metadata

__all__ = ["Base", "Books", "UserSavedBooks", "Users", "target_metadata"]
