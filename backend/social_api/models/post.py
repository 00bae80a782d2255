"""
Social API: Post SQLAlchemy Model
=================================

What:  ORM model representing the `posts` table.
How:   Inherits from the shared DeclarativeBase. Declared without a schema;
       the session's schema_translate_map places it in `settings.db_schema`.
Who:   Used by PostService for every statement and by init_models().

Table Design:
    - Integer autoincrement primary key
    - content: TEXT, no length limit
    - likes: counter, starts at 0, may go negative through dislikes
    - created: server-assigned timestamp
    - removed: soft-delete flag; rows are never physically deleted
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer, Text, false, func, text
from sqlalchemy.orm import Mapped, mapped_column

from social_api.database import Base

# Bounds of the INTEGER id column
POST_ID_MIN = -2**31
POST_ID_MAX = 2**31 - 1


class Post(Base):
    """
    A single post.

    Lifecycle:
        1. Inserted with only `content` (likes=0, removed=false)
        2. `content` and `likes` updated while visible
        3. `removed` toggled by delete / restore, never erased

    Visibility:
        list, get-by-id, edit, like and dislike only see rows with
        removed = false.
    """

    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    likes: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default=text("0"),
    )

    created: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    removed: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
    )

    def __repr__(self) -> str:
        """Developer-friendly string representation for debugging."""
        return (
            f"<Post(id={self.id}, likes={self.likes}, "
            f"removed={self.removed})>"
        )
