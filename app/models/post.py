"""ORM model for blog posts."""

from sqlalchemy import Boolean, Column, ForeignKey, Index, Integer, String, Text, false, text
from sqlalchemy.orm import relationship

from app.models.base import Base, TimestampMixin


class Post(TimestampMixin, Base):
    """
    Blog post written by a user, optionally filed under a category.

    slug is unique among non-deleted posts; author and category are loaded eagerly
    because every post response embeds them.
    """

    __tablename__ = "posts"
    __table_args__ = (
        Index(
            "ix_posts_slug_active",
            "slug",
            unique=True,
            postgresql_where=text("deleted_at IS NULL"),
            sqlite_where=text("deleted_at IS NULL"),
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(200), nullable=False)
    content = Column(Text, nullable=False)
    slug = Column(String(255), nullable=False)
    is_published = Column(Boolean, nullable=False, default=False, server_default=false())
    author_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    category_id = Column(
        Integer,
        ForeignKey("categories.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    author = relationship("User", lazy="joined")
    category = relationship("Category", lazy="joined")
