"""ORM model for post categories."""

from sqlalchemy import Boolean, Column, Index, Integer, String, Text, text, true

from app.models.base import Base, TimestampMixin


class Category(TimestampMixin, Base):
    """Post category; name is unique among non-deleted categories."""

    __tablename__ = "categories"
    __table_args__ = (
        Index(
            "ix_categories_name_active",
            "name",
            unique=True,
            postgresql_where=text("deleted_at IS NULL"),
            sqlite_where=text("deleted_at IS NULL"),
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True, server_default=true())
