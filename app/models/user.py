"""ORM model for blog users (auth and RBAC)."""

from sqlalchemy import Boolean, Column, Index, Integer, String, text, true

from app.models.base import Base, TimestampMixin

ROLE_USER = "user"
ROLE_ADMIN = "admin"
ROLES = (ROLE_USER, ROLE_ADMIN)


class User(TimestampMixin, Base):
    """
    User account for JWT authentication and role-based access control.

    role: 'admin' or 'user'. username and email are unique among non-deleted users.
    """

    __tablename__ = "users"
    __table_args__ = (
        Index(
            "ix_users_username_active",
            "username",
            unique=True,
            postgresql_where=text("deleted_at IS NULL"),
            sqlite_where=text("deleted_at IS NULL"),
        ),
        Index(
            "ix_users_email_active",
            "email",
            unique=True,
            postgresql_where=text("deleted_at IS NULL"),
            sqlite_where=text("deleted_at IS NULL"),
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    email = Column(String(150), nullable=False)
    username = Column(String(50), nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default=ROLE_USER)
    is_active = Column(Boolean, nullable=False, default=True, server_default=true())
