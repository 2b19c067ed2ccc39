"""User persistence: lookups, registration, profile/admin updates and soft delete."""

import logging
from datetime import datetime, timezone

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import ConflictError, NotFoundError
from app.core.security import DEFAULT_BCRYPT_ROUNDS, hash_password
from app.models import User
from app.schemas.user import RegisterRequest, UserCreate, UserUpdate

logger = logging.getLogger(__name__)

DUPLICATE_USER_MESSAGE = "Username or email already in use"


class UserStore:
    """Credential store over the users table; soft-deleted users are invisible."""

    def __init__(self, session: Session, bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS) -> None:
        self.session = session
        self.bcrypt_rounds = bcrypt_rounds

    def _active(self):
        return self.session.query(User).filter(User.deleted_at.is_(None))

    def find_by_username(self, username: str) -> User | None:
        return self._active().filter(User.username == username).first()

    def find_by_id(self, user_id: int) -> User | None:
        return self._active().filter(User.id == user_id).first()

    def get(self, user_id: int) -> User:
        user = self.find_by_id(user_id)
        if user is None:
            raise NotFoundError(f"User with id {user_id} not found")
        return user

    def list_page(self, offset: int, limit: int) -> tuple[list[User], int]:
        query = self._active()
        total = query.count()
        users = query.order_by(User.id).offset(offset).limit(limit).all()
        return users, total

    def _ensure_unique(
        self, username: str | None, email: str | None, exclude_id: int | None = None
    ) -> None:
        conditions = []
        if username is not None:
            conditions.append(User.username == username)
        if email is not None:
            conditions.append(User.email == email)
        if not conditions:
            return
        query = self._active().filter(or_(*conditions))
        if exclude_id is not None:
            query = query.filter(User.id != exclude_id)
        if query.first() is not None:
            raise ConflictError(DUPLICATE_USER_MESSAGE)

    def _commit(self) -> None:
        # Concurrent writers can still race past _ensure_unique; the unique index decides.
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            raise ConflictError(DUPLICATE_USER_MESSAGE) from e

    def create(self, data: RegisterRequest | UserCreate) -> User:
        """Create a user with a hashed password. Raises ConflictError on duplicate username/email."""
        self._ensure_unique(data.username, data.email)
        user = User(
            name=data.name,
            email=data.email,
            username=data.username,
            password_hash=hash_password(data.password, self.bcrypt_rounds),
            role=getattr(data, "role", "user"),
            is_active=getattr(data, "is_active", True),
        )
        self.session.add(user)
        self._commit()
        self.session.refresh(user)
        logger.info("User created: id=%s username=%s role=%s", user.id, user.username, user.role)
        return user

    def update(self, user_id: int, data: UserUpdate) -> User:
        """Apply a partial update. Raises NotFoundError or ConflictError."""
        user = self.get(user_id)
        changes = data.model_dump(exclude_unset=True)
        new_username = changes.get("username")
        new_email = changes.get("email")
        self._ensure_unique(
            new_username if new_username != user.username else None,
            new_email if new_email != user.email else None,
            exclude_id=user.id,
        )
        password = changes.pop("password", None)
        if password is not None:
            user.password_hash = hash_password(password, self.bcrypt_rounds)
        for field, value in changes.items():
            if value is not None:
                setattr(user, field, value)
        self._commit()
        self.session.refresh(user)
        return user

    def remove(self, user_id: int) -> None:
        """Soft delete: the row stays, with deleted_at set."""
        user = self.get(user_id)
        user.deleted_at = datetime.now(timezone.utc)
        self.session.commit()
        logger.info("User soft-deleted: id=%s", user_id)
