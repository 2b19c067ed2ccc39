"""Post persistence: published/all listings, slug lookups, create/update with unique slugs, soft delete."""

import logging
from datetime import datetime, timezone

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import BadRequestError, ConflictError, NotFoundError
from app.models import Category, Post
from app.schemas.post import PostCreate, PostUpdate
from app.services.slug import slugify

logger = logging.getLogger(__name__)


def _slug_taken_message(slug: str) -> str:
    return f'A post with slug "{slug}" already exists'


class PostStore:
    def __init__(self, session: Session) -> None:
        self.session = session

    def _active(self):
        return self.session.query(Post).filter(Post.deleted_at.is_(None))

    def get(self, post_id: int) -> Post:
        post = self._active().filter(Post.id == post_id).first()
        if post is None:
            raise NotFoundError(f"Post with id {post_id} not found")
        return post

    def get_by_slug(self, slug: str) -> Post:
        post = self._active().filter(Post.slug == slug).first()
        if post is None:
            raise NotFoundError(f'Post with slug "{slug}" not found')
        return post

    def list_page(
        self, offset: int, limit: int, published_only: bool = False
    ) -> tuple[list[Post], int]:
        """Page of posts; published_only lists newest first, otherwise by id."""
        query = self._active()
        if published_only:
            query = query.filter(Post.is_published.is_(True))
            order = (Post.created_at.desc(), Post.id.desc())
        else:
            order = (Post.id,)
        total = query.count()
        posts = query.order_by(*order).offset(offset).limit(limit).all()
        return posts, total

    def _ensure_slug_free(self, slug: str, exclude_id: int | None = None) -> None:
        query = self._active().filter(Post.slug == slug)
        if exclude_id is not None:
            query = query.filter(Post.id != exclude_id)
        if query.first() is not None:
            raise ConflictError(_slug_taken_message(slug))

    def _ensure_category_exists(self, category_id: int | None) -> None:
        if category_id is None:
            return
        exists = (
            self.session.query(Category.id)
            .filter(Category.id == category_id, Category.deleted_at.is_(None))
            .first()
        )
        if exists is None:
            raise NotFoundError(f"Category with id {category_id} not found")

    def _commit(self, slug: str) -> None:
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            raise ConflictError(_slug_taken_message(slug)) from e

    def create(self, data: PostCreate, author_id: int) -> Post:
        """Create a post owned by author_id; the slug defaults to slugify(title)."""
        slug = data.slug or slugify(data.title)
        if not slug:
            raise BadRequestError("Could not derive a slug from the title; provide one explicitly")
        self._ensure_slug_free(slug)
        self._ensure_category_exists(data.category_id)
        post = Post(
            **data.model_dump(exclude={"slug"}),
            slug=slug,
            author_id=author_id,
        )
        self.session.add(post)
        self._commit(slug)
        self.session.refresh(post)
        logger.info("Post created: id=%s slug=%s author_id=%s", post.id, post.slug, author_id)
        return post

    def update(self, post_id: int, data: PostUpdate) -> Post:
        """
        Partial update. An explicit new slug must be free; a new title without a slug
        regenerates the slug from the title.
        """
        post = self.get(post_id)
        changes = data.model_dump(exclude_unset=True)
        if changes.get("slug"):
            new_slug = changes["slug"]
        elif changes.get("title"):
            new_slug = slugify(changes["title"]) or post.slug
        else:
            new_slug = post.slug
        if new_slug != post.slug:
            self._ensure_slug_free(new_slug, exclude_id=post.id)
        changes["slug"] = new_slug
        if "category_id" in changes:
            self._ensure_category_exists(changes["category_id"])
        for field, value in changes.items():
            # category_id may be cleared; other columns are NOT NULL.
            if value is None and field != "category_id":
                continue
            setattr(post, field, value)
        self._commit(new_slug)
        self.session.refresh(post)
        return post

    def remove(self, post_id: int) -> None:
        post = self.get(post_id)
        post.deleted_at = datetime.now(timezone.utc)
        self.session.commit()
        logger.info("Post soft-deleted: id=%s", post_id)
