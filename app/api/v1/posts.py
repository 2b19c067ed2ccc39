"""Post endpoints: public reads of published posts, authenticated writes gated by ownership."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from app.api.v1.deps import CurrentIdentity, Pagination, get_post_store
from app.core.guards import ensure_owner_or_admin
from app.schemas.common import PaginatedResponse, PaginationParams
from app.schemas.post import PostCreate, PostResponse, PostUpdate
from app.services.posts import PostStore

router = APIRouter()

Posts = Annotated[PostStore, Depends(get_post_store)]


def _page(posts: list, total: int, pagination: PaginationParams) -> PaginatedResponse[PostResponse]:
    return PaginatedResponse[PostResponse].build(
        [PostResponse.model_validate(p) for p in posts], total, pagination
    )


@router.get("", response_model=PaginatedResponse[PostResponse])
def list_published_posts(posts: Posts, pagination: Pagination) -> PaginatedResponse[PostResponse]:
    """Published posts, newest first."""
    items, total = posts.list_page(pagination.offset, pagination.limit, published_only=True)
    return _page(items, total, pagination)


@router.get("/all", response_model=PaginatedResponse[PostResponse])
def list_all_posts(
    _identity: CurrentIdentity,
    posts: Posts,
    pagination: Pagination,
) -> PaginatedResponse[PostResponse]:
    """All posts including drafts (authenticated)."""
    items, total = posts.list_page(pagination.offset, pagination.limit)
    return _page(items, total, pagination)


@router.get("/slug/{slug}", response_model=PostResponse)
def get_post_by_slug(slug: str, posts: Posts) -> PostResponse:
    return PostResponse.model_validate(posts.get_by_slug(slug))


@router.get("/{post_id}", response_model=PostResponse)
def get_post(post_id: int, posts: Posts) -> PostResponse:
    return PostResponse.model_validate(posts.get(post_id))


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
def create_post(body: PostCreate, identity: CurrentIdentity, posts: Posts) -> PostResponse:
    """Create a post authored by the caller. 409 if the slug is taken."""
    return PostResponse.model_validate(posts.create(body, author_id=identity.sub))


@router.patch("/{post_id}", response_model=PostResponse)
def update_post(
    post_id: int,
    body: PostUpdate,
    identity: CurrentIdentity,
    posts: Posts,
) -> PostResponse:
    """Update a post (author or admin)."""
    ensure_owner_or_admin(post_id, identity, lambda pid: posts.get(pid).author_id)
    return PostResponse.model_validate(posts.update(post_id, body))


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_post(post_id: int, identity: CurrentIdentity, posts: Posts) -> Response:
    """Soft-delete a post (author or admin)."""
    ensure_owner_or_admin(post_id, identity, lambda pid: posts.get(pid).author_id)
    posts.remove(post_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
