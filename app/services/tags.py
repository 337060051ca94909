"""Tag taxonomy: categories and tags with audit fields and soft delete."""

import logging
import uuid
from datetime import UTC, datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query, Session, selectinload

from app.core.errors import ConflictError, NotFoundError
from app.models import Tag, TagCategory
from app.schemas.common import PagedQuery
from app.schemas.tag import (
    CategoryCreate,
    CategoryResponse,
    CategoryUpdate,
    TagCreate,
    TagListParams,
    TagResponse,
    TagUpdate,
)
from app.schemas.user import UserSummary
from app.services.paging import resolve_page
from app.services.slugs import normalize_slug

logger = logging.getLogger(__name__)

CATEGORY_SORTABLE = {
    "slug": TagCategory.slug,
    "name": TagCategory.name,
    "created_at": TagCategory.created_at,
    "updated_at": TagCategory.updated_at,
}

TAG_SORTABLE = {
    "slug": Tag.slug,
    "name": Tag.name,
    "created_at": Tag.created_at,
    "updated_at": Tag.updated_at,
}


def _summary(user) -> UserSummary | None:
    if user is None:
        return None
    return UserSummary(id=user.id, name=user.name)


def category_response(category: TagCategory) -> CategoryResponse:
    return CategoryResponse(
        id=category.id,
        slug=category.slug,
        name=category.name,
        created_at=category.created_at,
        updated_at=category.updated_at,
        created_by=_summary(category.created_by),
        updated_by=_summary(category.updated_by),
    )


def tag_response(tag: Tag) -> TagResponse:
    return TagResponse(
        id=tag.id,
        slug=tag.slug,
        name=tag.name,
        category_id=tag.category_id,
        category_slug=tag.category.slug,
        category_name=tag.category.name,
    )


# Categories -------------------------------------------------------------


def _categories(db: Session) -> Query:
    return (
        db.query(TagCategory)
        .options(selectinload(TagCategory.created_by), selectinload(TagCategory.updated_by))
        .filter(TagCategory.deleted_at.is_(None))
    )


def get_category(db: Session, category_id: uuid.UUID) -> TagCategory:
    category = _categories(db).filter(TagCategory.id == category_id).first()
    if category is None:
        raise NotFoundError("Tag category not found")
    return category


def list_categories(db: Session, params: PagedQuery) -> tuple[list[TagCategory], int]:
    return resolve_page(
        _categories(db),
        params,
        search_column=TagCategory.slug,
        sortable=CATEGORY_SORTABLE,
        default_sort=TagCategory.slug.asc(),
    )


def create_category(db: Session, request: CategoryCreate, user_id: uuid.UUID) -> TagCategory:
    category = TagCategory(
        slug=normalize_slug(request.slug),
        name=request.name,
        created_by_id=user_id,
    )
    db.add(category)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError("Tag category already exists") from e
    logger.info("Tag category created", extra={"category_id": str(category.id)})
    return get_category(db, category.id)


def update_category(db: Session, request: CategoryUpdate, user_id: uuid.UUID) -> TagCategory:
    category = get_category(db, request.id)
    if request.slug is not None:
        category.slug = normalize_slug(request.slug)
    if request.name is not None:
        category.name = request.name
    category.updated_by_id = user_id
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError("Tag category already exists") from e
    return get_category(db, request.id)


def delete_category(db: Session, category_id: uuid.UUID, user_id: uuid.UUID) -> None:
    """Soft delete, recording who deleted it."""
    category = get_category(db, category_id)
    category.deleted_by_id = user_id
    category.deleted_at = datetime.now(UTC)
    db.commit()
    logger.info("Tag category deleted", extra={"category_id": str(category_id)})


# Tags -------------------------------------------------------------------


def _tags(db: Session) -> Query:
    return (
        db.query(Tag)
        .options(selectinload(Tag.category))
        .filter(Tag.deleted_at.is_(None))
    )


def get_tag(db: Session, tag_id: uuid.UUID) -> Tag:
    tag = _tags(db).filter(Tag.id == tag_id).first()
    if tag is None:
        raise NotFoundError("Tag not found")
    return tag


def get_tag_by_slug(db: Session, name: str) -> Tag:
    tag = _tags(db).filter(Tag.slug == name).order_by(Tag.created_at.asc()).first()
    if tag is None:
        raise NotFoundError("Tag not found")
    return tag


def list_tags(db: Session, params: TagListParams) -> tuple[list[Tag], int]:
    query = _tags(db)
    if params.category_id is not None:
        query = query.filter(Tag.category_id == params.category_id)
    return resolve_page(
        query,
        params,
        search_column=Tag.slug,
        sortable=TAG_SORTABLE,
        default_sort=Tag.slug.asc(),
    )


def create_tag(db: Session, request: TagCreate, user_id: uuid.UUID) -> Tag:
    get_category(db, request.category_id)
    tag = Tag(
        slug=normalize_slug(request.slug),
        name=request.name,
        category_id=request.category_id,
        created_by_id=user_id,
    )
    db.add(tag)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError("Tag already exists in this category") from e
    logger.info("Tag created", extra={"tag_id": str(tag.id)})
    return get_tag(db, tag.id)


def update_tag(db: Session, request: TagUpdate, user_id: uuid.UUID) -> Tag:
    tag = get_tag(db, request.id)
    if request.category_id is not None:
        get_category(db, request.category_id)
        tag.category_id = request.category_id
    if request.slug is not None:
        tag.slug = normalize_slug(request.slug)
    if request.name is not None:
        tag.name = request.name
    tag.updated_by_id = user_id
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError("Tag already exists in this category") from e
    return get_tag(db, request.id)


def delete_tag(db: Session, tag_id: uuid.UUID, user_id: uuid.UUID) -> None:
    tag = get_tag(db, tag_id)
    tag.deleted_by_id = user_id
    tag.deleted_at = datetime.now(UTC)
    db.commit()
    logger.info("Tag deleted", extra={"tag_id": str(tag_id)})
