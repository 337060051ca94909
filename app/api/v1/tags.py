"""Tag taxonomy routes. Reads are public; writes require an admin bearer token."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.v1.auth import AdminUserID
from app.core.database import get_db
from app.schemas.common import Envelope, PagedData, PagedQuery
from app.schemas.tag import (
    CategoryCreate,
    CategoryResponse,
    CategoryUpdate,
    TagCreate,
    TagListParams,
    TagResponse,
    TagUpdate,
)
from app.services import tags
from app.services.paging import page_data

categories_router = APIRouter()
tags_router = APIRouter()


@categories_router.post("", response_model=Envelope[CategoryResponse])
def create_category(
    body: CategoryCreate,
    user_id: AdminUserID,
    db: Annotated[Session, Depends(get_db)],
) -> Envelope[CategoryResponse]:
    return Envelope(data=tags.category_response(tags.create_category(db, body, user_id)))


@categories_router.put("", response_model=Envelope[CategoryResponse])
def update_category(
    body: CategoryUpdate,
    user_id: AdminUserID,
    db: Annotated[Session, Depends(get_db)],
) -> Envelope[CategoryResponse]:
    return Envelope(data=tags.category_response(tags.update_category(db, body, user_id)))


@categories_router.delete("/{category_id}", response_model=Envelope[None])
def delete_category(
    category_id: uuid.UUID,
    user_id: AdminUserID,
    db: Annotated[Session, Depends(get_db)],
) -> Envelope[None]:
    tags.delete_category(db, category_id, user_id)
    return Envelope()


@categories_router.get("", response_model=Envelope[PagedData[CategoryResponse]])
def list_categories(
    params: Annotated[PagedQuery, Query()],
    db: Annotated[Session, Depends(get_db)],
) -> Envelope[PagedData[CategoryResponse]]:
    rows, total = tags.list_categories(db, params)
    items = [tags.category_response(c) for c in rows]
    return Envelope(data=page_data(items, total, params.offset, params.limit))


@categories_router.get("/{category_id}", response_model=Envelope[CategoryResponse])
def get_category(
    category_id: uuid.UUID,
    db: Annotated[Session, Depends(get_db)],
) -> Envelope[CategoryResponse]:
    return Envelope(data=tags.category_response(tags.get_category(db, category_id)))


@tags_router.post("", response_model=Envelope[TagResponse])
def create_tag(
    body: TagCreate,
    user_id: AdminUserID,
    db: Annotated[Session, Depends(get_db)],
) -> Envelope[TagResponse]:
    return Envelope(data=tags.tag_response(tags.create_tag(db, body, user_id)))


@tags_router.put("", response_model=Envelope[TagResponse])
def update_tag(
    body: TagUpdate,
    user_id: AdminUserID,
    db: Annotated[Session, Depends(get_db)],
) -> Envelope[TagResponse]:
    return Envelope(data=tags.tag_response(tags.update_tag(db, body, user_id)))


@tags_router.delete("/{tag_id}", response_model=Envelope[None])
def delete_tag(
    tag_id: uuid.UUID,
    user_id: AdminUserID,
    db: Annotated[Session, Depends(get_db)],
) -> Envelope[None]:
    tags.delete_tag(db, tag_id, user_id)
    return Envelope()


@tags_router.get("", response_model=Envelope[PagedData[TagResponse]])
def list_tags(
    params: Annotated[TagListParams, Query()],
    db: Annotated[Session, Depends(get_db)],
) -> Envelope[PagedData[TagResponse]]:
    rows, total = tags.list_tags(db, params)
    items = [tags.tag_response(t) for t in rows]
    return Envelope(data=page_data(items, total, params.offset, params.limit))


@tags_router.get("/name/{name}", response_model=Envelope[TagResponse])
def get_tag_by_name(
    name: str,
    db: Annotated[Session, Depends(get_db)],
) -> Envelope[TagResponse]:
    return Envelope(data=tags.tag_response(tags.get_tag_by_slug(db, name)))


@tags_router.get("/{tag_id}", response_model=Envelope[TagResponse])
def get_tag(
    tag_id: uuid.UUID,
    db: Annotated[Session, Depends(get_db)],
) -> Envelope[TagResponse]:
    return Envelope(data=tags.tag_response(tags.get_tag(db, tag_id)))
