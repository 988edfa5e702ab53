"""Router factory for the slugged content kinds; news, gallery and videos share one shape."""

from typing import Type

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.http.listing import ListingQuery, page_response
from app.core.auth import get_current_user
from app.core.db import get_db
from app.domains.content.schemas import ItemResponse, ListResponse, MessageResponse
from app.domains.content.services import ContentService
from app.domains.identity.entities import User


def content_router(
    prefix: str,
    slug_path: str,
    service_class: Type[ContentService],
    create_schema: Type[BaseModel],
    update_schema: Type[BaseModel],
    response_schema: Type[BaseModel],
    tag: str
) -> APIRouter:
    """
    Build the CRUD and listing routes for one content kind.

    Args:
        prefix: URL prefix, e.g. ``/news``
        slug_path: Segment for slug lookups, e.g. ``n`` gives ``/news/n/{slug}``
        service_class: Service handling the kind
        create_schema: Body of the create route
        update_schema: Body of the edit route
        response_schema: Item representation
        tag: OpenAPI tag
    """
    router = APIRouter(prefix=prefix, tags=[tag])
    kind = service_class.repository_class.entity.kind

    @router.post("/", response_model=ItemResponse[response_schema], status_code=status.HTTP_201_CREATED)
    async def create_item(
        data: create_schema,
        current_user: User = Depends(get_current_user),
        db: AsyncSession = Depends(get_db)
    ):
        item = await service_class(db).create(data, current_user)
        return {"status": "success", "item": response_schema.model_validate(item)}

    @router.get("/", response_model=ListResponse[response_schema])
    @router.get("/filter", response_model=ListResponse[response_schema])
    async def list_items(
        query: ListingQuery = Depends(),
        db: AsyncSession = Depends(get_db)
    ):
        page = await service_class(db).list(query.criteria(), query.sort, query.position(), query.limit)
        return page_response(page, response_schema)

    @router.get(f"/{slug_path}/{{slug}}", response_model=ItemResponse[response_schema])
    async def get_item_by_slug(
        slug: str,
        db: AsyncSession = Depends(get_db)
    ):
        item = await service_class(db).get_by_slug(slug)
        return {"status": "success", "item": response_schema.model_validate(item)}

    @router.get("/{item_id}", response_model=ItemResponse[response_schema])
    async def get_item(
        item_id: int,
        db: AsyncSession = Depends(get_db)
    ):
        item = await service_class(db).get(item_id)
        return {"status": "success", "item": response_schema.model_validate(item)}

    @router.put("/{item_id}", response_model=ItemResponse[response_schema])
    async def edit_item(
        item_id: int,
        data: update_schema,
        current_user: User = Depends(get_current_user),
        db: AsyncSession = Depends(get_db)
    ):
        item = await service_class(db).edit(item_id, data, current_user)
        return {"status": "success", "item": response_schema.model_validate(item)}

    @router.delete("/{item_id}", response_model=MessageResponse)
    async def delete_item(
        item_id: int,
        current_user: User = Depends(get_current_user),
        db: AsyncSession = Depends(get_db)
    ):
        await service_class(db).delete(item_id, current_user)
        return {"status": "success", "message": f"{kind.capitalize()} deleted"}

    return router
