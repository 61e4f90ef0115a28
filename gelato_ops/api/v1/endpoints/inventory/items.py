from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from gelato_ops.api.dependencies import require_permission
from gelato_ops.core.database import get_async_session
from gelato_ops.schemas.auth.user import AuthUser
from gelato_ops.schemas.inventory.item_schema import (
    CategoryCreate,
    CategoryResponse,
    ItemCreate,
    ItemResponse,
)
from gelato_ops.services.inventory.item_service import ItemService

router = APIRouter()

@router.get("", response_model=List[ItemResponse])
async def get_items(
    db: AsyncSession = Depends(get_async_session),
    current_user: AuthUser = Depends(require_permission("items", "read")),
):
    """Active items in stock-sheet order"""
    service = ItemService(db)
    return await service.get_active_items()

@router.post("", response_model=ItemResponse, status_code=status.HTTP_201_CREATED)
async def create_item(
    item_data: ItemCreate,
    db: AsyncSession = Depends(get_async_session),
    current_user: AuthUser = Depends(require_permission("items", "create")),
):
    service = ItemService(db)
    return await service.create_item(item_data)

@router.get("/categories", response_model=List[CategoryResponse])
async def get_categories(
    db: AsyncSession = Depends(get_async_session),
    current_user: AuthUser = Depends(require_permission("items", "read")),
):
    service = ItemService(db)
    return await service.get_categories()

@router.post("/categories", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    category_data: CategoryCreate,
    db: AsyncSession = Depends(get_async_session),
    current_user: AuthUser = Depends(require_permission("items", "create")),
):
    service = ItemService(db)
    return await service.create_category(category_data)
