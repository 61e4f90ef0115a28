from typing import List, Optional
from fastapi import APIRouter, Body, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from gelato_ops.api.dependencies import require_permission
from gelato_ops.core.database import get_async_session
from gelato_ops.core.exceptions import NotFoundError
from gelato_ops.schemas.auth.user import AuthUser
from gelato_ops.schemas.common.base import MessageResponse
from gelato_ops.schemas.organization.store_schema import (
    StoreCreate,
    StoreDeliveriesResponse,
    StoreInventoryDelete,
    StoreInventoryResponse,
    StoreInventoryUpsert,
    StoreResponse,
)
from gelato_ops.services.audit.audit_service import AuditService
from gelato_ops.services.delivery.delivery_plan_service import DeliveryPlanService
from gelato_ops.services.organization.store_service import StoreService

router = APIRouter()

# Delivered gelato is counted in tubs unless the item says otherwise
DEFAULT_DELIVERY_UNIT = "tubs"

async def _get_store_or_404(service: StoreService, slug: str):
    store = await service.get_store_by_slug(slug)
    if not store:
        raise NotFoundError("Store not found")
    return store

@router.get("", response_model=List[StoreResponse])
async def get_stores(
    db: AsyncSession = Depends(get_async_session),
    current_user: AuthUser = Depends(require_permission("stores", "read")),
):
    """Active stores in delivery priority order"""
    service = StoreService(db)
    return await service.get_stores()

@router.post("", response_model=StoreResponse, status_code=status.HTTP_201_CREATED)
async def create_store(
    store_data: StoreCreate,
    db: AsyncSession = Depends(get_async_session),
    current_user: AuthUser = Depends(require_permission("stores", "create")),
):
    service = StoreService(db)
    return await service.create_store(store_data, current_user.id)

@router.get("/{slug}/inventory", response_model=List[StoreInventoryResponse])
async def get_store_inventory(
    slug: str,
    db: AsyncSession = Depends(get_async_session),
    current_user: AuthUser = Depends(require_permission("stores", "read")),
):
    """Active per-item targets for one store"""
    service = StoreService(db)
    store = await _get_store_or_404(service, slug)
    return await service.get_store_inventory(store.id)

@router.post("/{slug}/inventory", response_model=StoreInventoryResponse)
async def upsert_store_inventory(
    slug: str,
    target_data: StoreInventoryUpsert,
    request: Request,
    db: AsyncSession = Depends(get_async_session),
    current_user: AuthUser = Depends(require_permission("stores", "manage_inventory")),
):
    """Create or replace the store's target for an item"""
    service = StoreService(db)
    store = await _get_store_or_404(service, slug)
    target = await service.upsert_store_inventory(store, target_data)
    await AuditService(db).log(
        action="upsert",
        resource="store_inventory",
        resource_id=store.id,
        user=current_user,
        details={
            "item_id": target_data.item_id,
            "target_quantity": float(target_data.target_quantity) if target_data.target_quantity is not None else None,
        },
        request=request,
    )
    return target

@router.delete("/{slug}/inventory", response_model=MessageResponse)
async def delete_store_inventory(
    slug: str,
    request: Request,
    target_data: StoreInventoryDelete = Body(...),
    db: AsyncSession = Depends(get_async_session),
    current_user: AuthUser = Depends(require_permission("stores", "manage_inventory")),
):
    service = StoreService(db)
    store = await _get_store_or_404(service, slug)
    removed = await service.deactivate_store_inventory(store, target_data.item_id)
    await AuditService(db).log(
        action="deactivate",
        resource="store_inventory",
        resource_id=store.id,
        user=current_user,
        details={"item_id": target_data.item_id, "rows": removed},
        request=request,
    )
    return {"message": "Store inventory target removed"}

@router.get("/{slug}/deliveries", response_model=StoreDeliveriesResponse)
async def get_store_deliveries(
    slug: str,
    category: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_async_session),
    current_user: AuthUser = Depends(require_permission("deliveries", "read")),
):
    """Confirmed and sent deliveries for a store, optionally narrowed to one item category"""
    store = await _get_store_or_404(StoreService(db), slug)
    plans = await DeliveryPlanService(db).get_store_deliveries(store.id)

    deliveries = []
    for plan in plans:
        lines = [
            line for line in plan.items
            if category is None or (line.item.category is not None and line.item.category.name == category)
        ]
        deliveries.append({
            "id": plan.id,
            "date": plan.date,
            "status": plan.status,
            "items": [
                {
                    "id": line.item.id,
                    "name": line.item.name,
                    "quantity": line.quantity,
                    "unit": line.item.unit or DEFAULT_DELIVERY_UNIT,
                }
                for line in lines
            ],
        })
    return {"store": store, "deliveries": deliveries}
