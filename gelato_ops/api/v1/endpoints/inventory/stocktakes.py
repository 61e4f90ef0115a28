from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from gelato_ops.api.dependencies import require_permission
from gelato_ops.core.config import settings
from gelato_ops.core.database import get_async_session
from gelato_ops.core.exceptions import NotFoundError
from gelato_ops.models.shared.enums import ExportFormat
from gelato_ops.schemas.auth.user import AuthUser
from gelato_ops.schemas.inventory.stocktake_schema import (
    StocktakeCountResponse,
    StocktakeCreate,
    StocktakeListResponse,
    StocktakeResponse,
)
from gelato_ops.services.audit.audit_service import AuditService
from gelato_ops.services.inventory.stocktake_service import StocktakeService
from gelato_ops.utils.data_exporter import DataExportService

router = APIRouter()

@router.get("", response_model=StocktakeListResponse)
async def get_stocktakes(
    after: Optional[datetime] = Query(None),
    before: Optional[datetime] = Query(None),
    store_id: Optional[int] = Query(None, alias="storeId"),
    db: AsyncSession = Depends(get_async_session),
    current_user: AuthUser = Depends(require_permission("stocktakes", "read")),
):
    """Newest stocktakes first, summarised by line count and total quantity"""
    service = StocktakeService(db)
    stocktakes = await service.get_stocktakes(
        after=after.replace(tzinfo=None) if after else None,
        before=before.replace(tzinfo=None) if before else None,
        store_id=store_id,
    )
    return {
        "stocktakes": [
            {
                "id": stocktake.id,
                "date": stocktake.date,
                "is_master": stocktake.is_master,
                "submitted_at": stocktake.submitted_at,
                "store": stocktake.store,
                "item_count": len(stocktake.items),
                "total_quantity": sum((line.quantity or 0 for line in stocktake.items), 0),
            }
            for stocktake in stocktakes
        ]
    }

@router.get("/count", response_model=StocktakeCountResponse)
async def count_stocktakes(
    db: AsyncSession = Depends(get_async_session),
    current_user: AuthUser = Depends(require_permission("stocktakes", "read")),
):
    service = StocktakeService(db)
    return {"count": await service.count_stocktakes()}

STOCKTAKE_EXPORT_COLUMNS = [
    "Store", "Submitted At", "Date", "Item", "Category", "Quantity", "Unit", "Notes", "Stocktake ID",
]

@router.get("/export")
async def export_stocktakes(
    after: Optional[datetime] = Query(None),
    before: Optional[datetime] = Query(None),
    store_id: Optional[int] = Query(None, alias="storeId"),
    format: ExportFormat = Query(ExportFormat.XLSX),
    db: AsyncSession = Depends(get_async_session),
    current_user: AuthUser = Depends(require_permission("stocktakes", "read")),
):
    """One row per stocktake line, same filters as the list"""
    service = StocktakeService(db)
    stocktakes = await service.get_stocktakes(
        after=after.replace(tzinfo=None) if after else None,
        before=before.replace(tzinfo=None) if before else None,
        store_id=store_id,
        limit=settings.STOCKTAKE_EXPORT_LIMIT,
        with_items=True,
    )
    rows = [
        dict(zip(STOCKTAKE_EXPORT_COLUMNS, [
            stocktake.store.name,
            stocktake.submitted_at.isoformat(),
            stocktake.date.date().isoformat(),
            line.item.name,
            line.item.category.name if line.item.category else "",
            float(line.quantity) if line.quantity is not None else None,
            line.item.unit or "",
            stocktake.notes or "",
            stocktake.id,
        ]))
        for stocktake in stocktakes
        for line in stocktake.items
    ]

    filename = f"stocktakes_{datetime.now().strftime('%Y%m%d_%H%M%S')}"
    exporter = DataExportService()
    if format == ExportFormat.CSV:
        return exporter.export_to_csv(rows, STOCKTAKE_EXPORT_COLUMNS, filename)
    return exporter.export_to_excel(rows, STOCKTAKE_EXPORT_COLUMNS, filename, sheet_name="Stocktakes")

@router.get("/{stocktake_id}", response_model=StocktakeResponse)
async def get_stocktake(
    stocktake_id: int,
    db: AsyncSession = Depends(get_async_session),
    current_user: AuthUser = Depends(require_permission("stocktakes", "read")),
):
    service = StocktakeService(db)
    stocktake = await service.get_stocktake_by_id(stocktake_id)
    if not stocktake:
        raise NotFoundError("Stocktake not found")
    return stocktake

@router.post("", response_model=StocktakeResponse, status_code=status.HTTP_201_CREATED)
async def create_stocktake(
    stocktake_data: StocktakeCreate,
    request: Request,
    db: AsyncSession = Depends(get_async_session),
    current_user: AuthUser = Depends(require_permission("stocktakes", "create")),
):
    """Record a stock count for one store"""
    service = StocktakeService(db)
    stocktake = await service.create_stocktake(stocktake_data, current_user)
    await AuditService(db).log(
        action="create",
        resource="stocktakes",
        resource_id=stocktake.id,
        user=current_user,
        details={"store": stocktake_data.store_slug, "items": len(stocktake_data.items), "is_master": stocktake.is_master},
        request=request,
    )
    return stocktake
