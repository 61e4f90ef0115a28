from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from gelato_ops.api.dependencies import require_permission
from gelato_ops.core.database import get_async_session
from gelato_ops.models.shared.enums import BaselineMode, ExportFormat
from gelato_ops.schemas.auth.user import AuthUser
from gelato_ops.schemas.inventory.dashboard_schema import (
    InventoryDashboardResponse,
    ItemHistoryResponse,
    MasterBaselineResponse,
)
from gelato_ops.services.inventory.baseline_selector import select_baseline
from gelato_ops.services.inventory.inventory_dashboard_service import (
    EXPORT_COLUMNS,
    InventoryDashboardService,
)
from gelato_ops.services.inventory.master_baseline_service import MasterBaselineService
from gelato_ops.services.inventory.stocktake_service import StocktakeService
from gelato_ops.utils.data_exporter import DataExportService

router = APIRouter()

NUMERIC_EXPORT_COLUMNS = [
    "Baseline", "Incoming", "Outgoing", "Production", "Net Movement", "Derived Current",
]

@router.get("/dashboard", response_model=InventoryDashboardResponse)
async def get_inventory_dashboard(
    from_date: Optional[date] = Query(None, alias="from"),
    to_date: Optional[date] = Query(None, alias="to"),
    baseline_mode: BaselineMode = Query(BaselineMode.AUTO, alias="baselineMode"),
    db: AsyncSession = Depends(get_async_session),
    current_user: AuthUser = Depends(require_permission("stocktakes", "read")),
):
    """Derived stock per item: baseline count plus movements inside the window"""
    service = InventoryDashboardService(db)
    return await service.get_dashboard(from_date, to_date, baseline_mode, current_user)

@router.get("/export")
async def export_inventory(
    from_date: Optional[date] = Query(None, alias="from"),
    to_date: Optional[date] = Query(None, alias="to"),
    baseline_mode: BaselineMode = Query(BaselineMode.AUTO, alias="baselineMode"),
    format: ExportFormat = Query(ExportFormat.CSV),
    db: AsyncSession = Depends(get_async_session),
    current_user: AuthUser = Depends(require_permission("stocktakes", "read")),
):
    service = InventoryDashboardService(db)
    rows = await service.get_export_rows(from_date, to_date, baseline_mode, current_user)

    filename = f"inventory_{rows[0]['From'] if rows else date.today().isoformat()}"
    exporter = DataExportService()
    if format == ExportFormat.XLSX:
        return exporter.export_to_excel(rows, EXPORT_COLUMNS, filename, sum_columns=NUMERIC_EXPORT_COLUMNS)
    return exporter.export_to_csv(rows, EXPORT_COLUMNS, filename)

@router.get("/item-history", response_model=ItemHistoryResponse)
async def get_item_history(
    item_id: int = Query(..., alias="itemId"),
    from_date: Optional[date] = Query(None, alias="from"),
    to_date: Optional[date] = Query(None, alias="to"),
    db: AsyncSession = Depends(get_async_session),
    current_user: AuthUser = Depends(require_permission("stocktakes", "read")),
):
    """Per-day incoming, outgoing and production for one item"""
    service = InventoryDashboardService(db)
    return await service.get_item_history(item_id, from_date, to_date)

@router.post("/master-baseline", response_model=MasterBaselineResponse)
async def ensure_master_baseline(
    db: AsyncSession = Depends(get_async_session),
    current_user: AuthUser = Depends(require_permission("stocktakes", "create")),
):
    """Seed the hub's master stocktake from the latest counts, unless one exists"""
    recent = await StocktakeService(db).get_recent_stocktakes()
    values = select_baseline(BaselineMode.LATEST, None, recent).quantities

    outcome = await MasterBaselineService(db).ensure_master_baseline(values, current_user)
    return MasterBaselineResponse(
        result=outcome.result,
        snapshot_id=getattr(outcome, "snapshot_id", None),
        reason=getattr(outcome, "reason", None),
    )
