from datetime import date, datetime
from typing import List, Optional
from pydantic import Field
from gelato_ops.models.shared.enums import BaselineSource, StockStatus
from gelato_ops.schemas.common.base import CamelModel


class InventoryRowResponse(CamelModel):
    id: int
    name: str
    category: Optional[str] = None
    unit: str
    target_stock: float
    baseline_quantity: float
    incoming: float
    outgoing: float
    production: float
    net_movement: float
    derived_current: float
    status: StockStatus


class InventorySummary(CamelModel):
    total_items: int
    low_stock_items: int
    out_of_stock_items: int
    high_stock_items: int
    incoming_total: float
    outgoing_total: float
    production_total: float


class MovementSummary(CamelModel):
    incoming: float
    outgoing: float
    production: float
    net: float


class InventoryDashboardResponse(CamelModel):
    inventory: List[InventoryRowResponse]
    summary: InventorySummary
    baseline: BaselineSource
    baseline_date: Optional[datetime] = None
    baseline_repair: Optional[str] = None
    movement_summary: MovementSummary
    partial_window: bool
    from_date: date = Field(alias="from")
    to_date: date = Field(alias="to")


class ItemHistoryDay(CamelModel):
    date: date
    incoming: float
    outgoing: float
    production: float
    net: float


class ItemHistoryResponse(CamelModel):
    item_id: int
    from_date: date = Field(alias="from")
    to_date: date = Field(alias="to")
    days: List[ItemHistoryDay]


class MasterBaselineResponse(CamelModel):
    result: str
    snapshot_id: Optional[int] = None
    reason: Optional[str] = None
