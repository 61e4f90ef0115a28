import logging
from datetime import date
from typing import Any, Dict, List, Optional, Tuple
from sqlalchemy import select, and_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from gelato_ops.core.config import settings
from gelato_ops.core.exceptions import NotFoundError, ValidationError
from gelato_ops.models.delivery.delivery_plan import DeliveryPlan
from gelato_ops.models.production.production import Production
from gelato_ops.models.purchase.order import Order
from gelato_ops.models.shared.enums import (
    BaselineMode,
    INCOMING_ORDER_STATUSES,
    OUTGOING_DELIVERY_STATUSES,
)
from gelato_ops.schemas.auth.user import AuthUser
from gelato_ops.services.inventory.baseline_selector import BaselineResult, select_baseline
from gelato_ops.services.inventory.derivation import DerivedInventoryRow, derive_rows, summarize
from gelato_ops.services.inventory.item_service import ItemService
from gelato_ops.services.inventory.master_baseline_service import MasterBaselineService
from gelato_ops.services.inventory.movement_aggregator import (
    DateRange,
    aggregate_daily,
    aggregate_movements,
    is_partial_window,
)
from gelato_ops.services.inventory.stocktake_service import StocktakeService
from gelato_ops.services.organization.store_service import StoreService

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = [
    "Item", "Category", "Baseline", "Incoming", "Outgoing", "Production",
    "Net Movement", "Derived Current", "Unit", "Target", "Status", "From", "To",
]


def resolve_date_range(start: Optional[date], end: Optional[date]) -> DateRange:
    """Default to today; ``to`` defaults to ``from``"""
    start = start or date.today()
    try:
        return DateRange.from_dates(start, end or start)
    except ValueError as e:
        raise ValidationError(str(e))


class InventoryDashboardService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get_incoming_orders(self, date_range: DateRange) -> List[Order]:
        result = await self.db.execute(
            select(Order)
            .options(selectinload(Order.items))
            .where(
                and_(
                    Order.status.in_([s.value for s in INCOMING_ORDER_STATUSES]),
                    Order.expected_date >= date_range.start,
                    Order.expected_date <= date_range.end,
                )
            )
        )
        return list(result.scalars().all())

    async def _get_outgoing_plans(self, date_range: DateRange) -> List[DeliveryPlan]:
        result = await self.db.execute(
            select(DeliveryPlan)
            .options(selectinload(DeliveryPlan.items))
            .where(
                and_(
                    DeliveryPlan.status.in_([s.value for s in OUTGOING_DELIVERY_STATUSES]),
                    DeliveryPlan.date >= date_range.start,
                    DeliveryPlan.date <= date_range.end,
                )
            )
        )
        return list(result.scalars().all())

    async def _get_productions(self, date_range: DateRange) -> List[Production]:
        result = await self.db.execute(
            select(Production)
            .options(selectinload(Production.ingredients))
            .where(
                and_(
                    Production.produced_at >= date_range.start,
                    Production.produced_at <= date_range.end,
                )
            )
        )
        return list(result.scalars().all())

    async def _load_movement_sources(self, date_range: DateRange) -> Tuple[list, list, list]:
        # One session per request: these run one after another
        orders = await self._get_incoming_orders(date_range)
        plans = await self._get_outgoing_plans(date_range)
        productions = await self._get_productions(date_range)
        return orders, plans, productions

    async def select_baseline(self, mode: BaselineMode) -> BaselineResult:
        master = None
        if mode != BaselineMode.LATEST:
            hub = await StoreService(self.db).get_hub_store()
            if hub is not None:
                master = await StocktakeService(self.db).get_latest_master(hub.id)

        recent = []
        if master is None and mode != BaselineMode.MASTER:
            recent = await StocktakeService(self.db).get_recent_stocktakes(settings.SNAPSHOT_SCAN_LIMIT)

        return select_baseline(mode, master, recent)

    async def derive_inventory(
        self,
        date_range: DateRange,
        mode: BaselineMode,
    ) -> Tuple[List[DerivedInventoryRow], BaselineResult]:
        items = await ItemService(self.db).get_active_items()
        baseline = await self.select_baseline(mode)
        orders, plans, productions = await self._load_movement_sources(date_range)
        movements = aggregate_movements(orders, plans, productions, date_range)
        rows = derive_rows(items, baseline, movements, settings.DEFAULT_TARGET_STOCK)
        return rows, baseline

    async def _repair_master(self, baseline: BaselineResult, user: Optional[AuthUser]) -> Optional[str]:
        if not baseline.needs_master:
            return None
        outcome = await MasterBaselineService(self.db).ensure_master_baseline(baseline.quantities, user)
        if outcome.result == "failed":
            logger.warning(f"Automatic master baseline failed: {outcome.reason}")
        return outcome.result

    async def get_dashboard(
        self,
        start: Optional[date],
        end: Optional[date],
        mode: BaselineMode = BaselineMode.AUTO,
        user: Optional[AuthUser] = None,
    ) -> Dict[str, Any]:
        date_range = resolve_date_range(start, end)
        rows, baseline = await self.derive_inventory(date_range, mode)
        # Rows are fully built before the repair step touches the session
        repair = await self._repair_master(baseline, user)

        summary = summarize(rows)
        net = summary["incoming_total"] - summary["outgoing_total"] + summary["production_total"]
        return {
            "inventory": [
                {
                    "id": row.item_id,
                    "name": row.name,
                    "category": row.category,
                    "unit": row.unit,
                    "target_stock": row.target_stock,
                    "baseline_quantity": row.baseline,
                    "incoming": row.incoming,
                    "outgoing": row.outgoing,
                    "production": row.production,
                    "net_movement": row.net_movement,
                    "derived_current": row.derived_current,
                    "status": row.status,
                }
                for row in rows
            ],
            "summary": summary,
            "baseline": baseline.source,
            "baseline_date": baseline.snapshot_date,
            "baseline_repair": repair,
            "movement_summary": {
                "incoming": summary["incoming_total"],
                "outgoing": summary["outgoing_total"],
                "production": summary["production_total"],
                "net": net,
            },
            "partial_window": is_partial_window(baseline.snapshot_date, date_range),
            "from_date": date_range.start.date(),
            "to_date": date_range.end.date(),
        }

    async def get_export_rows(
        self,
        start: Optional[date],
        end: Optional[date],
        mode: BaselineMode = BaselineMode.AUTO,
        user: Optional[AuthUser] = None,
    ) -> List[Dict[str, Any]]:
        """Same rows as the dashboard, keyed by export column"""
        date_range = resolve_date_range(start, end)
        rows, baseline = await self.derive_inventory(date_range, mode)
        await self._repair_master(baseline, user)

        from_text = date_range.start.date().isoformat()
        to_text = date_range.end.date().isoformat()
        return [
            dict(zip(EXPORT_COLUMNS, [
                row.name,
                row.category or "",
                float(row.baseline),
                float(row.incoming),
                float(row.outgoing),
                float(row.production),
                float(row.net_movement),
                float(row.derived_current),
                row.unit,
                float(row.target_stock),
                row.status.value,
                from_text,
                to_text,
            ]))
            for row in rows
        ]

    async def get_item_history(
        self,
        item_id: int,
        start: Optional[date],
        end: Optional[date],
    ) -> Dict[str, Any]:
        date_range = resolve_date_range(start, end)
        item = await ItemService(self.db).get_item_by_id(item_id)
        if not item:
            raise NotFoundError("Item not found")

        orders, plans, productions = await self._load_movement_sources(date_range)
        days = aggregate_daily(orders, plans, productions, date_range, item_id)
        return {
            "item_id": item_id,
            "from_date": date_range.start.date(),
            "to_date": date_range.end.date(),
            "days": [
                {
                    "date": day.date,
                    "incoming": day.incoming,
                    "outgoing": day.outgoing,
                    "production": day.production,
                    "net": day.net,
                }
                for day in days
            ],
        }
