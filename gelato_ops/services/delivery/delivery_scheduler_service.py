"""
Turns a received purchase order into DRAFT delivery plans for stores that
are below target.
"""
import logging
from datetime import date, datetime, time, timedelta
from typing import Dict, Iterable, List, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from gelato_ops.core.config import settings
from gelato_ops.services.delivery.deficit_allocator import (
    Allocation,
    LocationStock,
    allocate_received_stock,
    group_by_store,
)
from gelato_ops.services.delivery.delivery_plan_service import DeliveryPlanService
from gelato_ops.services.inventory.baseline_selector import latest_counts_by_store
from gelato_ops.services.inventory.stocktake_service import StocktakeService
from gelato_ops.services.organization.store_service import StoreService

logger = logging.getLogger(__name__)


def planned_delivery_date(today: date = None) -> datetime:
    today = today or date.today()
    return datetime.combine(today + timedelta(days=settings.DELIVERY_LEAD_DAYS), time.min)


class DeliverySchedulerService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_location_stock(self) -> List[LocationStock]:
        """Non-hub stores in allocation order with their targets and latest counts"""
        stores = await StoreService(self.db).get_delivery_locations()
        store_ids = [store.id for store in stores]
        targets = await StoreService(self.db).get_targets_by_store(store_ids)
        snapshots = await StocktakeService(self.db).get_recent_stocktakes(
            settings.SNAPSHOT_SCAN_LIMIT, store_ids=store_ids
        )
        current = latest_counts_by_store(snapshots)
        return [
            LocationStock(
                store_id=store_id,
                targets=targets.get(store_id, {}),
                current=current.get(store_id, {}),
            )
            for store_id in store_ids
        ]

    async def schedule_received_stock(
        self,
        received: Iterable[Tuple[int, object]],
    ) -> Dict[int, Dict[int, object]]:
        """
        Allocate received quantities and add them to each store's DRAFT plan.

        Commits on success and returns store id -> item id -> quantity added.
        Raises on failure; the caller decides how to report it.
        """
        received = list(received)
        locations = await self.get_location_stock()
        allocations: List[Allocation] = allocate_received_stock(received, locations)
        per_store = group_by_store(allocations)
        if not per_store:
            logger.info("Received stock left at the hub: no store below target")
            return {}

        plan_date = planned_delivery_date()
        plans = DeliveryPlanService(self.db)
        for store_id, quantities in per_store.items():
            plan = await plans.find_or_create_draft(store_id, plan_date)
            for item_id, quantity in quantities.items():
                await plans.add_quantity(plan.id, item_id, quantity)

        await self.db.commit()
        logger.info(
            f"Delivery allocation planned for {len(per_store)} stores "
            f"({len(allocations)} lines) on {plan_date.date().isoformat()}"
        )
        return per_store
