import logging
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional, Tuple
from fastapi import Request
from sqlalchemy import select, desc
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from gelato_ops.core.config import settings
from gelato_ops.core.exceptions import NotFoundError, ValidationError
from gelato_ops.models.purchase.order import Order
from gelato_ops.models.purchase.order_item import OrderItem
from gelato_ops.models.shared.enums import OrderStatus
from gelato_ops.schemas.auth.user import AuthUser
from gelato_ops.schemas.purchase.order_schema import OrderCreate, ReceiveOrderRequest
from gelato_ops.services.audit.audit_service import AuditService
from gelato_ops.services.delivery.delivery_scheduler_service import DeliverySchedulerService
from gelato_ops.services.inventory.baseline_selector import latest_counts_by_store
from gelato_ops.services.inventory.item_service import ItemService
from gelato_ops.services.inventory.stocktake_service import StocktakeService
from gelato_ops.services.organization.store_service import StoreService

logger = logging.getLogger(__name__)

class OrderService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_order_by_id(self, order_id: int) -> Optional[Order]:
        result = await self.db.execute(
            select(Order).options(selectinload(Order.items)).where(Order.id == order_id)
        )
        return result.scalar_one_or_none()

    async def get_orders(self, status: Optional[OrderStatus] = None) -> List[Order]:
        query = select(Order).options(selectinload(Order.items)).order_by(desc(Order.order_date), desc(Order.id))
        if status:
            query = query.where(Order.status == status.value)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def create_order(self, order_data: OrderCreate, current_user: AuthUser) -> Order:
        if order_data.status == OrderStatus.RECEIVED:
            raise ValidationError("Orders are received through the receive endpoint")

        item_ids = [line.item_id for line in order_data.items]
        known = await ItemService(self.db).get_existing_item_ids(item_ids)
        if len(known) != len(set(item_ids)):
            raise ValidationError("One or more items do not exist")

        try:
            order = Order(
                status=order_data.status.value,
                supplier_name=order_data.supplier_name,
                order_date=datetime.now(),
                expected_date=order_data.expected_date.replace(tzinfo=None) if order_data.expected_date else None,
                notes=order_data.notes,
                items=[
                    OrderItem(
                        item_id=line.item_id,
                        quantity=line.quantity,
                        unit=line.unit,
                        unit_price=line.unit_price,
                    )
                    for line in order_data.items
                ],
            )
            self.db.add(order)
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Error creating order: {str(e)}")
            raise

        logger.info(f"Order {order.id} created by user {current_user.id}")
        return await self.get_order_by_id(order.id)

    async def update_status(self, order_id: int, new_status: OrderStatus) -> Order:
        order = await self.get_order_by_id(order_id)
        if not order:
            raise NotFoundError("Order not found")
        if new_status == OrderStatus.RECEIVED:
            raise ValidationError("Use the receive endpoint to mark an order as received")
        if order.status == OrderStatus.RECEIVED.value:
            raise ValidationError("Order has already been received")

        order.status = new_status.value
        await self.db.commit()
        return await self.get_order_by_id(order_id)

    async def _resolve_received_lines(
        self,
        order: Order,
        receive_data: ReceiveOrderRequest,
    ) -> List[Tuple[int, Decimal, Optional[OrderItem]]]:
        """(item id, quantity, matching order line) per received entry"""
        lines_by_id = {line.id: line for line in order.items}
        lines_by_item: Dict[int, OrderItem] = {}
        for line in order.items:
            lines_by_item.setdefault(line.item_id, line)

        resolved = []
        for entry in receive_data.received_items:
            if entry.order_item_id is not None:
                line = lines_by_id.get(entry.order_item_id)
                if line is None:
                    raise ValidationError(f"Order line {entry.order_item_id} does not belong to this order")
                resolved.append((line.item_id, entry.received_quantity, line))
            else:
                resolved.append((entry.item_id, entry.received_quantity, lines_by_item.get(entry.item_id)))

        item_ids = {item_id for item_id, _, _ in resolved}
        known = await ItemService(self.db).get_existing_item_ids(list(item_ids))
        if known != item_ids:
            raise ValidationError("One or more received items do not exist")
        return resolved

    async def receive_order(
        self,
        order_id: int,
        receive_data: ReceiveOrderRequest,
        current_user: AuthUser,
        request: Optional[Request] = None,
    ) -> Order:
        """
        Mark an order received and record the stock at the hub.

        The receipt is committed first. Delivery planning for stores below
        target runs afterwards and never fails the receipt.
        """
        order = await self.get_order_by_id(order_id)
        if not order:
            raise NotFoundError("Order not found")
        if order.status == OrderStatus.RECEIVED.value:
            raise ValidationError("Order has already been received")

        hub = await StoreService(self.db).get_hub_store()
        if hub is None:
            raise ValidationError("Hub store not found - please create the factory store first")

        resolved = await self._resolve_received_lines(order, receive_data)
        hub_id = hub.id
        supplier = order.supplier_name or "Unknown Supplier"

        try:
            for _, quantity, line in resolved:
                if line is not None:
                    line.received_quantity = (line.received_quantity or 0) + quantity
            order.status = OrderStatus.RECEIVED.value
            order.received_date = datetime.now()

            await StocktakeService(self.db).add_stocktake(
                store_id=hub_id,
                date=datetime.now(),
                lines=[(item_id, quantity, f"Received from order {order_id}") for item_id, quantity, _ in resolved],
                notes=f"Stock receipt for order {order_id} from {supplier}",
                created_by=current_user.id,
            )
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Error receiving order {order_id}: {str(e)}")
            raise

        logger.info(f"Order {order_id} received into hub store {hub_id} by user {current_user.id}")
        audit = AuditService(self.db)
        await audit.log(
            action="receive",
            resource="orders",
            resource_id=order_id,
            user=current_user,
            details={"items": len(resolved)},
            request=request,
        )

        received = [(item_id, quantity) for item_id, quantity, _ in resolved]
        try:
            planned = await DeliverySchedulerService(self.db).schedule_received_stock(received)
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Delivery allocation failed for order {order_id}: {str(e)}")
            await audit.log(
                action="delivery_allocation_failed",
                resource="orders",
                resource_id=order_id,
                user=current_user,
                details={"error": str(e)},
                request=request,
            )
        else:
            if planned:
                await audit.log(
                    action="delivery_allocation",
                    resource="delivery_plans",
                    resource_id=order_id,
                    user=current_user,
                    details={
                        "order_id": order_id,
                        "stores": {
                            str(store_id): {str(item_id): float(qty) for item_id, qty in items.items()}
                            for store_id, items in planned.items()
                        },
                    },
                    request=request,
                )

        return await self.get_order_by_id(order_id)

    async def create_low_stock_order(self, current_user: AuthUser) -> Optional[Order]:
        """
        Draft an order for every item whose summed store targets exceed the
        summed latest per-store counts. Returns None when nothing is short.
        """
        target_totals = await StoreService(self.db).get_target_totals()
        snapshots = await StocktakeService(self.db).get_recent_stocktakes(settings.SNAPSHOT_SCAN_LIMIT)

        on_hand: Dict[int, object] = {}
        for counts in latest_counts_by_store(snapshots).values():
            for item_id, quantity in counts.items():
                on_hand[item_id] = on_hand.get(item_id, 0) + quantity

        deficits = []
        for item_id, target in sorted(target_totals.items()):
            shortfall = max(target - on_hand.get(item_id, 0), 0)
            if shortfall > 0:
                deficits.append((item_id, shortfall))

        if not deficits:
            return None

        try:
            order = Order(
                status=OrderStatus.DRAFT.value,
                order_date=datetime.now(),
                notes="Generated from store stock deficits",
                items=[
                    OrderItem(item_id=item_id, quantity=shortfall, unit="units")
                    for item_id, shortfall in deficits
                ],
            )
            self.db.add(order)
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Error creating low stock order: {str(e)}")
            raise

        logger.info(f"Low stock order {order.id} drafted with {len(deficits)} items")
        return await self.get_order_by_id(order.id)
