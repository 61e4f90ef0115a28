import logging
from datetime import date, datetime, time
from typing import List, Optional
from sqlalchemy import select, update, and_, desc
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from gelato_ops.core.config import settings
from gelato_ops.core.exceptions import NotFoundError, ValidationError
from gelato_ops.models.delivery.delivery_item import DeliveryItem
from gelato_ops.models.delivery.delivery_plan import DeliveryPlan
from gelato_ops.models.delivery.delivery_plan_customer import DeliveryPlanCustomer
from gelato_ops.models.inventory.item import Item
from gelato_ops.models.organization.store import Store
from gelato_ops.models.shared.enums import DeliveryPlanStatus
from gelato_ops.schemas.delivery.delivery_plan_schema import DeliveryPlanCreate
from gelato_ops.services.delivery.customer_service import CustomerService
from gelato_ops.services.inventory.item_service import ItemService

logger = logging.getLogger(__name__)

# Plans a store can expect to receive
STORE_DELIVERY_STATUSES = (DeliveryPlanStatus.CONFIRMED, DeliveryPlanStatus.SENT)

class DeliveryPlanService:
    def __init__(self, db: AsyncSession):
        self.db = db

    def _with_relations(self, query):
        return query.options(
            selectinload(DeliveryPlan.store),
            selectinload(DeliveryPlan.items).selectinload(DeliveryItem.item),
            selectinload(DeliveryPlan.customers).selectinload(DeliveryPlanCustomer.customer),
        )

    async def get_plan_by_id(self, plan_id: int) -> Optional[DeliveryPlan]:
        result = await self.db.execute(
            self._with_relations(select(DeliveryPlan)).where(DeliveryPlan.id == plan_id)
        )
        return result.scalar_one_or_none()

    async def get_plans(
        self,
        status: Optional[DeliveryPlanStatus] = None,
        on_date: Optional[date] = None,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
        store_id: Optional[int] = None,
    ) -> List[DeliveryPlan]:
        conditions = []
        if status:
            conditions.append(DeliveryPlan.status == status.value)
        if on_date:
            conditions.append(DeliveryPlan.date >= datetime.combine(on_date, time.min))
            conditions.append(DeliveryPlan.date <= datetime.combine(on_date, time.max))
        else:
            if from_date:
                conditions.append(DeliveryPlan.date >= datetime.combine(from_date, time.min))
            if to_date:
                conditions.append(DeliveryPlan.date <= datetime.combine(to_date, time.max))
        if store_id:
            conditions.append(DeliveryPlan.store_id == store_id)

        query = self._with_relations(select(DeliveryPlan)).order_by(desc(DeliveryPlan.date), desc(DeliveryPlan.id))
        if conditions:
            query = query.where(and_(*conditions))
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_store_deliveries(self, store_id: int, limit: Optional[int] = None) -> List[DeliveryPlan]:
        """Confirmed and sent plans for one store, newest first, lines with item and category"""
        result = await self.db.execute(
            select(DeliveryPlan)
            .options(selectinload(DeliveryPlan.items).selectinload(DeliveryItem.item).selectinload(Item.category))
            .where(
                and_(
                    DeliveryPlan.store_id == store_id,
                    DeliveryPlan.status.in_([s.value for s in STORE_DELIVERY_STATUSES]),
                )
            )
            .order_by(desc(DeliveryPlan.date), desc(DeliveryPlan.id))
            .limit(limit or settings.STORE_DELIVERIES_LIMIT)
        )
        return list(result.scalars().all())

    async def create_plan(self, plan_data: DeliveryPlanCreate) -> DeliveryPlan:
        if plan_data.store_id is not None:
            store = await self.db.execute(select(Store.id).where(Store.id == plan_data.store_id))
            if store.scalar_one_or_none() is None:
                raise NotFoundError("Store not found")

        customer_ids = list(dict.fromkeys(plan_data.customer_ids))
        known_customers = await CustomerService(self.db).get_existing_customer_ids(customer_ids)
        if len(known_customers) != len(customer_ids):
            raise ValidationError("One or more customers do not exist")

        item_ids = [line.item_id for line in plan_data.items]
        if len(set(item_ids)) != len(item_ids):
            raise ValidationError("Each item may appear only once per delivery plan")
        known_items = await ItemService(self.db).get_existing_item_ids(item_ids)
        if len(known_items) != len(set(item_ids)):
            raise ValidationError("One or more items do not exist")

        try:
            plan = DeliveryPlan(
                date=plan_data.date.replace(tzinfo=None),
                status=plan_data.status.value,
                store_id=plan_data.store_id,
                notes=plan_data.notes,
                customers=[DeliveryPlanCustomer(customer_id=cid) for cid in customer_ids],
                items=[
                    DeliveryItem(item_id=line.item_id, quantity=line.quantity, note=line.note)
                    for line in plan_data.items
                ],
            )
            self.db.add(plan)
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Error creating delivery plan: {str(e)}")
            raise

        return await self.get_plan_by_id(plan.id)

    async def update_status(self, plan_id: int, new_status: DeliveryPlanStatus) -> DeliveryPlan:
        plan = await self.get_plan_by_id(plan_id)
        if not plan:
            raise NotFoundError("Delivery plan not found")

        plan.status = new_status.value
        await self.db.commit()
        return await self.get_plan_by_id(plan_id)

    async def find_or_create_draft(self, store_id: int, plan_date: datetime) -> DeliveryPlan:
        """The store's DRAFT plan for ``plan_date``, created when missing. Not committed."""
        result = await self.db.execute(
            select(DeliveryPlan)
            .where(
                and_(
                    DeliveryPlan.store_id == store_id,
                    DeliveryPlan.date == plan_date,
                    DeliveryPlan.status == DeliveryPlanStatus.DRAFT.value,
                )
            )
            .order_by(DeliveryPlan.id)
            .limit(1)
        )
        plan = result.scalar_one_or_none()
        if plan is None:
            plan = DeliveryPlan(
                store_id=store_id,
                date=plan_date,
                status=DeliveryPlanStatus.DRAFT.value,
                notes="Auto-generated from received stock",
            )
            self.db.add(plan)
            await self.db.flush()
        return plan

    async def add_quantity(self, plan_id: int, item_id: int, quantity) -> None:
        """
        Add ``quantity`` to the plan's line for ``item_id``.

        The increment happens in the database so concurrent additions are not
        lost; a line is inserted only when none matched.
        """
        result = await self.db.execute(
            update(DeliveryItem)
            .where(
                and_(
                    DeliveryItem.delivery_plan_id == plan_id,
                    DeliveryItem.item_id == item_id,
                )
            )
            .values(quantity=DeliveryItem.quantity + quantity)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            self.db.add(DeliveryItem(delivery_plan_id=plan_id, item_id=item_id, quantity=quantity))
            await self.db.flush()
