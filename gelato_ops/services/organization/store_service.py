import logging
from typing import Dict, List, Optional
from sqlalchemy import select, and_, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from gelato_ops.core.config import settings
from gelato_ops.core.exceptions import ConflictError, NotFoundError
from gelato_ops.models.inventory.item import Item
from gelato_ops.models.organization.store import Store
from gelato_ops.models.organization.store_inventory import StoreInventory
from gelato_ops.schemas.organization.store_schema import StoreCreate, StoreInventoryUpsert

logger = logging.getLogger(__name__)

class StoreService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_hub_store(self) -> Optional[Store]:
        """The factory location whose counts anchor the inventory baseline"""
        result = await self.db.execute(
            select(Store).where(Store.slug == settings.HUB_STORE_SLUG)
        )
        return result.scalar_one_or_none()

    async def get_store_by_slug(self, slug: str) -> Optional[Store]:
        result = await self.db.execute(select(Store).where(Store.slug == slug))
        return result.scalar_one_or_none()

    async def get_stores(self, include_inactive: bool = False) -> List[Store]:
        query = select(Store).order_by(Store.delivery_priority, Store.id)
        if not include_inactive:
            query = query.where(Store.is_active == True)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_delivery_locations(self) -> List[Store]:
        """
        Active non-hub stores in the order received stock is shared out:
        delivery_priority ascending, then id.
        """
        result = await self.db.execute(
            select(Store)
            .where(
                and_(
                    Store.is_active == True,
                    Store.slug != settings.HUB_STORE_SLUG,
                )
            )
            .order_by(Store.delivery_priority, Store.id)
        )
        return list(result.scalars().all())

    async def create_store(self, store_data: StoreCreate, current_user_id: Optional[str] = None) -> Store:
        existing = await self.get_store_by_slug(store_data.slug)
        if existing:
            raise ConflictError(f"Store with slug '{store_data.slug}' already exists")

        store = Store(
            name=store_data.name,
            slug=store_data.slug,
            kind=store_data.kind.value,
            address=store_data.address,
            phone=store_data.phone,
            delivery_priority=store_data.delivery_priority,
        )
        self.db.add(store)
        await self.db.commit()
        await self.db.refresh(store)
        logger.info(f"Store created: {store.slug} by user {current_user_id}")
        return store

    async def get_store_inventory(self, store_id: int) -> List[StoreInventory]:
        result = await self.db.execute(
            select(StoreInventory)
            .options(selectinload(StoreInventory.item))
            .where(
                and_(
                    StoreInventory.store_id == store_id,
                    StoreInventory.is_active == True,
                )
            )
            .order_by(StoreInventory.item_id)
        )
        return list(result.scalars().all())

    async def upsert_store_inventory(self, store: Store, data: StoreInventoryUpsert) -> StoreInventory:
        item = await self.db.execute(select(Item.id).where(Item.id == data.item_id))
        if item.scalar_one_or_none() is None:
            raise NotFoundError("Item not found")

        result = await self.db.execute(
            select(StoreInventory).where(
                and_(
                    StoreInventory.store_id == store.id,
                    StoreInventory.item_id == data.item_id,
                )
            )
        )
        target = result.scalar_one_or_none()
        if target is None:
            target = StoreInventory(store_id=store.id, item_id=data.item_id)
            self.db.add(target)

        target.target_quantity = data.target_quantity
        target.target_text = data.target_text
        target.unit = data.unit
        target.is_active = True

        await self.db.commit()
        result = await self.db.execute(
            select(StoreInventory)
            .options(selectinload(StoreInventory.item))
            .where(StoreInventory.id == target.id)
        )
        return result.scalar_one()

    async def deactivate_store_inventory(self, store: Store, item_id: int) -> int:
        """Soft delete; returns how many target rows were switched off"""
        result = await self.db.execute(
            select(StoreInventory).where(
                and_(
                    StoreInventory.store_id == store.id,
                    StoreInventory.item_id == item_id,
                    StoreInventory.is_active == True,
                )
            )
        )
        targets = result.scalars().all()
        for target in targets:
            target.is_active = False
        await self.db.commit()
        return len(targets)

    async def get_targets_by_store(self, store_ids: List[int]) -> Dict[int, Dict[int, object]]:
        """store id -> item id -> target quantity for active targets"""
        if not store_ids:
            return {}
        result = await self.db.execute(
            select(StoreInventory).where(
                and_(
                    StoreInventory.store_id.in_(store_ids),
                    StoreInventory.is_active == True,
                    StoreInventory.target_quantity.isnot(None),
                )
            )
        )
        targets: Dict[int, Dict[int, object]] = {store_id: {} for store_id in store_ids}
        for row in result.scalars().all():
            targets[row.store_id][row.item_id] = row.target_quantity
        return targets

    async def get_target_totals(self) -> Dict[int, object]:
        """Sum of active targets per item across every store"""
        result = await self.db.execute(
            select(StoreInventory.item_id, func.sum(StoreInventory.target_quantity))
            .where(
                and_(
                    StoreInventory.is_active == True,
                    StoreInventory.target_quantity.isnot(None),
                )
            )
            .group_by(StoreInventory.item_id)
        )
        return {item_id: total for item_id, total in result.all()}
