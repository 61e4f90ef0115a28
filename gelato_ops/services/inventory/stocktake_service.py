import logging
from datetime import datetime
from typing import Iterable, List, Optional, Tuple
from sqlalchemy import select, and_, desc, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from gelato_ops.core.config import settings
from gelato_ops.core.exceptions import NotFoundError, ValidationError
from gelato_ops.models.inventory.item import Item
from gelato_ops.models.inventory.stocktake import Stocktake
from gelato_ops.models.inventory.stocktake_item import StocktakeItem
from gelato_ops.schemas.auth.user import AuthUser
from gelato_ops.schemas.inventory.stocktake_schema import StocktakeCreate
from gelato_ops.services.inventory.item_service import ItemService
from gelato_ops.services.organization.store_service import StoreService

logger = logging.getLogger(__name__)

class StocktakeService:
    def __init__(self, db: AsyncSession):
        self.db = db

    def _with_relations(self, query, with_items: bool = False):
        if with_items:
            lines = selectinload(Stocktake.items).selectinload(StocktakeItem.item).selectinload(Item.category)
        else:
            lines = selectinload(Stocktake.items)
        return query.options(selectinload(Stocktake.store), lines)

    async def get_recent_stocktakes(
        self,
        limit: Optional[int] = None,
        store_ids: Optional[List[int]] = None,
    ) -> List[Stocktake]:
        """Newest-first window of stocktakes, optionally restricted to some stores"""
        query = self._with_relations(select(Stocktake)).order_by(desc(Stocktake.date), desc(Stocktake.id))
        if store_ids is not None:
            if not store_ids:
                return []
            query = query.where(Stocktake.store_id.in_(store_ids))
        query = query.limit(limit or settings.SNAPSHOT_SCAN_LIMIT)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_latest_master(self, hub_store_id: int) -> Optional[Stocktake]:
        result = await self.db.execute(
            self._with_relations(select(Stocktake))
            .where(
                and_(
                    Stocktake.store_id == hub_store_id,
                    Stocktake.is_master == True,
                )
            )
            .order_by(desc(Stocktake.date), desc(Stocktake.id))
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def get_stocktake_by_id(self, stocktake_id: int) -> Optional[Stocktake]:
        result = await self.db.execute(
            self._with_relations(select(Stocktake)).where(Stocktake.id == stocktake_id)
        )
        return result.scalar_one_or_none()

    async def get_stocktakes(
        self,
        after: Optional[datetime] = None,
        before: Optional[datetime] = None,
        store_id: Optional[int] = None,
        limit: Optional[int] = None,
        with_items: bool = False,
    ) -> List[Stocktake]:
        """Filtered on submission time, newest submission first"""
        conditions = []
        if after:
            conditions.append(Stocktake.submitted_at >= after)
        if before:
            conditions.append(Stocktake.submitted_at <= before)
        if store_id:
            conditions.append(Stocktake.store_id == store_id)

        query = self._with_relations(select(Stocktake), with_items).order_by(
            desc(Stocktake.submitted_at), desc(Stocktake.id)
        )
        if conditions:
            query = query.where(and_(*conditions))
        result = await self.db.execute(query.limit(limit or settings.STOCKTAKE_LIST_LIMIT))
        return list(result.scalars().all())

    async def get_latest_submitted(self, limit: Optional[int] = None) -> List[Stocktake]:
        """Most recently entered stocktakes with their items, for the home screen"""
        result = await self.db.execute(
            self._with_relations(select(Stocktake), with_items=True)
            .order_by(desc(Stocktake.submitted_at), desc(Stocktake.id))
            .limit(limit or settings.LATEST_STOCKTAKES_LIMIT)
        )
        return list(result.scalars().all())

    async def count_stocktakes(self) -> int:
        result = await self.db.execute(select(func.count(Stocktake.id)))
        return result.scalar() or 0

    async def add_stocktake(
        self,
        store_id: int,
        date: datetime,
        lines: Iterable[Tuple[int, object, Optional[str]]],
        notes: Optional[str] = None,
        is_master: bool = False,
        photo_url: Optional[str] = None,
        created_by: Optional[str] = None,
    ) -> Stocktake:
        """Stage a stocktake with its (item id, quantity, note) lines; the caller commits"""
        stocktake = Stocktake(
            store_id=store_id,
            date=date,
            is_master=is_master,
            notes=notes,
            photo_url=photo_url,
            submitted_at=datetime.now(),
            items=[
                StocktakeItem(item_id=item_id, quantity=quantity, note=note)
                for item_id, quantity, note in lines
            ],
        )
        self.db.add(stocktake)
        await self.db.flush()
        logger.info(
            f"Stocktake staged for store {store_id} "
            f"({len(stocktake.items)} lines, master={is_master}) by {created_by}"
        )
        return stocktake

    async def create_stocktake(self, data: StocktakeCreate, current_user: AuthUser) -> Stocktake:
        store = await StoreService(self.db).get_store_by_slug(data.store_slug)
        if not store:
            raise NotFoundError("Store not found")

        if data.is_master and not store.is_hub:
            raise ValidationError("Only the hub store can record a master stocktake")

        item_ids = [line.item_id for line in data.items]
        known = await ItemService(self.db).get_existing_item_ids(item_ids)
        unknown = sorted(set(item_ids) - known)
        if unknown:
            raise ValidationError(f"Unknown item ids: {', '.join(str(i) for i in unknown)}")

        try:
            stocktake = await self.add_stocktake(
                store_id=store.id,
                date=data.date.replace(tzinfo=None),
                lines=[(line.item_id, line.quantity, line.note) for line in data.items],
                notes=data.notes,
                is_master=data.is_master,
                photo_url=data.photo_url,
                created_by=current_user.id,
            )
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Error creating stocktake: {str(e)}")
            raise

        return await self.get_stocktake_by_id(stocktake.id)
