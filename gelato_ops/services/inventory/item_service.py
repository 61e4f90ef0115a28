from typing import List, Optional
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from gelato_ops.core.exceptions import ConflictError, NotFoundError
from gelato_ops.models.inventory.category import Category
from gelato_ops.models.inventory.item import Item
from gelato_ops.schemas.inventory.item_schema import CategoryCreate, ItemCreate

class ItemService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_active_items(self) -> List[Item]:
        """Active items ordered the way stock sheets list them: category, then item sort order"""
        result = await self.db.execute(
            select(Item)
            .join(Category, Item.category_id == Category.id)
            .options(selectinload(Item.category))
            .where(Item.is_active == True)
            .order_by(Category.sort_order, Item.sort_order, Item.id)
        )
        return list(result.scalars().all())

    async def get_item_by_id(self, item_id: int) -> Optional[Item]:
        result = await self.db.execute(
            select(Item).options(selectinload(Item.category)).where(Item.id == item_id)
        )
        return result.scalar_one_or_none()

    async def get_existing_item_ids(self, item_ids: List[int]) -> set:
        if not item_ids:
            return set()
        result = await self.db.execute(select(Item.id).where(Item.id.in_(item_ids)))
        return set(result.scalars().all())

    async def create_item(self, item_data: ItemCreate) -> Item:
        category = await self.db.execute(select(Category.id).where(Category.id == item_data.category_id))
        if category.scalar_one_or_none() is None:
            raise NotFoundError("Category not found")

        item = Item(
            name=item_data.name,
            category_id=item_data.category_id,
            unit=item_data.unit,
            target_text=item_data.target_text,
            target_number=item_data.target_number,
            sort_order=item_data.sort_order,
        )
        self.db.add(item)
        await self.db.commit()
        return await self.get_item_by_id(item.id)

    async def get_categories(self) -> List[Category]:
        result = await self.db.execute(
            select(Category)
            .where(Category.is_active == True)
            .order_by(Category.sort_order, Category.id)
        )
        return list(result.scalars().all())

    async def create_category(self, category_data: CategoryCreate) -> Category:
        existing = await self.db.execute(
            select(func.count(Category.id)).where(Category.name == category_data.name)
        )
        if existing.scalar():
            raise ConflictError(f"Category '{category_data.name}' already exists")

        category = Category(
            name=category_data.name,
            description=category_data.description,
            sort_order=category_data.sort_order,
        )
        self.db.add(category)
        await self.db.commit()
        await self.db.refresh(category)
        return category
