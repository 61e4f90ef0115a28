import logging
from datetime import datetime
from typing import List, Optional
from sqlalchemy import select, desc
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from gelato_ops.core.exceptions import ValidationError
from gelato_ops.models.production.production import Production
from gelato_ops.models.production.production_ingredient import ProductionIngredient
from gelato_ops.schemas.auth.user import AuthUser
from gelato_ops.schemas.production.production_schema import ProductionCreate
from gelato_ops.services.inventory.item_service import ItemService

logger = logging.getLogger(__name__)

class ProductionService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_production_by_id(self, production_id: int) -> Optional[Production]:
        result = await self.db.execute(
            select(Production)
            .options(selectinload(Production.ingredients))
            .where(Production.id == production_id)
        )
        return result.scalar_one_or_none()

    async def get_productions(self, limit: int = 100) -> List[Production]:
        result = await self.db.execute(
            select(Production)
            .options(selectinload(Production.ingredients))
            .order_by(desc(Production.produced_at), desc(Production.id))
            .limit(limit)
        )
        return list(result.scalars().all())

    async def create_production(self, production_data: ProductionCreate, current_user: AuthUser) -> Production:
        item_ids = {ingredient.item_id for ingredient in production_data.ingredients}
        known = await ItemService(self.db).get_existing_item_ids(list(item_ids))
        if known != item_ids:
            raise ValidationError("One or more ingredient items do not exist")

        produced_at = production_data.produced_at or datetime.now()
        try:
            production = Production(
                recipe_name=production_data.recipe_name,
                batch_size=production_data.batch_size,
                batch_unit=production_data.batch_unit,
                produced_at=produced_at.replace(tzinfo=None),
                notes=production_data.notes,
                ingredients=[
                    ProductionIngredient(
                        item_id=ingredient.item_id,
                        quantity_used=ingredient.quantity_used,
                        unit=ingredient.unit,
                    )
                    for ingredient in production_data.ingredients
                ],
            )
            self.db.add(production)
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Error recording production: {str(e)}")
            raise

        logger.info(f"Production {production.id} ({production.recipe_name}) recorded by user {current_user.id}")
        return await self.get_production_by_id(production.id)
