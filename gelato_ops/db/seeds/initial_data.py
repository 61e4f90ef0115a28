import logging
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from gelato_ops.core.config import settings
from gelato_ops.models.inventory.category import Category
from gelato_ops.models.organization.store import Store
from gelato_ops.models.shared.enums import StoreKind

logger = logging.getLogger(__name__)

INITIAL_CATEGORIES = [
    {"name": "Gelato Base", "description": "Milk, cream and base mixes", "sort_order": 1},
    {"name": "Flavourings", "description": "Pastes, purees and inclusions", "sort_order": 2},
    {"name": "Packaging", "description": "Tubs, cups, cones and lids", "sort_order": 3},
]

async def create_initial_data(session: AsyncSession):
    """Create the hub store and starter categories; safe to run repeatedly"""
    try:
        logger.info("📋 Creating initial data...")
        await create_hub_store(session)
        await create_initial_categories(session)
        await session.commit()
        logger.info("✅ Initial data created successfully")
        return True
    except Exception as e:
        logger.error(f"❌ Error creating initial data: {str(e)}")
        await session.rollback()
        raise

async def create_hub_store(session: AsyncSession):
    result = await session.execute(select(Store).where(Store.slug == settings.HUB_STORE_SLUG))
    if result.scalar_one_or_none():
        logger.info(f"Hub store '{settings.HUB_STORE_SLUG}' already exists")
        return

    session.add(
        Store(
            name="Factory",
            slug=settings.HUB_STORE_SLUG,
            kind=StoreKind.FACTORY.value,
            delivery_priority=0,
        )
    )
    logger.info(f"✅ Hub store '{settings.HUB_STORE_SLUG}' created")

async def create_initial_categories(session: AsyncSession):
    for data in INITIAL_CATEGORIES:
        result = await session.execute(select(Category).where(Category.name == data["name"]))
        if not result.scalar_one_or_none():
            session.add(Category(**data))
            logger.info(f"✅ Category '{data['name']}' created")
