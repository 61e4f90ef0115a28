import logging
from gelato_ops.core.database import async_session_maker, engine
from gelato_ops.db.seeds.initial_data import create_initial_data
from gelato_ops.models.base import Base
import gelato_ops.models  # noqa: F401  registers every model on the metadata
from gelato_ops.utils.database_safety import DatabaseSafety

logger = logging.getLogger(__name__)

async def create_tables():
    """Create all database tables"""
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("✅ Database tables created successfully")
    except Exception as e:
        logger.error(f"❌ Error creating tables: {str(e)}")
        raise

async def init_db():
    """Create tables, verify them and seed the hub store"""
    try:
        env = DatabaseSafety.check_environment()
        logger.info(f"🗄️  Initializing database for {env} environment...")
        DatabaseSafety.prevent_destructive_operations()

        await create_tables()

        if not await DatabaseSafety.verify_database_integrity(engine):
            raise RuntimeError("Database integrity check failed!")

        async with async_session_maker() as session:
            await create_initial_data(session)

        logger.info("✅ Database initialized successfully")
    except Exception as e:
        logger.error(f"❌ Database initialization failed: {str(e)}")
        raise
