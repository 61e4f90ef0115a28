"""
Database Safety Utilities
Prevents accidental destructive operations
"""
import os
import logging
from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import AsyncEngine

logger = logging.getLogger(__name__)

CORE_TABLES = ["stores", "items", "categories", "stocktakes", "orders", "delivery_plans", "productions"]

class DatabaseSafety:
    """Database safety checks and protection"""

    @staticmethod
    def check_environment() -> str:
        return os.getenv("ENVIRONMENT", "development").lower()

    @staticmethod
    async def verify_database_integrity(engine: AsyncEngine) -> bool:
        """Verify the core tables exist"""
        try:
            async with engine.connect() as conn:
                tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())

            missing_tables = [table for table in CORE_TABLES if table not in tables]
            if missing_tables:
                logger.error(f"🚨 Missing core tables: {missing_tables}")
                return False

            logger.info(f"✅ Database integrity verified. Found {len(tables)} tables.")
            return True
        except Exception as e:
            logger.error(f"❌ Database integrity check failed: {e}")
            return False

    @staticmethod
    def prevent_destructive_operations():
        env = DatabaseSafety.check_environment()
        if env == "production":
            os.environ["PREVENT_DROP_TABLES"] = "true"
        logger.info(f"🛡️ Database safety measures active for {env} environment")
