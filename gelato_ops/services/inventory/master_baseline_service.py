"""
Idempotent creation of the hub's master stocktake.

``ensure_master_baseline`` reports what happened instead of raising, so the
dashboard can carry on with in-memory values when seeding fails.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Optional, Union
from sqlalchemy.ext.asyncio import AsyncSession
from gelato_ops.schemas.auth.user import AuthUser
from gelato_ops.services.audit.audit_service import AuditService
from gelato_ops.services.inventory.stocktake_service import StocktakeService
from gelato_ops.services.organization.store_service import StoreService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Created:
    snapshot_id: int
    result: str = "created"


@dataclass(frozen=True)
class AlreadyExists:
    snapshot_id: int
    result: str = "already_exists"


@dataclass(frozen=True)
class Failed:
    reason: str
    result: str = "failed"


MasterBaselineOutcome = Union[Created, AlreadyExists, Failed]


class MasterBaselineService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def ensure_master_baseline(
        self,
        values: Dict[int, object],
        user: Optional[AuthUser] = None,
    ) -> MasterBaselineOutcome:
        try:
            hub = await StoreService(self.db).get_hub_store()
            if hub is None:
                logger.warning("Master baseline not created: hub store is missing")
                return Failed(reason="Hub store not found")

            stocktakes = StocktakeService(self.db)
            existing = await stocktakes.get_latest_master(hub.id)
            if existing is not None:
                return AlreadyExists(snapshot_id=existing.id)

            if not values:
                return Failed(reason="No stocktake values to seed the master baseline from")

            snapshot = await stocktakes.add_stocktake(
                store_id=hub.id,
                date=datetime.now(),
                lines=[(item_id, quantity, None) for item_id, quantity in sorted(values.items())],
                notes="Master baseline seeded from latest stocktakes",
                is_master=True,
                created_by=user.id if user else None,
            )
            snapshot_id = snapshot.id
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Error creating master baseline: {str(e)}")
            return Failed(reason=str(e))

        logger.info(f"Master baseline {snapshot_id} created with {len(values)} items")
        await AuditService(self.db).log(
            action="create_master_baseline",
            resource="stocktakes",
            resource_id=snapshot_id,
            user=user,
            details={"items": len(values)},
        )
        return Created(snapshot_id=snapshot_id)
