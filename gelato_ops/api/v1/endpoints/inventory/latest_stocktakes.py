from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from gelato_ops.api.dependencies import require_permission
from gelato_ops.core.database import get_async_session
from gelato_ops.schemas.auth.user import AuthUser
from gelato_ops.schemas.inventory.stocktake_schema import LatestStocktakeResponse
from gelato_ops.services.inventory.stocktake_service import StocktakeService

router = APIRouter()

@router.get("", response_model=List[LatestStocktakeResponse])
async def get_latest_stocktakes(
    db: AsyncSession = Depends(get_async_session),
    current_user: AuthUser = Depends(require_permission("stocktakes", "read")),
):
    """The most recently submitted stocktakes; blank lines are left out"""
    service = StocktakeService(db)
    stocktakes = await service.get_latest_submitted()
    return [
        {
            "id": stocktake.id,
            "date": stocktake.date,
            "is_master": stocktake.is_master,
            "notes": stocktake.notes,
            "submitted_at": stocktake.submitted_at,
            "store": stocktake.store,
            "items": [line for line in stocktake.items if line.quantity is not None],
        }
        for stocktake in stocktakes
    ]
