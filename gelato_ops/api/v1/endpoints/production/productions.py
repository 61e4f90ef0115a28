from typing import List
from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from gelato_ops.api.dependencies import require_permission
from gelato_ops.core.database import get_async_session
from gelato_ops.schemas.auth.user import AuthUser
from gelato_ops.schemas.production.production_schema import ProductionCreate, ProductionResponse
from gelato_ops.services.audit.audit_service import AuditService
from gelato_ops.services.production.production_service import ProductionService

router = APIRouter()

@router.get("", response_model=List[ProductionResponse])
async def get_productions(
    limit: int = Query(100, ge=1, le=500),
    db: AsyncSession = Depends(get_async_session),
    current_user: AuthUser = Depends(require_permission("productions", "read")),
):
    service = ProductionService(db)
    return await service.get_productions(limit)

@router.post("", response_model=ProductionResponse, status_code=status.HTTP_201_CREATED)
async def create_production(
    production_data: ProductionCreate,
    request: Request,
    db: AsyncSession = Depends(get_async_session),
    current_user: AuthUser = Depends(require_permission("productions", "create")),
):
    """Record a production batch and the ingredients it consumed"""
    service = ProductionService(db)
    production = await service.create_production(production_data, current_user)
    await AuditService(db).log(
        action="create",
        resource="productions",
        resource_id=production.id,
        user=current_user,
        details={"recipe": production.recipe_name, "ingredients": len(production_data.ingredients)},
        request=request,
    )
    return production
