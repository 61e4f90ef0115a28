from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from gelato_ops.api.dependencies import require_permission
from gelato_ops.core.database import get_async_session
from gelato_ops.schemas.auth.user import AuthUser
from gelato_ops.schemas.delivery.delivery_plan_schema import CustomerCreate, CustomerResponse
from gelato_ops.services.delivery.customer_service import CustomerService

router = APIRouter()

@router.get("", response_model=List[CustomerResponse])
async def get_customers(
    db: AsyncSession = Depends(get_async_session),
    current_user: AuthUser = Depends(require_permission("deliveries", "read")),
):
    service = CustomerService(db)
    return await service.get_customers()

@router.post("", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED)
async def create_customer(
    customer_data: CustomerCreate,
    db: AsyncSession = Depends(get_async_session),
    current_user: AuthUser = Depends(require_permission("deliveries", "create")),
):
    service = CustomerService(db)
    return await service.create_customer(customer_data)
