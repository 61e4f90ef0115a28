from fastapi import APIRouter, Depends, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession
from gelato_ops.api.dependencies import require_permission
from gelato_ops.core.database import get_async_session
from gelato_ops.schemas.auth.user import AuthUser
from gelato_ops.schemas.purchase.order_schema import LowStockOrderResponse, OrderResponse
from gelato_ops.services.audit.audit_service import AuditService
from gelato_ops.services.purchase.order_service import OrderService

router = APIRouter()

@router.post("/low-stock-order", response_model=LowStockOrderResponse)
async def create_low_stock_order(
    request: Request,
    db: AsyncSession = Depends(get_async_session),
    current_user: AuthUser = Depends(require_permission("orders", "create")),
):
    """Draft a purchase order covering every item the stores are short of"""
    service = OrderService(db)
    order = await service.create_low_stock_order(current_user)
    if order is None:
        return LowStockOrderResponse(message="No deficits detected. No order needed.")

    await AuditService(db).log(
        action="create",
        resource="orders",
        resource_id=order.id,
        user=current_user,
        details={"auto": True, "deficits": len(order.items)},
        request=request,
    )
    body = LowStockOrderResponse(
        message="Draft order created from deficits",
        order=OrderResponse.model_validate(order),
    )
    return JSONResponse(status_code=201, content=jsonable_encoder(body.model_dump(by_alias=True)))
