from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import Field, model_validator
from gelato_ops.models.shared.enums import OrderStatus
from gelato_ops.schemas.common.base import CamelModel


class OrderItemCreate(CamelModel):
    item_id: int
    quantity: Decimal = Field(gt=0)
    unit: Optional[str] = None
    unit_price: Optional[Decimal] = Field(default=None, ge=0)


class OrderCreate(CamelModel):
    supplier_name: Optional[str] = None
    expected_date: Optional[datetime] = None
    status: OrderStatus = OrderStatus.PENDING
    notes: Optional[str] = None
    items: List[OrderItemCreate] = Field(min_length=1)


class OrderStatusUpdate(CamelModel):
    status: OrderStatus


class OrderItemResponse(CamelModel):
    id: int
    item_id: int
    quantity: float
    unit: Optional[str] = None
    unit_price: Optional[float] = None
    received_quantity: Optional[float] = None


class OrderResponse(CamelModel):
    id: int
    status: OrderStatus
    supplier_name: Optional[str] = None
    order_date: datetime
    expected_date: Optional[datetime] = None
    received_date: Optional[datetime] = None
    notes: Optional[str] = None
    items: List[OrderItemResponse] = Field(default_factory=list)


class ReceivedItem(CamelModel):
    item_id: Optional[int] = None
    order_item_id: Optional[int] = None
    received_quantity: Decimal = Field(ge=0)

    @model_validator(mode="after")
    def check_reference(self):
        if self.item_id is None and self.order_item_id is None:
            raise ValueError("each received item needs itemId or orderItemId")
        return self


class ReceiveOrderRequest(CamelModel):
    received_items: List[ReceivedItem] = Field(min_length=1)


class ReceiveOrderResponse(CamelModel):
    message: str
    order_id: int


class LowStockOrderResponse(CamelModel):
    message: str
    order: Optional[OrderResponse] = None
