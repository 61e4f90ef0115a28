from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import Field
from gelato_ops.models.shared.enums import CustomerType, DeliveryPlanStatus
from gelato_ops.schemas.common.base import CamelModel


class DeliveryItemCreate(CamelModel):
    item_id: int
    quantity: Decimal = Field(gt=0)
    note: Optional[str] = None


class DeliveryPlanCreate(CamelModel):
    date: datetime
    status: DeliveryPlanStatus = DeliveryPlanStatus.DRAFT
    store_id: Optional[int] = None
    customer_ids: List[int] = Field(default_factory=list)
    notes: Optional[str] = None
    items: List[DeliveryItemCreate] = Field(default_factory=list)


class DeliveryPlanStatusUpdate(CamelModel):
    status: DeliveryPlanStatus


class CustomerCreate(CamelModel):
    name: str = Field(min_length=1, max_length=150)
    type: CustomerType = CustomerType.WHOLESALE
    contact_name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None


class CustomerResponse(CamelModel):
    id: int
    name: str
    type: str
    contact_name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None


class StoreRef(CamelModel):
    id: int
    name: str
    slug: str


class ItemRef(CamelModel):
    id: int
    name: str
    unit: Optional[str] = None


class DeliveryItemResponse(CamelModel):
    id: int
    item_id: int
    quantity: float
    note: Optional[str] = None
    item: Optional[ItemRef] = None


class DeliveryPlanCustomerResponse(CamelModel):
    customer: CustomerResponse


class DeliveryPlanResponse(CamelModel):
    id: int
    date: datetime
    status: DeliveryPlanStatus
    notes: Optional[str] = None
    store: Optional[StoreRef] = None
    customers: List[DeliveryPlanCustomerResponse] = Field(default_factory=list)
    items: List[DeliveryItemResponse] = Field(default_factory=list)
