from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import Field
from gelato_ops.models.shared.enums import StoreKind
from gelato_ops.schemas.common.base import CamelModel


class StoreCreate(CamelModel):
    name: str = Field(min_length=1, max_length=100)
    slug: str = Field(min_length=1, max_length=100, pattern=r"^[a-z0-9-]+$")
    kind: StoreKind = StoreKind.RETAIL
    address: Optional[str] = None
    phone: Optional[str] = None
    delivery_priority: int = 100


class StoreResponse(CamelModel):
    id: int
    name: str
    slug: str
    kind: str
    address: Optional[str] = None
    phone: Optional[str] = None
    delivery_priority: int
    is_active: bool = True
    is_hub: bool = False


class StoreInventoryUpsert(CamelModel):
    item_id: int
    target_quantity: Optional[Decimal] = Field(default=None, ge=0)
    target_text: Optional[str] = None
    unit: Optional[str] = None


class StoreInventoryDelete(CamelModel):
    item_id: int


class ItemRef(CamelModel):
    id: int
    name: str
    unit: Optional[str] = None


class StoreInventoryResponse(CamelModel):
    id: int
    store_id: int
    item_id: int
    target_quantity: Optional[float] = None
    target_text: Optional[str] = None
    unit: Optional[str] = None
    is_active: bool = True
    item: Optional[ItemRef] = None


class StoreRef(CamelModel):
    id: int
    name: str
    slug: str


class StoreDeliveryLine(CamelModel):
    id: int
    name: str
    quantity: float
    unit: str


class StoreDelivery(CamelModel):
    id: int
    date: datetime
    status: str
    items: List[StoreDeliveryLine] = Field(default_factory=list)


class StoreDeliveriesResponse(CamelModel):
    store: StoreRef
    deliveries: List[StoreDelivery] = Field(default_factory=list)
