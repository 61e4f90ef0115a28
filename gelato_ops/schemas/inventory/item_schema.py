from decimal import Decimal
from typing import Optional
from pydantic import Field
from gelato_ops.schemas.common.base import CamelModel


class CategoryCreate(CamelModel):
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = None
    sort_order: int = 0


class CategoryResponse(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    sort_order: int = 0


class ItemCreate(CamelModel):
    name: str = Field(min_length=1, max_length=200)
    category_id: int
    unit: Optional[str] = None
    target_text: Optional[str] = None
    target_number: Optional[Decimal] = Field(default=None, ge=0)
    sort_order: int = 0


class CategoryRef(CamelModel):
    id: int
    name: str


class ItemResponse(CamelModel):
    id: int
    name: str
    unit: Optional[str] = None
    target_text: Optional[str] = None
    target_number: Optional[float] = None
    sort_order: int = 0
    is_active: bool = True
    category: Optional[CategoryRef] = None
