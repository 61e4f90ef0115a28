from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import Field
from gelato_ops.schemas.common.base import CamelModel


class ProductionIngredientCreate(CamelModel):
    item_id: int
    quantity_used: Decimal
    unit: Optional[str] = None


class ProductionCreate(CamelModel):
    recipe_name: str = Field(min_length=1, max_length=150)
    batch_size: Decimal = Field(gt=0)
    batch_unit: str = "kg"
    produced_at: Optional[datetime] = None
    notes: Optional[str] = None
    ingredients: List[ProductionIngredientCreate] = Field(min_length=1)


class ProductionIngredientResponse(CamelModel):
    id: int
    item_id: int
    quantity_used: float
    unit: Optional[str] = None


class ProductionResponse(CamelModel):
    id: int
    recipe_name: str
    batch_size: float
    batch_unit: Optional[str] = None
    produced_at: datetime
    notes: Optional[str] = None
    ingredients: List[ProductionIngredientResponse] = Field(default_factory=list)
