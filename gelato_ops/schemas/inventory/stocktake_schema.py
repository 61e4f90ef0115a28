from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import Field
from gelato_ops.schemas.common.base import CamelModel


class StocktakeItemCreate(CamelModel):
    item_id: int
    quantity: Optional[Decimal] = None
    note: Optional[str] = None


class StocktakeCreate(CamelModel):
    store_slug: str = Field(min_length=1)
    date: datetime
    photo_url: Optional[str] = None
    notes: Optional[str] = None
    is_master: bool = False
    items: List[StocktakeItemCreate]


class StoreRef(CamelModel):
    id: int
    name: str
    slug: str


class StocktakeItemResponse(CamelModel):
    id: int
    item_id: int
    quantity: Optional[float] = None
    note: Optional[str] = None


class StocktakeResponse(CamelModel):
    id: int
    date: datetime
    is_master: bool
    notes: Optional[str] = None
    submitted_at: datetime
    store: StoreRef
    items: List[StocktakeItemResponse] = Field(default_factory=list)


class StocktakeSummary(CamelModel):
    id: int
    date: datetime
    is_master: bool
    submitted_at: datetime
    store: StoreRef
    item_count: int
    total_quantity: float


class StocktakeListResponse(CamelModel):
    stocktakes: List[StocktakeSummary]


class StocktakeCountResponse(CamelModel):
    count: int


class CountedItemRef(CamelModel):
    id: int
    name: str
    unit: Optional[str] = None


class CountedLineResponse(CamelModel):
    id: int
    item_id: int
    quantity: float
    note: Optional[str] = None
    item: CountedItemRef


class LatestStocktakeResponse(CamelModel):
    """A recent stocktake with only its counted lines"""
    id: int
    date: datetime
    is_master: bool
    notes: Optional[str] = None
    submitted_at: datetime
    store: StoreRef
    items: List[CountedLineResponse] = Field(default_factory=list)
