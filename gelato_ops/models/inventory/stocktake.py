from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, Boolean, Text, ForeignKey
from sqlalchemy.orm import relationship
from gelato_ops.db.base import BaseModel

class Stocktake(BaseModel):
    __tablename__ = 'stocktakes'
    
    store_id = Column(Integer, ForeignKey('stores.id'), nullable=False, index=True)
    date = Column(DateTime, nullable=False, index=True)
    is_master = Column(Boolean, default=False, nullable=False)
    photo_url = Column(String(255))
    notes = Column(Text)
    submitted_at = Column(DateTime, default=datetime.now, nullable=False)
    
    # Relationships
    store = relationship("Store", back_populates="stocktakes")
    items = relationship(
        "StocktakeItem",
        back_populates="stocktake",
        order_by="StocktakeItem.id",
        cascade="all, delete-orphan",
    )
