from sqlalchemy import Column, Integer, Text, Numeric, ForeignKey
from sqlalchemy.orm import relationship
from gelato_ops.db.base import BaseModel

class StocktakeItem(BaseModel):
    __tablename__ = 'stocktake_items'
    
    stocktake_id = Column(Integer, ForeignKey('stocktakes.id'), nullable=False, index=True)
    item_id = Column(Integer, ForeignKey('items.id'), nullable=False)
    quantity = Column(Numeric(12, 3))  # NULL when the line was left blank
    note = Column(Text)
    
    # Relationships
    stocktake = relationship("Stocktake", back_populates="items")
    item = relationship("Item", back_populates="stocktake_items")
