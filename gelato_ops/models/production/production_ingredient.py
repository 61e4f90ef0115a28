from sqlalchemy import Column, Integer, String, Numeric, ForeignKey
from sqlalchemy.orm import relationship
from gelato_ops.db.base import BaseModel

class ProductionIngredient(BaseModel):
    __tablename__ = 'production_ingredients'
    
    production_id = Column(Integer, ForeignKey('productions.id'), nullable=False, index=True)
    item_id = Column(Integer, ForeignKey('items.id'), nullable=False)
    quantity_used = Column(Numeric(12, 3), nullable=False)
    unit = Column(String(20))
    
    production = relationship("Production", back_populates="ingredients")
    item = relationship("Item", back_populates="production_ingredients")
