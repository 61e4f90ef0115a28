from datetime import datetime
from sqlalchemy import Column, String, DateTime, Numeric, Text
from sqlalchemy.orm import relationship
from gelato_ops.db.base import BaseModel

class Production(BaseModel):
    __tablename__ = 'productions'
    
    recipe_name = Column(String(150), nullable=False)
    batch_size = Column(Numeric(12, 3), nullable=False)
    batch_unit = Column(String(20), default="kg")
    produced_at = Column(DateTime, default=datetime.now, nullable=False, index=True)
    notes = Column(Text)
    
    ingredients = relationship(
        "ProductionIngredient",
        back_populates="production",
        order_by="ProductionIngredient.id",
        cascade="all, delete-orphan",
    )
