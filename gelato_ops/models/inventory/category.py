from sqlalchemy import Column, Integer, String, Boolean, Text
from sqlalchemy.orm import relationship
from gelato_ops.db.base import BaseModel

class Category(BaseModel):
    __tablename__ = 'categories'
    
    name = Column(String(100), nullable=False, unique=True)
    description = Column(Text)
    sort_order = Column(Integer, default=0)
    is_active = Column(Boolean, default=True)
    
    items = relationship("Item", back_populates="category")
