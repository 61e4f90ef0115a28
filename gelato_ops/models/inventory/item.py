from sqlalchemy import Column, Integer, String, Boolean, Text, Numeric, ForeignKey
from sqlalchemy.orm import relationship
from gelato_ops.db.base import BaseModel

class Item(BaseModel):
    __tablename__ = 'items'
    
    name = Column(String(200), nullable=False)
    description = Column(Text)
    category_id = Column(Integer, ForeignKey('categories.id'), nullable=False)
    unit = Column(String(50))
    target_text = Column(String(100))
    target_number = Column(Numeric(12, 3))
    sort_order = Column(Integer, default=0)
    is_active = Column(Boolean, default=True)
    
    # Relationships
    category = relationship("Category", back_populates="items")
    stocktake_items = relationship("StocktakeItem", back_populates="item")
    order_items = relationship("OrderItem", back_populates="item")
    delivery_items = relationship("DeliveryItem", back_populates="item")
    production_ingredients = relationship("ProductionIngredient", back_populates="item")
    store_inventories = relationship("StoreInventory", back_populates="item")
