from sqlalchemy import Column, Integer, String, Numeric, ForeignKey
from sqlalchemy.orm import relationship
from gelato_ops.db.base import BaseModel

class OrderItem(BaseModel):
    __tablename__ = 'order_items'
    
    order_id = Column(Integer, ForeignKey('orders.id'), nullable=False, index=True)
    item_id = Column(Integer, ForeignKey('items.id'), nullable=False)
    quantity = Column(Numeric(12, 3), nullable=False)
    unit = Column(String(50))
    unit_price = Column(Numeric(10, 2))
    received_quantity = Column(Numeric(12, 3), default=0)
    
    # Relationships
    order = relationship("Order", back_populates="items")
    item = relationship("Item", back_populates="order_items")
