from sqlalchemy import Column, Integer, Text, Numeric, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from gelato_ops.db.base import BaseModel

class DeliveryItem(BaseModel):
    __tablename__ = 'delivery_items'
    __table_args__ = (
        UniqueConstraint('delivery_plan_id', 'item_id', name='uq_delivery_item_plan_item'),
    )
    
    delivery_plan_id = Column(Integer, ForeignKey('delivery_plans.id'), nullable=False, index=True)
    item_id = Column(Integer, ForeignKey('items.id'), nullable=False)
    quantity = Column(Numeric(12, 3), nullable=False, default=0)
    note = Column(Text)
    
    # Relationships
    delivery_plan = relationship("DeliveryPlan", back_populates="items")
    item = relationship("Item", back_populates="delivery_items")
