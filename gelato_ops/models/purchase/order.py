from datetime import datetime
from sqlalchemy import Column, String, DateTime, Text
from sqlalchemy.orm import relationship
from gelato_ops.db.base import BaseModel
from gelato_ops.models.shared.enums import OrderStatus

class Order(BaseModel):
    __tablename__ = 'orders'
    
    status = Column(String(20), default=OrderStatus.PENDING.value, nullable=False, index=True)
    supplier_name = Column(String(150))
    order_date = Column(DateTime, default=datetime.now, nullable=False)
    expected_date = Column(DateTime, index=True)
    received_date = Column(DateTime)
    notes = Column(Text)
    
    items = relationship(
        "OrderItem",
        back_populates="order",
        order_by="OrderItem.id",
        cascade="all, delete-orphan",
    )
