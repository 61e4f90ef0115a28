from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship
from gelato_ops.db.base import BaseModel
from gelato_ops.models.shared.enums import DeliveryPlanStatus

class DeliveryPlan(BaseModel):
    __tablename__ = 'delivery_plans'
    
    date = Column(DateTime, nullable=False, index=True)
    status = Column(String(20), default=DeliveryPlanStatus.DRAFT.value, nullable=False)
    notes = Column(Text)
    store_id = Column(Integer, ForeignKey('stores.id'), nullable=True, index=True)
    
    # Relationships
    store = relationship("Store", back_populates="delivery_plans")
    customers = relationship(
        "DeliveryPlanCustomer",
        back_populates="delivery_plan",
        cascade="all, delete-orphan",
    )
    items = relationship(
        "DeliveryItem",
        back_populates="delivery_plan",
        order_by="DeliveryItem.id",
        cascade="all, delete-orphan",
    )
