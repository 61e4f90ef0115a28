from sqlalchemy import Column, Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from gelato_ops.db.base import BaseModel

class DeliveryPlanCustomer(BaseModel):
    __tablename__ = 'delivery_plan_customers'
    __table_args__ = (
        UniqueConstraint('delivery_plan_id', 'customer_id', name='uq_delivery_plan_customer'),
    )
    
    delivery_plan_id = Column(Integer, ForeignKey('delivery_plans.id'), nullable=False, index=True)
    customer_id = Column(Integer, ForeignKey('customers.id'), nullable=False)
    
    delivery_plan = relationship("DeliveryPlan", back_populates="customers")
    customer = relationship("Customer", back_populates="delivery_plans")
