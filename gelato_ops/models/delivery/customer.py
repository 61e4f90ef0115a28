from sqlalchemy import Boolean, Column, String, Text
from sqlalchemy.orm import relationship
from gelato_ops.db.base import BaseModel
from gelato_ops.models.shared.enums import CustomerType

class Customer(BaseModel):
    __tablename__ = 'customers'
    
    name = Column(String(150), nullable=False)
    type = Column(String(20), default=CustomerType.WHOLESALE.value, nullable=False)
    contact_name = Column(String(100))
    phone = Column(String(20))
    email = Column(String(100))
    address = Column(Text)
    is_active = Column(Boolean, default=True)
    
    delivery_plans = relationship("DeliveryPlanCustomer", back_populates="customer")
