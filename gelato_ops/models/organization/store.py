from sqlalchemy import Boolean, Column, Integer, String, Text
from sqlalchemy.orm import relationship
from gelato_ops.core.config import settings
from gelato_ops.db.base import BaseModel
from gelato_ops.models.shared.enums import StoreKind

class Store(BaseModel):
    __tablename__ = 'stores'
    
    name = Column(String(100), nullable=False)
    slug = Column(String(100), unique=True, nullable=False, index=True)
    kind = Column(String(20), default=StoreKind.RETAIL.value, nullable=False)
    address = Column(Text)
    phone = Column(String(20))
    # Stores with a lower value are served first when received stock is shared out
    delivery_priority = Column(Integer, default=100, nullable=False)
    is_active = Column(Boolean, default=True)
    
    # Relationships
    stocktakes = relationship("Stocktake", back_populates="store")
    inventory_targets = relationship("StoreInventory", back_populates="store")
    delivery_plans = relationship("DeliveryPlan", back_populates="store")

    @property
    def is_hub(self) -> bool:
        return self.slug == settings.HUB_STORE_SLUG
