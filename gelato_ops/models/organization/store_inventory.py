from sqlalchemy import Boolean, Column, Integer, String, Numeric, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from gelato_ops.db.base import BaseModel

class StoreInventory(BaseModel):
    __tablename__ = 'store_inventories'
    __table_args__ = (
        UniqueConstraint('store_id', 'item_id', name='uq_store_inventory_store_item'),
    )
    
    store_id = Column(Integer, ForeignKey('stores.id'), nullable=False, index=True)
    item_id = Column(Integer, ForeignKey('items.id'), nullable=False)
    target_quantity = Column(Numeric(12, 3))
    target_text = Column(String(100))
    unit = Column(String(50))
    is_active = Column(Boolean, default=True)
    
    # Relationships
    store = relationship("Store", back_populates="inventory_targets")
    item = relationship("Item", back_populates="store_inventories")
