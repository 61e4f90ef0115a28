from gelato_ops.models.auth.audit_log import AuditLog
from gelato_ops.models.organization.store import Store
from gelato_ops.models.organization.store_inventory import StoreInventory
from gelato_ops.models.inventory.category import Category
from gelato_ops.models.inventory.item import Item
from gelato_ops.models.inventory.stocktake import Stocktake
from gelato_ops.models.inventory.stocktake_item import StocktakeItem
from gelato_ops.models.purchase.order import Order
from gelato_ops.models.purchase.order_item import OrderItem
from gelato_ops.models.delivery.customer import Customer
from gelato_ops.models.delivery.delivery_plan import DeliveryPlan
from gelato_ops.models.delivery.delivery_item import DeliveryItem
from gelato_ops.models.delivery.delivery_plan_customer import DeliveryPlanCustomer
from gelato_ops.models.production.production import Production
from gelato_ops.models.production.production_ingredient import ProductionIngredient


__all__ = [
    "AuditLog",
    "Store",
    "StoreInventory",
    "Category",
    "Item",
    "Stocktake",
    "StocktakeItem",
    "Order",
    "OrderItem",
    "Customer",
    "DeliveryPlan",
    "DeliveryItem",
    "DeliveryPlanCustomer",
    "Production",
    "ProductionIngredient",
]
