from fastapi import APIRouter
from gelato_ops.api.v1.endpoints.delivery import customers, delivery_plans
from gelato_ops.api.v1.endpoints.inventory import dashboard, items, latest_stocktakes, stocktakes
from gelato_ops.api.v1.endpoints.organization import stores
from gelato_ops.api.v1.endpoints.production import productions
from gelato_ops.api.v1.endpoints.purchase import automation, orders
from gelato_ops.api.v1.endpoints.system import audit_logs

api_router = APIRouter()

# Inventory routes
api_router.include_router(dashboard.router, prefix="/inventory", tags=["Inventory"])
api_router.include_router(stocktakes.router, prefix="/stocktakes", tags=["Inventory"])
api_router.include_router(latest_stocktakes.router, prefix="/latest-stocktakes", tags=["Inventory"])
api_router.include_router(items.router, prefix="/items", tags=["Inventory"])

# Purchase routes
api_router.include_router(orders.router, prefix="/orders", tags=["Purchase"])
api_router.include_router(automation.router, prefix="/automation", tags=["Purchase"])

# Delivery routes
api_router.include_router(delivery_plans.router, prefix="/delivery-plans", tags=["Delivery"])
api_router.include_router(customers.router, prefix="/customers", tags=["Delivery"])

# Production routes
api_router.include_router(productions.router, prefix="/productions", tags=["Production"])

# Organization routes
api_router.include_router(stores.router, prefix="/stores", tags=["Organization"])

# System routes
api_router.include_router(audit_logs.router, prefix="/audit-logs", tags=["System"])
