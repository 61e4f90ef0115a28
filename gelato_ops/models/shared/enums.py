from enum import Enum

class StoreKind(str, Enum):
    FACTORY = "FACTORY"
    RETAIL = "RETAIL"

class OrderStatus(str, Enum):
    DRAFT = "DRAFT"
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    RECEIVED = "RECEIVED"
    CANCELLED = "CANCELLED"

class DeliveryPlanStatus(str, Enum):
    DRAFT = "DRAFT"
    CONFIRMED = "CONFIRMED"
    SENT = "SENT"

class CustomerType(str, Enum):
    WHOLESALE = "WHOLESALE"
    RESTAURANT = "RESTAURANT"
    OTHER = "OTHER"

class BaselineMode(str, Enum):
    AUTO = "auto"
    MASTER = "master"
    LATEST = "latest"

class BaselineSource(str, Enum):
    MASTER = "master"
    LATEST = "latest"
    NONE = "none"

class StockStatus(str, Enum):
    CRITICAL = "critical"
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"

class ExportFormat(str, Enum):
    CSV = "csv"
    XLSX = "xlsx"

# Orders in these states count as incoming stock
INCOMING_ORDER_STATUSES = (OrderStatus.PENDING, OrderStatus.CONFIRMED)
# Delivery plans in these states count as outgoing stock
OUTGOING_DELIVERY_STATUSES = (DeliveryPlanStatus.CONFIRMED,)
