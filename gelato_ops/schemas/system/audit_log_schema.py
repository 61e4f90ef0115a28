from datetime import datetime
from typing import Any, Dict, Optional
from gelato_ops.schemas.common.base import CamelModel


class AuditLogResponse(CamelModel):
    id: int
    user_id: Optional[str] = None
    user_email: Optional[str] = None
    action: str
    resource: str
    resource_id: Optional[int] = None
    ip_address: Optional[str] = None
    endpoint: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
    timestamp: Optional[datetime] = None
