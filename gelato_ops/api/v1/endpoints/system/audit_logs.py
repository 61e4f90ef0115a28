from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from gelato_ops.api.dependencies import require_permission
from gelato_ops.core.database import get_async_session
from gelato_ops.schemas.auth.user import AuthUser
from gelato_ops.schemas.system.audit_log_schema import AuditLogResponse
from gelato_ops.services.audit.audit_service import AuditService

router = APIRouter()

@router.get("", response_model=List[AuditLogResponse])
async def get_audit_logs(
    resource: Optional[str] = Query(None),
    action: Optional[str] = Query(None),
    limit: int = Query(100, ge=1, le=1000),
    db: AsyncSession = Depends(get_async_session),
    current_user: AuthUser = Depends(require_permission("audit", "read")),
):
    """Most recent audit entries first"""
    service = AuditService(db)
    return await service.get_audit_logs(resource=resource, action=action, limit=limit)
