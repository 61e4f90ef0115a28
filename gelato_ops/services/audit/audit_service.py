import logging
from typing import Any, Dict, List, Optional
from fastapi import Request
from sqlalchemy import select, desc
from sqlalchemy.ext.asyncio import AsyncSession
from gelato_ops.core.request_context import get_request_context
from gelato_ops.models.auth.audit_log import AuditLog
from gelato_ops.schemas.auth.user import AuthUser

logger = logging.getLogger(__name__)

class AuditService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def log(
        self,
        action: str,
        resource: str,
        resource_id: Optional[int] = None,
        user: Optional[AuthUser] = None,
        details: Optional[Dict[str, Any]] = None,
        request: Optional[Request] = None,
    ) -> None:
        """Write an audit entry. Never raises: a failed write is only logged."""
        context = get_request_context(request) if request is not None else {}
        try:
            audit_log = AuditLog(
                user_id=user.id if user else None,
                user_email=user.email if user else None,
                action=action,
                resource=resource,
                resource_id=resource_id,
                details=details,
                ip_address=context.get("ip_address"),
                user_agent=context.get("user_agent"),
                endpoint=context.get("endpoint"),
            )
            self.session.add(audit_log)
            await self.session.commit()
        except Exception as e:
            await self.session.rollback()
            logger.error(f"Error logging audit event {action} on {resource}: {str(e)}")

    async def get_audit_logs(
        self,
        resource: Optional[str] = None,
        action: Optional[str] = None,
        limit: int = 100,
    ) -> List[AuditLog]:
        query = select(AuditLog).order_by(desc(AuditLog.id)).limit(limit)
        if resource:
            query = query.where(AuditLog.resource == resource)
        if action:
            query = query.where(AuditLog.action == action)
        result = await self.session.execute(query)
        return list(result.scalars().all())
