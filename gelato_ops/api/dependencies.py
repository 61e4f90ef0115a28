from typing import Optional
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from gelato_ops.auth.jwt_handler import decode_access_token
from gelato_ops.auth.permissions import PermissionChecker
from gelato_ops.core.config import settings
from gelato_ops.core.exceptions import AuthenticationError
from gelato_ops.schemas.auth.user import AuthUser
import logging

security = HTTPBearer(auto_error=False)
logger = logging.getLogger(__name__)

def authentication_failure(request: Request) -> Optional[str]:
    """
    Why the request has no usable session, or None when it has one

    Used where FastAPI rejects the body before the auth dependency has run.
    """
    scheme, _, value = request.headers.get("authorization", "").partition(" ")
    token = value.strip() if scheme.lower() == "bearer" else ""
    token = token or request.cookies.get(settings.AUTH_COOKIE_NAME)
    if not token:
        return "Unauthorized"
    if decode_access_token(token) is None:
        return "Invalid authentication credentials"
    return None

async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> AuthUser:
    """Resolve the session from a bearer token or the auth cookie"""
    token = credentials.credentials if credentials else request.cookies.get(settings.AUTH_COOKIE_NAME)
    if not token:
        raise AuthenticationError("Unauthorized")

    payload = decode_access_token(token)
    if payload is None:
        raise AuthenticationError("Invalid authentication credentials")

    user = AuthUser(
        id=str(payload["sub"]),
        email=payload.get("email"),
        first_name=payload.get("first_name"),
        last_name=payload.get("last_name"),
        roles=payload.get("roles") or [],
        permissions=payload.get("permissions") or [],
    )

    # Add request info to context
    request.state.current_user = user
    request.state.user_permissions = user.permissions

    return user

def require_permission(resource: str, action: str):
    """
    Dependency to require specific permission for an endpoint

    Examples:
        require_permission("stocktakes", "read")      # stocktakes:read
    """
    async def permission_dependency(
        current_user: AuthUser = Depends(get_current_user)
    ) -> AuthUser:
        checker = PermissionChecker(current_user.permissions)
        checker.require(resource, action)
        return current_user
    
    return permission_dependency
