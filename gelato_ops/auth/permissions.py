# gelato_ops/auth/permissions.py

from typing import Any, Iterable, List, Optional, Union
from gelato_ops.core.exceptions import PermissionDeniedError
import logging

logger = logging.getLogger(__name__)

PermissionEntry = Union[str, dict]


class PermissionChecker:
    """
    Check user permissions carried in the JWT

    Entries are "resource:action" strings; dicts with resource/action keys are also accepted.
    """
    
    def __init__(self, user_permissions: Optional[Iterable[PermissionEntry]]):
        self.permissions: List[str] = []
        for perm in user_permissions or []:
            key = self._normalize(perm)
            if key:
                self.permissions.append(key)
        self._permission_map = set(self.permissions)
        
        logger.debug(f"PermissionChecker initialized with {len(self.permissions)} permissions")

    @staticmethod
    def _normalize(perm: Any) -> Optional[str]:
        if isinstance(perm, str):
            return perm if ":" in perm else None
        if isinstance(perm, dict):
            resource = perm.get("resource")
            action = perm.get("action")
            if resource and action:
                return f"{resource}:{action}"
        return None
    
    def can(self, resource: str, action: str) -> bool:
        """
        Check if user can perform action on resource
            
        Examples:
            can("stocktakes", "read")
        """
        permission_key = f"{resource}:{action}"
        if permission_key in self._permission_map:
            logger.debug(f"Permission granted: {permission_key}")
            return True
        
        # Check for admin permission on this resource
        admin_key = f"{resource}:admin"
        if admin_key in self._permission_map:
            logger.debug(f"Permission granted: {permission_key} (via {admin_key})")
            return True
        
        # Check for system admin (full access)
        if "system:admin" in self._permission_map:
            logger.debug(f"Permission granted: {permission_key} (via system:admin)")
            return True
        
        logger.debug(f"Permission denied: {permission_key}")
        return False
    
    def cannot(self, resource: str, action: str) -> bool:
        return not self.can(resource, action)
    
    def require(self, resource: str, action: str, custom_message: Optional[str] = None):
        """
        Require permission or raise PermissionDeniedError
        """
        if self.cannot(resource, action):
            message = custom_message or f"Insufficient permissions to {action} {resource}"
            logger.warning(f"Permission check failed: {message}")
            raise PermissionDeniedError(message)