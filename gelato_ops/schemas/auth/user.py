from typing import List, Optional
from pydantic import BaseModel, Field

class AuthUser(BaseModel):
    """Identity resolved from the session token"""
    id: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    roles: List[str] = Field(default_factory=list)
    permissions: List[str] = Field(default_factory=list)
