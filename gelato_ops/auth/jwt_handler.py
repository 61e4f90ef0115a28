from typing import Optional
import time
from gelato_ops.core.security import verify_token

def decode_access_token(token: str) -> Optional[dict]:
    """Decode and validate access token"""
    payload = verify_token(token)
    if payload is None:
        return None

    # Check token type
    if payload.get("type") != "access":
        return None

    # Check expiration
    exp = payload.get("exp")
    if exp is None or time.time() > exp:
        return None

    if not payload.get("sub"):
        return None

    return payload
