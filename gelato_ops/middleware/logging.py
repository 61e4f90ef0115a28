import time
import uuid
import logging
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from gelato_ops.core.request_context import HDR_REQUEST_ID

logger = logging.getLogger("access")

class LoggingMiddleware(BaseHTTPMiddleware):
    """Access log line per request, tagged with a request id"""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(HDR_REQUEST_ID) or uuid.uuid4().hex[:12]
        start_time = time.time()

        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                f"[{request_id}] {request.method} {request.url.path} - unhandled error after "
                f"{time.time() - start_time:.4f}s"
            )
            raise

        process_time = time.time() - start_time
        user = getattr(request.state, "current_user", None)
        message = (
            f"[{request_id}] {request.method} {request.url.path} - "
            f"Status: {response.status_code} - "
            f"User: {user.id if user else 'anonymous'} - "
            f"Client: {request.client.host if request.client else 'unknown'} - "
            f"Time: {process_time:.4f}s"
        )
        if response.status_code >= 500:
            logger.error(message)
        elif response.status_code >= 400:
            logger.warning(message)
        else:
            logger.info(message)

        response.headers[HDR_REQUEST_ID] = request_id
        response.headers["X-Process-Time"] = str(process_time)
        return response
