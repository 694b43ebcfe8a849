from fastapi import Request
import logging
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("app")


class AuthLoggingMiddleware(BaseHTTPMiddleware):
    """Logs rejected requests; covers both bad tokens and ownership violations"""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)

        if response.status_code in (401, 403):
            has_auth = request.headers.get("Authorization") is not None
            logger.warning(
                f"Auth error: {response.status_code} on {request.method} {request.url.path} "
                f"(authorization header {'present' if has_auth else 'missing'})"
            )

        return response
