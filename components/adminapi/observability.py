from __future__ import annotations
import time, uuid
from typing import Callable
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
import logging

logger = logging.getLogger("adminapi")

class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Per-request id plus start/end logging. Protected routes leave the resolved
    operator (or the auth failure code) on request.state; both end up in the
    request.end record, and rejected credentials get their own warning.
    Tokens and passwords are never logged.
    """

    async def dispatch(self, request: Request, call_next: Callable):
        start = time.perf_counter()
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = request_id

        logger.info(
            "request.start",
            extra={"request_id": request_id, "path": request.url.path, "method": request.method}
        )
        try:
            response: Response = await call_next(request)
        except Exception:
            duration_ms = int((time.perf_counter() - start) * 1000)
            logger.exception(
                "request.exception",
                extra={"request_id": request_id, "duration_ms": duration_ms}
            )
            raise
        duration_ms = int((time.perf_counter() - start) * 1000)
        response.headers["x-request-id"] = request_id

        operator = getattr(request.state, "operator", None)
        auth_failure = getattr(request.state, "auth_failure", None)
        if auth_failure:
            logger.warning(
                "request.unauthorized",
                extra={"request_id": request_id, "path": request.url.path, "auth_failure": auth_failure}
            )
        logger.info(
            "request.end",
            extra={
                "request_id": request_id,
                "status": response.status_code,
                "duration_ms": duration_ms,
                "operator": operator,
            }
        )
        return response
