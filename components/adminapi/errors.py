from __future__ import annotations
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse

from components.common.errors import AdminError

logger = logging.getLogger("adminapi")

_STATUS_MESSAGES = {
    404: "Not found",
    405: "Method not allowed",
}


async def handle_admin_error(request: Request, exc: AdminError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("request.failed", extra={"code": exc.code, "path": request.url.path})
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": "Malformed request body", "code": "malformed_request"})


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = _STATUS_MESSAGES.get(exc.status_code, str(exc.detail))
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": message, "code": f"http_{exc.status_code}"},
        headers=getattr(exc, "headers", None),
    )


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("request.unhandled", extra={"path": request.url.path})
    return JSONResponse(status_code=500, content={"error": "Internal server error", "code": "internal_error"})


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AdminError, handle_admin_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected)
