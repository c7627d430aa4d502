from typing import Any, Dict, Optional
from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from quild.core.exceptions import ProviderUnavailableError
from quild.schemas.response import ErrorResponse
from datetime import datetime, timezone
import logging
import uuid

logger = logging.getLogger(__name__)

def _get_error_code(status_code: int) -> str:
    code_map = {
        400: "BAD_REQUEST",
        401: "UNAUTHORIZED",
        403: "FORBIDDEN",
        404: "NOT_FOUND",
        405: "METHOD_NOT_ALLOWED",
        409: "CONFLICT",
        422: "VALIDATION_ERROR",
        500: "INTERNAL_SERVER_ERROR",
    }
    return code_map.get(status_code, f"HTTP_{status_code}")

def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", None) or str(uuid.uuid4())

def _error_response(
    request: Request,
    request_id: str,
    status_code: int,
    message: str,
    code: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    error_response = ErrorResponse(
        error=message,
        code=code or _get_error_code(status_code),
        details=details,
        timestamp=datetime.now(timezone.utc).isoformat(),
        path=request.url.path,
        request_id=request_id,
    )
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(error_response.model_dump(exclude_none=True)),
        headers=headers,
    )

async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    request_id = _request_id(request)
    message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    log_level = logging.ERROR if exc.status_code >= 500 else logging.WARNING
    logger.log(log_level, f"[{request_id}] HTTP {exc.status_code}: {message}", extra={"request_id": request_id})
    return _error_response(request, request_id, exc.status_code, message, headers=getattr(exc, "headers", None))

async def validation_exception_handler(request: Request, exc: RequestValidationError):
    request_id = _request_id(request)
    logger.warning(f"[{request_id}] Validation error: {exc.errors()}", extra={"request_id": request_id})
    return _error_response(
        request,
        request_id,
        422,
        "Request validation failed",
        details={"validation_errors": exc.errors()},
    )

async def provider_unavailable_handler(request: Request, exc: ProviderUnavailableError):
    request_id = _request_id(request)
    logger.error(
        f"[{request_id}] Identity provider unavailable for {exc.external_id}: {exc.message}",
        extra={"request_id": request_id},
    )
    return _error_response(request, request_id, 500, "Identity provider unavailable", code="PROVIDER_UNAVAILABLE")

async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    request_id = _request_id(request)
    logger.error(
        f"[{request_id}] Database error: {exc}",
        exc_info=True,
        extra={"request_id": request_id, "error_type": type(exc).__name__},
    )
    return _error_response(request, request_id, 500, "Database error", code="DATABASE_ERROR")

async def global_exception_handler(request: Request, exc: Exception):
    request_id = _request_id(request)
    logger.error(f"[{request_id}] Unhandled exception: {exc}", exc_info=True, extra={"request_id": request_id})
    return _error_response(
        request,
        request_id,
        500,
        "An unexpected error occurred",
        details={"error_type": type(exc).__name__},
    )
