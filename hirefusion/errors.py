"""
API error types and the handlers that render them.

Every failure leaves the service as ``{"success": false, "message": ..., "code": ...}``
so callers can branch on ``code`` instead of matching message text.
"""
from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ApiError(HTTPException):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "error"

    def __init__(self, message, status_code: int | None = None, headers: dict | None = None):
        super().__init__(status_code=status_code or self.status_code, detail=message, headers=headers)


class BadRequest(ApiError):
    code = "bad_request"


class ValidationFailed(ApiError):
    code = "validation_error"


class Conflict(ApiError):
    code = "conflict"


class Unauthorized(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "unauthorized"


class NotFound(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"


class ServerError(ApiError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "internal_error"


def error_body(message, code: str, **extra) -> dict:
    return {"success": False, "message": message, "code": code, **extra}


def _validation_messages(exc: RequestValidationError) -> list[str]:
    messages = []
    for err in exc.errors():
        ctx_error = (err.get("ctx") or {}).get("error")
        if ctx_error is not None:
            messages.append(str(ctx_error))
            continue
        field = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        messages.append(f"{field}: {err['msg']}" if field else err["msg"])
    return messages


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    code = getattr(exc, "code", "http_error")
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.detail, code),
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = _validation_messages(exc)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("; ".join(messages), ValidationFailed.code, errors=messages),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("Internal Server Error", ServerError.code),
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
