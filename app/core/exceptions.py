"""
Application exceptions and their JSON rendering.

Hierarchy:
    AppError (500)
       ├── AuthenticationError (401)   missing / invalid / expired token, unsynced user
       ├── PermissionDeniedError (403) insufficient role, not the owner
       ├── NotFoundError (404)
       ├── BadRequestError (400)       missing fields, bad enum values
       │      └── InvalidTransitionError
       ├── ConflictError (409)         duplicate slug / email
       └── StorageError (500)          upload sink I/O

A bare AppError (500) covers an unconfigured identity provider.

Every error renders as ``{"message": ...}``; ``error`` carries the
underlying exception string when there is one.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code = 500

    def __init__(self, message: str, error: Optional[str] = None):
        self.message = message
        self.error = error
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"message": self.message}
        if self.error:
            body["error"] = self.error
        return body


class AuthenticationError(AppError):
    status_code = 401


class PermissionDeniedError(AppError):
    status_code = 403


class NotFoundError(AppError):
    status_code = 404


class BadRequestError(AppError):
    status_code = 400


class InvalidTransitionError(BadRequestError):
    """Requested status change is not an edge of the article workflow."""

    def __init__(self, current: str, requested: str, message: Optional[str] = None):
        self.current = current
        self.requested = requested
        super().__init__(
            message
            or f'Invalid transition: cannot move article from "{current}" to "{requested}"'
        )


class ConflictError(AppError):
    status_code = 409


class StorageError(AppError):
    status_code = 500


# ── Handlers (registered in app.api.main) ──

async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path}: {exc.message} ({exc.error})")
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404 and exc.detail == "Not Found":
        message = "Route not found"
    else:
        message = str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": message},
        headers=getattr(exc, "headers", None),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"field": ".".join(str(p) for p in err.get("loc", ())[1:]), "message": err.get("msg")}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={"message": "Invalid request body", "errors": errors},
    )


async def internal_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception: %s", exc)
    return JSONResponse(
        status_code=500,
        content={"message": "Internal server error", "error": str(exc)},
    )
