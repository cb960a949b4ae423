"""
ark/core/errors.py
───────────────────
Domain error taxonomy and the FastAPI handlers that render it.

Services and repositories raise these, never HTTPException.

  NotFoundError     404  row missing OR owned by another tenant (indistinguishable)
  BadRequestError   400  malformed input caught by handwritten checks
  ValidationError   400  declarative field validation, carries field errors
  UnauthorizedError 401  missing / invalid bearer token
  RepositoryError   500  unexpected driver error, wrapped with operation context
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

log = logging.getLogger(__name__)


class AppError(Exception):
    code: str = "APP_ERROR"
    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(
        self,
        message: str = "",
        *,
        field_errors: Optional[list[dict[str, str]]] = None,
    ) -> None:
        self.message = message or self.__class__.__name__
        self.field_errors = field_errors
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"success": False, "error": self.message, "code": self.code}
        if self.field_errors:
            body["field_errors"] = self.field_errors
        return body


class NotFoundError(AppError):
    code = "NOT_FOUND"
    status_code = status.HTTP_404_NOT_FOUND


class BadRequestError(AppError):
    code = "BAD_REQUEST"
    status_code = status.HTTP_400_BAD_REQUEST


class ValidationError(BadRequestError):
    code = "VALIDATION_ERROR"


class UnauthorizedError(AppError):
    code = "UNAUTHORIZED"
    status_code = status.HTTP_401_UNAUTHORIZED


class RepositoryError(AppError):
    code = "INTERNAL_ERROR"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


# ── Field error messages ────────────────────────────────────────────────

_LOCATIONS = ("body", "query", "path", "header")


def _field_name(loc: tuple) -> str:
    # ("body", "tags", 3) -> "tags[3]" ; ("query", "limit") -> "limit"
    parts = loc[1:] if len(loc) > 1 and loc[0] in _LOCATIONS else loc
    name = ""
    for item in parts:
        if isinstance(item, int):
            name += f"[{item}]"
        else:
            name = f"{name}.{item}" if name else str(item)
    return name or "body"


def _field_message(error: dict) -> str:
    kind = error.get("type", "")
    ctx = error.get("ctx") or {}
    if kind == "missing":
        return "is required"
    if kind == "string_too_short":
        return f"must be at least {ctx.get('min_length')} characters"
    if kind == "string_too_long":
        return f"must not exceed {ctx.get('max_length')} characters"
    if kind == "too_short":
        return f"must contain at least {ctx.get('min_length')} items"
    if kind == "too_long":
        return f"must not contain more than {ctx.get('max_length')} items"
    if kind in ("greater_than_equal", "greater_than"):
        return f"must be at least {ctx.get('ge', ctx.get('gt'))}"
    if kind in ("less_than_equal", "less_than"):
        return f"must not exceed {ctx.get('le', ctx.get('lt'))}"
    if kind in ("literal_error", "enum"):
        return f"must be one of: {ctx.get('expected')}"
    if kind.startswith("uuid"):
        return "must be a valid UUID"
    return error.get("msg", "is invalid")


def _field_error(err: dict) -> dict[str, str]:
    if err.get("type") == "json_invalid":
        # loc points at a character offset, not a field
        return {"field": "body", "error": "must be valid JSON"}
    return {"field": _field_name(tuple(err.get("loc", ()))), "error": _field_message(err)}


def field_errors_from(exc: RequestValidationError) -> list[dict[str, str]]:
    return [_field_error(err) for err in exc.errors()]


# ── Handlers ────────────────────────────────────────────────────────────

async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        log.error(f"[Errors] {request.method} {request.url.path}: {exc.message}", exc_info=exc)
        body = {"success": False, "error": "An internal error occurred.", "code": exc.code}
    else:
        log.debug(f"[Errors] {request.method} {request.url.path} -> {exc.status_code} {exc.message}")
        body = exc.to_dict()
    return JSONResponse(status_code=exc.status_code, content=body)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    err = ValidationError("Validation failed", field_errors=field_errors_from(exc))
    return JSONResponse(status_code=err.status_code, content=err.to_dict())


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    log.error(f"[Errors] Unhandled exception on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"success": False, "error": "An internal error occurred.", "code": "INTERNAL_ERROR"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
