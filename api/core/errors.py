"""
Error taxonomy shared by the stores, the handler layer and the HTTP boundary.

Layers:
- StorageError: what a repository raises. Closed set: InvalidIdentifier, StorageFailure.
- HandlerError: what the service layer raises. Closed set: BadRequest, InternalError.
- HTTP: `register_error_handlers` renders HandlerError as a 400 or 500 JSON response.

Backend exceptions are chained with `raise ... from exc` so operators see them
in logs; their text never ends up in a response body.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

# source: https://www.postgresql.org/docs/current/errcodes-appendix.html
FOREIGN_KEY_VIOLATION = "23503"

DEFAULT_INTERNAL_ERROR_MESSAGE = "Something went wrong! Please try again."


class StorageError(Exception):
    """
    Base for store failures. `detail` is an optional operator-facing note.
    """

    def __init__(self, message: str, *, detail: str | None = None) -> None:
        self.message = message
        self.detail = detail
        super().__init__(message)

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message} ({self.detail})"
        return self.message


class InvalidIdentifier(StorageError):
    """
    The identifier could not be parsed, or it parsed but references no row
    where referential integrity applies.
    """

    def __init__(self, uuid: str, *, detail: str | None = None) -> None:
        super().__init__(f"Invalid UUID provided: {uuid}", detail=detail)
        self.uuid = uuid


class StorageFailure(StorageError):
    """Any other backend-level error."""

    def __init__(self, *, detail: str | None = None) -> None:
        super().__init__("Database error occurred", detail=detail)


def is_foreign_key_violation(exc: BaseException) -> bool:
    return getattr(exc, "sqlstate", None) == FOREIGN_KEY_VIOLATION


class HandlerError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HandlerError):
            return NotImplemented
        return type(self) is type(other) and self.message == other.message

    def __hash__(self) -> int:
        return hash((type(self), self.message))


class BadRequest(HandlerError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __str__(self) -> str:
        return f"Bad Request: {self.message}."


class InternalError(HandlerError):
    @classmethod
    def default(cls) -> InternalError:
        return cls(DEFAULT_INTERNAL_ERROR_MESSAGE)

    def __str__(self) -> str:
        return "An Internal Error has occurred."


def to_handler_error(exc: StorageError) -> HandlerError:
    """
    Downgrade a store failure to the handler-facing kind.
    """
    if isinstance(exc, InvalidIdentifier):
        return BadRequest(exc.uuid)
    return InternalError.default()


def register_error_handlers(app: FastAPI) -> None:
    """
    Render handler errors as JSON. InternalError bodies carry only the fixed message.
    """

    @app.exception_handler(BadRequest)
    async def handle_bad_request(_request: Request, exc: BadRequest) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

    @app.exception_handler(InternalError)
    async def handle_internal_error(_request: Request, exc: InternalError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

    @app.exception_handler(StorageError)
    async def handle_unmapped_storage_error(_request: Request, exc: StorageError) -> JSONResponse:
        handler_error = to_handler_error(exc)
        logger.error("unmapped_storage_error kind=%s", type(exc).__name__)
        return JSONResponse(status_code=handler_error.status_code, content={"detail": handler_error.message})
