"""Translate service-layer failures into HTTP responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from postboard_backend.api.services import (
    EntityNotFoundError,
    InvalidFieldReferenceError,
    InvalidFieldValueError,
)

logger = logging.getLogger(__name__)


def install_exception_handlers(app: FastAPI) -> None:
    """Register handlers mapping service errors to ``{"detail": ...}`` bodies."""

    @app.exception_handler(EntityNotFoundError)
    def _handle_not_found(_request: Request, exc: EntityNotFoundError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)}
        )

    @app.exception_handler(InvalidFieldReferenceError)
    def _handle_invalid_field(
        _request: Request, exc: InvalidFieldReferenceError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": str(exc), "field": exc.field},
        )

    @app.exception_handler(InvalidFieldValueError)
    def _handle_invalid_value(
        _request: Request, exc: InvalidFieldValueError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": str(exc), "field": exc.field},
        )

    @app.exception_handler(Exception)
    def _handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )


__all__ = ["install_exception_handlers"]
