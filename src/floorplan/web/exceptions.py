"""Error handlers for the REST API.

Every handler answers with the same body shape::

    {"error": "...", "error_type": "...", "details": ...}
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from floorplan.application.serialization import LayoutFormatError
from floorplan.domain import (
    DuplicateEntityError,
    ExportError,
    LayoutNotFoundError,
    StorageError,
    UnsupportedFormatError,
)

logger = logging.getLogger(__name__)


def _error_response(
    status_code: int, error: str, error_type: str, details: object = None
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "error_type": error_type, "details": details},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers with the FastAPI app."""

    @app.exception_handler(LayoutNotFoundError)
    async def layout_not_found_handler(
        request: Request, exc: LayoutNotFoundError
    ) -> JSONResponse:
        return _error_response(
            404, f"Layout not found: {exc.slug}", "not_found", {"slug": exc.slug}
        )

    @app.exception_handler(LayoutFormatError)
    async def layout_format_handler(
        request: Request, exc: LayoutFormatError
    ) -> JSONResponse:
        return _error_response(422, exc.message, exc.error_type, exc.details or None)

    @app.exception_handler(DuplicateEntityError)
    async def duplicate_entity_handler(
        request: Request, exc: DuplicateEntityError
    ) -> JSONResponse:
        return _error_response(
            400, str(exc), "duplicate_entity", {"id": exc.entity_id}
        )

    @app.exception_handler(UnsupportedFormatError)
    async def unsupported_format_handler(
        request: Request, exc: UnsupportedFormatError
    ) -> JSONResponse:
        return _error_response(
            400,
            str(exc),
            "unsupported_format",
            {"format": exc.format_name, "available": exc.available},
        )

    @app.exception_handler(ExportError)
    async def export_error_handler(request: Request, exc: ExportError) -> JSONResponse:
        logger.warning(f"Export failed: {exc.message}")
        return _error_response(
            500, exc.message, "export", {"format": exc.format_name}
        )

    @app.exception_handler(StorageError)
    async def storage_error_handler(
        request: Request, exc: StorageError
    ) -> JSONResponse:
        logger.warning(f"Storage failure: {exc.message}")
        return _error_response(500, exc.message, "storage", {"slug": exc.slug})

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
        return _error_response(400, str(exc), "invalid_request")
