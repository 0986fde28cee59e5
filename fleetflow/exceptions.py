import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from fleetflow.services.exceptions import (
    ConflictError,
    DatabaseQueryError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)


async def validation_exception_handler(request: Request, exc: ValidationError):
    return JSONResponse(
        status_code=400,
        content={
            "error": "validation_error",
            "message": exc.message,
            "field": exc.field,
        },
    )


async def not_found_exception_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"error": str(exc)})


async def conflict_exception_handler(request: Request, exc: ConflictError):
    return JSONResponse(status_code=409, content={"error": str(exc)})


async def database_exception_handler(request: Request, exc: DatabaseQueryError):
    # Raw driver message goes back to the client, the dashboard shows it inline
    logger.error("Database error", extra={"path": request.url.path, "error": str(exc)})
    return JSONResponse(status_code=500, content={"error": str(exc)})


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(ValidationError, validation_exception_handler)
    app.add_exception_handler(NotFoundError, not_found_exception_handler)
    app.add_exception_handler(ConflictError, conflict_exception_handler)
    app.add_exception_handler(DatabaseQueryError, database_exception_handler)
