"""JSON error responses.

HTTP errors answer ``{"error": "..."}``; anything unhandled answers
``{"error": "Something went wrong!", "message": "..."}`` and only shows the
real message outside production.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI, settings: Settings) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        status_code = exc.status_code
        detail = exc.detail
        headers = getattr(exc, "headers", None)
        # Raised by the router itself when no route matched the path or the method
        if (status_code, detail) in ((404, "Not Found"), (405, "Method Not Allowed")):
            status_code, detail, headers = 404, "Route not found", None
        return JSONResponse(
            status_code=status_code,
            content={"error": str(detail)},
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        fields = []
        for err in exc.errors():
            loc = " -> ".join(str(part) for part in err["loc"])
            fields.append({"field": loc, "message": err["msg"]})
        return JSONResponse(
            status_code=422,
            content={"error": "Invalid request", "details": fields},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content={
                "error": "Something went wrong!",
                "message": "Internal server error" if settings.is_production else str(exc),
            },
        )
