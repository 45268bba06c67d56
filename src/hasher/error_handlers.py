import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_exc_handler(request: Request, exc: StarletteHTTPException):
        headers = dict(exc.headers or {})
        if exc.status_code == 405:
            allowed = headers.get("Allow", "")
            body = f"405 Not Allowed: {allowed} only is accepted for this endpoint"
        elif exc.status_code == 404:
            body = "404 page not found"
        else:
            logger.warning(
                "HTTPException path=%s status=%s detail=%r",
                request.url.path, exc.status_code, exc.detail,
            )
            body = str(exc.detail)
        return PlainTextResponse(body, status_code=exc.status_code, headers=headers)

    @app.exception_handler(RequestValidationError)
    async def validation_exc_handler(request: Request, exc: RequestValidationError):
        logger.warning("ValidationError path=%s errors=%s", request.url.path, exc.errors())
        return PlainTextResponse(f"invalid form payload: {exc.errors()}", status_code=400)

    @app.exception_handler(Exception)
    async def unhandled_exc_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error at path=%s", request.url.path)
        return PlainTextResponse("Internal server error", status_code=500)
