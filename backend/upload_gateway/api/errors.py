import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from upload_gateway.core.errors import ConfigurationError, MalformedFieldError, UploadError
from upload_gateway.schemas import ResponseMessage

logger = logging.getLogger(__name__)


def message_response(status_code: int, message: str) -> JSONResponse:
    body = ResponseMessage(status=status_code, message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Unknown paths and unsupported methods on known paths share the fallback.
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        return message_response(status.HTTP_404_NOT_FOUND, "404 not found")
    return message_response(exc.status_code, str(exc.detail))


async def configuration_error_handler(request: Request, exc: ConfigurationError) -> JSONResponse:
    logger.error("Configuration error while handling %s: %s", request.url.path, exc)
    return message_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Server configuration error")


async def malformed_field_handler(request: Request, exc: MalformedFieldError) -> JSONResponse:
    logger.warning("Rejected multipart field: %s", exc)
    return message_response(status.HTTP_400_BAD_REQUEST, "Malformed file field")


async def upload_error_handler(request: Request, exc: UploadError) -> JSONResponse:
    logger.error("Upload failed: %s", exc, exc_info=exc.__cause__ or exc)
    return message_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to upload file")


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error while handling %s", request.url.path, exc_info=exc)
    return message_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(ConfigurationError, configuration_error_handler)
    app.add_exception_handler(MalformedFieldError, malformed_field_handler)
    app.add_exception_handler(UploadError, upload_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
