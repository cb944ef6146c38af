import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from upload_gateway.api.errors import register_exception_handlers
from upload_gateway.api.routers import health as health_router
from upload_gateway.api.routers import upload as upload_router
from upload_gateway.core.config import BIND_HOST, BIND_PORT, get_settings
from upload_gateway.core.errors import ConfigurationError
from upload_gateway.core.logging import configure_logging
from upload_gateway.services.storage import StorageService, build_s3_client

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Upload gateway ready")
    yield
    logger.info("Upload gateway shutting down")


def create_app(storage: StorageService) -> FastAPI:
    app = FastAPI(title="Upload Gateway", lifespan=lifespan)
    app.state.storage = storage

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(health_router.router)
    app.include_router(upload_router.router)

    return app


def run() -> None:
    try:
        settings = get_settings()
    except ConfigurationError as exc:
        configure_logging()
        logger.critical("Refusing to start: %s", exc)
        raise SystemExit(f"cannot start upload gateway: {exc}") from exc

    configure_logging(settings.log_level)
    storage = StorageService(build_s3_client(settings))
    uvicorn.run(create_app(storage), host=BIND_HOST, port=BIND_PORT)


if __name__ == "__main__":
    run()
