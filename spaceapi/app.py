from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .config import Settings, get_settings
from .errors import SpaceAPIError
from .logging_config import logger, setup_logging
from .models.schemas import SpaceAPI
from .routes import health, space
from .services.document import load_document
from .services.status import StatusService
from .utils.rate_limiter import RateLimiter


def create_app(
    settings: Optional[Settings] = None,
    document: Optional[SpaceAPI] = None,
    limiter: Optional[RateLimiter] = None,
) -> FastAPI:
    """Build the application.

    Collaborators passed in are used as-is. Without a ``document`` the status
    file named by ``settings.data_file`` is loaded during startup, and a load
    failure aborts startup. The limiter's background sweep is started only by
    the lifespan and only when ``settings.cleanup_enabled`` is set.
    """
    settings = settings or get_settings()
    limiter = limiter or RateLimiter()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if getattr(app.state, "status_service", None) is None:
            app.state.status_service = StatusService(load_document(settings.data_file))
        if settings.cleanup_enabled:
            limiter.start()
        logger.info("app.ready", space=app.state.status_service.snapshot().get("space"))
        try:
            yield
        finally:
            limiter.stop()
            logger.info("app.shutdown")

    app = FastAPI(title=settings.app_name, version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.rate_limiter = limiter
    app.state.status_service = StatusService(document) if document is not None else None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-API-Key"],
    )

    @app.exception_handler(SpaceAPIError)
    async def spaceapi_error_handler(request: Request, exc: SpaceAPIError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.to_response()},
            headers=exc.headers or None,
        )

    app.include_router(health.router)
    app.include_router(space.router)
    return app


setup_logging(get_settings().log_level)
app = create_app()
logger.info("app.start", version=__version__)
