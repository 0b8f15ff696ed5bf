from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Request

from .errors import DocumentNotLoadedError

if TYPE_CHECKING:
    from .config import Settings
    from .services.status import StatusService
    from .utils.rate_limiter import RateLimiter


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_rate_limiter(request: Request) -> RateLimiter:
    return request.app.state.rate_limiter


def get_status_service(request: Request) -> StatusService:
    # Populated by the lifespan unless a document was injected into create_app.
    service = getattr(request.app.state, "status_service", None)
    if service is None:
        raise DocumentNotLoadedError()
    return service
