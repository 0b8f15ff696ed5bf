"""API-key gate for write routes, with per-client failure tracking.

Order of checks: block status, server configuration, supplied credential.
A successful authentication never resets a client's failure record.
"""
from __future__ import annotations

from typing import Optional, Sequence

from fastapi import Depends, Request
from fastapi.security import APIKeyHeader, HTTPAuthorizationCredentials, HTTPBearer

from ..config import Settings
from ..deps import get_app_settings, get_rate_limiter
from ..errors import AuthenticationError, ConfigurationError, RateLimitedError
from ..logging_config import logger, security_logger
from .rate_limiter import RateLimiter

FORWARDED_HEADER = "X-Forwarded-For"
API_KEY_HEADER = "X-API-Key"

_bearer = HTTPBearer(auto_error=False)
_api_key = APIKeyHeader(name=API_KEY_HEADER, auto_error=False)


def client_identifier(request: Request, trusted_proxies: Sequence[str] = ()) -> str:
    """Rate-limit bucket for the caller.

    With no trusted proxies configured the forwarded header is taken as-is,
    which lets a client choose its own bucket. Listing proxies restricts the
    header to requests arriving from those hosts.
    """
    peer = request.client.host if request.client else "unknown"
    forwarded = (request.headers.get(FORWARDED_HEADER) or "").strip()
    if forwarded and (not trusted_proxies or peer in trusted_proxies):
        return forwarded
    return peer


def extract_credential(
    bearer: Optional[HTTPAuthorizationCredentials],
    api_key: Optional[str],
) -> str:
    if bearer is not None and bearer.credentials:
        return bearer.credentials
    return api_key or ""


async def require_api_key(
    request: Request,
    settings: Settings = Depends(get_app_settings),
    limiter: RateLimiter = Depends(get_rate_limiter),
    bearer: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
    api_key: Optional[str] = Depends(_api_key),
) -> str:
    """Admit the request or raise. Returns the caller's client identifier."""
    client_id = client_identifier(request, settings.trusted_proxies)

    if limiter.is_blocked(client_id):
        retry_after = limiter.get_retry_after_seconds(client_id)
        security_logger.warning("auth.blocked_request", client_id=client_id, retry_after=retry_after, path=request.url.path)
        raise RateLimitedError(retry_after)

    expected = settings.auth_key
    if not expected:
        logger.error("config.auth_key_missing", env="SPACEAPI_AUTH_KEY")
        raise ConfigurationError()

    provided = extract_credential(bearer, api_key)
    if not provided:
        limiter.record_failed_attempt(client_id)
        security_logger.info("auth.missing_key", client_id=client_id, path=request.url.path)
        raise AuthenticationError("API key required", error_code="AUTH_REQUIRED")

    if provided != expected:
        limiter.record_failed_attempt(client_id)
        security_logger.warning("auth.invalid_key", client_id=client_id, path=request.url.path)
        raise AuthenticationError("Invalid API key")

    return client_id
