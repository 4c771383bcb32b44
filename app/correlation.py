# app/correlation.py
"""
Request context middleware.

Provides:
- X-Request-Id handling (client-provided when valid, otherwise UUID4)
- X-User-Id handling (caller identity, 'anonymous' when absent or invalid)
- request.state storage for downstream access
"""
from __future__ import annotations

import re
import uuid
from typing import Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware


MAX_HEADER_ID_LENGTH = 64
# Alphanumeric, hyphens, underscores only (safe for logging)
SAFE_ID_PATTERN = re.compile(r"^[a-zA-Z0-9_-]+$")

ANONYMOUS_USER = "anonymous"


def validate_header_id(value: Optional[str]) -> Optional[str]:
    """Return the value if it is a safe identifier, None otherwise."""
    if not value:
        return None
    if len(value) > MAX_HEADER_ID_LENGTH:
        return None
    if not SAFE_ID_PATTERN.match(value):
        return None
    return value


def generate_request_id() -> str:
    return str(uuid.uuid4())


def get_request_id(request: Request) -> Optional[str]:
    """Request ID set by the middleware, if any."""
    return getattr(request.state, "request_id", None)


def get_user_id(request: Request) -> str:
    """
    User the request acts for.

    Identity is resolved upstream; this service trusts X-User-Id and
    falls back to the shared anonymous user.
    """
    user_id = getattr(request.state, "user_id", None)
    if user_id:
        return user_id
    return validate_header_id(request.headers.get("x-user-id")) or ANONYMOUS_USER


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Stores request_id/user_id on request.state and echoes X-Request-Id."""

    async def dispatch(self, request: Request, call_next):
        request_id = validate_header_id(request.headers.get("x-request-id")) or generate_request_id()
        request.state.request_id = request_id
        request.state.user_id = (
            validate_header_id(request.headers.get("x-user-id")) or ANONYMOUS_USER
        )

        response = await call_next(request)
        response.headers["X-Request-Id"] = request_id
        return response
