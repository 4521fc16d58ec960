"""
Middleware for mount-point stripping, CORS and request logging.
"""
import time
import logging
from typing import Iterable, List
from fastapi import Request

from .cors import cors_headers, preflight_response

logger = logging.getLogger(__name__)


def strip_route_prefix(path: str, prefixes: Iterable[str]) -> str:
    """Remove the first matching mount-point prefix from a path

    Prefixes only match at a segment boundary ("/api" strips "/api/health"
    but not "/apiary"), longest first. A bare prefix becomes "/".
    """
    for prefix in sorted((p.rstrip("/") for p in prefixes if p.strip("/")), key=len, reverse=True):
        if path == prefix:
            return "/"
        if path.startswith(prefix + "/"):
            return path[len(prefix):]
    return path


class RoutePrefixMiddleware:
    """ASGI middleware that strips configured mount points before routing

    Lets the same app serve e.g. /api (production) and /api-staging.
    """

    def __init__(self, app, prefixes: List[str]):
        self.app = app
        self.prefixes = list(prefixes)

    async def __call__(self, scope, receive, send):
        if scope["type"] == "http" and self.prefixes:
            path = scope["path"]
            stripped = strip_route_prefix(path, self.prefixes)
            if stripped != path:
                scope = dict(scope)
                scope["path"] = stripped
                scope["raw_path"] = stripped.encode("utf-8")
        await self.app(scope, receive, send)


async def cors_middleware(request: Request, call_next):
    """Answer preflights and add CORS headers for allowlisted origins"""
    validator = request.app.state.validator
    origin = request.headers.get("origin")

    if request.method == "OPTIONS":
        return preflight_response(origin, validator)

    response = await call_next(request)
    response.headers.update(cors_headers(origin, validator))
    return response


async def log_requests_middleware(request: Request, call_next):
    """Middleware for request logging and timing"""
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time

    environment = request.app.state.environment
    logger.info(f"[{environment}] {request.method} {request.url.path} - {response.status_code} - {process_time:.3f}s")

    return response
