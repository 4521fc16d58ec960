"""
Endpoint handlers for the proxy server.
"""
from .health import router as health_router
from .token import router as token_router

__all__ = [
    'health_router',
    'token_router',
]
