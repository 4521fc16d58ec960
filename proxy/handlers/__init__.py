"""
Request handlers for the proxy server.
"""
from .token_handler import TokenExchangeHandler

__all__ = [
    'TokenExchangeHandler',
]
