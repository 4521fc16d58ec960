"""
OAuth token exchange proxy - server package.

Exchanges browser-supplied authorization codes with Google and Microsoft,
enriches the ID token with a backend user profile, and keeps client secrets
on the server.
"""
from .server import ProxyServer
from .app import app, create_app

__version__ = "1.0.0"

__all__ = [
    'ProxyServer',
    'app',
    'create_app',
]
