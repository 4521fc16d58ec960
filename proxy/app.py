"""
FastAPI application initialization and configuration.
"""
import logging
from typing import Callable, List, Mapping, Optional

import httpx
from fastapi import FastAPI

import settings
from oauth import PROVIDERS, ProviderConfig, RedirectValidator
from oauth.token_exchange import CredentialLookup
from .errors import register_error_handlers
from .handlers import TokenExchangeHandler
from .middleware import RoutePrefixMiddleware, cors_middleware, log_requests_middleware
from .endpoints import health_router, token_router

logger = logging.getLogger(__name__)


def create_app(
    environment: Optional[str] = None,
    allowed_redirect_uris: Optional[str] = None,
    user_info_url: Optional[str] = None,
    route_prefixes: Optional[List[str]] = None,
    credentials: Optional[CredentialLookup] = None,
    providers: Mapping[str, ProviderConfig] = PROVIDERS,
    http_client_factory: Optional[Callable[[], httpx.AsyncClient]] = None,
) -> FastAPI:
    """Build the token exchange application

    Unset arguments fall back to values from settings. The validator (and
    its pattern cache) and the token handler are created here, once, and
    shared by all requests through app.state.
    """
    environment = settings.ENVIRONMENT if environment is None else environment
    allowed_redirect_uris = settings.ALLOWED_REDIRECT_URIS if allowed_redirect_uris is None else allowed_redirect_uris
    user_info_url = settings.USER_INFO_SERVICE_URL if user_info_url is None else user_info_url
    route_prefixes = settings.ROUTE_PREFIXES if route_prefixes is None else route_prefixes

    app = FastAPI(
        title="OAuth Token Exchange Proxy",
        version="1.0.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    validator = RedirectValidator(allowed_redirect_uris)
    app.state.environment = environment
    app.state.validator = validator
    app.state.token_handler = TokenExchangeHandler(
        validator=validator,
        credentials=credentials or settings.get_credential,
        user_info_url=user_info_url,
        environment=environment,
        providers=providers,
        http_client_factory=http_client_factory,
        timeout=settings.REQUEST_TIMEOUT,
    )

    register_error_handlers(app)

    # Last added runs first: prefixes are stripped before CORS and logging
    app.middleware("http")(log_requests_middleware)
    app.middleware("http")(cors_middleware)
    app.add_middleware(RoutePrefixMiddleware, prefixes=route_prefixes)

    app.include_router(health_router)
    app.include_router(token_router)

    if not validator.patterns:
        logger.warning(f"[{environment}] ALLOWED_REDIRECT_URIS is empty; every redirect_uri will be rejected")
    if not user_info_url:
        logger.warning(f"[{environment}] USER_INFO_SERVICE_URL is not set; token exchanges will fail at enrichment")

    logger.debug(f"[{environment}] FastAPI application initialized with routers and middleware")
    return app


app = create_app()
