"""
Token exchange orchestration.

One request moves through: parse -> validate -> exchange -> enrich -> respond.
Any step can fail; failures are raised as ServiceError subclasses whose
messages are safe for the client. Provider and backend detail only goes to
the logs, and token values, client secrets and authorization codes never do.
"""

import logging
import uuid
from typing import Any, Callable, Dict, Mapping, Optional

import httpx
from pydantic import ValidationError

from oauth import (
    PROVIDERS,
    EnrichmentError,
    ExchangeError,
    ExchangeRequest,
    ProviderConfig,
    RedirectValidator,
    exchange_code,
    fetch_user_info,
)
from oauth.providers import normalize_provider
from oauth.token_exchange import CredentialLookup
from oauth.utils import loads_strict
from ..errors import BadRequestError, ServerError, ServiceError

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("code", "redirect_uri", "provider")

EXCHANGE_FAILED = "Token exchange failed"
USER_INFO_FAILED = "Failed to retrieve user information"


class TokenExchangeHandler:
    """Runs the authorization code exchange for one request at a time

    Holds only immutable collaborators, so a single instance serves
    concurrent requests. The provider call and the profile lookup run
    sequentially (the lookup needs the ID token) and are never retried.
    """

    def __init__(
        self,
        validator: RedirectValidator,
        credentials: CredentialLookup,
        user_info_url: str,
        environment: str,
        providers: Mapping[str, ProviderConfig] = PROVIDERS,
        http_client_factory: Optional[Callable[[], httpx.AsyncClient]] = None,
        timeout: float = 30.0,
    ):
        self.validator = validator
        self.credentials = credentials
        self.user_info_url = user_info_url
        self.environment = environment
        self.providers = providers
        self.timeout = timeout
        self.http_client_factory = http_client_factory or self._default_client

    def _default_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout)

    def parse_request(self, raw_body: bytes) -> ExchangeRequest:
        """Parse and check the request body

        Raises:
            BadRequestError: For malformed JSON or a missing required field
        """
        try:
            data = loads_strict(raw_body or b"")
            if not isinstance(data, dict):
                raise ValueError("request body is not a JSON object")
            request = ExchangeRequest.model_validate(data)
        except (ValueError, ValidationError):
            raise BadRequestError("Invalid request body")

        for field in REQUIRED_FIELDS:
            if not getattr(request, field):
                raise BadRequestError(f"{field} is required")

        return request

    async def handle(self, raw_body: bytes, referral_code: Optional[str] = None) -> Dict[str, Any]:
        """Exchange the code in raw_body and return the enriched token payload

        Args:
            raw_body: Raw POST body
            referral_code: Optional X-Referral-Code header value

        Returns:
            Token response payload including user_info

        Raises:
            BadRequestError: For client-correctable failures (400)
            ServerError: When the profile lookup fails (500)
        """
        request_id = uuid.uuid4().hex[:8]
        try:
            return await self._handle(raw_body, referral_code, request_id)
        except ServiceError:
            raise
        except Exception as e:
            logger.error(f"[{self.environment}] [{request_id}] OAuth token exchange error: {e!r}")
            raise BadRequestError(EXCHANGE_FAILED)

    async def _handle(self, raw_body: bytes, referral_code: Optional[str], request_id: str) -> Dict[str, Any]:
        request = self.parse_request(raw_body)

        if not self.validator.validate_redirect_uri(request.redirect_uri):
            logger.error(f"[{self.environment}] [{request_id}] Invalid redirect_uri attempted: {request.redirect_uri}")
            raise BadRequestError("invalid redirect_uri")

        provider = normalize_provider(request.provider)
        config = self.providers.get(provider)
        if config is None:
            raise BadRequestError(f"Unsupported OAuth provider: {request.provider.lower()}")

        logger.info(f"[{self.environment}] [{request_id}] Exchanging authorization code with {config.display_name}")

        async with self.http_client_factory() as client:
            try:
                token_response = await exchange_code(request, self.credentials, config, client)
            except ExchangeError as e:
                if e.is_config_error:
                    logger.error(f"[{self.environment}] [{request_id}] {config.display_name} is misconfigured: {e}")
                else:
                    logger.error(f"[{self.environment}] [{request_id}] {config.display_name} token exchange failed: {e}")
                raise BadRequestError(EXCHANGE_FAILED)

            # exchange_code already checks this; the profile lookup depends on it
            if not token_response.id_token:
                logger.error(f"[{self.environment}] [{request_id}] id_token missing from provider response")
                raise BadRequestError(EXCHANGE_FAILED)

            # No graceful degradation: without a profile the whole exchange fails
            try:
                user_info = await fetch_user_info(
                    token_response.id_token,
                    self.user_info_url,
                    client,
                    referral_code=referral_code or None,
                )
            except EnrichmentError as e:
                logger.error(f"[{self.environment}] [{request_id}] Failed to fetch user info: {e}")
                raise ServerError(USER_INFO_FAILED)

        token_response.user_info = user_info
        payload = token_response.to_payload()
        # A JSON null profile is still a profile; keep the key
        payload["user_info"] = user_info

        logger.info(f"[{self.environment}] [{request_id}] Token exchange with {config.display_name} complete")
        return payload
