"""OAuth authorization code exchange, shared by every provider"""

import logging
from typing import Callable, Dict

import httpx
from pydantic import ValidationError

from .models import ExchangeRequest, TokenResponse
from .providers import ProviderConfig
from .utils import loads_strict

logger = logging.getLogger(__name__)

# Resolves a credential config key (e.g. GOOGLE_OAUTH_CLIENT_ID) to its value
CredentialLookup = Callable[[str], str]


class ExchangeError(Exception):
    """Raised when an authorization code cannot be exchanged for tokens"""

    def __init__(self, message: str, is_config_error: bool = False):
        super().__init__(message)
        self.is_config_error = is_config_error


def build_token_request(
    request: ExchangeRequest,
    client_id: str,
    client_secret: str
) -> Dict[str, str]:
    """Build the form fields for an authorization_code grant

    code_verifier is only sent when the client supplied one.
    """
    data = {
        "client_id": client_id,
        "client_secret": client_secret,
        "code": request.code or "",
        "redirect_uri": request.redirect_uri or "",
        "grant_type": "authorization_code",
    }
    if request.code_verifier:
        data["code_verifier"] = request.code_verifier
    return data


def describe_error_response(status_code: int, body: str) -> str:
    """Turn a failed token endpoint response into an error message

    Uses the provider's error/error_description when the body is a JSON
    object, otherwise falls back to the raw body.
    """
    try:
        payload = loads_strict(body)
    except ValueError:
        payload = None

    if isinstance(payload, dict):
        return f"Token exchange failed: {payload.get('error')} - {payload.get('error_description')}"
    return f"Token exchange failed with status {status_code}: {body}"


async def exchange_code(
    request: ExchangeRequest,
    credentials: CredentialLookup,
    config: ProviderConfig,
    client: httpx.AsyncClient
) -> TokenResponse:
    """Exchange an authorization code for tokens at the provider's endpoint

    Single attempt: authorization codes are single-use, so a failed
    exchange is never retried here.

    Args:
        request: The validated exchange request
        credentials: Lookup for the provider's client id/secret
        config: Provider configuration
        client: HTTP client used for the outbound call

    Returns:
        TokenResponse carrying at least access_token and id_token

    Raises:
        ExchangeError: On missing credentials, a non-2xx response, an
            unparseable body, or missing tokens
    """
    client_id = credentials(config.client_id_key)
    client_secret = credentials(config.client_secret_key)

    if not client_id:
        raise ExchangeError(f"{config.client_id_key} is not configured", is_config_error=True)
    if not client_secret:
        raise ExchangeError(f"{config.client_secret_key} is not configured", is_config_error=True)

    data = build_token_request(request, client_id, client_secret)

    logger.debug(f"Exchanging authorization code with {config.display_name} at {config.token_endpoint}")

    try:
        response = await client.post(
            config.token_endpoint,
            data=data,
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )
    except httpx.HTTPError as e:
        raise ExchangeError(f"{config.display_name} token request failed: {e!r}") from e

    # Read the full body first so error details survive a parse failure
    body = response.text

    logger.debug(f"{config.display_name} token response status: {response.status_code}")

    if not response.is_success:
        raise ExchangeError(describe_error_response(response.status_code, body))

    try:
        payload = loads_strict(body)
    except ValueError as e:
        raise ExchangeError(f"Failed to parse {config.display_name} token response: {e}") from e

    if not isinstance(payload, dict):
        raise ExchangeError(f"Unexpected {config.display_name} token response shape")

    try:
        token_response = TokenResponse.model_validate(payload)
    except ValidationError as e:
        raise ExchangeError(
            f"Invalid {config.display_name} token response: {e.error_count()} validation error(s)"
        ) from e

    if not token_response.access_token:
        raise ExchangeError("access_token missing in token response")
    if not token_response.id_token:
        raise ExchangeError("id_token missing in token response")

    return token_response
