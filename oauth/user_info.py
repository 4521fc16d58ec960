"""User profile lookup against the internal backend"""

import logging
from typing import Any, Dict, Optional

import httpx

from .utils import loads_strict

logger = logging.getLogger(__name__)

USER_INFO_PATH = "/user/info"


class EnrichmentError(Exception):
    """Raised when the backend cannot return a user profile"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


async def fetch_user_info(
    id_token: str,
    base_url: str,
    client: httpx.AsyncClient,
    referral_code: Optional[str] = None
) -> Any:
    """Fetch the user profile for an ID token from the backend

    The ID token is passed through as a credential and never inspected here.
    The profile is returned as raw JSON so this service stays agnostic of its
    schema.

    Args:
        id_token: ID token issued by the provider
        base_url: Backend base URL
        client: HTTP client used for the outbound call
        referral_code: Optional referral code forwarded to the backend

    Returns:
        Parsed JSON profile

    Raises:
        EnrichmentError: On transport failure, non-2xx status or invalid JSON
    """
    url = f"{base_url.rstrip('/')}{USER_INFO_PATH}"

    headers: Dict[str, str] = {"x-auth-token": id_token}
    if referral_code:
        headers["x-referral-code"] = referral_code

    try:
        response = await client.get(url, headers=headers)
    except httpx.HTTPError as e:
        raise EnrichmentError(f"User info request failed: {e!r}") from e

    body = response.text

    if not response.is_success:
        raise EnrichmentError(
            f"User info request failed with status {response.status_code}: {body}",
            status_code=response.status_code,
        )

    try:
        return loads_strict(body)
    except ValueError as e:
        raise EnrichmentError(f"Failed to parse user info response: {body}") from e
