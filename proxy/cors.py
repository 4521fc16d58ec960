"""
CORS headers for allowlisted origins only.

Disallowed origins get no CORS headers at all (never a wildcard), so the
browser refuses to hand the response to the page.
"""
from typing import Dict, Optional
from fastapi import Response

from oauth import RedirectValidator

ALLOW_METHODS = "GET, POST, OPTIONS"
ALLOW_HEADERS = "Content-Type, X-Referral-Code"
PREFLIGHT_MAX_AGE = "86400"


def cors_headers(origin: Optional[str], validator: RedirectValidator, preflight: bool = False) -> Dict[str, str]:
    """Build the CORS headers for a request origin

    Args:
        origin: Origin header value (may be None)
        validator: Allowlist validator
        preflight: Include Access-Control-Max-Age

    Returns:
        Header dict, empty when the origin is not allowed
    """
    if not origin or not validator.is_allowed_origin(origin):
        return {}

    headers = {
        "Access-Control-Allow-Origin": origin,
        "Access-Control-Allow-Methods": ALLOW_METHODS,
        "Access-Control-Allow-Headers": ALLOW_HEADERS,
    }
    if preflight:
        headers["Access-Control-Max-Age"] = PREFLIGHT_MAX_AGE
    return headers


def preflight_response(origin: Optional[str], validator: RedirectValidator) -> Response:
    """Answer a CORS preflight; always 204, headers only for allowed origins"""
    return Response(status_code=204, headers=cors_headers(origin, validator, preflight=True))
