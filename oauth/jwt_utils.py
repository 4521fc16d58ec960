"""
ID token claim decoding (unverified).

The payload is decoded without checking the signature. Use the result only
as a display fallback, never for authorization decisions.
"""
import base64
import json
from typing import Any, Dict


def decode_jwt_claims(token: str) -> Dict[str, Any]:
    """
    Decode the claims segment of a JWT without verification.

    Args:
        token: JWT string (header.payload.signature)

    Returns:
        Decoded payload as a dictionary

    Raises:
        ValueError: If the token is not a three-part JWT or the payload is
            not a base64url-encoded JSON object
    """
    parts = (token or "").split(".")
    if len(parts) != 3:
        raise ValueError("Invalid JWT format")

    # base64url without padding; pad to a multiple of 4
    payload = parts[1]
    padded = payload + "=" * (-len(payload) % 4)

    try:
        decoded = base64.urlsafe_b64decode(padded.encode())
        claims = json.loads(decoded.decode("utf-8"))
    except (ValueError, UnicodeDecodeError) as e:
        raise ValueError(f"Invalid JWT payload: {e}") from e

    if not isinstance(claims, dict):
        raise ValueError("Invalid JWT payload: not an object")
    return claims


def extract_email_from_id_token(id_token: str) -> str:
    """
    Pull an email address out of a Google or Microsoft ID token.

    Tries "email", then "preferred_username" (personal Microsoft accounts),
    then "upn" (work/school accounts). The last two only count when they
    look like an address.

    Raises:
        ValueError: If no email claim can be found
    """
    claims = decode_jwt_claims(id_token)

    email = claims.get("email")
    if email and isinstance(email, str):
        return email

    for claim in ("preferred_username", "upn"):
        value = claims.get(claim)
        if value and isinstance(value, str) and "@" in value:
            return value

    raise ValueError("Email claim not found in token")
