"""Redirect URI and CORS origin validation against the allowlist"""

import logging
from typing import List, Optional
from urllib.parse import urlsplit

from .patterns import PatternCache, WILDCARD

logger = logging.getLogger(__name__)

# Stands in for "*" while a pattern goes through the URL parser
WILDCARD_PLACEHOLDER = "wildcard0placeholder"

# Browsers omit these from the Origin header
DEFAULT_PORTS = {"http": 80, "https": 443}


def split_allowlist(allowlist_csv: str) -> List[str]:
    """Split a comma-separated allowlist into trimmed, non-empty patterns"""
    if not allowlist_csv:
        return []
    return [entry.strip() for entry in allowlist_csv.split(",") if entry.strip()]


def extract_origin(pattern: str) -> Optional[str]:
    """Reduce a URL or URL pattern to its origin (scheme://host[:port])

    Wildcards survive the reduction, so "https://*.example.com/callback"
    becomes "https://*.example.com".

    Args:
        pattern: A URL or wildcard URL pattern

    Returns:
        The origin portion, or None if the pattern is not a parseable URL
    """
    candidate = pattern.replace(WILDCARD, WILDCARD_PLACEHOLDER)
    try:
        parts = urlsplit(candidate)
        # .port raises ValueError for a non-numeric or out-of-range port
        port = parts.port
    except ValueError:
        return None

    if not parts.scheme or not parts.netloc:
        return None

    scheme = parts.scheme.lower()
    host = parts.netloc.rsplit("@", 1)[-1].lower()
    if port is not None and DEFAULT_PORTS.get(scheme) == port:
        host = host.rsplit(":", 1)[0]
    if not host:
        return None

    origin = f"{scheme}://{host}"
    return origin.replace(WILDCARD_PLACEHOLDER, WILDCARD)


def validate_redirect_uri(redirect_uri: str, allowlist_csv: str, cache: PatternCache) -> bool:
    """Check that a redirect URI matches at least one allowlist pattern

    This is what keeps tokens from being issued to an attacker-controlled
    redirect target.

    Args:
        redirect_uri: The redirect_uri from the exchange request
        allowlist_csv: Comma-separated allowlist patterns
        cache: Compiled pattern cache

    Returns:
        True if allowed, False otherwise (always False for an empty URI)
    """
    if not redirect_uri:
        return False

    for pattern in split_allowlist(allowlist_csv):
        if cache.match(redirect_uri, pattern):
            return True

    return False


def is_allowed_origin(origin: str, allowlist_csv: str, cache: PatternCache) -> bool:
    """Check a request Origin against the origins of the allowlist patterns

    Args:
        origin: The Origin header value
        allowlist_csv: Comma-separated allowlist patterns
        cache: Compiled pattern cache

    Returns:
        True if the origin may receive CORS headers
    """
    if not origin:
        return False

    for pattern in split_allowlist(allowlist_csv):
        pattern_origin = extract_origin(pattern)
        if pattern_origin is None:
            logger.debug(f"Skipping unparseable allowlist entry for origin check: {pattern!r}")
            continue
        if cache.match(origin, pattern_origin):
            return True

    return False


class RedirectValidator:
    """Allowlist validation bound to one allowlist and one pattern cache

    Created once at application startup. Tests build their own instances
    so every test gets a fresh cache.
    """

    def __init__(self, allowlist_csv: str, cache: Optional[PatternCache] = None):
        self.allowlist_csv = allowlist_csv or ""
        self.cache = cache if cache is not None else PatternCache()

    @property
    def patterns(self) -> List[str]:
        return split_allowlist(self.allowlist_csv)

    def validate_redirect_uri(self, redirect_uri: str) -> bool:
        return validate_redirect_uri(redirect_uri, self.allowlist_csv, self.cache)

    def is_allowed_origin(self, origin: Optional[str]) -> bool:
        return is_allowed_origin(origin or "", self.allowlist_csv, self.cache)
