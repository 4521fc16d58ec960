"""
OAuth provider configuration.

Every provider goes through the same exchange routine; a provider is only a
token endpoint plus the config keys of its client credentials. Adding one
means adding an entry to PROVIDERS.
"""
from dataclasses import dataclass
from typing import Dict, Mapping, Optional


@dataclass(frozen=True)
class ProviderConfig:
    """Static configuration for one OAuth provider"""
    name: str
    display_name: str
    token_endpoint: str
    client_id_key: str
    client_secret_key: str


GOOGLE = ProviderConfig(
    name="google",
    display_name="Google",
    token_endpoint="https://oauth2.googleapis.com/token",
    client_id_key="GOOGLE_OAUTH_CLIENT_ID",
    client_secret_key="GOOGLE_OAUTH_CLIENT_SECRET",
)

MICROSOFT = ProviderConfig(
    name="microsoft",
    display_name="Microsoft",
    token_endpoint="https://login.microsoftonline.com/common/oauth2/v2.0/token",
    client_id_key="MICROSOFT_OAUTH_CLIENT_ID",
    client_secret_key="MICROSOFT_OAUTH_CLIENT_SECRET",
)

PROVIDERS: Dict[str, ProviderConfig] = {
    GOOGLE.name: GOOGLE,
    MICROSOFT.name: MICROSOFT,
}

# Alternate names clients may send
PROVIDER_ALIASES: Dict[str, str] = {
    "outlook": MICROSOFT.name,
}


def normalize_provider(name: str) -> str:
    """Lowercase a provider tag and resolve aliases"""
    tag = (name or "").lower()
    return PROVIDER_ALIASES.get(tag, tag)


def resolve_provider(
    name: str,
    providers: Mapping[str, ProviderConfig] = PROVIDERS,
) -> Optional[ProviderConfig]:
    """Look up the provider configuration for a client-supplied tag

    Args:
        name: Provider tag from the request (case-insensitive)
        providers: Provider table to search

    Returns:
        The matching ProviderConfig, or None if unsupported
    """
    return providers.get(normalize_provider(name))
