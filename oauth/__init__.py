"""OAuth code exchange package: allowlist validation, provider exchange and user enrichment"""

from .patterns import PatternCache, compile_pattern
from .validators import (
    RedirectValidator,
    extract_origin,
    is_allowed_origin,
    validate_redirect_uri,
)
from .models import ExchangeRequest, TokenResponse
from .providers import PROVIDERS, PROVIDER_ALIASES, ProviderConfig, resolve_provider
from .token_exchange import ExchangeError, exchange_code
from .user_info import EnrichmentError, fetch_user_info
from .jwt_utils import decode_jwt_claims, extract_email_from_id_token

__all__ = [
    "PatternCache",
    "compile_pattern",
    "RedirectValidator",
    "extract_origin",
    "is_allowed_origin",
    "validate_redirect_uri",
    "ExchangeRequest",
    "TokenResponse",
    "PROVIDERS",
    "PROVIDER_ALIASES",
    "ProviderConfig",
    "resolve_provider",
    "ExchangeError",
    "exchange_code",
    "EnrichmentError",
    "fetch_user_info",
    "decode_jwt_claims",
    "extract_email_from_id_token",
]
