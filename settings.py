from config.loader import get_config_loader

# Get the config loader instance
config = get_config_loader()

# Server configuration
PORT = config.get("PORT", 8787)
LOG_LEVEL = config.get("LOG_LEVEL", "info")
BIND_ADDRESS = config.get("BIND_ADDRESS", "0.0.0.0")

# Deployment label, used only to tag logs and the health response
ENVIRONMENT = config.get("ENVIRONMENT", "development")

# Comma-separated redirect URI patterns ("*" is a wildcard).
# Also the source of allowed CORS origins. Empty means nothing is allowed.
ALLOWED_REDIRECT_URIS = config.get("ALLOWED_REDIRECT_URIS", "")

# Internal backend that turns an ID token into a user profile
USER_INFO_SERVICE_URL = config.get("USER_INFO_SERVICE_URL", "")

# Mount points stripped from the path before routing (production, staging)
ROUTE_PREFIXES = config.get_list("ROUTE_PREFIXES", "/api-staging,/api")

# Outbound HTTP timeout for provider and backend calls, in seconds.
# Calls are single-attempt; there is no retry on timeout.
REQUEST_TIMEOUT = config.get("REQUEST_TIMEOUT", 30.0)


def get_credential(key: str) -> str:
    """Resolve a provider credential (client id/secret) by its config key

    Credentials are read at exchange time rather than cached here, so they
    never appear as module attributes.
    """
    return config.get_secret(key)
