"""Configuration status display for the CLI"""

from typing import Callable, Mapping

from rich.table import Table

import settings
from oauth import PROVIDERS, ProviderConfig
from oauth.validators import extract_origin, split_allowlist


def provider_status(
    providers: Mapping[str, ProviderConfig] = PROVIDERS,
    credentials: Callable[[str], str] = settings.get_credential,
) -> dict:
    """
    Report which providers have both client credentials configured

    Returns:
        Mapping of provider name to True/False
    """
    return {
        name: bool(credentials(config.client_id_key)) and bool(credentials(config.client_secret_key))
        for name, config in providers.items()
    }


def show_config_status(
    console,
    providers: Mapping[str, ProviderConfig] = PROVIDERS,
    credentials: Callable[[str], str] = settings.get_credential,
) -> bool:
    """
    Print the effective configuration without revealing any secret

    Args:
        console: Rich console for output
        providers: Provider table to report on
        credentials: Credential lookup

    Returns:
        True if every provider has credentials and an allowlist is set
    """
    table = Table(title="OAuth Proxy Configuration")
    table.add_column("Property", style="cyan")
    table.add_column("Value")

    table.add_row("Environment", settings.ENVIRONMENT)
    table.add_row("User Info Service", settings.USER_INFO_SERVICE_URL or "[red]not set[/red]")
    table.add_row("Route Prefixes", ", ".join(settings.ROUTE_PREFIXES) or "(none)")

    patterns = split_allowlist(settings.ALLOWED_REDIRECT_URIS)
    if not patterns:
        table.add_row("Redirect Allowlist", "[red]empty - all redirects rejected[/red]")
    for pattern in patterns:
        origin = extract_origin(pattern)
        table.add_row("Redirect Allowlist", f"{pattern}  (origin: {origin or 'unparseable'})")

    status = provider_status(providers, credentials)
    for name, configured in status.items():
        label = f"{providers[name].display_name} Credentials"
        table.add_row(label, "[green]configured[/green]" if configured else "[red]missing[/red]")

    console.print(table)
    return bool(patterns) and all(status.values())
