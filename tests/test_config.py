# Tests for config/loader.py and the CLI configuration report.

import os

from rich.console import Console

from config.loader import ConfigLoader
from cli.status_display import provider_status, show_config_status
from conftest import credential_lookup


class TestConfigLoader:
    def test_env_file_loaded(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("OAUTH_PROXY_TEST_VALUE=from-file\n")

        try:
            loader = ConfigLoader(env_path=str(env_file))
            assert loader.get("OAUTH_PROXY_TEST_VALUE", "default") == "from-file"
        finally:
            os.environ.pop("OAUTH_PROXY_TEST_VALUE", None)

    def test_missing_env_file_uses_defaults(self, tmp_path, monkeypatch):
        monkeypatch.delenv("OAUTH_PROXY_UNSET", raising=False)
        loader = ConfigLoader(env_path=str(tmp_path / "missing.env"))
        assert loader.get("OAUTH_PROXY_UNSET", "fallback") == "fallback"

    def test_type_coercion(self, tmp_path, monkeypatch):
        loader = ConfigLoader(env_path=str(tmp_path / "none.env"))
        monkeypatch.setenv("OAUTH_PROXY_INT", "9000")
        monkeypatch.setenv("OAUTH_PROXY_FLOAT", "2.5")
        monkeypatch.setenv("OAUTH_PROXY_BOOL", "yes")
        assert loader.get("OAUTH_PROXY_INT", 1) == 9000
        assert loader.get("OAUTH_PROXY_FLOAT", 1.0) == 2.5
        assert loader.get("OAUTH_PROXY_BOOL", False) is True

    def test_bad_int_falls_back(self, tmp_path, monkeypatch):
        loader = ConfigLoader(env_path=str(tmp_path / "none.env"))
        monkeypatch.setenv("OAUTH_PROXY_INT", "lots")
        assert loader.get("OAUTH_PROXY_INT", 8787) == 8787

    def test_get_list(self, tmp_path, monkeypatch):
        loader = ConfigLoader(env_path=str(tmp_path / "none.env"))
        monkeypatch.setenv("OAUTH_PROXY_LIST", " /api-staging , ,/api ")
        assert loader.get_list("OAUTH_PROXY_LIST") == ["/api-staging", "/api"]
        assert loader.get_list("OAUTH_PROXY_LIST_UNSET", "/a,/b") == ["/a", "/b"]

    def test_get_secret(self, tmp_path, monkeypatch):
        loader = ConfigLoader(env_path=str(tmp_path / "none.env"))
        monkeypatch.setenv("OAUTH_PROXY_SECRET", "  s3cret \n")
        monkeypatch.delenv("OAUTH_PROXY_NO_SECRET", raising=False)
        assert loader.get_secret("OAUTH_PROXY_SECRET") == "s3cret"
        assert loader.get_secret("OAUTH_PROXY_NO_SECRET") == ""


class TestConfigStatus:
    def test_provider_status(self):
        assert provider_status(credentials=credential_lookup) == {"google": True, "microsoft": True}
        assert provider_status(credentials=lambda key: "") == {"google": False, "microsoft": False}

    def test_report_hides_secrets(self, monkeypatch):
        monkeypatch.setattr("settings.ALLOWED_REDIRECT_URIS", "https://app.example.com/*")
        console = Console(record=True, width=200)

        ok = show_config_status(console, credentials=credential_lookup)

        output = console.export_text()
        assert ok is True
        assert "https://app.example.com/*" in output
        assert "google-client-secret" not in output
        assert "configured" in output

    def test_report_flags_missing_credentials(self, monkeypatch):
        monkeypatch.setattr("settings.ALLOWED_REDIRECT_URIS", "https://app.example.com/*")
        console = Console(record=True, width=200)
        assert show_config_status(console, credentials=lambda key: "") is False

    def test_report_flags_empty_allowlist(self, monkeypatch):
        monkeypatch.setattr("settings.ALLOWED_REDIRECT_URIS", "")
        console = Console(record=True, width=200)
        assert show_config_status(console, credentials=credential_lookup) is False
