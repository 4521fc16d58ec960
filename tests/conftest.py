# Shared fixtures: fake provider/backend upstream and a configured test app.

import base64
import json
from typing import Any, Dict, List, Optional

import httpx
import pytest
from fastapi.testclient import TestClient

from oauth import RedirectValidator
from proxy.app import create_app
from proxy.handlers import TokenExchangeHandler

ALLOWLIST = "https://app.example.com/*, http://localhost:3000/callback"
BACKEND_URL = "https://backend.example.com"

CREDENTIALS = {
    "GOOGLE_OAUTH_CLIENT_ID": "google-client-id",
    "GOOGLE_OAUTH_CLIENT_SECRET": "google-client-secret",
    "MICROSOFT_OAUTH_CLIENT_ID": "ms-client-id",
    "MICROSOFT_OAUTH_CLIENT_SECRET": "ms-client-secret",
}


def credential_lookup(key: str) -> str:
    return CREDENTIALS.get(key, "")


def make_jwt(claims: Dict[str, Any]) -> str:
    """Build an unsigned JWT-shaped token with base64url, unpadded segments"""
    def seg(data: Dict[str, Any]) -> str:
        raw = json.dumps(data).encode()
        return base64.urlsafe_b64encode(raw).decode().rstrip("=")

    return f"{seg({'alg': 'none', 'typ': 'JWT'})}.{seg(claims)}.signature"


ID_TOKEN = make_jwt({"email": "user@example.com", "sub": "123"})

TOKEN_BODY = {
    "access_token": "provider-access-token",
    "token_type": "Bearer",
    "expires_in": 3599,
    "scope": "openid email profile",
    "id_token": ID_TOKEN,
}

PROFILE = {"id": "u-1", "email": "user@example.com", "plan": "free"}


class FakeUpstream:
    """Stands in for the provider token endpoints and the profile backend"""

    def __init__(
        self,
        token_status: int = 200,
        token_body: Any = None,
        user_status: int = 200,
        user_body: Any = None,
    ):
        self.token_status = token_status
        self.token_body = TOKEN_BODY if token_body is None else token_body
        self.user_status = user_status
        self.user_body = PROFILE if user_body is None else user_body
        self.requests: List[httpx.Request] = []

    @staticmethod
    def _response(status: int, body: Any) -> httpx.Response:
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        return httpx.Response(status, json=body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == "/user/info":
            return self._response(self.user_status, self.user_body)
        return self._response(self.token_status, self.token_body)

    def client_factory(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

    @property
    def token_requests(self) -> List[httpx.Request]:
        return [r for r in self.requests if r.method == "POST"]

    @property
    def user_requests(self) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.path == "/user/info"]


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def validator():
    return RedirectValidator(ALLOWLIST)


@pytest.fixture
def handler(validator, upstream):
    return TokenExchangeHandler(
        validator=validator,
        credentials=credential_lookup,
        user_info_url=BACKEND_URL,
        environment="test",
        http_client_factory=upstream.client_factory,
    )


def build_client(upstream: FakeUpstream, allowlist: str = ALLOWLIST, credentials=credential_lookup) -> TestClient:
    app = create_app(
        environment="test",
        allowed_redirect_uris=allowlist,
        user_info_url=BACKEND_URL,
        route_prefixes=["/api-staging", "/api"],
        credentials=credentials,
        http_client_factory=upstream.client_factory,
    )
    return TestClient(app)


@pytest.fixture
def client(upstream):
    return build_client(upstream)


def exchange_body(**overrides: Optional[str]) -> Dict[str, Any]:
    body = {
        "code": "auth-code",
        "redirect_uri": "https://app.example.com/callback",
        "code_verifier": "verifier-123",
        "provider": "google",
    }
    body.update(overrides)
    return {k: v for k, v in body.items() if v is not None}
