"""
Pydantic models for the token exchange request and response.
"""
from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict


class ExchangeRequest(BaseModel):
    """Incoming request from the webapp OAuth flow

    Every field is optional at parse time; required-field checks happen in
    the token handler so it can name the missing field.
    """
    model_config = ConfigDict(frozen=True)

    code: Optional[str] = None
    redirect_uri: Optional[str] = None
    code_verifier: Optional[str] = None  # PKCE
    provider: Optional[str] = None  # google | microsoft | outlook


class TokenResponse(BaseModel):
    """Token endpoint response, later enriched with the user profile

    Extra provider fields (e.g. ext_expires_in) are kept and forwarded.
    """
    model_config = ConfigDict(extra="allow")

    access_token: str = ""
    token_type: Optional[str] = None
    expires_in: Optional[int] = None
    scope: Optional[str] = None
    refresh_token: Optional[str] = None
    id_token: Optional[str] = None
    user_info: Optional[Any] = None

    def to_payload(self) -> Dict[str, Any]:
        """Serialize for the client, leaving out unset optional fields"""
        return self.model_dump(exclude_none=True)
