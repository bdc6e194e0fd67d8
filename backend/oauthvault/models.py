from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, HttpUrl, TypeAdapter, ValidationError, field_validator

from .masking import mask_secret

DEFAULT_SCOPES = "openid profile email"


_HTTP_URL = TypeAdapter(HttpUrl)


def _check_url(v: str) -> str:
    """Validate as an http(s) URL with a host; the original string is stored."""
    v = v.strip()
    try:
        _HTTP_URL.validate_python(v)
    except ValidationError:
        raise ValueError("must be an http(s) URL") from None
    return v


class _ProviderFields(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    client_id: str = Field(..., min_length=1)
    authorization_url: str = Field(..., min_length=1)
    token_url: str = Field(..., min_length=1)
    user_info_url: Optional[str] = None
    scopes: str = Field(default=DEFAULT_SCOPES, min_length=1)
    enabled: bool = True

    @field_validator("authorization_url", "token_url")
    @classmethod
    def _endpoint_url(cls, v: str) -> str:
        return _check_url(v)

    @field_validator("user_info_url", mode="before")
    @classmethod
    def _optional_url(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        return _check_url(v)


class OAuthProviderCreate(_ProviderFields):
    provider_id: str = Field(..., min_length=1, max_length=64, pattern=r"^[a-z0-9][a-z0-9_-]*$")
    client_secret: str = Field(..., min_length=1)


class OAuthProviderUpdate(_ProviderFields):
    # provider_id is immutable once created
    client_secret: Optional[str] = Field(default=None, description="Empty keeps the stored secret")

    @field_validator("client_secret", mode="before")
    @classmethod
    def _blank_secret(cls, v):
        if isinstance(v, str) and not v:
            return None
        return v


class OAuthProviderOut(BaseModel):
    id: int
    name: str
    provider_id: str
    client_id: str
    client_secret: Optional[str] = None
    authorization_url: str
    token_url: str
    user_info_url: Optional[str] = None
    scopes: str
    enabled: bool
    created_at: datetime
    updated_at: datetime

    def masked(self) -> "OAuthProviderOut":
        """Copy with the client secret masked for display."""
        if self.client_secret is None:
            return self
        return self.model_copy(update={"client_secret": mask_secret(self.client_secret)})


class PublicOAuthProvider(BaseModel):
    """Fields safe to hand to an unauthenticated login page."""
    id: int
    provider_id: str
    name: str


class ToggleIn(BaseModel):
    enabled: bool
