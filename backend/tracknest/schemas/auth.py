"""
Pydantic schemas for login and token issuance.
"""
from datetime import datetime
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class LoginRequest(BaseModel):
    """Schema for user login."""
    username: str
    password: str


class AccessToken(BaseModel):
    """Signed bearer token and its expiry."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    token: str
    expires_at: datetime


class LoginResponse(BaseModel):
    """Schema for the login response body."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    access_token: AccessToken
