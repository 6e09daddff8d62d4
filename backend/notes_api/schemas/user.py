"""User Schemas — registration/login payloads and the public user projection.

Invariants:
    - RegisterRequest: name, username, password required and non-empty
    - is_admin accepted as is_admin or isAdmin; defaults to False
    - LoginRequest fields are optional so the service can answer 404 for missing ones
    - PublicUser never carries password or password_hash
"""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    """Registration payload."""
    name: str = Field(min_length=1, max_length=255)
    username: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1, max_length=1024)
    is_admin: bool = Field(
        False, validation_alias=AliasChoices("is_admin", "isAdmin"),
    )


class LoginRequest(BaseModel):
    username: str | None = None
    password: str | None = None


class PublicUser(BaseModel):
    """User as seen by API clients."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    username: str
    is_admin: bool
    created_at: datetime


class TokenResponse(BaseModel):
    token: str
