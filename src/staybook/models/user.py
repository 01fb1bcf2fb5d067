"""User models and the identity claims embedded in credentials."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class User(BaseModel):
    """A registered user as returned by the resource store."""

    model_config = ConfigDict(strict=True)

    user_id: str = Field(..., description="Unique user ID")
    email: EmailStr = Field(..., description="User email")
    username: str = Field(..., description="Public display name")
    first_name: str | None = Field(default=None, description="First name")
    last_name: str | None = Field(default=None, description="Last name")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

    def to_safe_user(self) -> "SafeUser":
        """Project the user down to the fields that may leave the server."""
        return SafeUser(id=self.user_id, email=self.email, username=self.username)


class SafeUser(BaseModel):
    """Minimal identity claim: the only user fields ever put in a credential."""

    model_config = ConfigDict(strict=True)

    id: str
    email: str
    username: str


class TokenClaims(SafeUser):
    """Verified claims recovered from a credential."""

    expires_at: datetime = Field(..., description="Credential expiry (UTC)")
