"""Credential codec: signs and verifies the session JWT.

The token carries only the caller's minimal identity claim:

    {"sub": "<user id>", "data": {"id", "email", "username"}, "iat", "exp"}

Passwords and other user fields are never embedded. The token travels in an
HTTP-only cookie whose lifetime matches the token's.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from pydantic import BaseModel, ConfigDict, ValidationError

from staybook.config import AuthSettings
from staybook.models import SafeUser, TokenClaims, User

logger = logging.getLogger(__name__)


class IssuedCredential(BaseModel):
    """A freshly signed credential and its lifetime."""

    model_config = ConfigDict(strict=True, frozen=True)

    token: str
    expires_at: datetime
    max_age_seconds: int

    @property
    def max_age_ms(self) -> int:
        """Lifetime in milliseconds, the unit browsers' maxAge helpers use."""
        return self.max_age_seconds * 1000


class CredentialCodec:
    """Signs and verifies credentials with an injected configuration."""

    def __init__(self, settings: AuthSettings) -> None:
        self.settings = settings

    def issue(self, user: User, now: datetime | None = None) -> IssuedCredential:
        """Sign a credential for a user.

        Args:
            user: The user to identify
            now: Issuance time (defaults to current UTC time)

        Returns:
            IssuedCredential with the encoded token and its expiry
        """
        issued_at = now or datetime.now(timezone.utc)
        expires_at = issued_at + timedelta(seconds=self.settings.expires_in)
        safe_user = user.to_safe_user()

        payload = {
            "sub": safe_user.id,
            "data": safe_user.model_dump(),
            "iat": issued_at,
            "exp": expires_at,
        }
        token = jwt.encode(
            payload, self.settings.secret, algorithm=self.settings.algorithm
        )
        return IssuedCredential(
            token=token,
            expires_at=expires_at,
            max_age_seconds=self.settings.expires_in,
        )

    def verify(self, raw_token: Any) -> TokenClaims | None:
        """Verify a credential and return its claims.

        Never raises: an absent, malformed, tampered or expired token yields
        None so the request can continue anonymously.

        Args:
            raw_token: Token from the request cookie (may be None)

        Returns:
            TokenClaims if the token is valid, None otherwise
        """
        if not raw_token or not isinstance(raw_token, str):
            return None

        try:
            payload: dict[str, Any] = jwt.decode(
                raw_token,
                self.settings.secret,
                algorithms=[self.settings.algorithm],
                options={"require": ["exp", "sub"]},
            )
        except jwt.PyJWTError as e:
            logger.debug("Credential rejected: %s", type(e).__name__)
            return None

        try:
            safe_user = SafeUser.model_validate(payload.get("data"))
        except ValidationError:
            logger.warning("Credential has a valid signature but no identity claim")
            return None

        return TokenClaims(
            **safe_user.model_dump(),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )

    def cookie_options(self) -> dict[str, Any]:
        """Cookie attributes for the credential cookie.

        `secure` and `samesite` are only set in production. Starlette takes
        `max_age` in seconds.
        """
        return {
            "max_age": self.settings.expires_in,
            "httponly": True,
            "secure": self.settings.is_production,
            "samesite": "lax" if self.settings.is_production else None,
        }
