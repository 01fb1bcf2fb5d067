"""Runtime configuration for credential signing and storage.

Settings are read from environment variables once per process and passed
explicitly to the services that need them. Nothing reads the environment at
request time.

Environment:
    ENVIRONMENT            dev (default) or production
    JWT_SECRET             signing secret
    JWT_SECRET_PARAMETER   SSM parameter holding the secret, used when
                           JWT_SECRET is unset
    JWT_EXPIRES_IN         credential lifetime in seconds (default one week)
    JWT_ALGORITHM          HS256 (default)
    AUTH_COOKIE_NAME       token (default)
    DYNAMODB_TABLE_PREFIX  staybook-<environment> (default)
"""

import os
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_EXPIRES_IN = 604_800  # one week


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""

    pass


class AuthSettings(BaseModel):
    """Credential and storage settings injected into services."""

    model_config = ConfigDict(strict=True, frozen=True)

    secret: str = Field(..., min_length=1, repr=False)
    expires_in: int = Field(default=DEFAULT_EXPIRES_IN, gt=0)
    algorithm: str = Field(default="HS256")
    environment: str = Field(default="dev")
    cookie_name: str = Field(default="token")
    table_prefix: str | None = Field(default=None)

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def dynamodb_table_prefix(self) -> str:
        return self.table_prefix or f"staybook-{self.environment}"

    @classmethod
    def from_env(cls) -> "AuthSettings":
        """Build settings from the process environment.

        Raises:
            ConfigurationError: If no signing secret is configured or a
                numeric variable cannot be parsed.
        """
        secret = os.getenv("JWT_SECRET")
        if not secret:
            parameter = os.getenv("JWT_SECRET_PARAMETER")
            if not parameter:
                raise ConfigurationError(
                    "JWT_SECRET or JWT_SECRET_PARAMETER must be set"
                )
            from staybook.services.ssm_service import get_ssm_service

            secret = get_ssm_service().get_parameter(parameter)

        raw_expires_in = os.getenv("JWT_EXPIRES_IN", str(DEFAULT_EXPIRES_IN))
        try:
            expires_in = int(raw_expires_in)
        except ValueError as e:
            raise ConfigurationError(
                f"JWT_EXPIRES_IN must be an integer, got {raw_expires_in!r}"
            ) from e

        return cls(
            secret=secret,
            expires_in=expires_in,
            algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
            environment=os.getenv("ENVIRONMENT", "dev"),
            cookie_name=os.getenv("AUTH_COOKIE_NAME", "token"),
            table_prefix=os.getenv("DYNAMODB_TABLE_PREFIX"),
        )


@lru_cache
def get_settings() -> AuthSettings:
    """Get the process-wide settings, read from the environment once."""
    return AuthSettings.from_env()
