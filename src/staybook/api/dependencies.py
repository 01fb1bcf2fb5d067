"""FastAPI dependency providers for shared services.

Services are lazily instantiated and cached with @lru_cache, so settings are
only read (and the signing secret only fetched) on first use.

Service Dependency Graph:
    AuthSettings (get_settings)
        ├── CredentialCodec
        └── DynamoDBService
                └── DynamoDBStore
                        ├── IdentityResolver (with CredentialCodec)
                        └── BookingService

Testing:
    Use reset_services() to clear cached instances between tests.
"""

from functools import lru_cache

from staybook.config import AuthSettings, get_settings
from staybook.services.booking import BookingService
from staybook.services.credentials import CredentialCodec
from staybook.services.dynamodb import get_dynamodb_service
from staybook.services.identity import IdentityResolver
from staybook.services.store import DynamoDBStore, ResourceStore


def get_auth_settings() -> AuthSettings:
    return get_settings()


@lru_cache
def get_credential_codec() -> CredentialCodec:
    """Get cached CredentialCodec configured from settings."""
    return CredentialCodec(get_settings())


@lru_cache
def get_store() -> ResourceStore:
    """Get cached DynamoDB-backed resource store."""
    db = get_dynamodb_service(get_settings().dynamodb_table_prefix)
    return DynamoDBStore(db)


@lru_cache
def get_identity_resolver() -> IdentityResolver:
    return IdentityResolver(codec=get_credential_codec(), store=get_store())


@lru_cache
def get_booking_service() -> BookingService:
    return BookingService(store=get_store())


def reset_services() -> None:
    """Clear all cached service instances and settings.

    Call this in test fixtures to ensure clean state between tests.
    """
    from staybook.services.dynamodb import reset_dynamodb_service

    get_credential_codec.cache_clear()
    get_store.cache_clear()
    get_identity_resolver.cache_clear()
    get_booking_service.cache_clear()
    get_settings.cache_clear()

    reset_dynamodb_service()
