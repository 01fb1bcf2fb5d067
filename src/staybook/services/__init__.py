"""Services for Staybook identity, access and booking checks."""

from .access_guard import (
    require_authenticated,
    require_not_owner,
    require_owner,
    require_resource_exists,
)
from .booking import BookingService
from .conflicts import detect_conflict, ensure_no_conflict
from .credentials import CredentialCodec, IssuedCredential
from .dynamodb import DynamoDBService, get_dynamodb_service, reset_dynamodb_service
from .identity import IdentityResolver
from .store import DynamoDBStore, ResourceStore

__all__ = [
    "BookingService",
    "CredentialCodec",
    "DynamoDBService",
    "DynamoDBStore",
    "IdentityResolver",
    "IssuedCredential",
    "ResourceStore",
    "detect_conflict",
    "ensure_no_conflict",
    "get_dynamodb_service",
    "require_authenticated",
    "require_not_owner",
    "require_owner",
    "require_resource_exists",
    "reset_dynamodb_service",
]
