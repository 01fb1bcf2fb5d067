"""Pytest configuration and fixtures for Staybook tests.

This module provides reusable fixtures for testing:
- DynamoDB mocking with moto
- Settings, credential codec and store fixtures
- Sample users, listings and bookings
"""

import datetime as dt
import os
from typing import Any, Callable, Generator

import boto3
import pytest
from moto import mock_aws

# === Environment Setup ===

# Set environment variables for testing before imports
os.environ.setdefault("AWS_DEFAULT_REGION", "eu-west-1")
os.environ.setdefault("DYNAMODB_TABLE_PREFIX", "test-staybook")
os.environ.setdefault("JWT_SECRET", "test-secret-do-not-use-in-production")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")

from staybook.config import AuthSettings  # noqa: E402
from staybook.models import Booking, Listing, User  # noqa: E402
from staybook.services.credentials import CredentialCodec  # noqa: E402
from staybook.services.dynamodb import DynamoDBService  # noqa: E402
from staybook.services.store import DynamoDBStore  # noqa: E402

TABLE_PREFIX = "test-staybook"
NOW = dt.datetime(2024, 5, 1, 12, 0, tzinfo=dt.timezone.utc)


# === Service Reset ===


@pytest.fixture(autouse=True)
def reset_cached_services() -> Generator[None, None, None]:
    """Reset cached services and the DynamoDB singleton around each test.

    This ensures tests using mock_aws get a fresh store inside the mock
    context rather than reusing one from a previous test.
    """
    from staybook.api.dependencies import reset_services

    reset_services()
    yield
    reset_services()


# === DynamoDB Fixtures ===


@pytest.fixture
def aws_credentials() -> None:
    """Mocked AWS Credentials for moto."""
    os.environ["AWS_ACCESS_KEY_ID"] = "testing"
    os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
    os.environ["AWS_SECURITY_TOKEN"] = "testing"
    os.environ["AWS_SESSION_TOKEN"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = "eu-west-1"


@pytest.fixture
def dynamodb_client(aws_credentials: None) -> Generator[Any, None, None]:
    """Create a mocked DynamoDB client."""
    with mock_aws():
        client = boto3.client("dynamodb", region_name="eu-west-1")
        yield client


@pytest.fixture
def create_tables(dynamodb_client: Any) -> None:
    """Create all required DynamoDB tables for testing."""
    simple_tables = {
        "users": "user_id",
        "listings": "listing_id",
        "reviews": "review_id",
    }
    for table, key in simple_tables.items():
        dynamodb_client.create_table(
            TableName=f"{TABLE_PREFIX}-{table}",
            KeySchema=[{"AttributeName": key, "KeyType": "HASH"}],
            AttributeDefinitions=[{"AttributeName": key, "AttributeType": "S"}],
            BillingMode="PAY_PER_REQUEST",
        )

    dynamodb_client.create_table(
        TableName=f"{TABLE_PREFIX}-bookings",
        KeySchema=[{"AttributeName": "booking_id", "KeyType": "HASH"}],
        AttributeDefinitions=[
            {"AttributeName": "booking_id", "AttributeType": "S"},
            {"AttributeName": "listing_id", "AttributeType": "S"},
            {"AttributeName": "start_date", "AttributeType": "S"},
        ],
        GlobalSecondaryIndexes=[
            {
                "IndexName": "listing_id-index",
                "KeySchema": [
                    {"AttributeName": "listing_id", "KeyType": "HASH"},
                    {"AttributeName": "start_date", "KeyType": "RANGE"},
                ],
                "Projection": {"ProjectionType": "ALL"},
            },
        ],
        BillingMode="PAY_PER_REQUEST",
    )

    dynamodb_client.create_table(
        TableName=f"{TABLE_PREFIX}-booking-days",
        KeySchema=[
            {"AttributeName": "listing_id", "KeyType": "HASH"},
            {"AttributeName": "day", "KeyType": "RANGE"},
        ],
        AttributeDefinitions=[
            {"AttributeName": "listing_id", "AttributeType": "S"},
            {"AttributeName": "day", "AttributeType": "S"},
        ],
        BillingMode="PAY_PER_REQUEST",
    )


@pytest.fixture
def store(create_tables: None) -> DynamoDBStore:
    """DynamoDBStore over the mocked tables."""
    return DynamoDBStore(DynamoDBService(TABLE_PREFIX))


# === Auth Fixtures ===


@pytest.fixture
def settings() -> AuthSettings:
    return AuthSettings(
        secret="unit-test-secret",
        expires_in=3600,
        environment="dev",
        table_prefix=TABLE_PREFIX,
    )


@pytest.fixture
def codec(settings: AuthSettings) -> CredentialCodec:
    return CredentialCodec(settings)


# === Sample Data Fixtures ===


@pytest.fixture
def make_user() -> Callable[..., User]:
    """Factory for users with unique IDs."""

    def _make(user_id: str = "user-1", username: str = "demo") -> User:
        return User(
            user_id=user_id,
            email=f"{username}@example.com",
            username=username,
            first_name="Demo",
            last_name="Lition",
            created_at=NOW,
            updated_at=NOW,
        )

    return _make


@pytest.fixture
def guest(make_user: Callable[..., User]) -> User:
    return make_user("user-guest", "guest")


@pytest.fixture
def owner(make_user: Callable[..., User]) -> User:
    return make_user("user-owner", "owner")


@pytest.fixture
def listing(owner: User) -> Listing:
    return Listing(
        listing_id="listing-1",
        owner_id=owner.user_id,
        name="Seaside cottage",
        city="Quesada",
        created_at=NOW,
    )


@pytest.fixture
def make_booking() -> Callable[..., Booking]:
    """Factory for bookings on listing-1."""

    def _make(
        start: dt.date,
        end: dt.date,
        booking_id: str = "booking-1",
        user_id: str = "user-guest",
        listing_id: str = "listing-1",
    ) -> Booking:
        return Booking(
            booking_id=booking_id,
            listing_id=listing_id,
            user_id=user_id,
            start_date=start,
            end_date=end,
            created_at=NOW,
        )

    return _make
