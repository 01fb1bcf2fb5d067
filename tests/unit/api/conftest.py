"""Fixtures for API route tests.

Routes run against moto-mocked tables seeded with a guest, an owner and one
listing owned by the owner. Credentials are issued with the same codec the
app uses, so cookies round-trip through IdentityMiddleware.
"""

from typing import Callable, Generator

import pytest
from fastapi.testclient import TestClient

from staybook.models import Listing, User
from staybook.services.store import DynamoDBStore


@pytest.fixture
def seeded_store(
    store: DynamoDBStore, guest: User, owner: User, listing: Listing
) -> DynamoDBStore:
    store.save_user(guest)
    store.save_user(owner)
    store.save_listing(listing)
    return store


@pytest.fixture
def client(
    seeded_store: DynamoDBStore, monkeypatch: pytest.MonkeyPatch
) -> Generator[TestClient, None, None]:
    """TestClient bound to the mocked tables."""
    monkeypatch.setenv("DYNAMODB_TABLE_PREFIX", "test-staybook")
    monkeypatch.setenv("JWT_SECRET", "api-test-secret")
    monkeypatch.setenv("ENVIRONMENT", "dev")

    from staybook.api.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def login(client: TestClient) -> Callable[[User], None]:
    """Put a valid credential cookie for the given user on the client."""
    from staybook.api.dependencies import get_credential_codec

    def _login(user: User) -> None:
        client.cookies.set("token", get_credential_codec().issue(user).token)

    return _login
