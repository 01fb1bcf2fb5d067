"""End-to-end booking flow through the HTTP API against mocked DynamoDB.

Two guests compete for the same dates on one listing:
1. Guest A books a week
2. Guest B tries overlapping dates and is rejected
3. Guest A cancels
4. Guest B books the freed dates
5. Guest A leaves a review, guest B cannot delete it
"""

from typing import Callable, Generator

import pytest
from fastapi.testclient import TestClient

from staybook.models import Listing, User
from staybook.services.store import DynamoDBStore


@pytest.fixture
def api(
    store: DynamoDBStore,
    owner: User,
    listing: Listing,
    monkeypatch: pytest.MonkeyPatch,
) -> Generator[tuple[TestClient, Callable[[User], None]], None, None]:
    monkeypatch.setenv("DYNAMODB_TABLE_PREFIX", "test-staybook")
    monkeypatch.setenv("JWT_SECRET", "integration-secret")

    store.save_user(owner)
    store.save_listing(listing)

    from staybook.api.dependencies import get_credential_codec
    from staybook.api.main import app

    with TestClient(app) as client:

        def login(user: User) -> None:
            client.cookies.set("token", get_credential_codec().issue(user).token)

        yield client, login


def test_competing_guests(
    api: tuple[TestClient, Callable[[User], None]],
    store: DynamoDBStore,
    make_user: Callable[..., User],
) -> None:
    client, login = api
    guest_a = make_user("user-a", "alice")
    guest_b = make_user("user-b", "bruno")
    store.save_user(guest_a)
    store.save_user(guest_b)
    url = "/api/listings/listing-1/bookings"

    # Guest A books a week
    login(guest_a)
    created = client.post(url, json={"startDate": "2099-07-01", "endDate": "2099-07-07"})
    assert created.status_code == 201
    booking_id = created.json()["booking_id"]

    # Guest B overlaps the last day
    login(guest_b)
    conflict = client.post(url, json={"startDate": "2099-07-07", "endDate": "2099-07-10"})
    assert conflict.status_code == 403
    assert conflict.json()["errors"] == {
        "startDate": "Start date conflicts with an existing booking"
    }

    # Guest B can't cancel A's booking
    assert client.delete(f"/api/bookings/{booking_id}").status_code == 403

    # Guest A cancels
    login(guest_a)
    assert client.delete(f"/api/bookings/{booking_id}").status_code == 200

    # Guest B books the freed dates
    login(guest_b)
    rebooked = client.post(url, json={"startDate": "2099-07-07", "endDate": "2099-07-10"})
    assert rebooked.status_code == 201
    bookings = client.get(url).json()["bookings"]
    assert len(bookings) == 1
    assert "booking_id" not in bookings[0]

    # Guest A reviews, guest B can't delete it
    login(guest_a)
    review = client.post(
        "/api/listings/listing-1/reviews", json={"review": "Sunny terrace", "stars": 4}
    )
    assert review.status_code == 201
    review_id = review.json()["review_id"]

    login(guest_b)
    assert client.delete(f"/api/reviews/{review_id}").status_code == 403

    login(guest_a)
    assert client.delete(f"/api/reviews/{review_id}").status_code == 200

    # Logout drops identity
    client.delete("/api/session")
    client.cookies.clear()
    assert client.get("/api/session").json() == {"user": None}
