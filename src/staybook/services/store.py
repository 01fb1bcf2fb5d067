"""Resource store: lookups and writes the access core depends on.

`ResourceStore` is the contract guards, the identity resolver and the booking
service call into. `DynamoDBStore` is the production implementation.

Tables (name prefixed, see AuthSettings.dynamodb_table_prefix):
    users          user_id
    listings       listing_id
    reviews        review_id
    bookings       booking_id, GSI listing_id-index (listing_id, start_date)
    booking-days   listing_id + day, one claim per occupied day

Booking writes go through a single transaction that also puts one claim per
day the booking occupies (both ends included). Two overlapping bookings can
never both commit, even if both passed the conflict check.
"""

import datetime as dt
from decimal import Decimal
from typing import Any, Protocol

from staybook.models import Booking, Listing, Review, User

from .dynamodb import DynamoDBService


class ResourceStore(Protocol):
    """Lookups return None when the entity does not exist."""

    def find_user_by_id(self, user_id: str) -> User | None: ...

    def find_listing_by_id(self, listing_id: str) -> Listing | None: ...

    def find_review_by_id(self, review_id: str) -> Review | None: ...

    def find_booking_by_id(self, booking_id: str) -> Booking | None: ...

    def find_bookings_for_listing(self, listing_id: str) -> list[Booking]: ...

    def create_booking(self, booking: Booking) -> bool: ...

    def delete_booking(self, booking: Booking) -> bool: ...

    def create_review(self, review: Review) -> bool: ...

    def delete_review(self, review_id: str) -> bool: ...


def _parse_datetime(value: str) -> dt.datetime:
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return dt.datetime.fromisoformat(value)


class DynamoDBStore:
    """ResourceStore backed by DynamoDB tables."""

    USERS = "users"
    LISTINGS = "listings"
    REVIEWS = "reviews"
    BOOKINGS = "bookings"
    BOOKING_DAYS = "booking-days"
    LISTING_INDEX = "listing_id-index"

    def __init__(self, db: DynamoDBService) -> None:
        self.db = db

    # Lookups

    def find_user_by_id(self, user_id: str) -> User | None:
        item = self.db.get_item(self.USERS, {"user_id": user_id})
        return self._item_to_user(item) if item else None

    def find_listing_by_id(self, listing_id: str) -> Listing | None:
        item = self.db.get_item(self.LISTINGS, {"listing_id": listing_id})
        return self._item_to_listing(item) if item else None

    def find_review_by_id(self, review_id: str) -> Review | None:
        item = self.db.get_item(self.REVIEWS, {"review_id": review_id})
        return self._item_to_review(item) if item else None

    def find_booking_by_id(self, booking_id: str) -> Booking | None:
        item = self.db.get_item(self.BOOKINGS, {"booking_id": booking_id})
        return self._item_to_booking(item) if item else None

    def find_bookings_for_listing(self, listing_id: str) -> list[Booking]:
        """All bookings of a listing, in index order (by start date)."""
        items = self.db.query_by_gsi(
            table=self.BOOKINGS,
            index_name=self.LISTING_INDEX,
            partition_key_name="listing_id",
            partition_key_value=listing_id,
        )
        return [self._item_to_booking(item) for item in items]

    # Writes

    def save_user(self, user: User) -> bool:
        """Create a user record. Returns False if the ID is taken."""
        item: dict[str, Any] = {
            "user_id": user.user_id,
            "email": user.email,
            "username": user.username,
            "created_at": user.created_at.isoformat(),
            "updated_at": user.updated_at.isoformat(),
        }
        if user.first_name:
            item["first_name"] = user.first_name
        if user.last_name:
            item["last_name"] = user.last_name
        return self.db.put_item(
            self.USERS, item, condition_expression="attribute_not_exists(user_id)"
        )

    def save_listing(self, listing: Listing) -> bool:
        """Create a listing record. Returns False if the ID is taken."""
        item: dict[str, Any] = {
            "listing_id": listing.listing_id,
            "owner_id": listing.owner_id,
            "name": listing.name,
            "created_at": listing.created_at.isoformat(),
        }
        if listing.city:
            item["city"] = listing.city
        return self.db.put_item(
            self.LISTINGS,
            item,
            condition_expression="attribute_not_exists(listing_id)",
        )

    def create_booking(self, booking: Booking) -> bool:
        """Atomically store a booking and claim every day it occupies.

        Returns:
            True if stored, False if any day is already claimed
        """
        bookings_table = self.db.table_name(self.BOOKINGS)
        days_table = self.db.table_name(self.BOOKING_DAYS)

        transact_items: list[dict[str, Any]] = [
            {
                "Put": {
                    "TableName": bookings_table,
                    "Item": {
                        "booking_id": {"S": booking.booking_id},
                        "listing_id": {"S": booking.listing_id},
                        "user_id": {"S": booking.user_id},
                        "start_date": {"S": booking.start_date.isoformat()},
                        "end_date": {"S": booking.end_date.isoformat()},
                        "created_at": {"S": booking.created_at.isoformat()},
                    },
                    "ConditionExpression": "attribute_not_exists(booking_id)",
                }
            }
        ]
        transact_items.extend(
            {
                "Put": {
                    "TableName": days_table,
                    "Item": {
                        "listing_id": {"S": booking.listing_id},
                        "day": {"S": day.isoformat()},
                        "booking_id": {"S": booking.booking_id},
                    },
                    "ConditionExpression": "attribute_not_exists(listing_id)",
                }
            }
            for day in booking.days
        )

        return self.db.transact_write(transact_items)

    def delete_booking(self, booking: Booking) -> bool:
        """Delete a booking and release the days it claimed."""
        bookings_table = self.db.table_name(self.BOOKINGS)
        days_table = self.db.table_name(self.BOOKING_DAYS)

        transact_items: list[dict[str, Any]] = [
            {
                "Delete": {
                    "TableName": bookings_table,
                    "Key": {"booking_id": {"S": booking.booking_id}},
                }
            }
        ]
        transact_items.extend(
            {
                "Delete": {
                    "TableName": days_table,
                    "Key": {
                        "listing_id": {"S": booking.listing_id},
                        "day": {"S": day.isoformat()},
                    },
                    "ConditionExpression": "booking_id = :bid",
                    "ExpressionAttributeValues": {":bid": {"S": booking.booking_id}},
                }
            }
            for day in booking.days
        )

        return self.db.transact_write(transact_items)

    def create_review(self, review: Review) -> bool:
        item = {
            "review_id": review.review_id,
            "listing_id": review.listing_id,
            "user_id": review.user_id,
            "review": review.review,
            "stars": review.stars,
            "created_at": review.created_at.isoformat(),
        }
        return self.db.put_item(
            self.REVIEWS, item, condition_expression="attribute_not_exists(review_id)"
        )

    def delete_review(self, review_id: str) -> bool:
        return self.db.delete_item(self.REVIEWS, {"review_id": review_id})

    # Item conversion

    def _item_to_user(self, item: dict[str, Any]) -> User:
        return User(
            user_id=item["user_id"],
            email=item["email"],
            username=item["username"],
            first_name=item.get("first_name"),
            last_name=item.get("last_name"),
            created_at=_parse_datetime(item["created_at"]),
            updated_at=_parse_datetime(item["updated_at"]),
        )

    def _item_to_listing(self, item: dict[str, Any]) -> Listing:
        return Listing(
            listing_id=item["listing_id"],
            owner_id=item["owner_id"],
            name=item["name"],
            city=item.get("city"),
            created_at=_parse_datetime(item["created_at"]),
        )

    def _item_to_review(self, item: dict[str, Any]) -> Review:
        stars = item["stars"]
        return Review(
            review_id=item["review_id"],
            listing_id=item["listing_id"],
            user_id=item["user_id"],
            review=item["review"],
            stars=int(stars) if isinstance(stars, Decimal) else stars,
            created_at=_parse_datetime(item["created_at"]),
        )

    def _item_to_booking(self, item: dict[str, Any]) -> Booking:
        return Booking(
            booking_id=item["booking_id"],
            listing_id=item["listing_id"],
            user_id=item["user_id"],
            start_date=dt.date.fromisoformat(item["start_date"]),
            end_date=dt.date.fromisoformat(item["end_date"]),
            created_at=_parse_datetime(item["created_at"]),
        )
