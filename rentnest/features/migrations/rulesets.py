"""
Migrations shipped with RentNest.

accounttype_to_role
    Users created before the single-role refactor carry `accountType`;
    `role` is filled from it. `accountType` itself is left in place.

booking_schema
    Bookings written by the first booking API used `user`,
    `checkInDate`/`checkOutDate` and approved/rejected statuses, and had
    no `owner`. The owner is copied from the booked property.
"""

from rentnest.features.migrations.domain.rules import (
    BackfillRule,
    Migration,
    RecodeRule,
    RenameRule,
)

USERS_COLLECTION = "users"
BOOKINGS_COLLECTION = "bookings"
PROPERTIES_COLLECTION = "properties"

LEGACY_BOOKING_STATUSES = {
    "approved": "confirmed",
    "rejected": "cancelled",
}

ACCOUNTTYPE_TO_ROLE = Migration(
    name="accounttype_to_role",
    collection=USERS_COLLECTION,
    rules=(RenameRule(target="role", source="accountType"),),
)

BOOKING_SCHEMA = Migration(
    name="booking_schema",
    collection=BOOKINGS_COLLECTION,
    rules=(
        RenameRule(target="renter", source="user"),
        RenameRule(target="checkIn", source="checkInDate"),
        RenameRule(target="checkOut", source="checkOutDate"),
        BackfillRule(
            target="owner",
            reference_field="property",
            reference_collection=PROPERTIES_COLLECTION,
            source_field="owner",
        ),
        RecodeRule(field_name="status", mapping=LEGACY_BOOKING_STATUSES),
    ),
)

MIGRATIONS: dict[str, Migration] = {
    migration.name: migration for migration in (ACCOUNTTYPE_TO_ROLE, BOOKING_SCHEMA)
}
