"""
Booking availability checks.

A property slot is taken by any pending or confirmed booking whose stay
overlaps the requested one. Stays are half-open: a check-out on the same
day as the next check-in does not conflict.
"""

from collections.abc import Iterable
from datetime import UTC, date, datetime, time
from typing import Any

# Legacy documents may still carry "approved" until the booking migration runs
BLOCKING_STATUSES = frozenset({"pending", "confirmed", "approved"})


def _as_datetime(value: date | datetime) -> datetime:
    """
    Naive UTC datetime for comparison.

    pymongo returns naive UTC datetimes while requests usually carry dates,
    so dates become midnight and aware datetimes are converted to UTC.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone(UTC).replace(tzinfo=None)
        return value
    return datetime.combine(value, time.min)


def bookings_overlap(
    a_check_in: date | datetime,
    a_check_out: date | datetime,
    b_check_in: date | datetime,
    b_check_out: date | datetime,
) -> bool:
    return _as_datetime(a_check_in) < _as_datetime(b_check_out) and _as_datetime(
        b_check_in
    ) < _as_datetime(a_check_out)


def _stay_dates(booking: dict[str, Any]) -> tuple[Any, Any]:
    check_in = booking.get("checkIn") or booking.get("checkInDate")
    check_out = booking.get("checkOut") or booking.get("checkOutDate")
    return check_in, check_out


def find_conflicting_booking(
    bookings: Iterable[dict[str, Any]],
    check_in: date | datetime,
    check_out: date | datetime,
    exclude_id: Any = None,
) -> dict[str, Any] | None:
    """
    First booking that blocks the requested stay, or None.

    Args:
        bookings: Booking documents for one property
        check_in: Requested check-in
        check_out: Requested check-out
        exclude_id: Booking being edited, ignored when comparing
    """
    for booking in bookings:
        if exclude_id is not None and str(booking.get("_id")) == str(exclude_id):
            continue
        if booking.get("status") not in BLOCKING_STATUSES:
            continue
        existing_in, existing_out = _stay_dates(booking)
        if not isinstance(existing_in, date) or not isinstance(existing_out, date):
            continue
        if bookings_overlap(existing_in, existing_out, check_in, check_out):
            return booking
    return None
