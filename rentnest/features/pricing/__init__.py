"""
FairFlex pricing feature package.

Pure pricing and availability helpers used by booking creation.
"""

from .availability import bookings_overlap, find_conflicting_booking  # noqa: F401
from .service import (  # noqa: F401
    adjustment_tier,
    compare_durations,
    compute_adjustment,
    compute_monthly_savings,
    compute_price,
    compute_savings,
    compute_total,
    quote,
)
