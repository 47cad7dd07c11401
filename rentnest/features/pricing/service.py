"""
FairFlex pricing - duration-tiered rent adjustment.

Short stays (1-2 months) pay a 10% premium, 3-5 months pay the standard
rate, and 6-12 month stays get a 10% discount. Every function here is
total: callers pass raw form values (often mid-keystroke), so invalid
input falls back to the standard rate or a zero amount instead of raising.

Money is computed in Decimal and rounded half-up to 2 places once, at the
end of each operation.
"""

from __future__ import annotations

import sys
from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Context, Decimal, InvalidOperation, localcontext
from typing import Any

from rentnest.models.domain.pricing_domain import AdjustmentTier, PriceAdjustment, RentQuote

SHORT_TERM_PREMIUM = 10
STANDARD_RATE = 0
LONG_TERM_DISCOUNT = -10

# (first month, last month, adjustment percent, tier), inclusive bounds
TIERS: tuple[tuple[int, int, int, AdjustmentTier], ...] = (
    (1, 2, SHORT_TERM_PREMIUM, AdjustmentTier.SHORT_TERM),
    (3, 5, STANDARD_RATE, AdjustmentTier.STANDARD),
    (6, 12, LONG_TERM_DISCOUNT, AdjustmentTier.LONG_TERM),
)

COMPARISON_DURATIONS = (1, 3, 6, 12)

_CENT = Decimal("0.01")
_ZERO = Decimal(0)
_HUNDRED = Decimal(100)

# Inputs are capped at the float range, so the largest product (amount x months)
# has ~617 integer digits and always fits this precision.
_FLOAT_MAX = Decimal(repr(sys.float_info.max))
_MONEY_CONTEXT = Context(prec=1000, rounding=ROUND_HALF_UP)


def _to_decimal(value: Any) -> Decimal | None:
    """Decimal for numbers and numeric strings within float range, None for anything else."""
    if isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        number = value
    elif isinstance(value, int):
        number = Decimal(value)
    elif isinstance(value, float):
        number = Decimal(repr(value))
    elif isinstance(value, str):
        try:
            number = Decimal(value.strip())
        except InvalidOperation:
            return None
    else:
        return None

    if not number.is_finite() or abs(number) > _FLOAT_MAX:
        return None
    return number


def _coerce_months(duration_months: Any) -> int | None:
    number = _to_decimal(duration_months)
    if number is None:
        return None
    # Truncate toward zero, the way form values are parsed
    return int(number)


def _billable_months(duration_months: Any) -> int:
    months = _coerce_months(duration_months)
    if months is None or months < 1:
        return 1
    return months


def _coerce_amount(amount: Any) -> Decimal:
    number = _to_decimal(amount)
    if number is None or number < 0:
        return _ZERO
    return number


def _round_money(amount: Decimal) -> float:
    with localcontext(_MONEY_CONTEXT):
        return float(amount.quantize(_CENT, rounding=ROUND_HALF_UP))


def adjustment_tier(duration_months: Any) -> AdjustmentTier:
    """Tier for a duration; unrecognized durations are priced at the standard rate."""
    months = _coerce_months(duration_months)
    if months is not None:
        for first, last, _, tier in TIERS:
            if first <= months <= last:
                return tier
    return AdjustmentTier.STANDARD


def compute_adjustment(duration_months: Any) -> int:
    """
    Adjustment percent for a stay length.

    Returns +10 for 1-2 months, 0 for 3-5 and -10 for 6-12. Anything else
    (zero, negative, over 12, NaN, None, garbage) gets 0.
    """
    months = _coerce_months(duration_months)
    if months is None:
        return STANDARD_RATE
    for first, last, percent, _ in TIERS:
        if first <= months <= last:
            return percent
    return STANDARD_RATE


def _adjusted_rate(base: Decimal, adjustment: int) -> Decimal:
    with localcontext(_MONEY_CONTEXT):
        return base * (1 + Decimal(adjustment) / _HUNDRED)


def _monthly_discount(base: Decimal, adjustment: int) -> Decimal:
    with localcontext(_MONEY_CONTEXT):
        return abs(base * Decimal(adjustment) / _HUNDRED)


def _times_months(amount: Decimal, months: int) -> Decimal:
    with localcontext(_MONEY_CONTEXT):
        return amount * months


def compute_price(base_rent: Any, duration_months: Any) -> PriceAdjustment:
    """
    Monthly rate after the FairFlex adjustment.

    Invalid or negative base rent is treated as 0.
    """
    base = _coerce_amount(base_rent)
    adjustment = compute_adjustment(duration_months)
    return PriceAdjustment(
        adjustment_percent=adjustment,
        monthly_rate=_round_money(_adjusted_rate(base, adjustment)),
    )


def compute_total(monthly_rate: Any, duration_months: Any) -> float:
    """Booking total; invalid durations bill a single month."""
    rate = _coerce_amount(monthly_rate)
    return _round_money(_times_months(rate, _billable_months(duration_months)))


def compute_monthly_savings(base_rent: Any, duration_months: Any) -> float:
    adjustment = compute_adjustment(duration_months)
    if adjustment >= 0:
        return 0.0
    base = _coerce_amount(base_rent)
    return _round_money(_monthly_discount(base, adjustment))


def compute_savings(base_rent: Any, duration_months: Any) -> float:
    """Total saved over the stay versus the base rent. 0 unless the stay is discounted."""
    adjustment = compute_adjustment(duration_months)
    if adjustment >= 0:
        return 0.0
    base = _coerce_amount(base_rent)
    monthly = _monthly_discount(base, adjustment)
    return _round_money(_times_months(monthly, _billable_months(duration_months)))


def quote(base_rent: Any, duration_months: Any) -> RentQuote:
    """
    Full FairFlex quote for a booking request.

    The tier is taken from the duration as given, so an unrecognized
    duration is quoted at the standard rate and billed as one month.
    """
    price = compute_price(base_rent, duration_months)
    return RentQuote(
        base_rent=_round_money(_coerce_amount(base_rent)),
        duration_months=_billable_months(duration_months),
        tier=adjustment_tier(duration_months),
        adjustment_percent=price.adjustment_percent,
        monthly_rate=price.monthly_rate,
        total_amount=compute_total(price.monthly_rate, duration_months),
        monthly_savings=compute_monthly_savings(base_rent, duration_months),
        total_savings=compute_savings(base_rent, duration_months),
    )


def compare_durations(
    base_rent: Any, durations: Iterable[Any] = COMPARISON_DURATIONS
) -> list[RentQuote]:
    """Quotes for several stay lengths, in the order given."""
    return [quote(base_rent, months) for months in durations]
