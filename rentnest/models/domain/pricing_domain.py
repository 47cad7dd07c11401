from enum import Enum

from pydantic import BaseModel, ConfigDict


class AdjustmentTier(str, Enum):
    """FairFlex duration band."""

    SHORT_TERM = "short_term"
    STANDARD = "standard"
    LONG_TERM = "long_term"


class PriceAdjustment(BaseModel):
    """Adjustment percent and the resulting monthly rate."""

    model_config = ConfigDict(frozen=True)

    adjustment_percent: int
    monthly_rate: float


class RentQuote(BaseModel):
    """Transient FairFlex quote handed to booking creation. Never persisted as is."""

    model_config = ConfigDict(frozen=True)

    base_rent: float
    duration_months: int
    tier: AdjustmentTier
    adjustment_percent: int
    monthly_rate: float
    total_amount: float
    monthly_savings: float = 0.0
    total_savings: float = 0.0

    def booking_fields(self) -> dict:
        """Fields the booking-creation handler stores on a new booking."""
        return {
            "monthlyRate": self.monthly_rate,
            "totalAmount": self.total_amount,
            "adjustmentPercent": self.adjustment_percent,
        }
