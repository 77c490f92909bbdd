"""Revenue report request and response models."""
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator
from tours_api.models.booking import Booking
from tours_api.models.package import PackageSummary


class RevenueQuery(BaseModel):
    """Normalized revenue query: inclusive UTC bounds plus the excluded status."""

    model_config = ConfigDict(frozen=True)

    from_date: datetime = Field(..., description="Inclusive lower bound (start of day)")
    to_date: datetime = Field(..., description="Inclusive upper bound (end of day)")
    excluded_status: str = Field(default="cancelled", description="Status never reported")

    @model_validator(mode="after")
    def check_bounds_are_aware(self) -> "RevenueQuery":
        """Bounds are compared against stored UTC instants, so they must carry a timezone."""
        if self.from_date.tzinfo is None or self.to_date.tzinfo is None:
            raise ValueError("RevenueQuery bounds must be timezone-aware")
        return self


class RevenueBooking(Booking):
    """Booking with its package reference resolved."""

    package_id: Optional[PackageSummary] = Field(
        None, description="Referenced package, or null if it no longer exists"
    )


class RevenueResponse(BaseModel):
    """Successful revenue report."""

    success: bool = True
    bookings: List[RevenueBooking] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """Error body shared by all endpoints."""

    success: bool = False
    message: str
