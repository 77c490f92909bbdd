"""Package (tour / transfer) data models."""
from typing import Literal, Optional
from pydantic import Field
from tours_api.models.booking import CamelModel, PackageType


class Package(CamelModel):
    """A sellable tour or transfer product."""

    id: str = Field(..., alias="_id")
    package_type: PackageType
    title: str = Field(..., description="Display title")
    slug: str = Field(..., description="URL slug, unique across packages")
    new_price: float = Field(..., ge=0, description="Current price in MYR")
    old_price: Optional[float] = Field(None, ge=0, description="Previous price in MYR")
    status: Literal["active", "sold"] = "active"


class PackageSummary(CamelModel):
    """Package fields attached to a booking in revenue reports."""

    id: str = Field(..., alias="_id")
    title: str
    package_type: PackageType
    new_price: float


class TourListing(CamelModel):
    """Slug/name projection of a tour."""

    slug: str
    name: str
