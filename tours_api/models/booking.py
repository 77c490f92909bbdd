"""Booking data models."""
from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

BookingStatus = Literal["pending", "confirmed", "cancelled", "completed"]
PackageType = Literal["tour", "transfer"]


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ContactInfo(CamelModel):
    """Lead traveller contact details."""

    name: str
    email: str
    phone: str
    whatsapp: Optional[str] = None


class PaymentInfo(CamelModel):
    """Payment state recorded against a booking."""

    payment_intent_id: Optional[str] = None
    payment_status: Literal["pending", "processing", "succeeded", "failed"] = "pending"
    amount: float = Field(..., description="Amount charged, including bank charge")
    bank_charge: float = Field(..., description="Bank/processing charge")
    currency: str = Field(default="MYR", description="Currency code")
    payment_method: Optional[str] = None
    refund_status: Literal["none", "partial", "full"] = "none"
    refund_amount: Optional[float] = None


class Booking(CamelModel):
    """Booking model."""

    id: Optional[str] = Field(None, alias="_id")
    user_id: Optional[str] = None
    package_type: PackageType = Field(..., description="Kind of package booked")
    package_id: str = Field(..., description="Referenced tour or transfer id")
    slot_id: Optional[str] = None
    date: datetime = Field(..., description="Business date of the booking")
    time: str = Field(..., description="Departure time, e.g. '08:00 AM'")
    adults: int = Field(..., ge=1, le=50)
    children: int = Field(default=0, ge=0, le=20)
    pickup_location: str = Field(..., max_length=500)
    status: BookingStatus = "pending"
    contact_info: ContactInfo
    payment_info: PaymentInfo
    subtotal: float
    total: float
    is_admin_booking: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "_id": "b9c1e7a2-2f4e-4c7e-9a55-0d7b1f3f7f10",
                "packageType": "tour",
                "packageId": "tour-mossy-forest",
                "date": "2024-01-05T00:00:00Z",
                "time": "08:00 AM",
                "adults": 2,
                "children": 1,
                "pickupLocation": "Tanah Rata",
                "status": "confirmed",
                "contactInfo": {"name": "Aisha", "email": "aisha@example.com", "phone": "+60123456789"},
                "paymentInfo": {"amount": 306.0, "bankCharge": 6.0, "currency": "MYR"},
                "subtotal": 300.0,
                "total": 306.0,
            }
        },
    )
