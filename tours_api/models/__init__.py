from .booking import Booking, ContactInfo, PaymentInfo
from .package import Package, PackageSummary, TourListing
from .revenue import RevenueQuery, RevenueBooking, RevenueResponse, ErrorResponse
from .currency import (
    ExchangeRates,
    RatesData,
    RatesResponse,
    ConversionRates,
    ConversionData,
    ConversionResponse,
)

__all__ = [
    "Booking",
    "ContactInfo",
    "PaymentInfo",
    "Package",
    "PackageSummary",
    "TourListing",
    "RevenueQuery",
    "RevenueBooking",
    "RevenueResponse",
    "ErrorResponse",
    "ExchangeRates",
    "RatesData",
    "RatesResponse",
    "ConversionRates",
    "ConversionData",
    "ConversionResponse",
]
