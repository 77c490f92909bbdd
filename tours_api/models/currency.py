"""Exchange rate models."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class ExchangeRates(BaseModel):
    """MYR exchange rates to USD and EUR."""

    model_config = ConfigDict(populate_by_name=True)

    usd: float = Field(..., alias="USD", gt=0, description="USD per 1 MYR")
    eur: float = Field(..., alias="EUR", gt=0, description="EUR per 1 MYR")
    last_updated: datetime = Field(..., alias="lastUpdated")
    from_cache: bool = Field(default=False, alias="fromCache")


class RatesData(BaseModel):
    """Rates payload returned by the rates and refresh endpoints."""

    model_config = ConfigDict(populate_by_name=True)

    usd: float = Field(..., alias="USD")
    eur: float = Field(..., alias="EUR")
    last_updated: datetime = Field(..., alias="lastUpdated")
    base_currency: Optional[str] = Field(None, alias="baseCurrency")


class RatesResponse(BaseModel):
    """Response from the rates and refresh endpoints."""

    success: bool = True
    message: Optional[str] = None
    data: RatesData


class ConversionRates(BaseModel):
    """Rates used for a conversion."""

    model_config = ConfigDict(populate_by_name=True)

    usd: float = Field(..., alias="USD")
    eur: float = Field(..., alias="EUR")


class ConversionData(BaseModel):
    """A MYR amount converted to USD and EUR."""

    model_config = ConfigDict(populate_by_name=True)

    myr: float = Field(..., alias="MYR")
    usd: int = Field(..., alias="USD")
    eur: int = Field(..., alias="EUR")
    rates: ConversionRates
    last_updated: datetime = Field(..., alias="lastUpdated")


class ConversionResponse(BaseModel):
    """Response from the convert endpoint."""

    success: bool = True
    data: ConversionData
