"""FastAPI main application."""
import logging
import math
from datetime import datetime, timezone
from typing import Optional, Tuple
from fastapi import Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from tours_api.config import ConfigurationError, settings
from tours_api.models.currency import (
    ConversionData,
    ConversionRates,
    ConversionResponse,
    RatesData,
    RatesResponse,
)
from tours_api.models.revenue import ErrorResponse, RevenueResponse
from tours_api.services.currency import CurrencyService
from tours_api.services.revenue import RevenueRequestError, RevenueService
from tours_api.storage.database import BookingStore, PackageStore, get_db

logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name, debug=settings.debug, version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

currency_service = CurrencyService(settings)

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def get_stores() -> Tuple[BookingStore, PackageStore]:
    """Dependency returning the booking and package stores."""
    return get_db(settings)


def get_currency_service() -> CurrencyService:
    """Dependency returning the shared currency service."""
    return currency_service


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(message=message).model_dump(),
    )


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    logger.error("Configuration error while serving %s: %s", request.url.path, exc)
    return error_response(500, "Internal server error")


@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": settings.app_name, "version": app.version}


def get_health_stores() -> Optional[Tuple[BookingStore, PackageStore]]:
    """Dependency for the health check: the stores, or None if the database is misconfigured."""
    try:
        return get_db(settings)
    except ConfigurationError as e:
        logger.error("Health check: %s", e)
        return None


@app.get("/health")
async def health(stores: Optional[Tuple[BookingStore, PackageStore]] = Depends(get_health_stores)):
    """Report whether the database can be reached."""
    timestamp = datetime.now(timezone.utc).isoformat()
    if stores is None:
        database = "misconfigured"
    elif stores[0].ping():
        return {"status": "ok", "database": "connected", "timestamp": timestamp}
    else:
        database = "disconnected"
    return JSONResponse(
        status_code=503,
        content={"status": "error", "database": database, "timestamp": timestamp},
    )


@app.get("/revenue", response_model=RevenueResponse, responses=ERROR_RESPONSES)
@app.get("/api/revenue", response_model=RevenueResponse, responses=ERROR_RESPONSES)
async def get_revenue_data(
    from_date: Optional[str] = Query(None, alias="from", description="First day of the range"),
    to_date: Optional[str] = Query(None, alias="to", description="Last day of the range (inclusive)"),
    stores: Tuple[BookingStore, PackageStore] = Depends(get_stores),
):
    """
    Revenue report: non-cancelled bookings whose date falls within
    [from 00:00:00.000, to 23:59:59.999], with package title, type and
    price attached, newest first.
    """
    logger.info("Revenue report requested with from=%r to=%r", from_date, to_date)
    service = RevenueService(*stores)

    try:
        bookings = service.get_report(from_date, to_date)
    except RevenueRequestError as e:
        return error_response(400, e.message)
    except Exception:
        logger.exception("Error fetching revenue data")
        return error_response(500, "Internal server error")

    return RevenueResponse(success=True, bookings=bookings)


@app.get(
    "/api/currency/rates",
    response_model=RatesResponse,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
)
async def get_exchange_rates(service: CurrencyService = Depends(get_currency_service)):
    """Current MYR→USD/EUR exchange rates."""
    try:
        rates = await service.get_exchange_rates()
    except Exception:
        logger.exception("Error fetching exchange rates")
        return error_response(500, "Failed to fetch exchange rates")

    return RatesResponse(
        data=RatesData(
            usd=rates.usd,
            eur=rates.eur,
            last_updated=rates.last_updated,
            base_currency="MYR",
        )
    )


@app.get("/api/currency/convert", response_model=ConversionResponse, responses=ERROR_RESPONSES)
async def convert_currency(
    amount: Optional[str] = Query(None, description="MYR amount to convert"),
    service: CurrencyService = Depends(get_currency_service),
):
    """Convert a MYR amount to USD and EUR."""
    try:
        myr_amount = float(amount) if amount else None
    except ValueError:
        myr_amount = None
    if myr_amount is None or math.isnan(myr_amount):
        return error_response(400, "Invalid amount parameter")

    try:
        rates = await service.get_exchange_rates()
        usd = await service.convert_to_usd(myr_amount)
        eur = await service.convert_to_eur(myr_amount)
    except Exception:
        logger.exception("Error converting currency")
        return error_response(500, "Failed to convert currency")

    return ConversionResponse(
        data=ConversionData(
            myr=myr_amount,
            usd=usd,
            eur=eur,
            rates=ConversionRates(usd=rates.usd, eur=rates.eur),
            last_updated=rates.last_updated,
        )
    )


@app.post(
    "/api/currency/refresh",
    response_model=RatesResponse,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
)
async def refresh_exchange_rates(service: CurrencyService = Depends(get_currency_service)):
    """Fetch rates from the providers, bypassing the cache."""
    try:
        rates = await service.get_fresh_rates()
    except Exception:
        logger.exception("Error refreshing exchange rates")
        return error_response(500, "Failed to refresh exchange rates")

    return RatesResponse(
        message="Exchange rates refreshed successfully",
        data=RatesData(usd=rates.usd, eur=rates.eur, last_updated=rates.last_updated),
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
