"""Exchange rate service (MYR base) with a primary/backup provider and a TTL cache."""
import logging
import math
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, Tuple
import httpx
from tours_api.config import Settings, settings
from tours_api.models.currency import ExchangeRates

logger = logging.getLogger(__name__)


class CurrencyServiceError(Exception):
    """Raised when an exchange rate provider returns an unusable response."""


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class CurrencyService:
    """Looks up MYR→USD/EUR rates, caching them for ``currency_cache_seconds``."""

    def __init__(
        self,
        config: Settings = settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self.config = config
        self.transport = transport
        self.clock = clock
        self._rates: Optional[ExchangeRates] = None

    @property
    def cache_duration(self) -> timedelta:
        return timedelta(seconds=self.config.currency_cache_seconds)

    @property
    def fallback_rates(self) -> Tuple[float, float]:
        return self.config.fallback_usd_rate, self.config.fallback_eur_rate

    async def _fetch_from(self, url: str) -> Tuple[float, float]:
        """Fetch (USD, EUR) from a single provider."""
        async with httpx.AsyncClient(
            transport=self.transport,
            timeout=self.config.currency_timeout_seconds,
        ) as client:
            resp = await client.get(url)
        resp.raise_for_status()

        payload = resp.json()
        rates = payload.get("rates") if isinstance(payload, dict) else None
        if not isinstance(rates, dict):
            raise CurrencyServiceError(f"Invalid API response from {url}: missing rates")

        values = []
        for code in ("USD", "EUR"):
            value = rates.get(code)
            # bool is an int subclass but never a valid rate
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise CurrencyServiceError(f"Invalid {code} rate from {url}: {value!r}")
            if not math.isfinite(value) or value <= 0:
                raise CurrencyServiceError(f"Invalid {code} rate from {url}: {value!r}")
            values.append(float(value))
        return values[0], values[1]

    async def _fetch_rates_from_api(self) -> Tuple[float, float]:
        """
        Fetch rates from the primary provider, then the backup.

        Falls back to the configured static rates when both providers fail,
        so this never raises for provider errors.
        """
        for url in (self.config.currency_primary_url, self.config.currency_backup_url):
            try:
                return await self._fetch_from(url)
            except (httpx.HTTPError, ValueError, TypeError, AttributeError, CurrencyServiceError) as e:
                logger.error("Failed to fetch exchange rates from %s: %s", url, e)

        logger.warning("Using fallback exchange rates")
        return self.fallback_rates

    async def get_exchange_rates(self) -> ExchangeRates:
        """Get current exchange rates (cached or fresh)."""
        now = self.clock()

        if self._rates is not None and now - self._rates.last_updated < self.cache_duration:
            logger.debug("Returning cached exchange rates")
            return self._rates.model_copy(update={"from_cache": True})

        logger.info("Fetching fresh exchange rates...")
        usd, eur = await self._fetch_rates_from_api()
        self._rates = ExchangeRates(usd=usd, eur=eur, last_updated=now)
        logger.info("Exchange rates updated: USD=%s EUR=%s", usd, eur)
        return self._rates

    async def convert_to_usd(self, myr_amount: float) -> int:
        """Convert MYR to USD, rounded to the nearest whole unit."""
        rates = await self.get_exchange_rates()
        return _round_half_up(myr_amount * rates.usd)

    async def convert_to_eur(self, myr_amount: float) -> int:
        """Convert MYR to EUR, rounded to the nearest whole unit."""
        rates = await self.get_exchange_rates()
        return _round_half_up(myr_amount * rates.eur)

    async def get_fresh_rates(self) -> ExchangeRates:
        """Get rates without consulting or updating the cache."""
        usd, eur = await self._fetch_rates_from_api()
        return ExchangeRates(usd=usd, eur=eur, last_updated=self.clock())
