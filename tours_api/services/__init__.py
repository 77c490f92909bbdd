from .revenue import RevenueService, RevenueRequestError, build_revenue_query
from .currency import CurrencyService, CurrencyServiceError

__all__ = [
    "RevenueService",
    "RevenueRequestError",
    "build_revenue_query",
    "CurrencyService",
    "CurrencyServiceError",
]
