"""Revenue reporting: request validation and the enriched booking query."""
import logging
from typing import List, Optional
from tours_api.models.revenue import RevenueBooking, RevenueQuery
from tours_api.storage.database import BookingStore, PackageStore
from tours_api.utils.timestamp import end_of_day, parse_timestamp, start_of_day

logger = logging.getLogger(__name__)

MISSING_DATES_MESSAGE = "From date and to date are required"
INVALID_DATE_MESSAGE = "Invalid date format"
EXCLUDED_STATUS = "cancelled"


class RevenueRequestError(Exception):
    """Client error in a revenue request. ``message`` is safe to return to the caller."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def build_revenue_query(from_value: Optional[str], to_value: Optional[str]) -> RevenueQuery:
    """
    Validate raw ``from``/``to`` values and build the normalized query.

    ``from`` is floored to the start of its calendar day and ``to`` ceiled to
    23:59:59.999 of its calendar day, so the range is inclusive at day level
    whatever time of day the caller sent.

    Raises:
        RevenueRequestError: If either value is missing or unparseable
    """
    if not from_value or not to_value:
        raise RevenueRequestError(MISSING_DATES_MESSAGE)

    try:
        from_date = parse_timestamp(from_value)
        to_date = parse_timestamp(to_value)
    except ValueError as e:
        logger.info("Rejected revenue range from=%r to=%r: %s", from_value, to_value, e)
        raise RevenueRequestError(INVALID_DATE_MESSAGE) from e

    return RevenueQuery(
        from_date=start_of_day(from_date),
        to_date=end_of_day(to_date),
        excluded_status=EXCLUDED_STATUS,
    )


class RevenueService:
    """Service producing revenue reports from the booking store."""

    def __init__(self, booking_store: BookingStore, package_store: PackageStore):
        self.booking_store = booking_store
        self.package_store = package_store

    def get_report(self, from_value: Optional[str], to_value: Optional[str]) -> List[RevenueBooking]:
        """
        Run a revenue report for a raw date range.

        Args:
            from_value: Raw ``from`` query parameter
            to_value: Raw ``to`` query parameter

        Returns:
            Non-cancelled bookings in range with package details, newest first

        Raises:
            RevenueRequestError: On missing or malformed dates (no query is issued)
        """
        query = build_revenue_query(from_value, to_value)
        logger.info(
            "Revenue query: from=%s to=%s (raw from=%r to=%r)",
            query.from_date.isoformat(),
            query.to_date.isoformat(),
            from_value,
            to_value,
        )

        bookings = self.booking_store.find_revenue_bookings(query, self.package_store)
        logger.info("Found %d bookings for range.", len(bookings))
        return bookings
