"""Database storage layer using SQLite."""
import json
import logging
import sqlite3
import uuid
from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional, Tuple
from tours_api.config import Settings, settings
from tours_api.models.booking import Booking
from tours_api.models.package import Package, PackageSummary, TourListing
from tours_api.models.revenue import RevenueBooking, RevenueQuery
from tours_api.utils.timestamp import from_storage, to_storage

logger = logging.getLogger(__name__)


class _SQLiteStore(ABC):
    """Shared connection handling for the stores."""

    def __init__(self, db_path: str):
        self.db_path = db_path
        self._init_db()

    @abstractmethod
    def _init_db(self):
        """Create the store's tables and indexes if they do not exist."""
        pass

    @contextmanager
    def _get_conn(self):
        """Get database connection."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
        finally:
            conn.close()

    def ping(self) -> bool:
        """Return True if the database file can be opened and queried."""
        try:
            with self._get_conn() as conn:
                conn.execute("SELECT 1").fetchone()
            return True
        except sqlite3.Error as e:
            logger.warning("Database ping failed: %s", e)
            return False


class PackageStore(_SQLiteStore):
    """Storage for tours and transfers."""

    def _init_db(self):
        """Initialize database tables."""
        with self._get_conn() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS packages (
                    id TEXT PRIMARY KEY,
                    package_type TEXT NOT NULL,
                    title TEXT NOT NULL,
                    slug TEXT NOT NULL UNIQUE,
                    new_price REAL NOT NULL,
                    old_price REAL,
                    status TEXT NOT NULL
                )
            """)
            conn.execute("""
                CREATE INDEX IF NOT EXISTS idx_packages_type_title
                ON packages(package_type, title)
            """)
            conn.commit()

    def add_packages(self, packages: Iterable[Package]) -> int:
        """Insert or replace packages."""
        with self._get_conn() as conn:
            count = 0
            for pkg in packages:
                conn.execute("""
                    INSERT OR REPLACE INTO packages
                    (id, package_type, title, slug, new_price, old_price, status)
                    VALUES (?, ?, ?, ?, ?, ?, ?)
                """, (
                    pkg.id,
                    pkg.package_type,
                    pkg.title,
                    pkg.slug,
                    pkg.new_price,
                    pkg.old_price,
                    pkg.status,
                ))
                count += 1
            conn.commit()
            return count

    def get_packages_by_ids(self, ids: Iterable[str]) -> Dict[str, Package]:
        """Batch-fetch packages by id. Unknown ids are simply absent from the result."""
        unique_ids = sorted(set(ids))
        if not unique_ids:
            return {}

        placeholders = ", ".join("?" for _ in unique_ids)
        with self._get_conn() as conn:
            rows = conn.execute(
                f"SELECT * FROM packages WHERE id IN ({placeholders})",
                unique_ids,
            ).fetchall()
            return {row["id"]: self._row_to_package(row) for row in rows}

    def list_tours(self, limit: int = 10) -> List[TourListing]:
        """List tours as slug/name pairs, ordered by title."""
        with self._get_conn() as conn:
            rows = conn.execute("""
                SELECT slug, title FROM packages
                WHERE package_type = 'tour'
                ORDER BY title ASC
                LIMIT ?
            """, (limit,)).fetchall()
            return [TourListing(slug=row["slug"], name=row["title"]) for row in rows]

    @staticmethod
    def _row_to_package(row: sqlite3.Row) -> Package:
        return Package(
            id=row["id"],
            package_type=row["package_type"],
            title=row["title"],
            slug=row["slug"],
            new_price=row["new_price"],
            old_price=row["old_price"],
            status=row["status"],
        )


class BookingStore(_SQLiteStore):
    """Storage for bookings."""

    def _init_db(self):
        """Initialize database tables."""
        with self._get_conn() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS bookings (
                    id TEXT PRIMARY KEY,
                    user_id TEXT,
                    package_type TEXT NOT NULL,
                    package_id TEXT NOT NULL,
                    slot_id TEXT,
                    date TEXT NOT NULL,
                    time TEXT NOT NULL,
                    adults INTEGER NOT NULL,
                    children INTEGER NOT NULL,
                    pickup_location TEXT NOT NULL,
                    status TEXT NOT NULL,
                    contact_info TEXT NOT NULL,
                    payment_info TEXT NOT NULL,
                    subtotal REAL NOT NULL,
                    total REAL NOT NULL,
                    is_admin_booking INTEGER NOT NULL DEFAULT 0,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)
            conn.execute("""
                CREATE INDEX IF NOT EXISTS idx_bookings_status_date
                ON bookings(status, date)
            """)
            conn.execute("""
                CREATE INDEX IF NOT EXISTS idx_bookings_package_date
                ON bookings(package_id, date)
            """)
            conn.commit()

    def add_bookings(self, bookings: Iterable[Booking]) -> int:
        """Insert or replace bookings. Missing ids and timestamps are filled in."""
        now = datetime.now(timezone.utc)
        with self._get_conn() as conn:
            count = 0
            for booking in bookings:
                booking_id = booking.id or str(uuid.uuid4())
                conn.execute("""
                    INSERT OR REPLACE INTO bookings
                    (id, user_id, package_type, package_id, slot_id, date, time,
                     adults, children, pickup_location, status, contact_info,
                     payment_info, subtotal, total, is_admin_booking, created_at, updated_at)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """, (
                    booking_id,
                    booking.user_id,
                    booking.package_type,
                    booking.package_id,
                    booking.slot_id,
                    to_storage(booking.date),
                    booking.time,
                    booking.adults,
                    booking.children,
                    booking.pickup_location,
                    booking.status,
                    booking.contact_info.model_dump_json(),
                    booking.payment_info.model_dump_json(),
                    booking.subtotal,
                    booking.total,
                    int(booking.is_admin_booking),
                    to_storage(booking.created_at or now),
                    to_storage(booking.updated_at or now),
                ))
                count += 1
            conn.commit()
            return count

    def find_bookings(self, query: RevenueQuery) -> List[Booking]:
        """Get bookings inside the query's inclusive range, excluding its status, newest first."""
        with self._get_conn() as conn:
            rows = conn.execute("""
                SELECT * FROM bookings
                WHERE date >= ? AND date <= ? AND status != ?
                ORDER BY date DESC, id ASC
            """, (
                to_storage(query.from_date),
                to_storage(query.to_date),
                query.excluded_status,
            )).fetchall()
            return [self._row_to_booking(row) for row in rows]

    def find_revenue_bookings(
        self,
        query: RevenueQuery,
        package_store: PackageStore,
    ) -> List[RevenueBooking]:
        """
        Get bookings for a revenue report with their packages resolved.

        Bookings are read first, then every referenced package is fetched in
        one batch and merged in. A reference that no longer resolves (or that
        points at a package of a different type) is reported as ``None``.

        Args:
            query: Normalized revenue query
            package_store: Store used to resolve ``package_id``

        Returns:
            Enriched bookings sorted by date, newest first
        """
        bookings = self.find_bookings(query)
        packages = package_store.get_packages_by_ids(b.package_id for b in bookings)

        enriched = []
        for booking in bookings:
            pkg = packages.get(booking.package_id)
            summary: Optional[PackageSummary] = None
            if pkg is not None and pkg.package_type == booking.package_type:
                summary = PackageSummary(
                    id=pkg.id,
                    title=pkg.title,
                    package_type=pkg.package_type,
                    new_price=pkg.new_price,
                )
            data = booking.model_dump(exclude={"package_id"})
            enriched.append(RevenueBooking(**data, package_id=summary))
        return enriched

    @staticmethod
    def _row_to_booking(row: sqlite3.Row) -> Booking:
        return Booking(
            id=row["id"],
            user_id=row["user_id"],
            package_type=row["package_type"],
            package_id=row["package_id"],
            slot_id=row["slot_id"],
            date=from_storage(row["date"]),
            time=row["time"],
            adults=row["adults"],
            children=row["children"],
            pickup_location=row["pickup_location"],
            status=row["status"],
            contact_info=json.loads(row["contact_info"]),
            payment_info=json.loads(row["payment_info"]),
            subtotal=row["subtotal"],
            total=row["total"],
            is_admin_booking=bool(row["is_admin_booking"]),
            created_at=from_storage(row["created_at"]),
            updated_at=from_storage(row["updated_at"]),
        )


# Global instances
_stores: Optional[Tuple[BookingStore, PackageStore]] = None


def get_db(config: Settings = settings) -> Tuple[BookingStore, PackageStore]:
    """Get database store instances, creating them on first use."""
    global _stores
    if _stores is None:
        db_path = config.database_path()
        logger.info("Opening SQLite database at %s", db_path)
        _stores = (BookingStore(db_path), PackageStore(db_path))
    return _stores
