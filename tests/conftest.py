"""Shared fixtures: temporary stores and an app client wired to them."""
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from tours_api.main import app, get_health_stores, get_stores
from tours_api.models.booking import Booking, ContactInfo, PaymentInfo
from tours_api.models.package import Package
from tours_api.storage.database import BookingStore, PackageStore


@pytest.fixture
def stores(tmp_path):
    """Booking and package stores backed by a throwaway SQLite file."""
    db_path = str(tmp_path / "tours_test.db")
    return BookingStore(db_path), PackageStore(db_path)


@pytest.fixture
def client(stores):
    """Test client whose store dependency points at the temporary database."""
    app.dependency_overrides[get_stores] = lambda: stores
    app.dependency_overrides[get_health_stores] = lambda: stores
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def packages():
    """A tour and a transfer."""
    return [
        Package(id="tour-1", package_type="tour", title="Mossy Forest Adventure",
                slug="mossy-forest-adventure", new_price=120.0, old_price=150.0),
        Package(id="transfer-1", package_type="transfer", title="KL to Cameron Highlands",
                slug="kl-to-cameron-highlands", new_price=90.0),
    ]


@pytest.fixture
def make_booking():
    """Factory for bookings with sensible defaults."""
    counter = {"n": 0}

    def _make(date, status="confirmed", package_id="tour-1", package_type="tour", **kwargs):
        counter["n"] += 1
        if isinstance(date, str):
            date = datetime.fromisoformat(date)
        if date.tzinfo is None:
            date = date.replace(tzinfo=timezone.utc)
        fields = dict(
            id=f"booking-{counter['n']:03d}",
            package_type=package_type,
            package_id=package_id,
            date=date,
            time="08:00 AM",
            adults=2,
            children=0,
            pickup_location="Tanah Rata",
            status=status,
            contact_info=ContactInfo(name="Test Guest", email="guest@example.com", phone="+60123456789"),
            payment_info=PaymentInfo(amount=244.0, bank_charge=4.0),
            subtotal=240.0,
            total=244.0,
        )
        fields.update(kwargs)
        return Booking(**fields)

    return _make
