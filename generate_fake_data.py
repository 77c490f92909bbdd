import datetime
import random
import uuid

from dotenv import load_dotenv

from tours_api.config import Settings
from tours_api.models.booking import Booking, ContactInfo, PaymentInfo
from tours_api.models.package import Package
from tours_api.storage.database import BookingStore, PackageStore

load_dotenv()

DAYS_BACK = 90
BANK_CHARGE_RATE = 0.028

PACKAGES = [
    Package(id="tour-mossy-forest", package_type="tour", title="Mossy Forest Adventure",
            slug="mossy-forest-adventure", new_price=120.0, old_price=150.0),
    Package(id="tour-sunrise", package_type="tour", title="Sunrise Viewpoint Tour",
            slug="sunrise-viewpoint-tour", new_price=95.0, old_price=110.0),
    Package(id="tour-tea-plantation", package_type="tour", title="BOH Tea Plantation Half-Day",
            slug="boh-tea-plantation-half-day", new_price=75.0),
    Package(id="tour-private-fullday", package_type="tour", title="Private Full-Day Highlands",
            slug="private-full-day-highlands", new_price=480.0),
    Package(id="transfer-kl", package_type="transfer", title="Kuala Lumpur to Cameron Highlands",
            slug="kl-to-cameron-highlands", new_price=90.0),
    Package(id="transfer-ipoh", package_type="transfer", title="Ipoh to Cameron Highlands",
            slug="ipoh-to-cameron-highlands", new_price=60.0),
]

PICKUPS = ["Tanah Rata", "Brinchang", "Kea Farm", "Golden Hills"]
TIMES = ["08:00 AM", "08:45 AM", "01:30 PM"]
# Weighted so roughly one booking in eight is cancelled
STATUSES = ["confirmed"] * 5 + ["completed"] * 2 + ["pending", "cancelled"]


def fake_booking(day: datetime.date, pkg: Package) -> Booking:
    adults = random.randint(1, 6)
    children = random.randint(0, 3)
    subtotal = round(pkg.new_price * adults + pkg.new_price * 0.5 * children, 2)
    bank_charge = round(subtotal * BANK_CHARGE_RATE, 2)
    status = random.choice(STATUSES)
    hour = random.choice([0, 6, 12])

    return Booking(
        id=str(uuid.uuid4()),
        package_type=pkg.package_type,
        package_id=pkg.id,
        date=datetime.datetime(day.year, day.month, day.day, hour, tzinfo=datetime.timezone.utc),
        time=random.choice(TIMES),
        adults=adults,
        children=children,
        pickup_location=random.choice(PICKUPS),
        status=status,
        contact_info=ContactInfo(
            name=f"Guest {random.randint(100, 999)}",
            email=f"guest{random.randint(100, 999)}@example.com",
            phone=f"+6012{random.randint(1000000, 9999999)}",
        ),
        payment_info=PaymentInfo(
            payment_status="failed" if status == "cancelled" else "succeeded",
            amount=round(subtotal + bank_charge, 2),
            bank_charge=bank_charge,
        ),
        subtotal=subtotal,
        total=round(subtotal + bank_charge, 2),
    )


def main():
    db_path = Settings().database_path()
    booking_store = BookingStore(db_path)
    package_store = PackageStore(db_path)

    package_store.add_packages(PACKAGES)

    end_date = datetime.date.today()
    current = end_date - datetime.timedelta(days=DAYS_BACK)
    bookings = []

    print(f"Generating bookings from {current} to {end_date}...")

    while current <= end_date:
        # Weekends are busier
        per_day = random.randint(2, 6) if current.weekday() >= 5 else random.randint(0, 3)
        for _ in range(per_day):
            bookings.append(fake_booking(current, random.choice(PACKAGES)))
        current += datetime.timedelta(days=1)

    count = booking_store.add_bookings(bookings)
    print(f"Success. Wrote {len(PACKAGES)} packages and {count} bookings to {db_path}")


if __name__ == "__main__":
    main()
