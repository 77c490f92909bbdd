"""List available tours in the database (first 10, by title)."""
import os
import sqlite3
import sys
from pathlib import Path

from dotenv import load_dotenv

from tours_api.config import ConfigurationError, Settings
from tours_api.storage.database import PackageStore

load_dotenv()
if not os.getenv("DATABASE_URL"):
    load_dotenv(Path(__file__).resolve().parent.parent / ".env")


def main() -> int:
    config = Settings()
    try:
        db_path = config.database_path()
    except ConfigurationError as e:
        print(f"Configuration error: {e}")
        return 1

    try:
        tours = PackageStore(db_path).list_tours(limit=10)
    except sqlite3.Error as e:
        print(f"Error: {e}")
        return 1

    print(f"Connected to database at {db_path}")
    print("\nAvailable Tours:")
    print("================")
    for i, tour in enumerate(tours, start=1):
        print(f"{i}. {tour.slug}")
        print(f"   Name: {tour.name}")
        print("")

    if not tours:
        print("No tours found. Run generate_fake_data.py to seed some.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
