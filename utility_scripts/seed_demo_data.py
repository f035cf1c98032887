#!/usr/bin/env python3
"""
Demo Data Script
Campus Storage Marketplace

Creates the tables on a local development database, a demo host with a few
storage spaces, and prints access tokens for the demo host and renter.
The hosted database owns the production schema; do not run this against it.

Usage:
    python utility_scripts/seed_demo_data.py

Environment Variables (from .env file):
    - DATABASE_URL: local database connection string
    - AUTH_JWT_SECRET: secret used to sign the demo tokens
"""

import sys
import uuid
from datetime import date, timedelta
from decimal import Decimal
from pathlib import Path

# Add the project root to Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

# Load environment variables from .env file
from dotenv import load_dotenv
load_dotenv()

from campus_storage.config import settings
from campus_storage.core.database import engine, get_db_session
from campus_storage.core.security import create_access_token
from campus_storage.models import Base, Profile, StorageSpace

DEMO_HOST_ID = uuid.UUID("00000000-0000-4000-8000-000000000001")
DEMO_RENTER_ID = uuid.UUID("00000000-0000-4000-8000-000000000002")

DEMO_SPACES = [
    ("Half a dorm closet near Penland", "closet", "small", "35.00", "North Village", ["climate_controlled"]),
    ("Empty garage bay off campus", "garage", "large", "120.00", "Speight", ["24_7_access", "ground_floor"]),
    ("Spare dorm room over the summer", "dorm_room", "medium", "80.00", "East Village", ["climate_controlled", "secure"]),
]


def seed() -> None:
    Base.metadata.create_all(bind=engine)
    today = date.today()

    with get_db_session() as db:
        for profile_id, email, name in (
            (DEMO_HOST_ID, "host@example.edu", "Demo Host"),
            (DEMO_RENTER_ID, "renter@example.edu", "Demo Renter"),
        ):
            if not db.query(Profile).filter(Profile.id == profile_id).first():
                db.add(Profile(
                    id=profile_id,
                    email=email,
                    full_name=name,
                    university=settings.DEFAULT_UNIVERSITY
                ))
        db.flush()

        if db.query(StorageSpace).filter(StorageSpace.host_id == DEMO_HOST_ID).count() == 0:
            for title, storage_type, size, price, area, amenities in DEMO_SPACES:
                db.add(StorageSpace(
                    host_id=DEMO_HOST_ID,
                    title=title,
                    description=f"{title}. Message me with questions.",
                    storage_type=storage_type,
                    size_category=size,
                    price_per_month=Decimal(price),
                    location_address="1301 S University Parks Dr, Waco, TX",
                    campus_area=area,
                    available_from=today,
                    available_until=today + timedelta(days=180),
                    amenities=amenities,
                    images=[settings.PLACEHOLDER_IMAGE_URL]
                ))

    print("Demo data ready")
    print(f"Host token:   {create_access_token(str(DEMO_HOST_ID), 'host@example.edu', 'Demo Host')}")
    print(f"Renter token: {create_access_token(str(DEMO_RENTER_ID), 'renter@example.edu', 'Demo Renter')}")


if __name__ == "__main__":
    seed()
