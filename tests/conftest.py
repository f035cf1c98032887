# ================================
# TEST CONFIGURATION (tests/conftest.py)
# ================================

import os

# In-memory database and a known signing secret, set before the app is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AUTH_JWT_SECRET"] = "test-secret"

import uuid
from typing import Any, Dict, Optional

import pytest
from fastapi.testclient import TestClient

from campus_storage.core.database import engine, SessionLocal
from campus_storage.core.security import create_access_token
from campus_storage.main import app
from campus_storage.models import Base

LISTING_PAYLOAD: Dict[str, Any] = {
    "title": "Dorm closet near Penland",
    "description": "Half of a walk-in closet, dry and locked.",
    "storage_type": "dorm_room",
    "size_category": "medium",
    "price_per_month": "100.00",
    "location_address": "1111 Speight Ave, Waco, TX",
    "campus_area": "North Village",
    "available_from": "2025-08-01",
    "available_until": "2025-12-31",
    "amenities": ["climate_controlled"],
}


def make_user(email: str, full_name: Optional[str] = None) -> Dict[str, Any]:
    """A fresh identity with bearer headers for it"""
    user_id = uuid.uuid4()
    token = create_access_token(str(user_id), email, full_name)
    return {
        "id": str(user_id),
        "email": email,
        "headers": {"Authorization": f"Bearer {token}"},
    }


@pytest.fixture(autouse=True)
def setup_database():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def host():
    return make_user("hannah@baylor.edu", "Hannah Host")


@pytest.fixture
def renter():
    return make_user("riley@baylor.edu", "Riley Renter")


@pytest.fixture
def outsider():
    return make_user("olly@baylor.edu", "Olly Outsider")


@pytest.fixture
def create_listing(client, host):
    """Factory: POST a listing (as the host unless other headers are given)"""
    def _create(headers: Optional[Dict[str, str]] = None, **overrides) -> Dict[str, Any]:
        payload = {**LISTING_PAYLOAD, **overrides}
        response = client.post("/api/v1/listings", json=payload, headers=headers or host["headers"])
        assert response.status_code == 201, response.text
        return response.json()
    return _create


@pytest.fixture
def create_booking(client, renter):
    """Factory: POST a booking request (as the renter unless other headers are given)"""
    def _create(
        listing_id: str,
        start_date: str,
        end_date: str,
        headers: Optional[Dict[str, str]] = None,
        **extra
    ) -> Dict[str, Any]:
        payload = {
            "storage_space_id": listing_id,
            "start_date": start_date,
            "end_date": end_date,
            **extra,
        }
        response = client.post("/api/v1/bookings", json=payload, headers=headers or renter["headers"])
        assert response.status_code == 201, response.text
        return response.json()
    return _create


@pytest.fixture
def confirmed_booking(client, host, create_booking):
    """Factory: booking request immediately confirmed by the host"""
    def _create(listing_id: str, start_date: str, end_date: str, **kwargs) -> Dict[str, Any]:
        booking = create_booking(listing_id, start_date, end_date, **kwargs)
        response = client.post(f"/api/v1/bookings/{booking['id']}/confirm", headers=host["headers"])
        assert response.status_code == 200, response.text
        return response.json()
    return _create
