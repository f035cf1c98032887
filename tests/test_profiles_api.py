# ================================
# PROFILE AND APP TESTS (test_profiles_api.py)
# ================================

import uuid
from datetime import timedelta

from campus_storage.config import settings
from campus_storage.core.security import create_access_token
from campus_storage.models.profile import Profile

from conftest import make_user

PROFILE_URL = "/api/v1/profiles"


class TestProfiles:

    def test_profile_created_on_first_access(self, client, renter, db_session):
        response = client.get(f"{PROFILE_URL}/me", headers=renter["headers"])

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == renter["id"]
        assert data["full_name"] == "Riley Renter"
        assert data["university"] == settings.DEFAULT_UNIVERSITY
        assert data["verification_status"] == "unverified"
        assert data["total_reviews"] == 0

        assert db_session.query(Profile).count() == 1

    def test_second_access_reuses_profile(self, client, renter, db_session):
        client.get(f"{PROFILE_URL}/me", headers=renter["headers"])
        client.get(f"{PROFILE_URL}/me", headers=renter["headers"])
        assert db_session.query(Profile).count() == 1

    def test_name_falls_back_to_email(self, client):
        user = make_user("sam.student@baylor.edu")
        data = client.get(f"{PROFILE_URL}/me", headers=user["headers"]).json()
        assert data["full_name"] == "sam.student"

    def test_update_own_profile(self, client, renter):
        response = client.patch(
            f"{PROFILE_URL}/me",
            json={"major": "Biology", "year_in_school": "Junior", "university": "Texas State University"},
            headers=renter["headers"]
        )

        assert response.status_code == 200
        data = response.json()
        assert data["major"] == "Biology"
        assert data["year_in_school"] == "Junior"
        assert data["university"] == "Texas State University"

    def test_invalid_year_rejected(self, client, renter):
        response = client.patch(f"{PROFILE_URL}/me", json={"year_in_school": "Fifth"}, headers=renter["headers"])
        assert response.status_code == 422

    def test_public_profile(self, client, host, renter):
        client.get(f"{PROFILE_URL}/me", headers=host["headers"])
        response = client.get(f"{PROFILE_URL}/{host['id']}", headers=renter["headers"])

        assert response.status_code == 200
        assert response.json()["full_name"] == "Hannah Host"
        assert "email" not in response.json()

    def test_unknown_profile(self, client, renter):
        response = client.get(f"{PROFILE_URL}/{uuid.uuid4()}", headers=renter["headers"])
        assert response.status_code == 404


class TestAuthentication:

    def test_missing_token(self, client):
        response = client.get(f"{PROFILE_URL}/me")

        assert response.status_code == 401
        assert response.json()["error_code"] == "AUTH_FAILED"
        assert response.json()["request_id"]

    def test_garbage_token(self, client):
        response = client.get(f"{PROFILE_URL}/me", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401

    def test_expired_token(self, client):
        token = create_access_token(str(uuid.uuid4()), "late@baylor.edu", expires_delta=timedelta(minutes=-5))
        response = client.get(f"{PROFILE_URL}/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    def test_subject_must_be_uuid(self, client):
        token = create_access_token("user-42", "odd@baylor.edu")
        response = client.get(f"{PROFILE_URL}/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401


class TestApp:

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_detailed_health_checks_database(self, client):
        data = client.get("/health/detailed").json()
        assert data["checks"]["database"] == "healthy"

    def test_root(self, client):
        data = client.get("/").json()
        assert data["available_endpoints"]["listings"] == "/api/v1/listings"

    def test_response_headers(self, client):
        response = client.get("/health")

        assert response.headers["X-Request-ID"]
        assert "X-Process-Time" in response.headers
        assert response.headers["X-Content-Type-Options"] == "nosniff"
