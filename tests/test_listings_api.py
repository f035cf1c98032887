# ================================
# LISTING API TESTS (test_listings_api.py)
# ================================

from decimal import Decimal

from campus_storage.config import settings

LISTINGS_URL = "/api/v1/listings"


class TestListingCrud:
    """Create, read, update and soft delete."""

    def test_create_listing(self, client, host, create_listing):
        listing = create_listing()

        assert listing["host_id"] == host["id"]
        assert listing["is_active"] is True
        assert listing["storage_type"] == "dorm_room"
        assert Decimal(listing["price_per_month"]) == Decimal("100")
        assert listing["host"]["full_name"] == "Hannah Host"

    def test_placeholder_image_when_none_given(self, create_listing):
        listing = create_listing(images=[])
        assert listing["images"] == [settings.PLACEHOLDER_IMAGE_URL]

    def test_amenities_are_deduplicated(self, create_listing):
        listing = create_listing(amenities=["secure", "secure", "ground_floor"])
        assert listing["amenities"] == ["secure", "ground_floor"]

    def test_window_must_be_ordered(self, client, host):
        payload = {
            "title": "Backwards",
            "description": "Bad window",
            "storage_type": "garage",
            "size_category": "large",
            "price_per_month": "60.00",
            "location_address": "Somewhere",
            "available_from": "2025-12-01",
            "available_until": "2025-08-01",
        }
        response = client.post(LISTINGS_URL, json=payload, headers=host["headers"])

        assert response.status_code == 422
        assert response.json()["error_code"] == "INVALID_RANGE"

    def test_missing_required_fields(self, client, host):
        response = client.post(LISTINGS_URL, json={"title": "Only a title"}, headers=host["headers"])

        assert response.status_code == 422
        error = response.json()
        assert error["error_code"] == "VALIDATION_ERROR"
        assert "price_per_month" in error["detail"]
        assert error["request_id"]

    def test_requires_authentication(self, client):
        response = client.get(LISTINGS_URL)

        assert response.status_code == 401
        assert response.json()["error_code"] == "AUTH_FAILED"

    def test_get_listing(self, client, renter, create_listing):
        listing = create_listing()
        response = client.get(f"{LISTINGS_URL}/{listing['id']}", headers=renter["headers"])

        assert response.status_code == 200
        assert response.json()["title"] == listing["title"]

    def test_get_unknown_listing(self, client, renter):
        response = client.get(f"{LISTINGS_URL}/00000000-0000-4000-8000-000000000000", headers=renter["headers"])

        assert response.status_code == 404
        assert response.json()["error_code"] == "NOT_FOUND"

    def test_host_updates_listing(self, client, host, create_listing):
        listing = create_listing()
        response = client.patch(
            f"{LISTINGS_URL}/{listing['id']}",
            json={"price_per_month": "75.50", "campus_area": "East Village"},
            headers=host["headers"]
        )

        assert response.status_code == 200
        data = response.json()
        assert Decimal(data["price_per_month"]) == Decimal("75.50")
        assert data["campus_area"] == "East Village"
        assert data["title"] == listing["title"]

    def test_only_host_may_update(self, client, outsider, create_listing):
        listing = create_listing()
        response = client.patch(
            f"{LISTINGS_URL}/{listing['id']}",
            json={"title": "Mine now"},
            headers=outsider["headers"]
        )

        assert response.status_code == 403
        assert response.json()["error_code"] == "ACCESS_DENIED"

    def test_update_revalidates_window(self, client, host, create_listing):
        listing = create_listing()
        response = client.patch(
            f"{LISTINGS_URL}/{listing['id']}",
            json={"available_until": "2025-07-01"},
            headers=host["headers"]
        )
        assert response.status_code == 422
        assert response.json()["error_code"] == "INVALID_RANGE"

    def test_window_cannot_strand_confirmed_booking(self, client, host, create_listing, confirmed_booking):
        listing = create_listing()
        confirmed_booking(listing["id"], "2025-11-01", "2025-11-30")
        url = f"{LISTINGS_URL}/{listing['id']}"

        response = client.patch(url, json={"available_until": "2025-11-15"}, headers=host["headers"])
        assert response.status_code == 422
        assert response.json()["error_code"] == "BOOKINGS_OUTSIDE_WINDOW"

        response = client.patch(url, json={"available_until": "2025-11-30"}, headers=host["headers"])
        assert response.status_code == 200
        assert response.json()["available_until"] == "2025-11-30"

    def test_update_cannot_clear_required_field(self, client, host, create_listing):
        listing = create_listing()
        response = client.patch(f"{LISTINGS_URL}/{listing['id']}", json={"title": None}, headers=host["headers"])

        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    def test_soft_delete(self, client, host, renter, create_listing):
        listing = create_listing()

        response = client.delete(f"{LISTINGS_URL}/{listing['id']}", headers=renter["headers"])
        assert response.status_code == 403

        response = client.delete(f"{LISTINGS_URL}/{listing['id']}", headers=host["headers"])
        assert response.status_code == 204

        assert client.get(f"{LISTINGS_URL}/{listing['id']}", headers=renter["headers"]).status_code == 404
        assert client.get(LISTINGS_URL, headers=renter["headers"]).json()["total"] == 0

        mine = client.get(f"{LISTINGS_URL}/mine", headers=host["headers"]).json()
        assert [(item["id"], item["is_active"]) for item in mine] == [(listing["id"], False)]

    def test_my_listings_only_show_own(self, client, host, outsider, create_listing):
        create_listing()
        create_listing(headers=outsider["headers"], title="Someone else's garage")

        mine = client.get(f"{LISTINGS_URL}/mine", headers=host["headers"]).json()
        assert len(mine) == 1
        assert mine[0]["host_id"] == host["id"]


class TestListingSearch:
    """GET /listings filters, availability and pagination."""

    def test_cards_carry_host_details(self, client, renter, create_listing):
        create_listing(images=["https://img.example/a.jpg", "https://img.example/b.jpg"])
        data = client.get(LISTINGS_URL, headers=renter["headers"]).json()

        assert data["total"] == 1
        card = data["items"][0]
        assert card["host_name"] == "Hannah Host"
        assert card["campus"] == settings.DEFAULT_UNIVERSITY
        assert card["thumbnail_url"] == "https://img.example/a.jpg"
        assert card["address"] == "1111 Speight Ave, Waco, TX"

    def test_filters_by_query_params(self, client, renter, create_listing):
        create_listing(title="Closet", storage_type="closet", size_category="small", price_per_month="30.00")
        create_listing(title="Garage", storage_type="garage", size_category="large", price_per_month="150.00",
                       campus_area="Speight", amenities=["24_7_access"])
        create_listing(title="Dorm")

        def titles(params):
            response = client.get(LISTINGS_URL, params=params, headers=renter["headers"])
            assert response.status_code == 200, response.text
            return sorted(item["title"] for item in response.json()["items"])

        assert titles({"storage_type": "garage"}) == ["Garage"]
        assert titles({"size_category": "small"}) == ["Closet"]
        assert titles({"min_price": "50", "max_price": "100"}) == ["Dorm"]
        assert titles({"campus_area": "north"}) == ["Closet", "Dorm"]
        assert titles({"amenities": ["24_7_access", "secure"]}) == ["Garage"]
        assert titles({"storage_type": "garage", "campus_area": "north"}) == []

    def test_radius_filter(self, client, renter, create_listing):
        create_listing(title="Near", latitude=31.5500, longitude=-97.1140)
        create_listing(title="Austin", latitude=30.2672, longitude=-97.7431)
        create_listing(title="Unmapped")

        params = {"near_latitude": 31.5489, "near_longitude": -97.1131, "radius_miles": 5}
        items = client.get(LISTINGS_URL, params=params, headers=renter["headers"]).json()["items"]
        assert [item["title"] for item in items] == ["Near"]

    def test_partial_radius_rejected(self, client, renter):
        response = client.get(LISTINGS_URL, params={"radius_miles": 5}, headers=renter["headers"])
        assert response.status_code == 422

    def test_price_bounds_must_be_ordered(self, client, renter):
        response = client.get(LISTINGS_URL, params={"min_price": "90", "max_price": "10"}, headers=renter["headers"])

        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    def test_date_range_must_be_ordered(self, client, renter):
        params = {"start_date": "2025-09-30", "end_date": "2025-09-01"}
        response = client.get(LISTINGS_URL, params=params, headers=renter["headers"])

        assert response.status_code == 422
        assert response.json()["error_code"] == "INVALID_RANGE"

    def test_single_day_search(self, client, renter, create_listing, confirmed_booking):
        booked = create_listing(title="Booked that day")
        create_listing(title="Free that day")
        confirmed_booking(booked["id"], "2025-09-01", "2025-09-10")

        params = {"start_date": "2025-09-10", "end_date": "2025-09-10"}
        response = client.get(LISTINGS_URL, params=params, headers=renter["headers"])

        assert response.status_code == 200
        assert [item["title"] for item in response.json()["items"]] == ["Free that day"]

    def test_availability_window_must_contain_dates(self, client, renter, create_listing):
        create_listing(title="Fall", available_from="2025-08-01", available_until="2025-12-31")
        create_listing(title="Summer", available_from="2025-05-01", available_until="2025-08-31")

        params = {"start_date": "2025-09-01", "end_date": "2025-09-30"}
        items = client.get(LISTINGS_URL, params=params, headers=renter["headers"]).json()["items"]
        assert [item["title"] for item in items] == ["Fall"]

    def test_pagination(self, client, renter, create_listing):
        for number in range(5):
            create_listing(title=f"Space {number}")

        first = client.get(LISTINGS_URL, params={"page": 1, "page_size": 2}, headers=renter["headers"]).json()
        assert len(first["items"]) == 2
        assert (first["total"], first["page"], first["size"], first["pages"]) == (5, 1, 2, 3)

        last = client.get(LISTINGS_URL, params={"page": 3, "page_size": 2}, headers=renter["headers"]).json()
        assert len(last["items"]) == 1

        beyond = client.get(LISTINGS_URL, params={"page": 9, "page_size": 2}, headers=renter["headers"]).json()
        assert beyond["items"] == []
        assert beyond["total"] == 5

        seen = {item["id"] for p in (1, 2, 3)
                for item in client.get(LISTINGS_URL, params={"page": p, "page_size": 2},
                                       headers=renter["headers"]).json()["items"]}
        assert len(seen) == 5

    def test_default_page_size(self, client, renter, create_listing):
        for number in range(settings.DEFAULT_PAGE_SIZE + 1):
            create_listing(title=f"Space {number}")

        data = client.get(LISTINGS_URL, headers=renter["headers"]).json()
        assert len(data["items"]) == settings.DEFAULT_PAGE_SIZE
        assert data["pages"] == 2

    def test_page_must_be_positive(self, client, renter):
        response = client.get(LISTINGS_URL, params={"page": 0}, headers=renter["headers"])
        assert response.status_code == 422

    def test_confirmed_bookings_hide_listings(self, client, renter, create_listing, create_booking, confirmed_booking):
        """Five listings, two confirmed into September, dorm rooms wanted for September."""
        dorm_booked = create_listing(title="Dorm booked")
        garage_booked = create_listing(title="Garage booked", storage_type="garage")
        create_listing(title="Dorm free")
        dorm_pending = create_listing(title="Dorm pending")
        create_listing(title="Closet free", storage_type="closet")

        confirmed_booking(dorm_booked["id"], "2025-09-10", "2025-09-20")
        confirmed_booking(garage_booked["id"], "2025-08-15", "2025-09-01")
        create_booking(dorm_pending["id"], "2025-09-01", "2025-09-30")

        params = {"storage_type": "dorm_room", "start_date": "2025-09-01", "end_date": "2025-09-30"}
        data = client.get(LISTINGS_URL, params=params, headers=renter["headers"]).json()

        assert data["total"] == 2
        assert sorted(item["title"] for item in data["items"]) == ["Dorm free", "Dorm pending"]

        # Without dates nothing is hidden by bookings
        data = client.get(LISTINGS_URL, params={"storage_type": "dorm_room"}, headers=renter["headers"]).json()
        assert data["total"] == 3

    def test_booking_outside_window_does_not_hide(self, client, renter, create_listing, confirmed_booking):
        listing = create_listing()
        confirmed_booking(listing["id"], "2025-10-01", "2025-10-15")

        params = {"start_date": "2025-09-01", "end_date": "2025-09-30"}
        assert client.get(LISTINGS_URL, params=params, headers=renter["headers"]).json()["total"] == 1

    def test_cancelled_booking_frees_listing(self, client, host, renter, create_listing, confirmed_booking):
        listing = create_listing()
        booking = confirmed_booking(listing["id"], "2025-09-10", "2025-09-20")
        params = {"start_date": "2025-09-01", "end_date": "2025-09-30"}
        assert client.get(LISTINGS_URL, params=params, headers=renter["headers"]).json()["total"] == 0

        client.post(f"/api/v1/bookings/{booking['id']}/cancel", headers=renter["headers"])
        assert client.get(LISTINGS_URL, params=params, headers=renter["headers"]).json()["total"] == 1


class TestQuote:
    """GET /listings/{id}/quote."""

    def test_quote(self, client, renter, create_listing):
        listing = create_listing()
        params = {"start_date": "2025-09-01", "end_date": "2025-10-16"}
        response = client.get(f"{LISTINGS_URL}/{listing['id']}/quote", params=params, headers=renter["headers"])

        assert response.status_code == 200
        data = response.json()
        assert (data["days"], data["months"]) == (45, 2)
        assert Decimal(data["total_price"]) == Decimal("200")

    def test_quote_invalid_range(self, client, renter, create_listing):
        listing = create_listing()
        params = {"start_date": "2025-09-01", "end_date": "2025-09-01"}
        response = client.get(f"{LISTINGS_URL}/{listing['id']}/quote", params=params, headers=renter["headers"])

        assert response.status_code == 422
        assert response.json()["error_code"] == "INVALID_RANGE"
