# ================================
# LISTING FILTERS (utils/listing_filters.py)
# ================================

"""Pure keep/discard predicates for storage space search."""

from typing import Any

from campus_storage.schemas.listing import ListingCriteria
from campus_storage.utils.location_utils import within_radius


def _value(field: Any) -> Any:
    return getattr(field, "value", field)


def matches(listing: Any, criteria: ListingCriteria) -> bool:
    """Check if a listing satisfies every criterion that is set."""
    if not getattr(listing, "is_active", True):
        return False

    # Exact matches
    if criteria.storage_type and _value(listing.storage_type) != _value(criteria.storage_type):
        return False

    if criteria.size_category and _value(listing.size_category) != _value(criteria.size_category):
        return False

    # Inclusive price range
    price = listing.price_per_month
    if criteria.min_price is not None and price < criteria.min_price:
        return False
    if criteria.max_price is not None and price > criteria.max_price:
        return False

    # Campus area substring, case-insensitive
    if criteria.campus_area:
        campus_area = (listing.campus_area or "").lower()
        if criteria.campus_area.lower() not in campus_area:
            return False

    # Any shared amenity is enough
    if criteria.amenities:
        if not set(criteria.amenities) & set(listing.amenities or []):
            return False

    # Availability window must contain the requested dates
    if criteria.start_date and listing.available_from > criteria.start_date:
        return False
    if criteria.end_date and listing.available_until < criteria.end_date:
        return False

    if (
        criteria.near_latitude is not None
        and criteria.near_longitude is not None
        and criteria.radius_miles is not None
    ):
        if not within_radius(
            listing.latitude,
            listing.longitude,
            criteria.near_latitude,
            criteria.near_longitude,
            criteria.radius_miles,
        ):
            return False

    return True
