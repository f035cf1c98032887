"""
Listing Mapper Module
Handles conversion of StorageSpace ORM objects to response dictionaries
"""
from typing import Dict, Any

from campus_storage.config import settings
from campus_storage.models.marketplace import StorageSpace


def map_listing_to_card(space: StorageSpace) -> Dict[str, Any]:
    """
    Map a StorageSpace ORM object to the ListingCard format

    Args:
        space: StorageSpace ORM object with its host loaded

    Returns:
        Dictionary matching ListingCard schema
    """
    host = space.host
    images = list(space.images or [])

    return {
        "id": space.id,
        "host_id": space.host_id,
        "title": space.title,
        "description": space.description,
        # Campus comes from the host's university
        "campus": host.university if host and host.university else settings.DEFAULT_UNIVERSITY,
        "campus_area": space.campus_area,
        "address": space.location_address,
        "storage_type": space.storage_type,
        "size_category": space.size_category,
        "price_per_month": space.price_per_month,
        "available_from": space.available_from,
        "available_until": space.available_until,
        "capacity_description": space.capacity_description or "",
        "amenities": list(space.amenities or []),
        "images": images,
        "thumbnail_url": images[0] if images else None,
        "host_name": host.full_name if host else "Unknown Host",
        "rating": host.rating if host and host.rating is not None else 0,
        "review_count": host.total_reviews if host else 0,
    }
