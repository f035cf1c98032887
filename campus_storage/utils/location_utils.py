# ================================
# LOCATION UTILITIES (utils/location_utils.py)
# ================================

import math
from typing import Optional

EARTH_RADIUS_MILES = 3959


def calculate_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Great-circle distance between two points.

    Args:
        lat1, lon1: First point in decimal degrees
        lat2, lon2: Second point in decimal degrees

    Returns:
        Distance in miles (haversine formula)
    """
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_MILES * c


def within_radius(
    latitude: Optional[float],
    longitude: Optional[float],
    center_latitude: float,
    center_longitude: float,
    radius_miles: float
) -> bool:
    """Check whether a point lies inside the radius; missing coordinates never do"""
    if latitude is None or longitude is None:
        return False
    return calculate_distance(center_latitude, center_longitude, latitude, longitude) <= radius_miles
