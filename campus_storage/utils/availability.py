# ================================
# AVAILABILITY / OVERLAP RESOLUTION (utils/availability.py)
# ================================

from datetime import date
from typing import Any, Iterable, List, Optional, Set

from campus_storage.models.enums import BookingStatus


def windows_overlap(a_start: date, a_end: date, b_start: date, b_end: date) -> bool:
    """Two inclusive date windows share at least one day"""
    return a_start <= b_end and a_end >= b_start


def blocked_space_ids(reservations: Iterable[Any], start: date, end: date) -> Set[Any]:
    """
    Collect storage space ids holding a confirmed reservation that overlaps
    [start, end]. Pending, cancelled and completed reservations never block.
    """
    blocked = set()
    for reservation in reservations:
        if reservation.status != BookingStatus.CONFIRMED.value:
            continue
        if windows_overlap(reservation.start_date, reservation.end_date, start, end):
            blocked.add(reservation.storage_space_id)
    return blocked


def available_for(
    listings: Iterable[Any],
    reservations: Iterable[Any],
    start: Optional[date],
    end: Optional[date]
) -> List[Any]:
    """
    Drop listings with a conflicting confirmed reservation.

    Without both dates the listings pass through unchanged. Runs in
    O(listings + reservations).
    """
    listings = list(listings)
    if start is None or end is None:
        return listings

    blocked = blocked_space_ids(reservations, start, end)
    return [listing for listing in listings if listing.id not in blocked]
