"""
Booking Mapper Module
Adds lifecycle flags derived from the booking status
"""
from typing import Dict, Any

from campus_storage.models.marketplace import Booking
from campus_storage.utils import booking_status


def map_booking_to_response(booking: Booking) -> Dict[str, Any]:
    """Map a Booking ORM object to the BookingResponse format"""
    return {
        "id": booking.id,
        "storage_space_id": booking.storage_space_id,
        "renter_id": booking.renter_id,
        "host_id": booking.host_id,
        "start_date": booking.start_date,
        "end_date": booking.end_date,
        "total_price": booking.total_price,
        "status": booking.status,
        "special_requests": booking.special_requests,
        "created_at": booking.created_at,
        "updated_at": booking.updated_at,
        "is_active": booking_status.is_active(booking.status),
        "is_cancellable": booking_status.is_cancellable(booking.status),
        "is_editable": booking_status.is_editable(booking.status),
        "storage_space": booking.storage_space,
        "renter": booking.renter,
        "host": booking.host,
    }
