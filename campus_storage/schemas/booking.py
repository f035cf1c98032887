# ================================
# BOOKING SCHEMAS (schemas/booking.py)
# ================================

from typing import Optional, List
from datetime import date
from decimal import Decimal
from pydantic import Field
import uuid

from campus_storage.schemas.base import BaseSchema, BaseResponseSchema, TimestampMixin
from campus_storage.schemas.profile import ProfileBasicInfo
from campus_storage.models.enums import BookingStatus, StorageType, SizeCategory


class BookingCreate(BaseSchema):
    """Schema for requesting a booking; the price is computed server-side"""
    storage_space_id: uuid.UUID
    start_date: date
    end_date: date
    special_requests: Optional[str] = Field(None, max_length=2000)

class BookingUpdate(BaseSchema):
    """Renter edits while the booking is still pending"""
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    special_requests: Optional[str] = Field(None, max_length=2000)

class BookingSpaceSummary(BaseResponseSchema):
    """Listing fields shown next to a booking"""
    title: str
    storage_type: StorageType
    size_category: SizeCategory
    location_address: str
    price_per_month: Decimal
    images: List[str] = Field(default_factory=list)

class BookingResponse(BaseResponseSchema, TimestampMixin):
    """Booking with derived lifecycle flags"""
    storage_space_id: uuid.UUID
    renter_id: uuid.UUID
    host_id: uuid.UUID
    start_date: date
    end_date: date
    total_price: Decimal
    status: BookingStatus
    special_requests: Optional[str] = None

    # Derived from status
    is_active: bool
    is_cancellable: bool
    is_editable: bool

    # Related data
    storage_space: Optional[BookingSpaceSummary] = None
    renter: Optional[ProfileBasicInfo] = None
    host: Optional[ProfileBasicInfo] = None
