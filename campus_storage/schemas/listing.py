# ================================
# LISTING SCHEMAS (schemas/listing.py)
# ================================

from typing import Optional, List
from datetime import date
from decimal import Decimal
from pydantic import Field, field_validator
import uuid

from campus_storage.schemas.base import BaseSchema, BaseResponseSchema, TimestampMixin, PageEnvelope
from campus_storage.schemas.profile import ProfileBasicInfo
from campus_storage.models.enums import StorageType, SizeCategory


def _dedupe(values: Optional[List[str]]) -> Optional[List[str]]:
    if values is None:
        return None
    seen = []
    for value in values:
        if value and value not in seen:
            seen.append(value)
    return seen


class ListingCriteria(BaseSchema):
    """Search criteria; every field is optional and ANDed with the others"""
    storage_type: Optional[StorageType] = None
    size_category: Optional[SizeCategory] = None
    min_price: Optional[Decimal] = Field(None, ge=0)
    max_price: Optional[Decimal] = Field(None, ge=0)
    campus_area: Optional[str] = None
    amenities: Optional[List[str]] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    # Radius search around a point
    near_latitude: Optional[float] = Field(None, ge=-90, le=90)
    near_longitude: Optional[float] = Field(None, ge=-180, le=180)
    radius_miles: Optional[float] = Field(None, gt=0)

    @field_validator('amenities')
    @classmethod
    def normalize_amenities(cls, v):
        return _dedupe(v) or None

    @field_validator('campus_area')
    @classmethod
    def blank_campus_is_absent(cls, v):
        return v or None

class ListingBase(BaseSchema):
    """Fields shared by create and response"""
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    storage_type: StorageType
    size_category: SizeCategory
    capacity_description: Optional[str] = None
    price_per_month: Decimal = Field(..., gt=0, decimal_places=2)
    location_address: str = Field(..., min_length=1, max_length=500)
    campus_area: Optional[str] = Field(None, max_length=255)
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    available_from: date
    available_until: date
    amenities: List[str] = Field(default_factory=list)
    images: List[str] = Field(default_factory=list)
    rules: Optional[str] = None
    can_help_move: bool = False
    has_vehicle: bool = False
    vehicle_type: Optional[str] = Field(None, max_length=100)
    move_in_time: Optional[str] = Field(None, max_length=50)
    move_out_time: Optional[str] = Field(None, max_length=50)

    @field_validator('amenities')
    @classmethod
    def normalize_amenities(cls, v):
        return _dedupe(v)

class ListingCreate(ListingBase):
    """Schema for creating a listing"""
    pass

class ListingUpdate(BaseSchema):
    """Partial update by the owning host"""
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=1)
    storage_type: Optional[StorageType] = None
    size_category: Optional[SizeCategory] = None
    capacity_description: Optional[str] = None
    price_per_month: Optional[Decimal] = Field(None, gt=0, decimal_places=2)
    location_address: Optional[str] = Field(None, min_length=1, max_length=500)
    campus_area: Optional[str] = Field(None, max_length=255)
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    available_from: Optional[date] = None
    available_until: Optional[date] = None
    amenities: Optional[List[str]] = None
    images: Optional[List[str]] = None
    rules: Optional[str] = None
    can_help_move: Optional[bool] = None
    has_vehicle: Optional[bool] = None
    vehicle_type: Optional[str] = Field(None, max_length=100)
    move_in_time: Optional[str] = Field(None, max_length=50)
    move_out_time: Optional[str] = Field(None, max_length=50)

    @field_validator('amenities')
    @classmethod
    def normalize_amenities(cls, v):
        return _dedupe(v)

class ListingResponse(ListingBase, BaseResponseSchema, TimestampMixin):
    """Listing with host details"""
    host_id: uuid.UUID
    is_active: bool
    host: Optional[ProfileBasicInfo] = None

class ListingCard(BaseSchema):
    """Flattened listing for search result cards"""
    id: uuid.UUID
    host_id: uuid.UUID
    title: str
    description: str
    campus: str
    campus_area: Optional[str] = None
    address: str
    storage_type: StorageType
    size_category: SizeCategory
    price_per_month: Decimal
    available_from: date
    available_until: date
    capacity_description: str = ""
    amenities: List[str] = Field(default_factory=list)
    images: List[str] = Field(default_factory=list)
    thumbnail_url: Optional[str] = None
    host_name: str
    rating: Decimal = Decimal("0")
    review_count: int = 0

class ListingSearchResponse(PageEnvelope):
    """One page of search results"""
    items: List[ListingCard]

class PriceQuoteResponse(BaseSchema):
    """Billing breakdown for a date window"""
    storage_space_id: uuid.UUID
    start_date: date
    end_date: date
    days: int
    months: int
    price_per_month: Decimal
    total_price: Decimal
