# ================================
# LISTINGS API (api/v1/listings.py)
# ================================

from fastapi import APIRouter, Depends, Query, Path, status
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import date
from decimal import Decimal
from uuid import UUID

from campus_storage.config import settings
from campus_storage.core.exceptions import ValidationError
from campus_storage.dependencies import get_db, get_current_profile
from campus_storage.mappers.booking_mapper import map_booking_to_response
from campus_storage.models.enums import SizeCategory, StorageType
from campus_storage.models.profile import Profile
from campus_storage.schemas.booking import BookingResponse
from campus_storage.schemas.listing import (
    ListingCreate,
    ListingCriteria,
    ListingResponse,
    ListingSearchResponse,
    ListingUpdate,
    PriceQuoteResponse
)
from campus_storage.schemas.review import ReviewResponse
from campus_storage.services.booking_service import BookingService
from campus_storage.services.listing_service import ListingService
from campus_storage.services.review_service import ReviewService

router = APIRouter()

@router.get("", response_model=ListingSearchResponse)
async def search_listings(
    storage_type: Optional[StorageType] = Query(None),
    size_category: Optional[SizeCategory] = Query(None),
    min_price: Optional[Decimal] = Query(None, ge=0),
    max_price: Optional[Decimal] = Query(None, ge=0),
    campus_area: Optional[str] = Query(None),
    amenities: Optional[List[str]] = Query(None),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    near_latitude: Optional[float] = Query(None, ge=-90, le=90),
    near_longitude: Optional[float] = Query(None, ge=-180, le=180),
    radius_miles: Optional[float] = Query(None, gt=0),
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    current_profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db)
):
    """Search active storage spaces (all filters optional, ANDed)"""
    try:
        criteria = ListingCriteria(
            storage_type=storage_type,
            size_category=size_category,
            min_price=min_price,
            max_price=max_price,
            campus_area=campus_area,
            amenities=amenities,
            start_date=start_date,
            end_date=end_date,
            near_latitude=near_latitude,
            near_longitude=near_longitude,
            radius_miles=radius_miles
        )
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid search filters: {e.errors()[0]['msg']}")

    result = ListingService.search_listings(db, criteria, page, page_size)
    return ListingSearchResponse(**result)

@router.post("", response_model=ListingResponse, status_code=status.HTTP_201_CREATED)
async def create_listing(
    listing_data: ListingCreate,
    current_profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db)
):
    """List a storage space as the caller"""
    listing = ListingService.create_listing(db, listing_data, current_profile)
    return ListingResponse.model_validate(listing)

@router.get("/mine", response_model=List[ListingResponse])
async def list_my_listings(
    current_profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db)
):
    """Caller's own listings, including deactivated ones"""
    listings = ListingService.list_host_listings(db, current_profile)
    return [ListingResponse.model_validate(listing) for listing in listings]

@router.get("/{listing_id}", response_model=ListingResponse)
async def get_listing(
    listing_id: UUID = Path(..., description="Storage space ID"),
    current_profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db)
):
    """Get an active storage space"""
    listing = ListingService.get_listing(db, listing_id)
    return ListingResponse.model_validate(listing)

@router.patch("/{listing_id}", response_model=ListingResponse)
async def update_listing(
    listing_data: ListingUpdate,
    listing_id: UUID = Path(..., description="Storage space ID"),
    current_profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db)
):
    """Update a storage space (host only)"""
    listing = ListingService.update_listing(db, listing_id, listing_data, current_profile)
    return ListingResponse.model_validate(listing)

@router.delete("/{listing_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_listing(
    listing_id: UUID = Path(..., description="Storage space ID"),
    current_profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db)
):
    """Deactivate a storage space (host only)"""
    ListingService.deactivate_listing(db, listing_id, current_profile)

@router.get("/{listing_id}/quote", response_model=PriceQuoteResponse)
async def quote_listing(
    listing_id: UUID = Path(..., description="Storage space ID"),
    start_date: date = Query(...),
    end_date: date = Query(...),
    current_profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db)
):
    """Price a date window; every started 30-day block bills as a month"""
    return PriceQuoteResponse(**ListingService.quote(db, listing_id, start_date, end_date))

@router.get("/{listing_id}/reviews", response_model=List[ReviewResponse])
async def list_listing_reviews(
    listing_id: UUID = Path(..., description="Storage space ID"),
    current_profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db)
):
    """Reviews of a storage space"""
    reviews = ReviewService.list_reviews_for_listing(db, listing_id)
    return [ReviewResponse.model_validate(review) for review in reviews]

@router.get("/{listing_id}/bookings", response_model=List[BookingResponse])
async def list_listing_bookings(
    listing_id: UUID = Path(..., description="Storage space ID"),
    current_profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db)
):
    """Bookings of a storage space (host only)"""
    bookings = BookingService.list_bookings_for_listing(db, listing_id, current_profile)
    return [BookingResponse.model_validate(map_booking_to_response(b)) for b in bookings]
