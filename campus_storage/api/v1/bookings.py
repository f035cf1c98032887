# ================================
# BOOKINGS API (api/v1/bookings.py)
# ================================

from fastapi import APIRouter, Depends, Query, Path, status
from sqlalchemy.orm import Session
from typing import List
from uuid import UUID

from campus_storage.dependencies import get_db, get_current_profile
from campus_storage.mappers.booking_mapper import map_booking_to_response
from campus_storage.models.profile import Profile
from campus_storage.schemas.booking import BookingCreate, BookingResponse, BookingUpdate
from campus_storage.schemas.review import ReviewCreate, ReviewResponse
from campus_storage.services.booking_service import BookingService
from campus_storage.services.review_service import ReviewService

router = APIRouter()

@router.post("", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
async def create_booking(
    booking_data: BookingCreate,
    current_profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db)
):
    """Request a booking; the total price is computed by the server"""
    booking = BookingService.create_booking(db, booking_data, current_profile)
    return BookingResponse.model_validate(map_booking_to_response(booking))

@router.get("", response_model=List[BookingResponse])
async def list_bookings(
    role: str = Query("all", description="renter, host or all"),
    current_profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db)
):
    """Bookings of the caller"""
    bookings = BookingService.list_bookings(db, current_profile, role)
    return [BookingResponse.model_validate(map_booking_to_response(b)) for b in bookings]

@router.get("/{booking_id}", response_model=BookingResponse)
async def get_booking(
    booking_id: UUID = Path(..., description="Booking ID"),
    current_profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db)
):
    """Get a booking (renter or host)"""
    booking = BookingService.get_booking(db, booking_id, current_profile)
    return BookingResponse.model_validate(map_booking_to_response(booking))

@router.patch("/{booking_id}", response_model=BookingResponse)
async def update_booking(
    booking_data: BookingUpdate,
    booking_id: UUID = Path(..., description="Booking ID"),
    current_profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db)
):
    """Edit a pending booking (renter only)"""
    booking = BookingService.update_booking(db, booking_id, booking_data, current_profile)
    return BookingResponse.model_validate(map_booking_to_response(booking))

@router.post("/{booking_id}/confirm", response_model=BookingResponse)
async def confirm_booking(
    booking_id: UUID = Path(..., description="Booking ID"),
    current_profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db)
):
    """Host accepts a pending booking"""
    booking = BookingService.confirm_booking(db, booking_id, current_profile)
    return BookingResponse.model_validate(map_booking_to_response(booking))

@router.post("/{booking_id}/cancel", response_model=BookingResponse)
async def cancel_booking(
    booking_id: UUID = Path(..., description="Booking ID"),
    current_profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db)
):
    """Renter or host cancels a pending or confirmed booking"""
    booking = BookingService.cancel_booking(db, booking_id, current_profile)
    return BookingResponse.model_validate(map_booking_to_response(booking))

@router.post("/{booking_id}/complete", response_model=BookingResponse)
async def complete_booking(
    booking_id: UUID = Path(..., description="Booking ID"),
    current_profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db)
):
    """Host marks a confirmed booking as completed"""
    booking = BookingService.complete_booking(db, booking_id, current_profile)
    return BookingResponse.model_validate(map_booking_to_response(booking))

@router.post("/{booking_id}/reviews", response_model=ReviewResponse, status_code=status.HTTP_201_CREATED)
async def create_review(
    review_data: ReviewCreate,
    booking_id: UUID = Path(..., description="Booking ID"),
    current_profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db)
):
    """Review the other party of a completed booking"""
    review = ReviewService.create_review(db, booking_id, review_data, current_profile)
    return ReviewResponse.model_validate(review)
