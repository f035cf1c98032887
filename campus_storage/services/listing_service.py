# ================================
# LISTING SERVICE (services/listing_service.py)
# ================================

from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.exc import SQLAlchemyError
from typing import List, Dict, Any
from uuid import UUID
from datetime import date
import logging

from campus_storage.config import settings
from campus_storage.core.exceptions import (
    AuthorizationError, ExternalStoreError, InvalidRangeError, NotFoundError, ValidationError
)
from campus_storage.mappers.listing_mapper import map_listing_to_card
from campus_storage.models.enums import BookingStatus
from campus_storage.models.marketplace import Booking, StorageSpace
from campus_storage.models.profile import Profile
from campus_storage.schemas.listing import ListingCreate, ListingCriteria, ListingUpdate
from campus_storage.services.pricing_service import PricingService
from campus_storage.utils import get_audit_logger
from campus_storage.utils.availability import available_for
from campus_storage.utils.listing_filters import matches
from campus_storage.utils.pagination import page, page_count

logger = logging.getLogger(__name__)
audit_logger = get_audit_logger()

# Columns that a partial update may not set to null
REQUIRED_FIELDS = {
    "title", "description", "storage_type", "size_category", "price_per_month",
    "location_address", "available_from", "available_until",
    "amenities", "images", "can_help_move", "has_vehicle",
}


def _check_window(available_from: date, available_until: date) -> None:
    if available_from > available_until:
        raise InvalidRangeError("Available until must not be before available from")


class ListingService:
    """Service for managing storage space listings"""

    @staticmethod
    def create_listing(
        db: Session,
        listing_data: ListingCreate,
        actor: Profile
    ) -> StorageSpace:
        """Create a listing owned by the acting host"""
        _check_window(listing_data.available_from, listing_data.available_until)

        values = listing_data.model_dump()
        if not values["images"]:
            values["images"] = [settings.PLACEHOLDER_IMAGE_URL]

        try:
            listing = StorageSpace(**values, host_id=actor.id, is_active=True)
            db.add(listing)
            db.flush()

            audit_logger.log_business_event(
                action="LISTING_CREATED",
                actor_id=actor.id,
                resource_type="storage_space",
                resource_id=listing.id,
                new_values={
                    "title": listing.title,
                    "storage_type": listing.storage_type,
                    "price_per_month": listing.price_per_month
                }
            )

            db.commit()
            db.refresh(listing)
            return listing

        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to create listing: {str(e)}")
            raise ExternalStoreError("Failed to create storage space") from e

    @staticmethod
    def get_listing(db: Session, listing_id: UUID) -> StorageSpace:
        """Get an active listing with its host"""
        try:
            listing = db.query(StorageSpace).options(
                joinedload(StorageSpace.host)
            ).filter(
                StorageSpace.id == listing_id,
                StorageSpace.is_active == True
            ).first()
        except SQLAlchemyError as e:
            logger.error(f"Listing lookup failed: {str(e)}")
            raise ExternalStoreError("Failed to load storage space") from e

        if not listing:
            raise NotFoundError("Storage space not found")
        return listing

    @staticmethod
    def get_owned_listing(db: Session, listing_id: UUID, actor: Profile) -> StorageSpace:
        """Get an active listing and check that the actor hosts it"""
        listing = ListingService.get_listing(db, listing_id)
        if listing.host_id != actor.id:
            raise AuthorizationError("Only the host can manage this storage space")
        return listing

    @staticmethod
    def list_host_listings(db: Session, actor: Profile) -> List[StorageSpace]:
        """All listings of the acting host, including deactivated ones"""
        try:
            return db.query(StorageSpace).options(
                joinedload(StorageSpace.host)
            ).filter(
                StorageSpace.host_id == actor.id
            ).order_by(
                StorageSpace.created_at.desc()
            ).all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to list host listings: {str(e)}")
            raise ExternalStoreError("Failed to load storage spaces") from e

    @staticmethod
    def _check_window_keeps_bookings(
        db: Session,
        listing: StorageSpace,
        available_from: date,
        available_until: date
    ) -> None:
        """A narrowed window must still contain every confirmed booking"""
        try:
            stranded = db.query(Booking).filter(
                Booking.storage_space_id == listing.id,
                Booking.status == BookingStatus.CONFIRMED.value,
                or_(Booking.start_date < available_from, Booking.end_date > available_until)
            ).count()
        except SQLAlchemyError as e:
            logger.error(f"Booking check for listing {listing.id} failed: {str(e)}")
            raise ExternalStoreError("Failed to check bookings") from e

        if stranded:
            raise ValidationError(
                "The availability window must cover all confirmed bookings",
                error_code="BOOKINGS_OUTSIDE_WINDOW"
            )

    @staticmethod
    def update_listing(
        db: Session,
        listing_id: UUID,
        listing_data: ListingUpdate,
        actor: Profile
    ) -> StorageSpace:
        """Partially update a listing; host only"""
        listing = ListingService.get_owned_listing(db, listing_id, actor)
        changes = listing_data.model_dump(exclude_unset=True)

        for field, value in changes.items():
            if value is None and field in REQUIRED_FIELDS:
                raise ValidationError(f"{field} cannot be empty")

        available_from = changes.get("available_from", listing.available_from)
        available_until = changes.get("available_until", listing.available_until)
        _check_window(available_from, available_until)
        if (available_from, available_until) != (listing.available_from, listing.available_until):
            ListingService._check_window_keeps_bookings(db, listing, available_from, available_until)
        if "images" in changes and not changes["images"]:
            changes["images"] = [settings.PLACEHOLDER_IMAGE_URL]

        old_values = {field: getattr(listing, field) for field in changes}
        for field, value in changes.items():
            setattr(listing, field, value)

        try:
            audit_logger.log_business_event(
                action="LISTING_UPDATED",
                actor_id=actor.id,
                resource_type="storage_space",
                resource_id=listing.id,
                old_values=old_values,
                new_values=changes
            )
            db.commit()
            db.refresh(listing)
            return listing

        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to update listing {listing_id}: {str(e)}")
            raise ExternalStoreError("Failed to update storage space") from e

    @staticmethod
    def deactivate_listing(db: Session, listing_id: UUID, actor: Profile) -> None:
        """Soft delete: the listing is hidden from search but kept for its bookings"""
        listing = ListingService.get_owned_listing(db, listing_id, actor)

        try:
            listing.is_active = False
            audit_logger.log_business_event(
                action="LISTING_DEACTIVATED",
                actor_id=actor.id,
                resource_type="storage_space",
                resource_id=listing.id,
                old_values={"is_active": True},
                new_values={"is_active": False}
            )
            db.commit()

        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to deactivate listing {listing_id}: {str(e)}")
            raise ExternalStoreError("Failed to delete storage space") from e

    @staticmethod
    def search_listings(
        db: Session,
        criteria: ListingCriteria,
        page_number: int = 1,
        page_size: int = None
    ) -> Dict[str, Any]:
        """
        Search active listings and return one page of cards.

        Simple predicates are pushed into the SQL query; every candidate is then
        re-checked in memory (amenity overlap and radius only exist there). When
        both dates are given, listings holding a confirmed booking that overlaps
        the window are removed before paging.
        """
        page_size = page_size or settings.DEFAULT_PAGE_SIZE
        start, end = criteria.start_date, criteria.end_date

        # Reject malformed criteria before touching the store
        if start and end and end < start:
            raise InvalidRangeError("End date must not be before start date")
        if (
            criteria.min_price is not None
            and criteria.max_price is not None
            and criteria.min_price > criteria.max_price
        ):
            raise ValidationError("min_price cannot exceed max_price")
        radius_fields = (criteria.near_latitude, criteria.near_longitude, criteria.radius_miles)
        if any(v is not None for v in radius_fields) and not all(v is not None for v in radius_fields):
            raise ValidationError("near_latitude, near_longitude and radius_miles must be given together")

        try:
            query = db.query(StorageSpace).options(
                joinedload(StorageSpace.host)
            ).filter(StorageSpace.is_active == True)

            if criteria.storage_type:
                query = query.filter(StorageSpace.storage_type == criteria.storage_type)
            if criteria.size_category:
                query = query.filter(StorageSpace.size_category == criteria.size_category)
            if criteria.min_price is not None:
                query = query.filter(StorageSpace.price_per_month >= criteria.min_price)
            if criteria.max_price is not None:
                query = query.filter(StorageSpace.price_per_month <= criteria.max_price)
            if criteria.campus_area:
                query = query.filter(StorageSpace.campus_area.ilike(f"%{criteria.campus_area}%"))
            if start:
                query = query.filter(StorageSpace.available_from <= start)
            if end:
                query = query.filter(StorageSpace.available_until >= end)

            # Newest first
            query = query.order_by(StorageSpace.created_at.desc(), StorageSpace.id.desc())
            candidates = [listing for listing in query.all() if matches(listing, criteria)]

            if start and end and candidates:
                reservations = db.query(Booking).filter(
                    Booking.storage_space_id.in_([listing.id for listing in candidates]),
                    Booking.status == BookingStatus.CONFIRMED.value,
                    Booking.start_date <= end,
                    Booking.end_date >= start
                ).all()
                candidates = available_for(candidates, reservations, start, end)

        except SQLAlchemyError as e:
            logger.error(f"Listing search failed: {str(e)}")
            raise ExternalStoreError("Failed to search storage spaces") from e

        items, total = page(candidates, page_number, page_size)
        return {
            "items": [map_listing_to_card(listing) for listing in items],
            "total": total,
            "page": page_number,
            "size": page_size,
            "pages": page_count(total, page_size)
        }

    @staticmethod
    def quote(db: Session, listing_id: UUID, start: date, end: date) -> Dict[str, Any]:
        """Price a date window at the listing's monthly rate"""
        listing = ListingService.get_listing(db, listing_id)
        quote = PricingService.price(listing.price_per_month, start, end)
        return {
            "storage_space_id": listing.id,
            "start_date": start,
            "end_date": end,
            "days": quote.days,
            "months": quote.months,
            "price_per_month": listing.price_per_month,
            "total_price": quote.total
        }
