# ================================
# BOOKING SERVICE (services/booking_service.py)
# ================================

from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.exc import SQLAlchemyError
from typing import List, Optional
from uuid import UUID
from datetime import date
import logging

from campus_storage.core.exceptions import (
    AuthorizationError, BookingConflictError, ExternalStoreError,
    InvalidRangeError, NotFoundError, ValidationError
)
from campus_storage.models.marketplace import Booking, StorageSpace
from campus_storage.models.profile import Profile
from campus_storage.schemas.booking import BookingCreate, BookingUpdate
from campus_storage.services.listing_service import ListingService
from campus_storage.services.pricing_service import PricingService
from campus_storage.utils import booking_status, get_audit_logger
from campus_storage.utils.availability import blocked_space_ids

logger = logging.getLogger(__name__)
audit_logger = get_audit_logger()

BOOKING_ROLES = ("renter", "host", "all")


def _ensure_listed(listing: StorageSpace) -> None:
    if not listing.is_active:
        raise ValidationError("This storage space is no longer listed", error_code="LISTING_INACTIVE")


def _check_dates(listing: StorageSpace, start: date, end: date) -> None:
    if end <= start:
        raise InvalidRangeError()
    if start < listing.available_from or end > listing.available_until:
        raise ValidationError(
            "Requested dates are outside the availability window",
            error_code="OUTSIDE_AVAILABILITY"
        )


class BookingService:
    """Service for booking requests and their lifecycle"""

    @staticmethod
    def has_confirmed_conflict(
        db: Session,
        storage_space_id: UUID,
        start: date,
        end: date,
        exclude_booking_id: Optional[UUID] = None
    ) -> bool:
        """Re-read confirmed bookings of a listing and test them against [start, end]"""
        try:
            query = db.query(Booking).filter(
                Booking.storage_space_id == storage_space_id,
                Booking.status == booking_status.CONFIRMED
            )
            if exclude_booking_id is not None:
                query = query.filter(Booking.id != exclude_booking_id)
            reservations = query.all()
        except SQLAlchemyError as e:
            logger.error(f"Conflict check failed: {str(e)}")
            raise ExternalStoreError("Failed to check availability") from e

        return storage_space_id in blocked_space_ids(reservations, start, end)

    @staticmethod
    def create_booking(db: Session, booking_data: BookingCreate, actor: Profile) -> Booking:
        """Request a booking; it starts pending and is priced server-side"""
        if booking_data.end_date <= booking_data.start_date:
            raise InvalidRangeError()

        listing = ListingService.get_listing(db, booking_data.storage_space_id)
        if listing.host_id == actor.id:
            raise ValidationError("You cannot book your own storage space", error_code="OWN_LISTING")

        _check_dates(listing, booking_data.start_date, booking_data.end_date)
        if BookingService.has_confirmed_conflict(
            db, listing.id, booking_data.start_date, booking_data.end_date
        ):
            raise BookingConflictError()

        quote = PricingService.price(listing.price_per_month, booking_data.start_date, booking_data.end_date)

        try:
            booking = Booking(
                storage_space_id=listing.id,
                renter_id=actor.id,
                host_id=listing.host_id,
                start_date=booking_data.start_date,
                end_date=booking_data.end_date,
                total_price=quote.total,
                status=booking_status.PENDING,
                special_requests=booking_data.special_requests
            )
            db.add(booking)
            db.flush()

            audit_logger.log_business_event(
                action="BOOKING_CREATED",
                actor_id=actor.id,
                resource_type="booking",
                resource_id=booking.id,
                new_values={
                    "storage_space_id": listing.id,
                    "start_date": booking.start_date,
                    "end_date": booking.end_date,
                    "total_price": booking.total_price
                }
            )

            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to create booking: {str(e)}")
            raise ExternalStoreError("Failed to create booking") from e

        return BookingService.get_booking(db, booking.id, actor)

    @staticmethod
    def get_booking(db: Session, booking_id: UUID, actor: Profile) -> Booking:
        """Get a booking; only its renter and host may see it"""
        try:
            booking = db.query(Booking).options(
                joinedload(Booking.storage_space),
                joinedload(Booking.renter),
                joinedload(Booking.host)
            ).filter(Booking.id == booking_id).first()
        except SQLAlchemyError as e:
            logger.error(f"Booking lookup failed: {str(e)}")
            raise ExternalStoreError("Failed to load booking") from e

        if not booking:
            raise NotFoundError("Booking not found")
        if actor.id not in (booking.renter_id, booking.host_id):
            raise AuthorizationError("You are not a party to this booking")
        return booking

    @staticmethod
    def list_bookings(db: Session, actor: Profile, role: str = "all") -> List[Booking]:
        """Bookings where the actor is renter, host, or either"""
        if role not in BOOKING_ROLES:
            raise ValidationError(f"role must be one of: {', '.join(BOOKING_ROLES)}")

        query = db.query(Booking).options(
            joinedload(Booking.storage_space),
            joinedload(Booking.renter),
            joinedload(Booking.host)
        )
        if role == "renter":
            query = query.filter(Booking.renter_id == actor.id)
        elif role == "host":
            query = query.filter(Booking.host_id == actor.id)
        else:
            query = query.filter(or_(Booking.renter_id == actor.id, Booking.host_id == actor.id))

        try:
            return query.order_by(Booking.created_at.desc()).all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to list bookings: {str(e)}")
            raise ExternalStoreError("Failed to load bookings") from e

    @staticmethod
    def list_bookings_for_listing(db: Session, listing_id: UUID, actor: Profile) -> List[Booking]:
        """All bookings of one listing; host only"""
        listing = ListingService.get_owned_listing(db, listing_id, actor)
        try:
            return db.query(Booking).options(
                joinedload(Booking.storage_space),
                joinedload(Booking.renter),
                joinedload(Booking.host)
            ).filter(
                Booking.storage_space_id == listing.id
            ).order_by(Booking.start_date).all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to list bookings of {listing_id}: {str(e)}")
            raise ExternalStoreError("Failed to load bookings") from e

    @staticmethod
    def update_booking(
        db: Session,
        booking_id: UUID,
        booking_data: BookingUpdate,
        actor: Profile
    ) -> Booking:
        """Renter edits a pending booking; new dates are re-priced"""
        booking = BookingService.get_booking(db, booking_id, actor)
        if booking.renter_id != actor.id:
            raise AuthorizationError("Only the renter can edit this booking")
        if not booking_status.is_editable(booking.status):
            raise ValidationError(
                f"Bookings can only be edited while pending (status: {booking.status})",
                error_code="BOOKING_NOT_EDITABLE"
            )

        changes = booking_data.model_dump(exclude_unset=True)
        start = changes.get("start_date") or booking.start_date
        end = changes.get("end_date") or booking.end_date
        old_values = {
            "start_date": booking.start_date,
            "end_date": booking.end_date,
            "total_price": booking.total_price,
            "special_requests": booking.special_requests
        }

        if (start, end) != (booking.start_date, booking.end_date):
            listing = booking.storage_space
            _ensure_listed(listing)
            _check_dates(listing, start, end)
            if BookingService.has_confirmed_conflict(db, listing.id, start, end, booking.id):
                raise BookingConflictError()
            booking.start_date = start
            booking.end_date = end
            booking.total_price = PricingService.price(listing.price_per_month, start, end).total

        if "special_requests" in changes:
            booking.special_requests = changes["special_requests"]

        try:
            audit_logger.log_business_event(
                action="BOOKING_UPDATED",
                actor_id=actor.id,
                resource_type="booking",
                resource_id=booking.id,
                old_values=old_values,
                new_values={
                    "start_date": booking.start_date,
                    "end_date": booking.end_date,
                    "total_price": booking.total_price,
                    "special_requests": booking.special_requests
                }
            )
            db.commit()
            db.refresh(booking)
            return booking

        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to update booking {booking_id}: {str(e)}")
            raise ExternalStoreError("Failed to update booking") from e

    @staticmethod
    def change_status(
        db: Session,
        booking_id: UUID,
        target_status: str,
        actor: Profile
    ) -> Booking:
        """
        Move a booking to ``target_status``.

        The transition must be permitted from the current status and the actor
        must hold a role allowed to trigger it. Confirming re-checks the other
        confirmed bookings of the listing. A rejected change leaves the stored
        status untouched.
        """
        booking = BookingService.get_booking(db, booking_id, actor)
        current_status = booking.status
        booking_status.ensure_transition(current_status, target_status)

        role = "host" if actor.id == booking.host_id else "renter"
        allowed = booking_status.roles_allowed(current_status, target_status)
        if role not in allowed:
            raise AuthorizationError(
                f"Only the {' or '.join(sorted(allowed))} can move a booking to {target_status}"
            )

        if target_status == booking_status.CONFIRMED:
            _ensure_listed(booking.storage_space)
            if BookingService.has_confirmed_conflict(
                db, booking.storage_space_id, booking.start_date, booking.end_date, booking.id
            ):
                raise BookingConflictError()

        try:
            booking.status = target_status
            audit_logger.log_business_event(
                action=f"BOOKING_{target_status.upper()}",
                actor_id=actor.id,
                resource_type="booking",
                resource_id=booking.id,
                old_values={"status": current_status},
                new_values={"status": target_status}
            )
            db.commit()
            db.refresh(booking)
            return booking

        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to change status of booking {booking_id}: {str(e)}")
            raise ExternalStoreError("Failed to update booking status") from e

    @staticmethod
    def confirm_booking(db: Session, booking_id: UUID, actor: Profile) -> Booking:
        return BookingService.change_status(db, booking_id, booking_status.CONFIRMED, actor)

    @staticmethod
    def cancel_booking(db: Session, booking_id: UUID, actor: Profile) -> Booking:
        # FREE_CANCELLATION_HOURS is advertised only; no window is enforced here
        return BookingService.change_status(db, booking_id, booking_status.CANCELLED, actor)

    @staticmethod
    def complete_booking(db: Session, booking_id: UUID, actor: Profile) -> Booking:
        return BookingService.change_status(db, booking_id, booking_status.COMPLETED, actor)
