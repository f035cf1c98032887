# ================================
# REVIEW SERVICE (services/review_service.py)
# ================================

from sqlalchemy.orm import Session, joinedload
from sqlalchemy.exc import SQLAlchemyError
from typing import List
from uuid import UUID
from decimal import Decimal, ROUND_HALF_UP
import logging

from campus_storage.core.exceptions import ExternalStoreError, NotFoundError, ValidationError
from campus_storage.models.enums import ReviewType
from campus_storage.models.marketplace import Review, StorageSpace
from campus_storage.models.profile import Profile
from campus_storage.schemas.review import ReviewCreate
from campus_storage.services.booking_service import BookingService
from campus_storage.utils import booking_status, get_audit_logger

logger = logging.getLogger(__name__)
audit_logger = get_audit_logger()


def updated_rating(current: Decimal, count: int, new_rating: int) -> Decimal:
    """Fold one more rating into an average over ``count`` reviews"""
    total = Decimal(str(current or 0)) * count + new_rating
    return (total / (count + 1)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


class ReviewService:
    """Service for reviews of completed bookings"""

    @staticmethod
    def create_review(
        db: Session,
        booking_id: UUID,
        review_data: ReviewCreate,
        actor: Profile
    ) -> Review:
        """
        Review the other party of a completed booking.

        The renter writes the host_review, the host writes the renter_review;
        each direction can be written once. The reviewee's aggregate rating is
        updated in the same commit.
        """
        booking = BookingService.get_booking(db, booking_id, actor)
        if booking.status != booking_status.COMPLETED:
            raise ValidationError(
                "Only completed bookings can be reviewed",
                error_code="BOOKING_NOT_COMPLETED"
            )

        if actor.id == booking.renter_id:
            review_type, reviewee_id = ReviewType.HOST_REVIEW.value, booking.host_id
        else:
            review_type, reviewee_id = ReviewType.RENTER_REVIEW.value, booking.renter_id

        try:
            existing = db.query(Review).filter(
                Review.booking_id == booking.id,
                Review.review_type == review_type
            ).first()
            if existing:
                raise ValidationError(
                    "You have already reviewed this booking",
                    error_code="REVIEW_ALREADY_EXISTS"
                )

            reviewee = db.query(Profile).filter(Profile.id == reviewee_id).first()
            if not reviewee:
                raise NotFoundError("Profile not found")

            review = Review(
                booking_id=booking.id,
                reviewer_id=actor.id,
                reviewee_id=reviewee_id,
                storage_space_id=booking.storage_space_id,
                rating=review_data.rating,
                comment=review_data.comment,
                review_type=review_type
            )
            db.add(review)

            count = reviewee.total_reviews or 0
            reviewee.rating = updated_rating(reviewee.rating, count, review_data.rating)
            reviewee.total_reviews = count + 1
            db.flush()

            audit_logger.log_business_event(
                action="REVIEW_CREATED",
                actor_id=actor.id,
                resource_type="review",
                resource_id=review.id,
                new_values={
                    "booking_id": booking.id,
                    "review_type": review_type,
                    "rating": review.rating,
                    "reviewee_rating": reviewee.rating
                }
            )

            db.commit()
            db.refresh(review)
            return review

        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to create review for booking {booking_id}: {str(e)}")
            raise ExternalStoreError("Failed to create review") from e

    @staticmethod
    def list_reviews_for_listing(db: Session, listing_id: UUID) -> List[Review]:
        """Reviews left on bookings of a listing, newest first"""
        try:
            if not db.query(StorageSpace.id).filter(StorageSpace.id == listing_id).first():
                raise NotFoundError("Storage space not found")

            return db.query(Review).options(
                joinedload(Review.reviewer)
            ).filter(
                Review.storage_space_id == listing_id
            ).order_by(Review.created_at.desc()).all()

        except SQLAlchemyError as e:
            logger.error(f"Failed to list reviews of {listing_id}: {str(e)}")
            raise ExternalStoreError("Failed to load reviews") from e
