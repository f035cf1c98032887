# ================================
# PROFILE SERVICE (services/profile_service.py)
# ================================

from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from uuid import UUID
import logging

from campus_storage.config import settings
from campus_storage.core.exceptions import AuthorizationError, ExternalStoreError, NotFoundError
from campus_storage.models.enums import VerificationStatus
from campus_storage.models.profile import Profile
from campus_storage.schemas.profile import AuthIdentity, ProfileUpdate
from campus_storage.utils import get_audit_logger

logger = logging.getLogger(__name__)
audit_logger = get_audit_logger()


class ProfileService:
    """Service for marketplace profiles"""

    @staticmethod
    def get_profile(db: Session, profile_id: UUID) -> Profile:
        """Get a profile by ID"""
        try:
            profile = db.query(Profile).filter(Profile.id == profile_id).first()
        except SQLAlchemyError as e:
            logger.error(f"Profile lookup failed: {str(e)}")
            raise ExternalStoreError("Failed to load profile") from e

        if not profile:
            raise NotFoundError("Profile not found")
        return profile

    @staticmethod
    def ensure_profile(db: Session, identity: AuthIdentity) -> Profile:
        """
        Return the profile for an authenticated identity, creating it on first access.

        New profiles get the default university, a display name taken from the
        token metadata (or the e-mail local part) and the unverified status.
        """
        try:
            profile = db.query(Profile).filter(Profile.id == identity.id).first()
            if profile:
                return profile

            profile = Profile(
                id=identity.id,
                email=identity.email,
                full_name=identity.full_name or identity.email.split("@")[0],
                university=settings.DEFAULT_UNIVERSITY,
                verification_status=VerificationStatus.UNVERIFIED.value,
                rating=0,
                total_reviews=0
            )
            db.add(profile)
            db.flush()

            audit_logger.log_business_event(
                action="PROFILE_CREATED",
                actor_id=profile.id,
                resource_type="profile",
                resource_id=profile.id,
                new_values={"email": profile.email, "university": profile.university}
            )

            db.commit()
            db.refresh(profile)
            return profile

        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to ensure profile for {identity.id}: {str(e)}")
            raise ExternalStoreError("Failed to create profile") from e

    @staticmethod
    def update_profile(
        db: Session,
        profile_id: UUID,
        profile_data: ProfileUpdate,
        actor: Profile
    ) -> Profile:
        """Update a profile; users may only edit their own"""
        if actor.id != profile_id:
            raise AuthorizationError("You can only update your own profile")

        profile = ProfileService.get_profile(db, profile_id)
        changes = profile_data.model_dump(exclude_unset=True)

        # Required columns cannot be cleared
        for field in ("full_name", "university"):
            if field in changes and changes[field] is None:
                changes.pop(field)

        old_values = {field: getattr(profile, field) for field in changes}
        for field, value in changes.items():
            setattr(profile, field, value)

        try:
            audit_logger.log_business_event(
                action="PROFILE_UPDATED",
                actor_id=actor.id,
                resource_type="profile",
                resource_id=profile.id,
                old_values=old_values,
                new_values=changes
            )
            db.commit()
            db.refresh(profile)
            return profile

        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to update profile {profile_id}: {str(e)}")
            raise ExternalStoreError("Failed to update profile") from e
