# ================================
# PROFILE SCHEMAS (schemas/profile.py)
# ================================

from typing import Optional
from decimal import Decimal
from pydantic import Field
import uuid

from campus_storage.schemas.base import BaseSchema, BaseResponseSchema, TimestampMixin
from campus_storage.models.enums import VerificationStatus, YearInSchool


class AuthIdentity(BaseSchema):
    """Identity asserted by a verified provider token"""
    id: uuid.UUID
    email: str
    full_name: Optional[str] = None

class ProfileBasicInfo(BaseResponseSchema):
    """Profile fields embedded in listings and bookings"""
    full_name: str
    university: str
    verification_status: VerificationStatus
    rating: Decimal = Decimal("0")
    total_reviews: int = 0
    profile_image_url: Optional[str] = None

class ProfileResponse(ProfileBasicInfo, TimestampMixin):
    """Full profile"""
    email: str
    year_in_school: Optional[YearInSchool] = None
    major: Optional[str] = None
    phone: Optional[str] = None
    bio: Optional[str] = None

class ProfileUpdate(BaseSchema):
    """Fields a user may change on their own profile"""
    full_name: Optional[str] = Field(None, min_length=1, max_length=200)
    university: Optional[str] = Field(None, min_length=1, max_length=255)
    year_in_school: Optional[YearInSchool] = None
    major: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=50)
    bio: Optional[str] = None
    profile_image_url: Optional[str] = None
