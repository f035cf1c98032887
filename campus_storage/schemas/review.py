# ================================
# REVIEW SCHEMAS (schemas/review.py)
# ================================

from typing import Optional
from datetime import datetime
from pydantic import Field
import uuid

from campus_storage.schemas.base import BaseSchema, BaseResponseSchema
from campus_storage.schemas.profile import ProfileBasicInfo
from campus_storage.models.enums import ReviewType


class ReviewCreate(BaseSchema):
    """Schema for reviewing a completed booking"""
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = Field(None, max_length=2000)

class ReviewResponse(BaseResponseSchema):
    """Stored review"""
    booking_id: uuid.UUID
    reviewer_id: uuid.UUID
    reviewee_id: uuid.UUID
    storage_space_id: uuid.UUID
    rating: int
    comment: Optional[str] = None
    review_type: ReviewType
    created_at: datetime
    reviewer: Optional[ProfileBasicInfo] = None
