# ================================
# SCHEMAS PACKAGE INITIALIZATION (schemas/__init__.py)
# ================================

"""
Pydantic Schemas Package

Central imports for all request/response schemas
"""

from campus_storage.schemas.base import (
    BaseSchema,
    BaseResponseSchema,
    TimestampMixin,
    ErrorResponse,
    HealthCheckResponse,
    PageEnvelope,
)
from campus_storage.schemas.profile import (
    AuthIdentity,
    ProfileBasicInfo,
    ProfileResponse,
    ProfileUpdate,
)
from campus_storage.schemas.listing import (
    ListingCriteria,
    ListingCreate,
    ListingUpdate,
    ListingResponse,
    ListingCard,
    ListingSearchResponse,
    PriceQuoteResponse,
)
from campus_storage.schemas.booking import (
    BookingCreate,
    BookingUpdate,
    BookingSpaceSummary,
    BookingResponse,
)
from campus_storage.schemas.review import (
    ReviewCreate,
    ReviewResponse,
)

__all__ = [
    "BaseSchema",
    "BaseResponseSchema",
    "TimestampMixin",
    "ErrorResponse",
    "HealthCheckResponse",
    "PageEnvelope",
    "AuthIdentity",
    "ProfileBasicInfo",
    "ProfileResponse",
    "ProfileUpdate",
    "ListingCriteria",
    "ListingCreate",
    "ListingUpdate",
    "ListingResponse",
    "ListingCard",
    "ListingSearchResponse",
    "PriceQuoteResponse",
    "BookingCreate",
    "BookingUpdate",
    "BookingSpaceSummary",
    "BookingResponse",
    "ReviewCreate",
    "ReviewResponse",
]
