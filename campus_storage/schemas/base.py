# ================================
# BASE SCHEMAS (schemas/base.py)
# ================================

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Dict
from datetime import datetime
from uuid import UUID


class BaseSchema(BaseModel):
    """Base schema with shared configuration"""
    model_config = ConfigDict(
        from_attributes=True,
        str_strip_whitespace=True,
        validate_assignment=True,
        use_enum_values=True,
    )

class BaseResponseSchema(BaseSchema):
    """Base schema for API responses with ID field"""
    id: UUID

class TimestampMixin(BaseModel):
    """Mixin for timestamp fields"""
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

# ================================
# ERROR / HEALTH RESPONSE SCHEMAS
# ================================

class ErrorResponse(BaseSchema):
    """Standard Error Response Schema"""
    detail: str = Field(..., description="Error message")
    error_code: Optional[str] = Field(None, description="Application-specific error code")
    request_id: Optional[str] = None

class HealthCheckResponse(BaseSchema):
    """Health check payload"""
    status: str
    service: str
    version: str
    timestamp: Optional[datetime] = None
    checks: Dict[str, str] = Field(default_factory=dict)

class PageEnvelope(BaseSchema):
    """Shared page metadata"""
    total: int
    page: int
    size: int
    pages: int

__all__ = [
    "BaseSchema",
    "BaseResponseSchema",
    "TimestampMixin",
    "ErrorResponse",
    "HealthCheckResponse",
    "PageEnvelope",
]
