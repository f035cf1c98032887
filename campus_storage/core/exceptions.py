# ================================
# CUSTOM EXCEPTIONS (core/exceptions.py)
# ================================

class AppException(Exception):
    """Base exception for application errors"""

    def __init__(self, detail: str, status_code: int = 400, error_code: str = None):
        self.detail = detail
        self.status_code = status_code
        self.error_code = error_code
        super().__init__(detail)

class AuthenticationError(AppException):
    """Missing or invalid identity provider token"""

    def __init__(self, detail: str = "Authentication failed", error_code: str = "AUTH_FAILED"):
        super().__init__(detail, 401, error_code)

class AuthorizationError(AppException):
    """Actor is not allowed to touch the record"""

    def __init__(self, detail: str = "Access denied", error_code: str = "ACCESS_DENIED"):
        super().__init__(detail, 403, error_code)

class ValidationError(AppException):
    """Malformed or missing fields, rejected before any store call"""

    def __init__(self, detail: str, error_code: str = "VALIDATION_ERROR"):
        super().__init__(detail, 422, error_code)

class InvalidRangeError(ValidationError):
    """End date is not after start date"""

    def __init__(self, detail: str = "End date must be after start date", error_code: str = "INVALID_RANGE"):
        super().__init__(detail, error_code)

class NotFoundError(AppException):
    """Requested identity does not exist (or is no longer active)"""

    def __init__(self, detail: str = "Resource not found", error_code: str = "NOT_FOUND"):
        super().__init__(detail, 404, error_code)

class InvalidStatusTransitionError(AppException):
    """Booking status change not permitted from the current status"""

    def __init__(self, current_status: str, target_status: str):
        self.current_status = current_status
        self.target_status = target_status
        super().__init__(
            f"Invalid status transition from {current_status} to {target_status}",
            409,
            "INVALID_STATUS_TRANSITION",
        )

class BookingConflictError(AppException):
    """Dates collide with an already confirmed booking"""

    def __init__(self, detail: str = "Storage space is already booked for these dates", error_code: str = "BOOKING_CONFLICT"):
        super().__init__(detail, 409, error_code)

class ExternalStoreError(AppException):
    """The backing database call failed"""

    def __init__(self, detail: str = "Data store request failed", error_code: str = "EXTERNAL_STORE_ERROR"):
        super().__init__(detail, 502, error_code)
