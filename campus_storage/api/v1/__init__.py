# ================================
# API V1 INITIALIZATION (api/v1/__init__.py)
# ================================

from campus_storage.api.v1 import bookings, listings, profiles

__all__ = ["bookings", "listings", "profiles"]
