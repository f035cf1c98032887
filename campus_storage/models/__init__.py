# ================================
# DATABASE INITIALIZATION (models/__init__.py)
# ================================

"""
Database Models Package

Imports every model so the metadata is complete
"""

from campus_storage.models.base import Base
from campus_storage.models.profile import Profile
from campus_storage.models.marketplace import StorageSpace, Booking, Review

__all__ = [
    "Base",
    "Profile",
    "StorageSpace",
    "Booking",
    "Review",
]
