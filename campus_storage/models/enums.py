# ================================
# MARKETPLACE ENUMS (models/enums.py)
# ================================

import enum


class StorageType(str, enum.Enum):
    DORM_ROOM = "dorm_room"
    APARTMENT = "apartment"
    GARAGE = "garage"
    CLOSET = "closet"
    BASEMENT = "basement"
    STORAGE_UNIT = "storage_unit"


class SizeCategory(str, enum.Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    EXTRA_LARGE = "extra_large"


class BookingStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class ReviewType(str, enum.Enum):
    HOST_REVIEW = "host_review"  # renter reviews the host
    RENTER_REVIEW = "renter_review"  # host reviews the renter


class VerificationStatus(str, enum.Enum):
    UNVERIFIED = "unverified"
    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"


class YearInSchool(str, enum.Enum):
    FRESHMAN = "Freshman"
    SOPHOMORE = "Sophomore"
    JUNIOR = "Junior"
    SENIOR = "Senior"
    GRADUATE = "Graduate"
