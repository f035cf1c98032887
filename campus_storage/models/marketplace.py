# ================================
# MARKETPLACE MODELS (models/marketplace.py)
# ================================

from sqlalchemy import Column, String, Text, Integer, Float, Boolean, Date, ForeignKey, JSON, Numeric, Index, Uuid
from sqlalchemy.orm import relationship

from campus_storage.models.base import Base
from campus_storage.models.enums import BookingStatus


class StorageSpace(Base):
    """Storage space offered by a host"""
    __tablename__ = "storage_spaces"

    # Foreign Keys
    host_id = Column(Uuid(as_uuid=True), ForeignKey('profiles.id'), nullable=False)

    # Basic Information
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    storage_type = Column(String(50), nullable=False)  # see StorageType
    size_category = Column(String(50), nullable=False)  # see SizeCategory
    capacity_description = Column(Text, nullable=True)
    price_per_month = Column(Numeric(10, 2), nullable=False)

    # Location
    location_address = Column(String(500), nullable=False)
    campus_area = Column(String(255), nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)

    # Availability window (inclusive)
    available_from = Column(Date, nullable=False)
    available_until = Column(Date, nullable=False)

    # Details
    amenities = Column(JSON, default=list, nullable=False)  # e.g. ["climate_controlled", "24_7_access"]
    images = Column(JSON, default=list, nullable=False)  # ordered image URLs
    rules = Column(Text, nullable=True)

    # Moving help offered by the host
    can_help_move = Column(Boolean, default=False, nullable=False)
    has_vehicle = Column(Boolean, default=False, nullable=False)
    vehicle_type = Column(String(100), nullable=True)
    move_in_time = Column(String(50), nullable=True)
    move_out_time = Column(String(50), nullable=True)

    # Soft delete flag
    is_active = Column(Boolean, default=True, nullable=False)

    # Relationships
    host = relationship("Profile", back_populates="storage_spaces")
    bookings = relationship("Booking", back_populates="storage_space")

    __table_args__ = (
        Index('idx_storage_spaces_host_id', 'host_id'),
        Index('idx_storage_spaces_is_active', 'is_active'),
        Index('idx_storage_spaces_storage_type', 'storage_type'),
        Index('idx_storage_spaces_price', 'price_per_month'),
    )

    def __repr__(self):
        return f"<StorageSpace(title='{self.title}', type='{self.storage_type}', active={self.is_active})>"


class Booking(Base):
    """A renter's claim on a storage space for a date window"""
    __tablename__ = "bookings"

    # Foreign Keys
    storage_space_id = Column(Uuid(as_uuid=True), ForeignKey('storage_spaces.id'), nullable=False)
    renter_id = Column(Uuid(as_uuid=True), ForeignKey('profiles.id'), nullable=False)
    host_id = Column(Uuid(as_uuid=True), ForeignKey('profiles.id'), nullable=False)  # copy of storage_space.host_id

    # Window and price
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    total_price = Column(Numeric(10, 2), nullable=False)

    # Status Tracking
    status = Column(String(20), default=BookingStatus.PENDING.value, nullable=False)
    special_requests = Column(Text, nullable=True)

    # Relationships
    storage_space = relationship("StorageSpace", back_populates="bookings")
    renter = relationship("Profile", foreign_keys=[renter_id])
    host = relationship("Profile", foreign_keys=[host_id])
    reviews = relationship("Review", back_populates="booking")

    __table_args__ = (
        Index('idx_bookings_storage_space_id', 'storage_space_id'),
        Index('idx_bookings_renter_id', 'renter_id'),
        Index('idx_bookings_host_id', 'host_id'),
        Index('idx_bookings_status', 'status'),
    )

    def __repr__(self):
        return f"<Booking(space='{self.storage_space_id}', {self.start_date}..{self.end_date}, status='{self.status}')>"


class Review(Base):
    """Review left after a completed booking"""
    __tablename__ = "reviews"

    # Foreign Keys
    booking_id = Column(Uuid(as_uuid=True), ForeignKey('bookings.id'), nullable=False)
    reviewer_id = Column(Uuid(as_uuid=True), ForeignKey('profiles.id'), nullable=False)
    reviewee_id = Column(Uuid(as_uuid=True), ForeignKey('profiles.id'), nullable=False)
    storage_space_id = Column(Uuid(as_uuid=True), ForeignKey('storage_spaces.id'), nullable=False)

    rating = Column(Integer, nullable=False)  # 1..5
    comment = Column(Text, nullable=True)
    review_type = Column(String(20), nullable=False)  # see ReviewType

    # Relationships
    booking = relationship("Booking", back_populates="reviews")
    reviewer = relationship("Profile", foreign_keys=[reviewer_id])
    reviewee = relationship("Profile", foreign_keys=[reviewee_id])

    __table_args__ = (
        Index('idx_reviews_storage_space_id', 'storage_space_id'),
        Index('uq_reviews_booking_type', 'booking_id', 'review_type', unique=True),
    )

    def __repr__(self):
        return f"<Review(booking='{self.booking_id}', type='{self.review_type}', rating={self.rating})>"
