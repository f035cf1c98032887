# ================================
# PROFILE MODEL (models/profile.py)
# ================================

from sqlalchemy import Column, String, Text, Integer, Numeric
from sqlalchemy.orm import relationship

from campus_storage.models.base import Base
from campus_storage.models.enums import VerificationStatus


class Profile(Base):
    """Marketplace profile; id is the identity provider subject"""
    __tablename__ = "profiles"

    # Basic Information
    email = Column(String(255), nullable=False, index=True)
    full_name = Column(String(200), nullable=False)
    university = Column(String(255), nullable=False)
    year_in_school = Column(String(20), nullable=True)
    major = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    bio = Column(Text, nullable=True)
    profile_image_url = Column(Text, nullable=True)

    # Trust
    verification_status = Column(String(20), default=VerificationStatus.UNVERIFIED.value, nullable=False)
    rating = Column(Numeric(3, 2), default=0, nullable=False)
    total_reviews = Column(Integer, default=0, nullable=False)

    # Relationships
    storage_spaces = relationship("StorageSpace", back_populates="host")

    def __repr__(self):
        return f"<Profile(email='{self.email}', university='{self.university}')>"
