# ================================
# PROFILES API (api/v1/profiles.py)
# ================================

from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session
from uuid import UUID

from campus_storage.dependencies import get_db, get_current_profile
from campus_storage.models.profile import Profile
from campus_storage.schemas.profile import ProfileBasicInfo, ProfileResponse, ProfileUpdate
from campus_storage.services.profile_service import ProfileService

router = APIRouter()

@router.get("/me", response_model=ProfileResponse)
async def get_my_profile(
    current_profile: Profile = Depends(get_current_profile)
):
    """Profile of the caller (created on first access)"""
    return ProfileResponse.model_validate(current_profile)

@router.patch("/me", response_model=ProfileResponse)
async def update_my_profile(
    profile_data: ProfileUpdate,
    current_profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db)
):
    """Update the caller's profile"""
    profile = ProfileService.update_profile(db, current_profile.id, profile_data, current_profile)
    return ProfileResponse.model_validate(profile)

@router.get("/{profile_id}", response_model=ProfileBasicInfo)
async def get_profile(
    profile_id: UUID = Path(..., description="Profile ID"),
    current_profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db)
):
    """Public profile fields of another user"""
    profile = ProfileService.get_profile(db, profile_id)
    return ProfileBasicInfo.model_validate(profile)
