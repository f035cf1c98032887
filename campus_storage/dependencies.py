# ================================
# DEPENDENCIES (dependencies.py)
# ================================

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from typing import Optional
import uuid

from campus_storage.core.exceptions import AuthenticationError
from campus_storage.core.security import verify_token
from campus_storage.models.profile import Profile
from campus_storage.schemas.profile import AuthIdentity
from campus_storage.services.profile_service import ProfileService

# Missing credentials are reported through AuthenticationError, not FastAPI's 403
security = HTTPBearer(auto_error=False)

# ================================
# BASIC DEPENDENCIES
# ================================

def get_db(request: Request) -> Session:
    """Database session opened by the request middleware"""
    return request.state.db

# ================================
# AUTHENTICATION DEPENDENCIES
# ================================

async def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> AuthIdentity:
    """Identity from a verified provider token"""
    if credentials is None:
        raise AuthenticationError("Not authenticated")

    payload = verify_token(credentials.credentials)
    if not payload:
        raise AuthenticationError("Invalid authentication credentials")

    subject = payload.get("sub")
    email = payload.get("email")
    if not subject or not email:
        raise AuthenticationError("Invalid token payload")

    try:
        identity_id = uuid.UUID(str(subject))
    except ValueError:
        raise AuthenticationError("Invalid token subject")

    metadata = payload.get("user_metadata") or {}
    return AuthIdentity(id=identity_id, email=email, full_name=metadata.get("full_name"))

async def get_current_profile(
    identity: AuthIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db)
) -> Profile:
    """Profile of the caller, created lazily on first access"""
    return ProfileService.ensure_profile(db, identity)
