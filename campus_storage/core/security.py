# ================================
# SECURITY CORE (core/security.py)
# ================================

from jose import JWTError, jwt
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any

from campus_storage.config import settings


def verify_token(token: str) -> Optional[Dict[str, Any]]:
    """Verify an access token issued by the identity provider"""
    options = {"verify_aud": settings.AUTH_JWT_AUDIENCE is not None}
    try:
        return jwt.decode(
            token,
            settings.AUTH_JWT_SECRET,
            algorithms=[settings.AUTH_JWT_ALGORITHM],
            audience=settings.AUTH_JWT_AUDIENCE,
            options=options,
        )
    except JWTError:
        return None


def create_access_token(
    subject: str,
    email: str,
    full_name: Optional[str] = None,
    expires_delta: Optional[timedelta] = None
) -> str:
    """Mint a provider-shaped token (local development and tests)"""
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(hours=1))
    to_encode: Dict[str, Any] = {
        "sub": subject,
        "email": email,
        "exp": expire,
        "user_metadata": {"full_name": full_name} if full_name else {},
    }
    if settings.AUTH_JWT_AUDIENCE:
        to_encode["aud"] = settings.AUTH_JWT_AUDIENCE
    return jwt.encode(to_encode, settings.AUTH_JWT_SECRET, algorithm=settings.AUTH_JWT_ALGORITHM)
