"""
Authentication Utility - JWT, password and session handling.

Provides:
- Password hashing with bcrypt
- Access/refresh JWT creation and verification
- Refresh-token sessions stored as SHA256 digests
- Auth cookies
- FastAPI dependencies for protected routes (token read from the
  `accessToken` cookie)
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Cookie, Depends, HTTPException, Response, status
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy import delete, select

from jobboard.core.config import get_settings
from jobboard.db.database import get_db_session
from jobboard.models import Company, Session, User, UserRole
from jobboard.utils import utcnow

logger = logging.getLogger(__name__)

settings = get_settings()

ACCESS_COOKIE = "accessToken"
REFRESH_COOKIE = "refreshToken"

# Password hashing
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)


def hash_password(password: str) -> str:
    """Hash password with bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash."""
    return pwd_context.verify(plain_password, hashed_password)


def _token_payload(user: User) -> dict:
    return {"sub": user.id, "email": user.email, "role": user.role}


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token."""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    to_encode.update({"exp": expire, "type": "access"})
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def create_refresh_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT refresh token. Each one carries a unique jti."""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(days=settings.refresh_token_expire_days)
    )
    to_encode.update({"exp": expire, "type": "refresh", "jti": uuid.uuid4().hex})
    return jwt.encode(to_encode, settings.jwt_refresh_secret_key, algorithm=settings.jwt_algorithm)


def _decode(token: str, secret: str, token_type: str) -> Optional[dict]:
    try:
        payload = jwt.decode(token, secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None
    if payload.get("type") != token_type or not payload.get("sub"):
        return None
    return payload


def verify_access_token(token: str) -> Optional[dict]:
    """Decode and verify an access token. Returns None if invalid or expired."""
    return _decode(token, settings.jwt_secret_key, "access")


def verify_refresh_token(token: str) -> Optional[dict]:
    """Decode and verify a refresh token. Returns None if invalid or expired."""
    return _decode(token, settings.jwt_refresh_secret_key, "refresh")


# ============================================================
# SESSIONS
# ============================================================

def create_session(db, user_id: str, refresh_token: str) -> Session:
    """Persist a refresh-token session."""
    session = Session(
        user_id=user_id,
        token_hash=Session.hash_token(refresh_token),
        expires_at=utcnow() + timedelta(days=settings.refresh_token_expire_days),
    )
    db.add(session)
    db.flush()
    return session


def validate_session(db, refresh_token: str) -> Optional[User]:
    """Return the session's user if the token maps to a live session."""
    session = db.scalar(
        select(Session).where(
            Session.token_hash == Session.hash_token(refresh_token),
            Session.expires_at > utcnow(),
        )
    )
    if session is None:
        return None
    return session.user


def revoke_session(db, refresh_token: str) -> bool:
    """Delete the session for this token. Returns True if one existed."""
    result = db.execute(
        delete(Session).where(Session.token_hash == Session.hash_token(refresh_token))
    )
    return result.rowcount > 0


def issue_tokens(db, user: User) -> tuple:
    """Create an access/refresh token pair and record the refresh session."""
    payload = _token_payload(user)
    access_token = create_access_token(payload)
    refresh_token = create_refresh_token(payload)
    create_session(db, user.id, refresh_token)
    return access_token, refresh_token


# ============================================================
# COOKIES
# ============================================================

def set_access_cookie(response: Response, access_token: str) -> None:
    response.set_cookie(
        ACCESS_COOKIE,
        access_token,
        max_age=settings.access_token_expire_minutes * 60,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )


def set_auth_cookies(response: Response, access_token: str, refresh_token: str) -> None:
    set_access_cookie(response, access_token)
    response.set_cookie(
        REFRESH_COOKIE,
        refresh_token,
        max_age=settings.refresh_token_expire_days * 24 * 60 * 60,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )


def clear_auth_cookies(response: Response) -> None:
    response.delete_cookie(ACCESS_COOKIE)
    response.delete_cookie(REFRESH_COOKIE)


# ============================================================
# DEPENDENCIES
# ============================================================

async def get_token_payload(access_token: Optional[str] = Cookie(None, alias=ACCESS_COOKIE)) -> dict:
    """Dependency - verified access-token payload, without a database hit."""
    if not access_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")

    payload = verify_access_token(access_token)
    if not payload:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

    return payload


async def get_current_user(payload: dict = Depends(get_token_payload)) -> dict:
    """
    FastAPI dependency - Get current authenticated user.

    Usage:
        @router.get("/protected")
        async def route(user: dict = Depends(get_current_user)):
            return user
    """
    with get_db_session() as db:
        user = db.get(User, payload["sub"])
        if user is None:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
        return {"user_id": user.id, "email": user.email, "role": user.role}


async def get_current_job_seeker(user: dict = Depends(get_current_user)) -> dict:
    """Dependency - Require the USER (job seeker) role."""
    if user["role"] != UserRole.USER.value:
        raise HTTPException(status_code=403, detail="Only job seekers can apply for positions")
    return user


async def get_current_company(user: dict = Depends(get_current_user)) -> dict:
    """Dependency - Require company role and get company_id."""
    if user["role"] != UserRole.COMPANY.value:
        raise HTTPException(status_code=403, detail="Companies only")

    with get_db_session() as db:
        company_id = db.scalar(select(Company.id).where(Company.user_id == user["user_id"]))

    if not company_id:
        raise HTTPException(status_code=404, detail="Company profile not found")

    user["company_id"] = company_id
    return user
