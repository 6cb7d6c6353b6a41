"""
Authentication Routes

POST /auth/signup - Create an account (job seeker or company) and sign in
POST /auth/signin - Sign in with email and password
POST /auth/logout - Revoke the refresh session and clear cookies
POST /auth/refresh - Issue a new access token from the refresh cookie
GET /auth/me - Get current user info
GET /auth/google - Google sign-in (redirect, then callback with ?code=)
"""

import logging
from typing import Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Cookie, Depends, HTTPException, Response
from fastapi.responses import RedirectResponse
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from jobboard.core.auth import (
    REFRESH_COOKIE, clear_auth_cookies, create_access_token, get_current_user, hash_password,
    issue_tokens, revoke_session, set_access_cookie, set_auth_cookies, validate_session,
    verify_password, verify_refresh_token
)
from jobboard.db.database import get_db_session
from jobboard.models import Company, User, UserRole
from jobboard.schemas.schemas import (
    AuthResponse, MessageResponse, SignInRequest, SignUpRequest, UserResponse
)
from jobboard.services.oauth_service import GoogleOAuthService, OAuthError, get_google_oauth_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/signup", response_model=AuthResponse, status_code=201)
async def signup(request: SignUpRequest, response: Response):
    """
    Register a new account and sign it in.

    Company sign-ups must include companyName; the company profile is
    created alongside the user.
    """
    is_company = request.user_type == "company"
    if is_company and not (request.company_name or "").strip():
        raise HTTPException(status_code=400, detail="Company name is required for company accounts")

    with get_db_session() as db:
        if db.scalar(select(User.id).where(User.email == request.email)):
            raise HTTPException(status_code=409, detail="User with this email already exists")

        user = User(
            email=request.email,
            password=hash_password(request.password),
            name=request.name,
            role=UserRole.COMPANY.value if is_company else UserRole.USER.value,
        )
        db.add(user)
        db.flush()

        if is_company:
            db.add(Company(name=request.company_name.strip(), email=request.email, user_id=user.id))

        access_token, refresh_token = issue_tokens(db, user)
        db.refresh(user)
        user_data = UserResponse.model_validate(user)

    set_auth_cookies(response, access_token, refresh_token)
    logger.info(f"New {user_data.role.value} account {user_data.email}")
    return AuthResponse(user=user_data, message="Account created successfully")


@router.post("/signin", response_model=AuthResponse)
async def signin(request: SignInRequest, response: Response):
    """Sign in; sets the accessToken and refreshToken cookies."""
    with get_db_session() as db:
        user = db.scalar(select(User).where(User.email == request.email))

        if not user or not user.password:
            raise HTTPException(status_code=401, detail="Invalid credentials")

        if not verify_password(request.password, user.password):
            raise HTTPException(status_code=401, detail="Invalid credentials")

        access_token, refresh_token = issue_tokens(db, user)
        user_data = UserResponse.model_validate(user)

    set_auth_cookies(response, access_token, refresh_token)
    return AuthResponse(user=user_data, message="Signed in successfully")


@router.post("/logout", response_model=MessageResponse)
async def logout(response: Response, refresh_token: Optional[str] = Cookie(None, alias=REFRESH_COOKIE)):
    """Revoke the refresh session (if any) and clear both cookies."""
    if refresh_token:
        with get_db_session() as db:
            revoke_session(db, refresh_token)

    clear_auth_cookies(response)
    return MessageResponse(message="Logged out successfully")


@router.post("/refresh", response_model=MessageResponse)
async def refresh(response: Response, refresh_token: Optional[str] = Cookie(None, alias=REFRESH_COOKIE)):
    """Issue a fresh access token for a live refresh session."""
    if not refresh_token or not verify_refresh_token(refresh_token):
        raise HTTPException(status_code=401, detail="Invalid refresh token")

    with get_db_session() as db:
        user = validate_session(db, refresh_token)
        if user is None:
            raise HTTPException(status_code=401, detail="Session expired or revoked")
        access_token = create_access_token({"sub": user.id, "email": user.email, "role": user.role})

    set_access_cookie(response, access_token)
    return MessageResponse(message="Token refreshed")


@router.get("/me", response_model=UserResponse)
async def get_me(user: dict = Depends(get_current_user)):
    """Get current authenticated user's info."""
    with get_db_session() as db:
        return UserResponse.model_validate(db.get(User, user["user_id"]))


def _find_or_create_google_user(db, google_user: dict) -> User:
    user = db.scalar(select(User).where(User.google_id == google_user["id"]))
    if user:
        return user

    email = google_user["email"].lower()
    user = db.scalar(select(User).where(User.email == email))
    if user:
        # Link the existing password account to Google
        user.google_id = google_user["id"]
        if not user.avatar and google_user.get("picture"):
            user.avatar = google_user["picture"]
        return user

    user = User(
        email=email,
        name=google_user.get("name"),
        google_id=google_user["id"],
        avatar=google_user.get("picture"),
        role=UserRole.USER.value,
    )
    db.add(user)
    db.flush()
    return user


@router.get("/google")
async def google_auth(
    code: Optional[str] = None,
    oauth: GoogleOAuthService = Depends(get_google_oauth_service),
):
    """
    Without ?code, redirect to Google's consent page. With ?code (the
    callback), sign the Google user in and redirect home with auth=success.
    """
    if not code:
        return RedirectResponse(oauth.generate_auth_url())

    try:
        google_user = await oauth.fetch_google_user(code)
        with get_db_session() as db:
            user = _find_or_create_google_user(db, google_user)
            access_token, refresh_token = issue_tokens(db, user)
    except (OAuthError, SQLAlchemyError) as e:
        logger.error(f"Google sign-in failed: {e}")
        params = urlencode({"auth": "error", "message": "Authentication failed"})
        return RedirectResponse(f"/?{params}")

    redirect = RedirectResponse("/?auth=success")
    set_auth_cookies(redirect, access_token, refresh_token)
    return redirect
