"""
Google OAuth - authorization-code flow for "Sign in with Google".
"""

import logging
from typing import Any, Dict, Optional
from urllib.parse import urlencode

import httpx

from jobboard.core.config import get_settings

logger = logging.getLogger(__name__)


class OAuthError(Exception):
    """Raised when any step of the Google exchange fails."""


class GoogleOAuthService:
    auth_url = "https://accounts.google.com/o/oauth2/v2/auth"
    token_url = "https://oauth2.googleapis.com/token"
    userinfo_url = "https://www.googleapis.com/oauth2/v2/userinfo"
    scopes = ["openid", "email", "profile"]

    def __init__(self, client_id: str, client_secret: str, redirect_uri: str):
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri

    def generate_auth_url(self, state: Optional[str] = None) -> str:
        """Google consent page URL that redirects back with ?code=..."""
        params = {
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "response_type": "code",
            "scope": " ".join(self.scopes),
            "access_type": "offline",
        }
        if state:
            params["state"] = state
        return f"{self.auth_url}?{urlencode(params)}"

    async def exchange_code_for_tokens(self, code: str) -> Dict[str, Any]:
        data = {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "code": code,
            "grant_type": "authorization_code",
            "redirect_uri": self.redirect_uri,
        }
        try:
            async with httpx.AsyncClient(timeout=10.0) as client:
                response = await client.post(self.token_url, data=data)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPError as e:
            logger.error(f"Error exchanging code for tokens: {e}")
            raise OAuthError("Failed to get tokens") from e

    async def get_user_info(self, access_token: str) -> Dict[str, Any]:
        headers = {"Authorization": f"Bearer {access_token}"}
        try:
            async with httpx.AsyncClient(timeout=10.0) as client:
                response = await client.get(self.userinfo_url, headers=headers)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPError as e:
            logger.error(f"Error getting user info: {e}")
            raise OAuthError("Failed to get user info") from e

    async def fetch_google_user(self, code: str) -> Dict[str, Any]:
        """Run the code exchange and return Google's user profile (id, email, name, picture)."""
        tokens = await self.exchange_code_for_tokens(code)
        if "access_token" not in tokens:
            raise OAuthError("Token response missing access_token")

        user_info = await self.get_user_info(tokens["access_token"])
        if not user_info.get("id") or not user_info.get("email"):
            raise OAuthError("Email not provided by OAuth provider")
        return user_info


def get_google_oauth_service() -> GoogleOAuthService:
    settings = get_settings()
    return GoogleOAuthService(
        client_id=settings.google_client_id,
        client_secret=settings.google_client_secret,
        redirect_uri=f"{settings.oauth_redirect_base_url.rstrip('/')}/api/auth/google",
    )
