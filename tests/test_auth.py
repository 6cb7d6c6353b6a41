from unittest.mock import patch

import pytest
from sqlalchemy.exc import IntegrityError

from jobboard.main import app
from jobboard.models import Company, Session, User
from jobboard.services.oauth_service import OAuthError, get_google_oauth_service

from tests.conftest import PASSWORD, count_rows, signup


class TestSignUp:
    def test_job_seeker_signup_sets_cookies(self, client):
        response = client.post(
            "/api/auth/signup",
            json={"email": "Jane@Example.com", "password": PASSWORD, "name": "Jane"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Account created successfully"
        assert body["user"]["email"] == "jane@example.com"
        assert body["user"]["role"] == "USER"
        assert "password" not in body["user"]
        assert client.cookies.get("accessToken")
        assert client.cookies.get("refreshToken")
        assert count_rows(Session, user_id=body["user"]["id"]) == 1

    def test_company_signup_creates_company(self, client):
        user = signup(client, "hr@techcorp.com", company_name="TechCorp")

        assert user["role"] == "COMPANY"
        assert count_rows(Company, user_id=user["id"], name="TechCorp") == 1

    def test_company_signup_requires_company_name(self, client):
        response = client.post(
            "/api/auth/signup",
            json={"email": "hr@techcorp.com", "password": PASSWORD, "name": "HR", "userType": "company"},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Company name is required for company accounts"}
        assert count_rows(User) == 0

    def test_duplicate_email_conflicts(self, client, make_client):
        signup(client, "jane@example.com")

        response = make_client().post(
            "/api/auth/signup",
            json={"email": "JANE@example.com", "password": PASSWORD, "name": "Other"},
        )

        assert response.status_code == 409
        assert response.json() == {"error": "User with this email already exists"}
        assert count_rows(User) == 1

    @pytest.mark.parametrize("body", [
        {"email": "not-an-email", "password": PASSWORD, "name": "Jane"},
        {"email": "jane@example.com", "password": "short", "name": "Jane"},
        {"email": "jane@example.com", "password": PASSWORD},
    ])
    def test_invalid_signup_is_400(self, client, body):
        response = client.post("/api/auth/signup", json=body)

        assert response.status_code == 400
        assert "error" in response.json()
        assert count_rows(User) == 0


class TestSignIn:
    def test_signin_with_valid_credentials(self, client, make_client):
        signup(client, "jane@example.com", name="Jane")
        fresh = make_client()

        response = fresh.post("/api/auth/signin", json={"email": "jane@example.com", "password": PASSWORD})

        assert response.status_code == 200
        assert response.json()["message"] == "Signed in successfully"
        assert response.json()["user"]["name"] == "Jane"
        assert fresh.cookies.get("accessToken")

    def test_signin_email_is_case_insensitive(self, client, make_client):
        signup(client, "jane@example.com")

        response = make_client().post("/api/auth/signin", json={"email": "Jane@EXAMPLE.com", "password": PASSWORD})

        assert response.status_code == 200

    def test_wrong_password(self, client, make_client):
        signup(client, "jane@example.com")

        response = make_client().post("/api/auth/signin", json={"email": "jane@example.com", "password": "wrong-pass"})

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid credentials"}

    def test_unknown_email(self, client):
        response = client.post("/api/auth/signin", json={"email": "nobody@example.com", "password": PASSWORD})

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid credentials"}

    def test_each_signin_opens_a_session(self, client, make_client):
        user = signup(client, "jane@example.com")
        make_client().post("/api/auth/signin", json={"email": "jane@example.com", "password": PASSWORD})

        assert count_rows(Session, user_id=user["id"]) == 2


class TestSessionLifecycle:
    def test_me_returns_current_user(self, seeker):
        client, user = seeker

        response = client.get("/api/auth/me")

        assert response.status_code == 200
        assert response.json()["id"] == user["id"]
        assert response.json()["email"] == "seeker@example.com"

    def test_me_requires_auth(self, client):
        response = client.get("/api/auth/me")

        assert response.status_code == 401
        assert response.json() == {"error": "Authentication required"}

    def test_logout_revokes_session_and_clears_cookies(self, seeker):
        client, user = seeker

        response = client.post("/api/auth/logout")

        assert response.status_code == 200
        assert response.json() == {"message": "Logged out successfully"}
        assert count_rows(Session, user_id=user["id"]) == 0
        assert client.get("/api/auth/me").status_code == 401

    def test_logout_without_cookies_still_succeeds(self, client):
        response = client.post("/api/auth/logout")

        assert response.status_code == 200

    def test_refresh_issues_new_access_token(self, seeker):
        client, _ = seeker
        client.cookies.delete("accessToken")

        response = client.post("/api/auth/refresh")

        assert response.status_code == 200
        assert response.json() == {"message": "Token refreshed"}
        assert client.cookies.get("accessToken")
        assert client.get("/api/auth/me").status_code == 200

    def test_refresh_after_logout_is_rejected(self, seeker):
        client, _ = seeker
        refresh_token = client.cookies.get("refreshToken")
        client.post("/api/auth/logout")
        client.cookies.set("refreshToken", refresh_token)

        response = client.post("/api/auth/refresh")

        assert response.status_code == 401
        assert response.json() == {"error": "Session expired or revoked"}

    def test_refresh_without_cookie(self, client):
        response = client.post("/api/auth/refresh")

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid refresh token"}

    def test_access_token_is_not_a_refresh_token(self, seeker):
        client, _ = seeker
        access_token = client.cookies.get("accessToken")
        client.cookies.delete("refreshToken")
        client.cookies.set("refreshToken", access_token)

        response = client.post("/api/auth/refresh")

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid refresh token"}


class FakeGoogleOAuth:
    def __init__(self, user_info=None, error=None):
        self.user_info = user_info
        self.error = error

    def generate_auth_url(self, state=None):
        return "https://accounts.google.com/o/oauth2/v2/auth?client_id=test"

    async def fetch_google_user(self, code):
        if self.error:
            raise self.error
        return self.user_info


@pytest.fixture
def google():
    def _install(**kwargs):
        fake = FakeGoogleOAuth(**kwargs)
        app.dependency_overrides[get_google_oauth_service] = lambda: fake
        return fake

    yield _install
    app.dependency_overrides.pop(get_google_oauth_service, None)


GOOGLE_USER = {
    "id": "google-123",
    "email": "Jane.Google@gmail.com",
    "name": "Jane Google",
    "picture": "https://lh3.googleusercontent.com/a/photo.jpg",
}


class TestGoogleSignIn:
    def test_redirects_to_consent_page(self, client, google):
        google()

        response = client.get("/api/auth/google", follow_redirects=False)

        assert response.status_code == 307
        assert response.headers["location"].startswith("https://accounts.google.com/")

    def test_callback_creates_user_and_sets_cookies(self, client, google):
        google(user_info=GOOGLE_USER)

        response = client.get("/api/auth/google", params={"code": "abc"}, follow_redirects=False)

        assert response.status_code == 307
        assert response.headers["location"] == "/?auth=success"
        assert client.cookies.get("accessToken")
        assert count_rows(User, email="jane.google@gmail.com", google_id="google-123") == 1

        me = client.get("/api/auth/me").json()
        assert me["role"] == "USER"
        assert me["avatar"] == GOOGLE_USER["picture"]

    def test_callback_links_existing_account(self, client, make_client, google):
        user = signup(make_client(), "jane.google@gmail.com", name="Jane")
        google(user_info=GOOGLE_USER)

        client.get("/api/auth/google", params={"code": "abc"}, follow_redirects=False)

        assert count_rows(User) == 1
        assert count_rows(User, id=user["id"], google_id="google-123") == 1

    def test_repeat_sign_in_reuses_user(self, make_client, google):
        google(user_info=GOOGLE_USER)

        make_client().get("/api/auth/google", params={"code": "a"}, follow_redirects=False)
        make_client().get("/api/auth/google", params={"code": "b"}, follow_redirects=False)

        assert count_rows(User) == 1

    def test_callback_failure_redirects_with_error(self, client, google):
        google(error=OAuthError("Failed to get tokens"))

        response = client.get("/api/auth/google", params={"code": "bad"}, follow_redirects=False)

        assert response.status_code == 307
        assert response.headers["location"] == "/?auth=error&message=Authentication+failed"
        assert client.cookies.get("accessToken") is None
        assert count_rows(User) == 0

    def test_database_failure_redirects_with_error(self, client, google):
        google(user_info=GOOGLE_USER)
        race = IntegrityError("INSERT INTO users", {}, Exception("UNIQUE constraint failed: users.google_id"))

        with patch("jobboard.api.routes.auth_routes.issue_tokens", side_effect=race):
            response = client.get("/api/auth/google", params={"code": "abc"}, follow_redirects=False)

        assert response.status_code == 307
        assert response.headers["location"] == "/?auth=error&message=Authentication+failed"
        assert client.cookies.get("accessToken") is None
        assert count_rows(User) == 0
