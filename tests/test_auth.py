import json

import httpx
import pytest
from conftest import OWNER
from fastapi.testclient import TestClient

from main import create_app
from utils.dependencies import get_db
from utils.supabase_auth import (
    AuthConfigurationError,
    AuthServiceUnavailableError,
    InvalidSessionError,
    SupabaseAuthClient,
)

VALID_TOKEN = "valid-token"
USER_PAYLOAD = {"id": str(OWNER.id), "email": OWNER.email}


def auth_backend(request: httpx.Request) -> httpx.Response:
    """Minimal stand-in for the ``/auth/v1`` endpoints."""
    if request.headers.get("apikey") != "anon-key":
        return httpx.Response(401, json={"message": "No API key found in request"})

    if request.url.path == "/auth/v1/user":
        if request.headers.get("Authorization") == f"Bearer {VALID_TOKEN}":
            return httpx.Response(200, json=USER_PAYLOAD)
        return httpx.Response(401, json={"msg": "invalid JWT"})

    if request.url.path == "/auth/v1/token":
        body = json.loads(request.content)
        if body["password"] == "secret":
            return httpx.Response(
                200,
                json={
                    "access_token": VALID_TOKEN,
                    "refresh_token": "refresh",
                    "token_type": "bearer",
                    "expires_in": 3600,
                    "user": USER_PAYLOAD,
                },
            )
        return httpx.Response(
            400,
            json={
                "error": "invalid_grant",
                "error_description": "Invalid login credentials",
            },
        )

    if request.url.path == "/auth/v1/logout":
        return httpx.Response(204)

    return httpx.Response(404)


def make_client(handler=auth_backend, base_url="https://backend.test"):
    return SupabaseAuthClient(
        base_url=base_url,
        anon_key="anon-key",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


def unreachable(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("connection refused", request=request)


@pytest.mark.anyio
async def test_get_user_resolves_token():
    user = await make_client().get_user(VALID_TOKEN)

    assert user.id == OWNER.id
    assert user.email == OWNER.email


@pytest.mark.anyio
async def test_get_user_rejects_unknown_token():
    with pytest.raises(InvalidSessionError, match="Invalid or expired session"):
        await make_client().get_user("expired")


@pytest.mark.anyio
async def test_unreachable_backend_is_reported():
    with pytest.raises(AuthServiceUnavailableError):
        await make_client(handler=unreachable).get_user(VALID_TOKEN)


@pytest.mark.anyio
async def test_unreadable_user_payload_is_reported():
    client = make_client(handler=lambda request: httpx.Response(200, text="<html>"))

    with pytest.raises(AuthServiceUnavailableError):
        await client.get_user(VALID_TOKEN)


@pytest.mark.anyio
async def test_unconfigured_client_refuses_requests():
    client = SupabaseAuthClient(base_url="", anon_key="")

    with pytest.raises(AuthConfigurationError):
        await client.get_user(VALID_TOKEN)


@pytest.mark.anyio
async def test_password_login():
    session = await make_client().sign_in_with_password(OWNER.email, "secret")

    assert session.access_token == VALID_TOKEN
    assert session.expires_in == 3600
    assert session.user.id == OWNER.id


@pytest.mark.anyio
async def test_password_login_reports_backend_message():
    with pytest.raises(InvalidSessionError, match="Invalid login credentials"):
        await make_client().sign_in_with_password(OWNER.email, "wrong")


@pytest.fixture
def auth_app(session_factory, image_store, request):
    handler = getattr(request, "param", auth_backend)
    app = create_app(image_store=image_store, auth_client=make_client(handler))

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


def test_session_endpoint_returns_the_user(auth_app):
    response = auth_app.get(
        "/api/auth/session", headers={"Authorization": f"Bearer {VALID_TOKEN}"}
    )

    assert response.status_code == 200
    assert response.json() == {"id": str(OWNER.id), "email": OWNER.email}


def test_session_endpoint_rejects_missing_and_invalid_tokens(auth_app):
    missing = auth_app.get("/api/auth/session")
    invalid = auth_app.get(
        "/api/auth/session", headers={"Authorization": "Bearer expired"}
    )

    assert missing.status_code == 401
    assert invalid.status_code == 401
    assert invalid.json() == {"detail": "Authentication required"}


@pytest.mark.parametrize("auth_app", [unreachable], indirect=True)
def test_session_endpoint_reports_unreachable_backend(auth_app):
    response = auth_app.get(
        "/api/auth/session", headers={"Authorization": f"Bearer {VALID_TOKEN}"}
    )

    assert response.status_code == 503
    assert response.json() == {"detail": "Authentication service unavailable"}


def test_login_endpoint(auth_app):
    accepted = auth_app.post(
        "/api/auth/login", json={"email": OWNER.email, "password": "secret"}
    )
    rejected = auth_app.post(
        "/api/auth/login", json={"email": OWNER.email, "password": "wrong"}
    )

    assert accepted.status_code == 200
    assert accepted.json()["access_token"] == VALID_TOKEN
    assert accepted.json()["user"]["id"] == str(OWNER.id)
    assert rejected.status_code == 401
    assert rejected.json() == {"detail": "Invalid login credentials"}


def test_logout_endpoint(auth_app):
    signed_in = auth_app.post(
        "/api/auth/logout", headers={"Authorization": f"Bearer {VALID_TOKEN}"}
    )
    anonymous = auth_app.post("/api/auth/logout")

    assert signed_in.status_code == 204
    assert anonymous.status_code == 401


def test_protected_routes_use_the_bearer_token(auth_app, tags):
    response = auth_app.get(
        "/api/tags", headers={"Authorization": f"Bearer {VALID_TOKEN}"}
    )

    assert response.status_code == 200
    assert len(response.json()) == 3
