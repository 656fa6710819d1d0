import httpx
import pytest
from conftest import STORED_URL
from fastapi.testclient import TestClient

from domain.repositories.image_store import ImageStoreNoURLError, ImageStoreRejectedError
from domain.services.upload_service import MAX_FILE_SIZE
from main import create_app
from utils.supabase_auth import SupabaseAuthClient

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


def upload(client, content=PNG_BYTES, content_type="image/png", filename="cover.png"):
    return client.post(
        "/api/upload", files={"file": (filename, content, content_type)}
    )


def test_upload_returns_public_url(client, image_store):
    response = upload(client)

    assert response.status_code == 200
    assert response.json() == {"url": STORED_URL}
    assert len(image_store.uploads) == 1
    stored = image_store.uploads[0]
    assert stored.content_type == "image/png"
    assert stored.data == PNG_BYTES
    assert stored.to_data_uri().startswith("data:image/png;base64,")


def test_identical_uploads_are_not_deduplicated(client, image_store):
    upload(client)
    upload(client)

    assert len(image_store.uploads) == 2


def test_upload_requires_a_session(client, session_state, image_store):
    session_state.user = None

    response = upload(client)

    assert response.status_code == 401
    assert response.json() == {"error": "Authentication required"}
    assert image_store.uploads == []


def test_missing_configuration_is_reported_first(client, image_store):
    image_store.missing = ["CLOUDINARY_API_KEY", "CLOUDINARY_API_SECRET"]

    response = upload(client, content=b"plain text", content_type="text/plain")

    assert response.status_code == 500
    assert response.json() == {
        "error": "Cloudinary configuration is missing. Please check environment variables.",
        "details": "Make sure CLOUDINARY_API_KEY, CLOUDINARY_API_SECRET are set.",
    }


def test_request_without_file(client):
    empty = client.post("/api/upload")
    other_field = client.post("/api/upload", data={"title": "cover"})

    assert empty.status_code == 400
    assert empty.json() == {"error": "No file provided"}
    assert other_field.status_code == 400
    assert other_field.json() == {"error": "No file provided"}


def test_non_image_is_rejected(client, image_store):
    response = upload(client, content=b"%PDF-1.7", content_type="application/pdf")

    assert response.status_code == 400
    assert response.json() == {"error": "File must be an image"}
    assert image_store.uploads == []


def test_oversized_file_is_rejected(client, image_store):
    response = upload(client, content=b"\x00" * (MAX_FILE_SIZE + 1))

    assert response.status_code == 400
    assert response.json() == {"error": "File size must be less than 10MB"}
    assert image_store.uploads == []


def test_file_at_the_size_limit_is_accepted(client):
    response = upload(client, content=b"\x00" * MAX_FILE_SIZE)

    assert response.status_code == 200


def test_provider_rejection_is_passed_through(client, image_store):
    image_store.failure = ImageStoreRejectedError("Invalid Signature", 401)

    response = upload(client)

    assert response.status_code == 500
    assert response.json() == {"error": "Invalid Signature"}


def test_provider_without_url(client, image_store):
    image_store.failure = ImageStoreNoURLError()

    response = upload(client)

    assert response.status_code == 500
    assert response.json() == {"error": "No URL returned from Cloudinary"}


def test_unexpected_failure_uses_its_message(client, image_store):
    image_store.failure = RuntimeError("boom")

    response = upload(client)

    assert response.status_code == 500
    assert response.json() == {"error": "boom"}


def test_delete_requires_public_id(client):
    response = client.delete("/api/upload")

    assert response.status_code == 400
    assert response.json() == {"error": "No public_id provided"}


def test_delete_image(client, image_store):
    response = client.delete("/api/upload", params={"public_id": "noty-app/abc123"})

    assert response.status_code == 200
    assert response.json() == {"result": "ok"}
    assert image_store.deleted == ["noty-app/abc123"]


def test_upload_without_bearer_token(app):
    response = TestClient(app).post(
        "/api/upload", files={"file": ("cover.png", PNG_BYTES, "image/png")}
    )

    assert response.status_code == 401
    assert response.json() == {"error": "Authentication required"}


def refuse_connection(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("connection refused", request=request)


@pytest.fixture(params=["unreachable", "unconfigured"])
def failing_auth(request, image_store):
    if request.param == "unreachable":
        auth_client = SupabaseAuthClient(
            base_url="https://backend.test",
            anon_key="anon-key",
            http_client=httpx.AsyncClient(
                transport=httpx.MockTransport(refuse_connection)
            ),
        )
        status_code, message = 503, "Authentication service unavailable"
    else:
        auth_client = SupabaseAuthClient(base_url="", anon_key="")
        status_code = 500
        message = (
            "Authentication is not configured. Set SUPABASE_URL and SUPABASE_ANON_KEY."
        )

    app = create_app(image_store=image_store, auth_client=auth_client)
    client = TestClient(app, headers={"Authorization": "Bearer session-token"})
    return client, status_code, message


def test_upload_reports_auth_failures_as_envelope(failing_auth, image_store):
    client, status_code, message = failing_auth

    response = upload(client)

    assert response.status_code == status_code
    assert response.json() == {"error": message}
    assert image_store.uploads == []


def test_delete_reports_auth_failures_as_envelope(failing_auth, image_store):
    client, status_code, message = failing_auth

    response = client.delete("/api/upload", params={"public_id": "noty-app/abc123"})

    assert response.status_code == status_code
    assert response.json() == {"error": message}
    assert image_store.deleted == []
