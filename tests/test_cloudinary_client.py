import hashlib
from urllib.parse import parse_qs

import httpx
import pytest

from domain.entities.upload import ImageUpload
from domain.repositories.image_store import ImageStoreNoURLError, ImageStoreRejectedError
from infrastructure.image_store.cloudinary_client import CloudinaryImageStore
from utils.config import ImageStoreCredentials

CREDENTIALS = ImageStoreCredentials("demo", "api-key", "api-secret")
FIXED_TIME = 1700000000.0


def make_store(handler, requests=None):
    def recording_handler(request: httpx.Request) -> httpx.Response:
        if requests is not None:
            requests.append(request)
        return handler(request)

    return CloudinaryImageStore(
        CREDENTIALS,
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(recording_handler)),
        clock=lambda: FIXED_TIME,
    )


def form_fields(request: httpx.Request) -> dict:
    return {key: values[0] for key, values in parse_qs(request.content.decode()).items()}


def test_signature_uses_sorted_parameters():
    expected = hashlib.sha1(b"folder=noty-app&timestamp=1700000000api-secret").hexdigest()

    assert (
        CloudinaryImageStore.sign(
            {"timestamp": "1700000000", "folder": "noty-app"}, "api-secret"
        )
        == expected
    )


def test_missing_configuration_lists_unset_credentials():
    store = CloudinaryImageStore(ImageStoreCredentials("demo", "", ""))

    assert store.missing_configuration() == [
        "CLOUDINARY_API_KEY",
        "CLOUDINARY_API_SECRET",
    ]
    assert make_store(lambda request: httpx.Response(200)).missing_configuration() == []


@pytest.mark.anyio
async def test_upload_sends_signed_data_uri():
    requests = []
    store = make_store(
        lambda request: httpx.Response(
            200,
            json={
                "secure_url": "https://res.cloudinary.com/demo/image/upload/v1/noty-app/a.png",
                "public_id": "noty-app/a",
            },
        ),
        requests,
    )

    stored = await store.upload_image(ImageUpload("a.png", "image/png", b"png-bytes"))

    assert stored.url == "https://res.cloudinary.com/demo/image/upload/v1/noty-app/a.png"
    assert stored.public_id == "noty-app/a"

    request = requests[0]
    fields = form_fields(request)
    assert str(request.url) == "https://api.cloudinary.com/v1_1/demo/image/upload"
    assert fields["api_key"] == "api-key"
    assert fields["timestamp"] == "1700000000"
    assert fields["folder"] == "noty-app"
    assert fields["file"].startswith("data:image/png;base64,")
    assert fields["signature"] == hashlib.sha1(
        b"folder=noty-app&timestamp=1700000000api-secret"
    ).hexdigest()


@pytest.mark.anyio
async def test_upload_reports_provider_message():
    store = make_store(
        lambda request: httpx.Response(
            401, json={"error": {"message": "Invalid Signature"}}
        )
    )

    with pytest.raises(ImageStoreRejectedError) as exc_info:
        await store.upload_image(ImageUpload("a.png", "image/png", b"png-bytes"))

    assert str(exc_info.value) == "Invalid Signature"
    assert exc_info.value.status_code == 401


@pytest.mark.anyio
async def test_upload_falls_back_to_status_text():
    store = make_store(lambda request: httpx.Response(500, text="<html>oops</html>"))

    with pytest.raises(ImageStoreRejectedError) as exc_info:
        await store.upload_image(ImageUpload("a.png", "image/png", b"png-bytes"))

    assert str(exc_info.value) == "Cloudinary upload failed: 500 Internal Server Error"


@pytest.mark.anyio
async def test_upload_without_secure_url():
    store = make_store(lambda request: httpx.Response(200, json={"public_id": "x"}))

    with pytest.raises(ImageStoreNoURLError):
        await store.upload_image(ImageUpload("a.png", "image/png", b"png-bytes"))


@pytest.mark.anyio
async def test_delete_returns_provider_result():
    requests = []
    store = make_store(
        lambda request: httpx.Response(200, json={"result": "not found"}), requests
    )

    result = await store.delete_image("noty-app/a")

    fields = form_fields(requests[0])
    assert result == "not found"
    assert str(requests[0].url) == "https://api.cloudinary.com/v1_1/demo/image/destroy"
    assert fields["public_id"] == "noty-app/a"
    assert fields["signature"] == hashlib.sha1(
        b"public_id=noty-app/a&timestamp=1700000000api-secret"
    ).hexdigest()
