import sys
import threading
from pathlib import Path

import pytest
import pytest_asyncio
from botocore.exceptions import ClientError
from httpx import ASGITransport, AsyncClient

# Ensure project root is on sys.path
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from upload_gateway.core.config import get_settings
from upload_gateway.main import create_app
from upload_gateway.services.storage import StorageService

BOUNDARY = "gatewaytestboundary"

TEST_ENV = {
    "REGION": "us-east-1",
    "ENDPOINT": "http://localhost:9000",
    "AWS3_CRED_KEY_ID": "test-key-id",
    "AWS3_CRED_KEY_SECRET": "test-key-secret",
    "BUCKET_NAME": "test-bucket",
}


class FakeS3Client:
    """Records put_object calls and keeps the last body stored under each key."""

    def __init__(self) -> None:
        self.calls: list[dict] = []
        self.objects: dict[tuple[str, str], bytes] = {}
        self.fail = False
        self.error: Exception | None = None
        self._lock = threading.Lock()

    def put_object(self, **kwargs) -> dict:
        if self.error is not None:
            raise self.error
        if self.fail:
            raise ClientError(
                {"Error": {"Code": "InternalError", "Message": "backend unavailable"}},
                "PutObject",
            )
        with self._lock:
            self.calls.append(kwargs)
            self.objects[(kwargs["Bucket"], kwargs["Key"])] = kwargs["Body"]
        return {}


def multipart_body(*parts: tuple[str, str | None, str | None, bytes]) -> bytes:
    """Encode (name, filename, content_type, data) parts by hand.

    Lets tests omit the filename or content type, which httpx always fills in.
    """
    chunks = []
    for name, filename, content_type, data in parts:
        disposition = f'Content-Disposition: form-data; name="{name}"'
        if filename is not None:
            disposition += f'; filename="{filename}"'
        headers = [disposition]
        if content_type is not None:
            headers.append(f"Content-Type: {content_type}")
        chunks.append(
            f"--{BOUNDARY}\r\n".encode() + "\r\n".join(headers).encode() + b"\r\n\r\n" + data + b"\r\n"
        )
    chunks.append(f"--{BOUNDARY}--\r\n".encode())
    return b"".join(chunks)


MULTIPART_HEADERS = {"Content-Type": f"multipart/form-data; boundary={BOUNDARY}"}


@pytest.fixture(autouse=True)
def configure_environment(monkeypatch, tmp_path):
    # Keep a developer's .env out of the tests.
    monkeypatch.chdir(tmp_path)
    for name, value in TEST_ENV.items():
        monkeypatch.setenv(name, value)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def s3_client() -> FakeS3Client:
    return FakeS3Client()


@pytest.fixture
def app_instance(s3_client):
    return create_app(StorageService(s3_client))


@pytest_asyncio.fixture
async def client(app_instance):
    transport = ASGITransport(app=app_instance)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
