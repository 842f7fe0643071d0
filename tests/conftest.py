"""Shared pytest fixtures for WebsiteBio tests."""

import base64
import io
import os
import shutil
import tempfile
from pathlib import Path
from typing import Callable, Generator

# Keep the import-time global config away from the working tree.
_SESSION_DIR = Path(tempfile.mkdtemp(prefix="websitebio-tests-"))
os.environ.setdefault("WEBSITEBIO_DATA_DIR", str(_SESSION_DIR / "data"))
os.environ.setdefault("WEBSITEBIO_DOWNLOADS_DIR", str(_SESSION_DIR / "downloads"))

import httpx  # noqa: E402
import pytest  # noqa: E402
from PIL import Image  # noqa: E402

from websitebio.core.config import WebsiteBioConfig  # noqa: E402
from websitebio.core.image_client import ImageApiClient  # noqa: E402
from websitebio.core.local_store import LocalStore  # noqa: E402
from websitebio.core.models import Settings  # noqa: E402
from websitebio.core.persistence import PersistenceLayer  # noqa: E402
from websitebio.ui.models import UIState  # noqa: E402
from websitebio.ui.orchestrator import GenerationOrchestrator  # noqa: E402

API_URL = "https://images.test/v1/images/generations"


def pytest_sessionfinish(session, exitstatus):
    shutil.rmtree(_SESSION_DIR, ignore_errors=True)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory

    Cleanup:
        Directory is removed after test completes
    """
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def test_config(temp_dir: Path) -> WebsiteBioConfig:
    """Create a test configuration with temporary directories.

    Args:
        temp_dir: Temporary directory from fixture

    Returns:
        WebsiteBioConfig instance for testing
    """
    return WebsiteBioConfig(
        _env_file=None,
        api_key="sk-test",
        api_endpoint=API_URL,
        data_dir=str(temp_dir / "data"),
        downloads_dir=str(temp_dir / "downloads"),
    )


@pytest.fixture
def local_store(temp_dir: Path) -> LocalStore:
    """LocalStore backed by a file in the temporary directory."""
    return LocalStore(temp_dir / "data" / "local_storage.json")


@pytest.fixture
def persistence(local_store: LocalStore) -> PersistenceLayer:
    """PersistenceLayer with a deterministic, ever-increasing clock."""
    ticks = iter(range(1_700_000_000, 1_800_000_000))
    return PersistenceLayer(local_store, clock=lambda: float(next(ticks)))


@pytest.fixture
def png_base64() -> str:
    """A tiny valid PNG encoded as base64."""
    buffer = io.BytesIO()
    Image.new("RGB", (2, 2), color=(200, 30, 30)).save(buffer, format="PNG")
    return base64.b64encode(buffer.getvalue()).decode("ascii")


class RecordingHandler:
    """httpx.MockTransport handler that records requests and replays a response."""

    def __init__(self, responder: Callable[[httpx.Request], httpx.Response]):
        self.responder = responder
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)


@pytest.fixture
def make_client() -> Callable[..., tuple[ImageApiClient, RecordingHandler]]:
    """Factory building an ImageApiClient over a recording mock transport.

    Usage::

        client, handler = make_client(lambda req: httpx.Response(200, json={...}))
    """

    def factory(responder, api_key: str | None = "sk-test", endpoint: str = API_URL):
        handler = RecordingHandler(responder)
        client = ImageApiClient(endpoint, api_key=api_key, transport=httpx.MockTransport(handler))
        return client, handler

    return factory


@pytest.fixture
def default_settings() -> Settings:
    return Settings(model="nano-banana", size="512x512", quantity=2, seed=None)


@pytest.fixture
def make_orchestrator(persistence: PersistenceLayer, test_config: WebsiteBioConfig):
    """Factory building a GenerationOrchestrator around any client."""

    def factory(client) -> GenerationOrchestrator:
        return GenerationOrchestrator(
            client=client,
            persistence=persistence,
            models=test_config.available_models,
            sizes=test_config.available_sizes,
            max_images=test_config.max_images,
            clock=lambda: 1_700_000_000.5,
        )

    return factory


@pytest.fixture
def ui_state() -> UIState:
    """Create empty UI state for testing."""
    return UIState()
