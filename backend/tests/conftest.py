"""
Relay Hub Backend: Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   The app under test gets a known Settings instance and a real
       httpx.AsyncClient through FastAPI's dependency_overrides. Upstream
       APIs are stubbed at the transport level with respx (`respx_mock`).

Fixture Hierarchy (all function-scoped):
    ├── test_settings: Settings with fake credentials and default URLs
    ├── http_client: httpx.AsyncClient used for outbound calls
    ├── app: Fresh FastAPI app with both dependencies overridden
    ├── test_client: HTTPX AsyncClient talking to the app via ASGITransport
    └── sample_image_bytes: Fake image content for upload tests
"""

import os

# Override settings for testing BEFORE any app imports
os.environ["FACE_API_KEY"] = "env-face-key"
os.environ["FACE_API_SECRET"] = "env-face-secret"
os.environ["WEATHER_API_KEY"] = "env-weather-key"
os.environ["LLAMA_API_KEY"] = "env-chat-key"
os.environ["LOG_LEVEL"] = "WARNING"

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.config import Settings, get_settings
from app.main import create_app
from app.services.http_client import get_http_client

@pytest.fixture
def test_settings() -> Settings:
    """
    Settings with fake credentials and the default upstream URLs.

    Upstream URLs are pinned to their field defaults so a developer's
    FACE_API_URL etc. cannot redirect the stubs.
    """
    return Settings(
        _env_file=None,
        face_api_key="test-face-key",
        face_api_secret="test-face-secret",
        weather_api_key="test-weather-key",
        chat_api_key="test-chat-key",
        face_api_url=Settings.model_fields["face_api_url"].default,
        weather_api_url=Settings.model_fields["weather_api_url"].default,
        chat_api_url=Settings.model_fields["chat_api_url"].default,
    )


@pytest_asyncio.fixture
async def http_client():
    """Outbound client; respx intercepts its transport when `respx_mock` is active."""
    async with httpx.AsyncClient() as client:
        yield client


@pytest.fixture
def app(test_settings, http_client):
    """
    Fresh app per test.

    ASGITransport does not run the lifespan, so the shared client that the
    lifespan would create is supplied through dependency_overrides instead.
    """
    application = create_app()
    application.dependency_overrides[get_settings] = lambda: test_settings
    application.dependency_overrides[get_http_client] = lambda: http_client
    yield application
    application.dependency_overrides.clear()


@pytest_asyncio.fixture
async def test_client(app):
    """
    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def sample_image_bytes():
    """Minimal JPEG: SOI + JFIF header + EOI. Not a real photo."""
    return (
        b'\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00'
        b'\xff\xd9'
    )
