"""
Relay Hub Backend: Application Wiring Tests
==============================================

What:  Tests for the pieces create_app() assembles around the relays:
       health check, request IDs, CORS, static bundle, lifespan.
"""

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from app import __version__
from app.config import Settings, get_settings
from app.main import create_app, lifespan
from app.services.http_client import get_http_client
from app.services.weather_service import get_weather_service


class TestHealthCheck:

    @pytest.mark.asyncio
    async def test_healthy_when_all_credentials_set(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["version"] == __version__
        assert body["upstreams"] == {
            "face": "configured",
            "weather": "configured",
            "chat": "configured",
        }
        assert body["uptime_seconds"] >= 0

    @pytest.mark.asyncio
    async def test_degraded_when_a_credential_is_missing(self, app, test_settings, test_client):
        no_chat = test_settings.model_copy(update={"chat_api_key": ""})
        app.dependency_overrides[get_settings] = lambda: no_chat

        response = await test_client.get("/health")

        body = response.json()
        assert response.status_code == 200
        assert body["status"] == "degraded"
        assert body["upstreams"]["chat"] == "missing_credentials"
        assert body["upstreams"]["face"] == "configured"

    @pytest.mark.asyncio
    async def test_health_does_not_call_upstreams(self, test_client, respx_mock):
        await test_client.get("/health")
        assert not respx_mock.calls

    @pytest.mark.asyncio
    async def test_answers_without_shared_client(self, test_settings):
        application = create_app()
        application.dependency_overrides[get_settings] = lambda: test_settings

        transport = ASGITransport(app=application)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert not hasattr(application.state, "http_client")


class TestRequestID:

    @pytest.mark.asyncio
    async def test_generated_when_absent(self, test_client):
        response = await test_client.get("/health")
        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_client_id_echoed(self, test_client):
        response = await test_client.get("/health", headers={"X-Request-ID": "trace-123"})
        assert response.headers["X-Request-ID"] == "trace-123"

    @pytest.mark.asyncio
    async def test_present_on_error_responses(self, test_client):
        response = await test_client.get("/api/weather")
        assert response.status_code == 400
        assert response.headers["X-Request-ID"]

    @pytest.mark.asyncio
    async def test_present_on_unexpected_500(self, app, test_client):
        class BrokenWeatherService:
            async def current(self, city):
                raise RuntimeError("boom")

        app.dependency_overrides[get_weather_service] = lambda: BrokenWeatherService()

        response = await test_client.get(
            "/api/weather",
            params={"city": "London"},
            headers={"X-Request-ID": "trace-500", "Origin": "http://localhost:5173"},
        )

        assert response.status_code == 500
        assert response.json() == {"error": "server error"}
        assert response.headers["X-Request-ID"] == "trace-500"
        assert response.headers["access-control-allow-origin"] == "*"


class TestCORS:

    @pytest.mark.asyncio
    async def test_preflight_allowed_for_browser_client(self, test_client):
        response = await test_client.options(
            "/api/chat",
            headers={
                "Origin": "http://localhost:5173",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "content-type",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"


class TestStaticBundle:

    @pytest.fixture
    def static_app(self, tmp_path, monkeypatch, test_settings, http_client):
        (tmp_path / "index.html").write_text("<h1>Relay Hub</h1>")
        monkeypatch.setattr(
            "app.main.settings",
            test_settings.model_copy(update={"static_dir": str(tmp_path)}),
        )
        application = create_app()
        application.dependency_overrides[get_settings] = lambda: test_settings
        application.dependency_overrides[get_http_client] = lambda: http_client
        return application

    @pytest.mark.asyncio
    async def test_index_served_at_root(self, static_app):
        transport = ASGITransport(app=static_app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/")

        assert response.status_code == 200
        assert "Relay Hub" in response.text

    @pytest.mark.asyncio
    async def test_api_routes_take_precedence(self, static_app):
        transport = ASGITransport(app=static_app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            health = await client.get("/health")
            weather = await client.get("/api/weather")

        assert health.json()["status"] == "healthy"
        assert weather.json() == {"error": "city required"}

    @pytest.mark.asyncio
    async def test_no_mount_without_directory(self, test_client):
        response = await test_client.get("/")
        assert response.status_code == 404


class TestLifespan:

    @pytest.mark.asyncio
    async def test_creates_and_closes_shared_client(self, monkeypatch):
        monkeypatch.setattr("app.main.settings", Settings(_env_file=None))
        application = create_app()

        async with lifespan(application):
            client = application.state.http_client
            assert isinstance(client, httpx.AsyncClient)
            assert not client.is_closed

        assert client.is_closed
