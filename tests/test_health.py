"""Tests for the service banner, health router and error handler."""
from guardian import config
from guardian.model_client import ModelClientError
from guardian.main import app
from guardian.services import contacts


class TestHealthEndpoints:
    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["message"] == "Guardian brain is running"

    def test_ping(self, client):
        response = client.get("/health/ping")
        assert response.json()["status"] == "ok"

    def test_system(self, client):
        data = client.get("/health/system").json()
        assert data["status"] == "ok"
        assert "cpu_percent" in data
        assert data["memory"]["total"] > 0

    def test_database_ok(self, client):
        data = client.get("/health/database").json()
        assert data["status"] == "ok"

    def test_database_missing_file(self, client, monkeypatch, tmp_path):
        monkeypatch.setattr(contacts, "DB_PATH", str(tmp_path / "missing.db"))
        data = client.get("/health/database").json()
        assert data["status"] == "error"

    def test_providers_never_expose_keys(self, client, monkeypatch):
        monkeypatch.setattr(config, "GEMINI_API_KEY", "secret-gemini")
        monkeypatch.setattr(config, "ELEVENLABS_API_KEY", "")
        response = client.get("/health/providers")
        data = response.json()
        assert data["gemini"]["configured"] is True
        assert data["elevenlabs"]["configured"] is False
        assert "secret-gemini" not in response.text


class TestModelErrorHandler:
    def test_uncaught_model_error_becomes_500(self, client):
        @app.get("/_raise_model_error", include_in_schema=False)
        async def _raise():
            raise ModelClientError("provider down")

        try:
            response = client.get("/_raise_model_error")
            assert response.status_code == 500
            assert response.json() == {"error": "Model client error: provider down"}
        finally:
            app.router.routes[:] = [
                r for r in app.router.routes if getattr(r, "path", None) != "/_raise_model_error"
            ]


class TestConfigHelpers:
    def test_placeholder_keys_are_blank(self):
        assert config.key_or_empty("YOUR_ELEVENLABS_API_KEY") == ""
        assert config.key_or_empty("YOUR_GEMINI_API_KEY") == ""
        assert config.key_or_empty("real-key") == "real-key"
