"""
Noteful Backend — Health Endpoint & Settings Tests
====================================================

What:  /health status mapping, the 500 fallback body, request ids and Settings parsing.
"""

import logging
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError

from noteful.config import Settings
from noteful.database import engine_options, get_db_session
from noteful.dependencies import get_note_service
from noteful.middleware.request_id import (
    RequestIDLogFilter,
    request_id_var,
    resolve_request_id,
)


class TestHealth:

    @pytest.mark.asyncio
    async def test_healthy(self, test_client):
        response = await test_client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        assert "uptimeSeconds" in body

    @pytest.mark.asyncio
    async def test_database_down_is_503(self, test_client, mock_db_session):
        from noteful.main import app

        mock_db_session.execute.side_effect = OperationalError("SELECT 1", {}, Exception("refused"))

        async def broken_session():
            yield mock_db_session

        app.dependency_overrides[get_db_session] = broken_session
        response = await test_client.get("/health")
        assert response.status_code == 503
        assert response.json()["database"] == "disconnected"


class TestUnexpectedErrors:

    @pytest.mark.asyncio
    async def test_store_failure_is_generic_500(self, mock_db_session):
        """Driver errors reach the client as a 500 without internals."""
        from noteful.main import app

        service = AsyncMock()
        service.list.side_effect = OperationalError("SELECT", {}, Exception("secret dsn"))
        app.dependency_overrides[get_note_service] = lambda: service

        transport = ASGITransport(app=app, raise_app_exceptions=False)
        try:
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                response = await client.get("/api/notes")
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "internal_server_error"
        assert "secret" not in body["message"]

    @pytest.mark.asyncio
    async def test_500_body_carries_request_id(self, mock_db_session):
        from noteful.main import app

        service = AsyncMock()
        service.list.side_effect = OperationalError("SELECT", {}, Exception("down"))
        app.dependency_overrides[get_note_service] = lambda: service

        transport = ASGITransport(app=app, raise_app_exceptions=False)
        try:
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                response = await client.get("/api/notes", headers={"X-Request-ID": "trace-500"})
        finally:
            app.dependency_overrides.clear()

        assert response.json()["request_id"] == "trace-500"


class TestRequestId:

    @pytest.mark.parametrize("value", ["abc12345", "web.trace_01-A", "x" * 64])
    def test_plain_tokens_kept(self, value):
        assert resolve_request_id(value) == value

    @pytest.mark.parametrize("value", [None, "", "two words", "line\nbreak", "x" * 65, "id;rm"])
    def test_unsafe_values_replaced(self, value):
        rid = resolve_request_id(value)
        assert rid != value
        assert len(rid) == 8
        int(rid, 16)

    def test_log_filter_outside_request(self):
        token = request_id_var.set("")
        try:
            record = logging.LogRecord("noteful", logging.INFO, __file__, 1, "msg", None, None)
            assert RequestIDLogFilter().filter(record)
        finally:
            request_id_var.reset(token)
        assert record.request_id == "-"

    def test_log_filter_inside_request(self):
        token = request_id_var.set("abc12345")
        try:
            record = logging.LogRecord("noteful", logging.INFO, __file__, 1, "msg", None, None)
            RequestIDLogFilter().filter(record)
        finally:
            request_id_var.reset(token)
        assert record.request_id == "abc12345"


class TestSettings:

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("API_PREFIX", raising=False)
        s = Settings(_env_file=None, database_url="sqlite+aiosqlite://")
        assert s.cascade_tag_delete is True
        assert s.cascade_folder_delete is True
        assert s.api_prefix == "/api"
        assert s.backend_port == 8080

    @pytest.mark.parametrize("raw, expected", [("api/", "/api"), ("/v1/", "/v1"), ("", "")])
    def test_api_prefix_normalized(self, raw, expected):
        assert Settings(_env_file=None, api_prefix=raw).api_prefix == expected

    def test_cascades_from_environment(self, monkeypatch):
        monkeypatch.setenv("CASCADE_TAG_DELETE", "false")
        monkeypatch.setenv("CASCADE_FOLDER_DELETE", "0")
        s = Settings(_env_file=None)
        assert s.cascade_tag_delete is False
        assert s.cascade_folder_delete is False

    def test_invalid_log_level_rejected(self):
        with pytest.raises(ValueError):
            Settings(_env_file=None, log_level="LOUD")

    def test_cors_origins_list(self):
        s = Settings(_env_file=None, cors_origins="http://a.test, http://b.test")
        assert s.cors_origins_list == ["http://a.test", "http://b.test"]

    def test_sync_driver_url_fails_validation(self):
        s = Settings(_env_file=None, database_url="postgresql://u:p@localhost/noteful")
        with pytest.raises(ValueError, match="no async driver"):
            s.validate_required_for_production()

    def test_async_driver_url_passes(self):
        Settings(_env_file=None, database_url="sqlite+aiosqlite://").validate_required_for_production()


class TestEngineOptions:

    def test_in_memory_sqlite_shares_one_connection(self):
        options = engine_options("sqlite+aiosqlite://")
        assert options["poolclass"].__name__ == "StaticPool"

    def test_postgres_gets_pool_settings(self):
        options = engine_options("postgresql+asyncpg://u:p@localhost/noteful")
        assert "pool_size" in options
        assert options["pool_pre_ping"] is True
