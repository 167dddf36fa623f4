"""Tests for the assembled application: routes, handlers and middleware."""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from passroom.api.v1.routers.channel import get_channel_service
from passroom.domain.live.channel.channel_domain import ChannelService
from passroom.main import app, build_granian_kwargs


@pytest.fixture
def mock_channel_service() -> AsyncMock:
    return AsyncMock(spec=ChannelService)


@pytest.fixture
def client(mock_channel_service: AsyncMock):
    app.dependency_overrides[get_channel_service] = lambda: mock_channel_service
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestApp:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["success"] is True
        assert response.json()["results"] == "OK"

    def test_routes_are_mounted_under_api_v1(self):
        paths = set(app.openapi()["paths"])

        assert {
            "/api/v1/channel/create_channel",
            "/api/v1/channel/join_channel",
            "/api/v1/channel/share",
            "/api/v1/recording/start_recording",
            "/api/v1/recording/stop_recording",
            "/api/v1/user/get_user",
            "/api/v1/user/update_user_name",
            "/api/v1/user/logout_session",
            "/api/v1/user/get_sessions",
        } <= paths

    def test_validation_error_envelope(self, client, mock_channel_service):
        response = client.post("/api/v1/channel/create_channel", json={})

        assert response.status_code == 422
        data = response.json()
        assert data["success"] is False
        assert data["errcode"] == "E_INVALID_PARAMS"
        mock_channel_service.create_channel.assert_not_called()

    def test_unhandled_exception_is_internal_error(self, client, mock_channel_service):
        mock_channel_service.share.side_effect = RuntimeError("database exploded")

        response = client.get("/api/v1/channel/share", params={"passphrase": "p"})

        assert response.status_code == 500
        data = response.json()
        assert data["errcode"] == "E_INTERNAL_ERROR"
        assert "database exploded" not in data["errmesg"]

    def test_granian_kwargs(self):
        kwargs = build_granian_kwargs()

        assert kwargs["interface"] == "asgi"
        assert isinstance(kwargs["port"], int)
