"""HTTP API tests."""

import json
import logging
from collections.abc import AsyncGenerator
from uuid import uuid4

import httpx
import pytest
from fastapi import FastAPI

from conftest import DISCORD_URL, DISCORD_WEBHOOK, TEST_SECRET, RecordingTransport

from healarr_notify.config import Settings
from healarr_notify.exceptions import DeliveryError
from healarr_notify.main import create_app
from healarr_notify.models.domain.event import get_notifiable_event_types
from healarr_notify.services.notification_service import TEST_MESSAGE

DISCORD_CONFIG = {
    "name": "Discord",
    "provider_type": "discord",
    "config": {"webhook_url": DISCORD_WEBHOOK},
    "events": ["ScanStarted", "CorruptionDetected"],
}


@pytest.fixture
def api_settings() -> Settings:
    return Settings(
        database_url="sqlite+aiosqlite://",
        database_create_tables=True,
        healarr_encryption_key=TEST_SECRET,
        store_timeout_seconds=5,
    )


@pytest.fixture
def api_transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def app(api_settings, api_transport) -> FastAPI:
    return create_app(api_settings, transport=api_transport)


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Client for an app whose lifespan is running."""
    async with app.router.lifespan_context(app):
        async with httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app), base_url="http://test"
        ) as client:
            yield client


class TestHealth:
    async def test_health(self, client: httpx.AsyncClient) -> None:
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestStartup:
    """Test application startup."""

    @pytest.mark.parametrize("key,warned", [("", True), (TEST_SECRET, False)])
    async def test_unencrypted_storage_warning(self, caplog, key: str, warned: bool) -> None:
        settings = Settings(
            database_url="sqlite+aiosqlite://",
            database_create_tables=True,
            healarr_encryption_key=key,
        )
        app = create_app(settings, transport=RecordingTransport())

        with caplog.at_level(logging.WARNING, logger="healarr_notify.main"):
            async with app.router.lifespan_context(app):
                pass

        assert ("HEALARR_ENCRYPTION_KEY not set" in caplog.text) is warned


class TestNotificationCrud:
    """Test configuration endpoints."""

    async def test_create_and_get(self, client: httpx.AsyncClient) -> None:
        response = await client.post("/api/notifications", json=DISCORD_CONFIG)

        assert response.status_code == 201
        body = response.json()
        assert body["name"] == "Discord"
        assert body["provider_label"] == "Discord"
        assert body["config"] == {"webhook_url": DISCORD_WEBHOOK}
        assert body["events"] == ["CorruptionDetected", "ScanStarted"]
        assert body["enabled"] is True
        assert body["throttle_seconds"] == 5

        response = await client.get(f"/api/notifications/{body['id']}")
        assert response.status_code == 200
        assert response.json()["id"] == body["id"]

    async def test_create_accepts_json_string_config(self, client: httpx.AsyncClient) -> None:
        payload = dict(DISCORD_CONFIG, config=json.dumps({"webhook_url": DISCORD_WEBHOOK}))

        response = await client.post("/api/notifications", json=payload)

        assert response.status_code == 201
        assert response.json()["config"] == {"webhook_url": DISCORD_WEBHOOK}

    async def test_list(self, client: httpx.AsyncClient) -> None:
        await client.post("/api/notifications", json=dict(DISCORD_CONFIG, name="B"))
        await client.post("/api/notifications", json=dict(DISCORD_CONFIG, name="A"))

        response = await client.get("/api/notifications")

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 2
        assert [item["name"] for item in body["items"]] == ["A", "B"]

    async def test_invalid_provider_config_returns_400(self, client: httpx.AsyncClient) -> None:
        payload = dict(DISCORD_CONFIG, config={"webhook_url": "https://example.com"})

        response = await client.post("/api/notifications", json=payload)

        assert response.status_code == 400
        assert response.json() == {"detail": "invalid Discord webhook URL format"}

    @pytest.mark.parametrize(
        "overrides",
        [
            {"provider_type": "carrier-pigeon"},
            {"name": ""},
            {"throttle_seconds": -1},
            {"config": "not json"},
        ],
    )
    async def test_invalid_request_returns_422(
        self, client: httpx.AsyncClient, overrides: dict
    ) -> None:
        response = await client.post("/api/notifications", json=dict(DISCORD_CONFIG, **overrides))
        assert response.status_code == 422

    async def test_update(self, client: httpx.AsyncClient) -> None:
        created = (await client.post("/api/notifications", json=DISCORD_CONFIG)).json()

        response = await client.put(
            f"/api/notifications/{created['id']}",
            json={"name": "Renamed", "throttle_seconds": 60},
        )

        assert response.status_code == 200
        assert response.json()["name"] == "Renamed"
        assert response.json()["throttle_seconds"] == 60
        assert response.json()["config"] == {"webhook_url": DISCORD_WEBHOOK}

    async def test_delete(self, client: httpx.AsyncClient) -> None:
        created = (await client.post("/api/notifications", json=DISCORD_CONFIG)).json()

        response = await client.delete(f"/api/notifications/{created['id']}")
        assert response.status_code == 204

        response = await client.get(f"/api/notifications/{created['id']}")
        assert response.status_code == 404
        assert response.json() == {"detail": "Notification not found"}

    async def test_missing_config_returns_404(self, client: httpx.AsyncClient) -> None:
        missing = uuid4()
        assert (await client.get(f"/api/notifications/{missing}")).status_code == 404
        assert (await client.put(f"/api/notifications/{missing}", json={})).status_code == 404
        assert (await client.delete(f"/api/notifications/{missing}")).status_code == 404


class TestEventsEndpoint:
    async def test_event_groups(self, client: httpx.AsyncClient) -> None:
        response = await client.get("/api/notifications/events")

        assert response.status_code == 200
        groups = response.json()["groups"]
        names = [event["name"] for group in groups for event in group["events"]]
        assert names == get_notifiable_event_types()
        assert groups[0]["name"] == "Scan Events"


class TestTestNotification:
    """Test notification endpoints."""

    async def test_unsaved_config(self, client: httpx.AsyncClient, api_transport) -> None:
        response = await client.post(
            "/api/notifications/test",
            json={"provider_type": "discord", "config": {"webhook_url": DISCORD_WEBHOOK}},
        )

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Test notification sent"}
        assert api_transport.sent == [(DISCORD_URL, TEST_MESSAGE)]

    async def test_saved_config(self, client: httpx.AsyncClient, api_transport) -> None:
        created = (await client.post("/api/notifications", json=DISCORD_CONFIG)).json()

        response = await client.post(f"/api/notifications/{created['id']}/test")

        assert response.json()["success"] is True
        assert api_transport.sent == [(DISCORD_URL, TEST_MESSAGE)]

        log = await client.get(f"/api/notifications/{created['id']}/log")
        assert log.json() == []

    async def test_delivery_failure_reported(self, client: httpx.AsyncClient, api_transport) -> None:
        api_transport.error = DeliveryError("failed to send: 401 Unauthorized")

        response = await client.post(
            "/api/notifications/test",
            json={"provider_type": "discord", "config": {"webhook_url": DISCORD_WEBHOOK}},
        )

        assert response.status_code == 200
        assert response.json() == {"success": False, "message": "failed to send: 401 Unauthorized"}

    async def test_invalid_config_returns_400(self, client: httpx.AsyncClient) -> None:
        response = await client.post(
            "/api/notifications/test",
            json={"provider_type": "slack", "config": {"webhook_url": "https://hooks.slack.com/x"}},
        )
        assert response.status_code == 400


class TestDeliveryLog:
    """Test delivery log endpoints."""

    async def test_log_after_dispatch(self, app: FastAPI, client: httpx.AsyncClient) -> None:
        created = (await client.post("/api/notifications", json=DISCORD_CONFIG)).json()
        service = app.state.notification_service
        await service.cache.reload()

        service.handle_event("ScanStarted", {"path": "/tv"})
        await service.wait_idle()

        response = await client.get(f"/api/notifications/{created['id']}/log")
        assert response.status_code == 200
        entries = response.json()
        assert len(entries) == 1
        assert entries[0]["status"] == "sent"
        assert entries[0]["message"] == "🔍 Scan started: /tv"

        response = await client.get("/api/notifications/log", params={"limit": 10})
        assert len(response.json()) == 1

    async def test_invalid_limit_returns_422(self, client: httpx.AsyncClient) -> None:
        response = await client.get("/api/notifications/log", params={"limit": -1})
        assert response.status_code == 422
