"""Tests for admin endpoints."""

from fastapi.testclient import TestClient

from foodlog.api.app import create_app
from tests.conftest import FakeWebhookClient


def test_webhook_test_requires_token(
    container, webhook_client: FakeWebhookClient
) -> None:
    client = TestClient(create_app(container))

    response = client.post("/admin/webhook-test")

    assert response.status_code == 401
    assert webhook_client.calls == []


def test_webhook_test_rejects_wrong_token(container) -> None:
    client = TestClient(create_app(container))

    response = client.post("/admin/webhook-test", headers={"X-Admin-Token": "nope"})

    assert response.status_code == 401


def test_webhook_test_disabled_without_configured_token(
    container, webhook_client: FakeWebhookClient
) -> None:
    container.settings.admin_token = None
    client = TestClient(create_app(container))

    response = client.post("/admin/webhook-test", headers={"X-Admin-Token": ""})

    assert response.status_code == 401
    assert webhook_client.calls == []


def test_webhook_test_relays_sample_image(
    container, webhook_client: FakeWebhookClient
) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/admin/webhook-test", headers={"X-Admin-Token": "admin-token"}
    )

    assert response.status_code == 200
    assert response.json()["success"] is True
    [(upload, _)] = webhook_client.calls
    assert upload.content_type == "image/png"
    assert upload.filename.startswith("debug-test-")
    assert upload.content.startswith(b"\x89PNG\r\n\x1a\n")
