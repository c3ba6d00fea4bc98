"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import datetime

import pytest

from foodlog.adapters.webhook_client import WebhookClient, WebhookReply
from foodlog.config import Settings
from foodlog.containers import AppContainer
from foodlog.domain.uploads import ImageUpload
from foodlog.services.upload import UploadRelayService


@dataclass
class FakeWebhookClient(WebhookClient):
    """Fake webhook client that records uploads and returns a fixed reply."""

    url: str = "https://hooks.example.test/analyze"
    status_code: int = 200
    payload: object = field(
        default_factory=lambda: {
            "items": [
                {
                    "name": "김치볶음밥",
                    "confidence": 0.95,
                    "quantity": "1 그릇 (300g)",
                    "calories": 520,
                    "nutrients": {
                        "carbohydrates": 78.2,
                        "protein": 12.5,
                        "fat": 15.8,
                        "sugars": 4.2,
                        "sodium": 1200,
                    },
                }
            ],
            "meal_type": "점심",
        }
    )
    error: Exception | None = None
    calls: list[tuple[ImageUpload, datetime]] = field(default_factory=list)

    async def send_image(
        self, upload: ImageUpload, timestamp: datetime
    ) -> WebhookReply:
        self.calls.append((upload, timestamp))
        if self.error is not None:
            raise self.error
        return WebhookReply(status_code=self.status_code, payload=self.payload)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        webhook_url="https://hooks.example.test/analyze",
        admin_token="admin-token",
        environment="test",
    )


@pytest.fixture
def webhook_client() -> FakeWebhookClient:
    return FakeWebhookClient()


@pytest.fixture
def container(settings: Settings, webhook_client: FakeWebhookClient) -> AppContainer:
    upload_service = UploadRelayService(
        client=webhook_client,
        max_upload_bytes=settings.max_upload_bytes,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        webhook_client=webhook_client,
        upload_service=upload_service,
        close_resources=close_resources,
    )
