"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from foodlog.adapters.webhook_client import HttpxWebhookClient, WebhookClient
from foodlog.config import Settings
from foodlog.services.upload import UploadRelayService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    webhook_client: WebhookClient
    upload_service: UploadRelayService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    webhook_client = HttpxWebhookClient.create(resolved_settings.webhook_url)
    upload_service = UploadRelayService(
        client=webhook_client,
        max_upload_bytes=resolved_settings.max_upload_bytes,
    )

    async def close_resources() -> None:
        await webhook_client.close()

    return AppContainer(
        settings=resolved_settings,
        webhook_client=webhook_client,
        upload_service=upload_service,
        close_resources=close_resources,
    )
