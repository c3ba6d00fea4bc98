"""Analysis webhook client."""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

import httpx

from foodlog.domain.uploads import ImageUpload


class WebhookRelayError(RuntimeError):
    """Raised when the webhook answers with a non-2xx status."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"Webhook request failed: {status_code} - {body}")
        self.status_code = status_code
        self.body = body


@dataclass(frozen=True)
class WebhookReply:
    """Successful webhook response."""

    status_code: int
    payload: object


class WebhookClient(Protocol):
    """Interface for sending images to the analysis webhook."""

    url: str

    async def send_image(
        self, upload: ImageUpload, timestamp: datetime
    ) -> WebhookReply:
        """Send an image with its metadata and return the parsed reply."""


@dataclass
class HttpxWebhookClient(WebhookClient):
    """HTTPX-backed webhook client."""

    url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, url: str) -> "HttpxWebhookClient":
        """Create a webhook client with a managed httpx session."""
        return cls(url=url, http_client=httpx.AsyncClient())

    async def send_image(
        self, upload: ImageUpload, timestamp: datetime
    ) -> WebhookReply:
        """POST the image as multipart form data."""
        response = await self.http_client.post(
            self.url,
            data={
                "timestamp": format_timestamp(timestamp),
                "filename": upload.filename,
                "size": str(upload.size),
                "type": upload.content_type,
            },
            files={
                "image": (upload.filename, upload.content, upload.content_type),
            },
        )
        if not response.is_success:
            raise WebhookRelayError(response.status_code, response.text)
        return WebhookReply(status_code=response.status_code, payload=response.json())

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


def format_timestamp(timestamp: datetime) -> str:
    """Format a UTC timestamp as ISO-8601 with millisecond precision."""
    return timestamp.isoformat(timespec="milliseconds").replace("+00:00", "Z")
