"""Upload relay service forwarding meal photos to the analysis webhook."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime

from foodlog.adapters.webhook_client import WebhookClient
from foodlog.domain.food import AnalyzeResult
from foodlog.domain.uploads import ImageUpload, format_file_size
from foodlog.services.normalizer import normalize_webhook_response

MAX_UPLOAD_BYTES = 10 * 1024 * 1024
ALLOWED_IMAGE_TYPES = frozenset({"image/jpeg", "image/png", "image/webp"})

_logger = logging.getLogger(__name__)


class UploadValidationError(ValueError):
    """Raised when an uploaded file is rejected before relaying."""


@dataclass(frozen=True)
class RelayOutcome:
    """Normalized analysis together with the upstream response."""

    result: AnalyzeResult
    upstream_status: int
    upstream_payload: object


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class UploadRelayService:
    """Service that validates uploads and relays them to the webhook."""

    client: WebhookClient
    max_upload_bytes: int = MAX_UPLOAD_BYTES
    allowed_types: frozenset[str] = ALLOWED_IMAGE_TYPES
    clock: Callable[[], datetime] = field(default=_utcnow)

    @property
    def webhook_url(self) -> str:
        return self.client.url

    def validate(self, upload: ImageUpload) -> None:
        """Reject unsupported types and oversized files."""
        if upload.content_type not in self.allowed_types:
            _logger.info("Rejected upload type: %s", upload.content_type)
            raise UploadValidationError(
                "지원하지 않는 파일 형식입니다. (JPEG, PNG, WebP만 지원)"
            )
        if upload.size > self.max_upload_bytes:
            _logger.info("Rejected upload size: %s", format_file_size(upload.size))
            raise UploadValidationError(
                f"파일 크기가 {format_file_size(self.max_upload_bytes)}를 초과합니다."
            )

    async def analyze(self, upload: ImageUpload) -> RelayOutcome:
        """Validate, relay and normalize a single upload."""
        self.validate(upload)
        _logger.info(
            "Relaying upload to webhook: filename=%s size=%s type=%s",
            upload.filename,
            format_file_size(upload.size),
            upload.content_type,
        )
        reply = await self.client.send_image(upload, self.clock())
        result = normalize_webhook_response(reply.payload)
        if not result.success:
            _logger.warning(
                "Webhook response rejected: code=%s message=%s",
                result.code,
                result.message,
            )
        return RelayOutcome(
            result=result,
            upstream_status=reply.status_code,
            upstream_payload=reply.payload,
        )
