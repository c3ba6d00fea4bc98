"""Image upload endpoint relaying photos to the analysis webhook."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile

from foodlog.adapters.webhook_client import WebhookRelayError, format_timestamp
from foodlog.api.models import AnalysisPayload, UploadResponse
from foodlog.domain.uploads import ImageUpload
from foodlog.services.upload import RelayOutcome, UploadValidationError

if TYPE_CHECKING:
    from foodlog.containers import AppContainer

router = APIRouter(tags=["uploads"])

_logger = logging.getLogger(__name__)

MISSING_FILE_MESSAGE = "이미지 파일이 필요합니다."
SUCCESS_MESSAGE = "이미지가 성공적으로 분석되었습니다."
ANALYSIS_FAILED_MESSAGE = "분석 결과를 처리할 수 없습니다."
ANALYSIS_FAILED_DETAILS = "웹훅 응답을 분석하는 중 오류가 발생했습니다."
UPLOAD_FAILED_MESSAGE = "이미지 업로드 중 오류가 발생했습니다."
UNKNOWN_ERROR_DETAILS = "알 수 없는 오류"


@router.post("/api/upload-image")
async def upload_image(request: Request) -> JSONResponse:
    """Validate an uploaded photo and return its nutrition analysis."""
    container: AppContainer = request.app.state.container
    try:
        form = await request.form()
    except Exception:
        _logger.warning("Failed to parse upload form", exc_info=True)
        form = None
    image = form.get("image") if form is not None else None
    if not isinstance(image, UploadFile):
        return _respond(400, UploadResponse(success=False, error=MISSING_FILE_MESSAGE))
    upload = ImageUpload(
        filename=image.filename or "upload",
        content_type=image.content_type or "",
        content=await image.read(),
    )
    return await relay_upload(container, upload)


async def relay_upload(container: AppContainer, upload: ImageUpload) -> JSONResponse:
    """Run an upload through the relay and map the outcome to a response."""
    service = container.upload_service
    try:
        outcome = await service.analyze(upload)
        return _outcome_response(container, upload, outcome)
    except UploadValidationError as exc:
        return _respond(400, UploadResponse(success=False, error=str(exc)))
    except Exception as exc:
        _logger.exception(
            "Image upload failed",
            extra={"upload_filename": upload.filename},
        )
        return _respond(
            500,
            UploadResponse(
                success=False,
                error=UPLOAD_FAILED_MESSAGE,
                details=_format_failure_details(container, exc),
                debug={
                    "webhookUrl": service.webhook_url,
                    "timestamp": format_timestamp(service.clock()),
                },
            ),
        )


def _outcome_response(
    container: AppContainer, upload: ImageUpload, outcome: RelayOutcome
) -> JSONResponse:
    debug: dict[str, object] = {
        "originalFile": upload.metadata(),
        "webhookUrl": container.upload_service.webhook_url,
        "responseStatus": outcome.upstream_status,
    }
    result = outcome.result
    if not result.success:
        debug["webhookResponse"] = outcome.upstream_payload
        return _respond(
            422,
            UploadResponse(
                success=False,
                error=result.message or ANALYSIS_FAILED_MESSAGE,
                details=ANALYSIS_FAILED_DETAILS,
                debug=debug,
            ),
        )
    return _respond(
        200,
        UploadResponse(
            success=True,
            message=SUCCESS_MESSAGE,
            data=AnalysisPayload.from_result(result),
            debug=debug,
        ),
    )


def _respond(status_code: int, body: UploadResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body.to_content())


def _format_failure_details(container: AppContainer, exc: Exception) -> str:
    """Describe a failure without exposing internals outside local runs."""
    if isinstance(exc, WebhookRelayError):
        return str(exc)
    if container.settings.environment == "local":
        return f"{UNKNOWN_ERROR_DETAILS} (debug: {type(exc).__name__}: {exc})"
    return UNKNOWN_ERROR_DETAILS
