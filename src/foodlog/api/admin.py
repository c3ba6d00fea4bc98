"""Admin API endpoints with simple token auth."""

from __future__ import annotations

import base64
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status
from fastapi.responses import JSONResponse

from foodlog.api.uploads import relay_upload
from foodlog.domain.uploads import ImageUpload

if TYPE_CHECKING:
    from foodlog.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])

# 1x1 transparent PNG used to exercise the webhook end to end.
_SAMPLE_PNG = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChAI9jU77lQ"
    "AAAABJRU5ErkJggg=="
)


def _get_admin_token(request: Request) -> str | None:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str | None = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.post("/webhook-test", dependencies=[Depends(require_admin)])
async def webhook_test(request: Request) -> JSONResponse:
    """Relay a tiny sample image to check the webhook round trip."""
    container: AppContainer = request.app.state.container
    millis = int(datetime.now(tz=UTC).timestamp() * 1000)
    upload = ImageUpload(
        filename=f"debug-test-{millis}.png",
        content_type="image/png",
        content=_SAMPLE_PNG,
    )
    return await relay_upload(container, upload)
