"""Handler for GET /api/timestamps.

Validates the page URL (a hard gate: nothing is fetched for a URL that fails
validation), resolves it through the content resolver, and returns a
JSON-ready dict. No Starlette imports — server.py handles the HTTP wiring.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from jumpscared.errors import ErrorCode, JumpScaredError
from jumpscared.models.api import TimestampsInput, TimestampsOutput
from jumpscared.urls import validate_page_url

if TYPE_CHECKING:
    from jumpscared.state import AppState


async def handle(url: str | None, state: AppState) -> dict:
    """Handle a timestamps request."""
    log = structlog.get_logger().bind(handler="timestamps", url=url)
    log.info("handler_called")

    try:
        validated = TimestampsInput(url=url or "")
    except ValueError as exc:
        raise JumpScaredError(
            code=ErrorCode.INVALID_INPUT,
            message=str(exc),
            suggestion="Provide a jump-scare page URL in the url parameter.",
        ) from exc

    page_url = validate_page_url(validated.url, state.settings.site)
    page = await state.content_resolver.resolve(page_url)
    log.info("resolve_complete", source=page.source, timestamp_count=len(page.timestamps))

    output = TimestampsOutput(url=page_url.url, title=page.title, timestamps=page.timestamps)
    return output.model_dump(mode="json")
