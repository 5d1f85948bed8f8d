"""Handler for GET /api/search.

Receives AppState, delegates to the search resolver, and returns a
JSON-ready list. No Starlette imports — server.py handles the HTTP wiring.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from jumpscared.errors import ErrorCode, JumpScaredError
from jumpscared.models.api import SearchInput

if TYPE_CHECKING:
    from jumpscared.state import AppState


async def handle(query: str | None, state: AppState) -> list[dict]:
    """Handle a search request."""
    log = structlog.get_logger().bind(handler="search", query=query)
    log.info("handler_called")

    # Validate before any network call
    try:
        validated = SearchInput(query=query or "")
    except ValueError as exc:
        raise JumpScaredError(
            code=ErrorCode.INVALID_INPUT,
            message=str(exc),
            suggestion="Provide a movie title of at least 2 characters in the q parameter.",
        ) from exc

    results = await state.search_resolver.search(validated.query)
    return [result.model_dump(mode="json") for result in results]
