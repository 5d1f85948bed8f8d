"""Application state container.

AppState is created once at server startup (inside the Starlette lifespan, or
directly by tests) and handed to every request handler. It holds only
immutable settings and stateless collaborators; nothing is cached across
requests.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from jumpscared.content import ContentResolver
from jumpscared.fetcher import Fetcher
from jumpscared.search import SearchResolver

if TYPE_CHECKING:
    import httpx

    from jumpscared.config import Settings
    from jumpscared.protocols import FetcherProtocol


@dataclass
class AppState:
    """Holds all shared runtime state. Passed to every handler."""

    settings: Settings
    fetcher: FetcherProtocol
    search_resolver: SearchResolver
    content_resolver: ContentResolver
    http_client: httpx.AsyncClient | None = None


def build_state(settings: Settings, http_client: httpx.AsyncClient) -> AppState:
    """Wire the fetcher and resolvers around ``http_client``."""
    fetcher = Fetcher(http_client, settings.fetcher, allowed_host=settings.site.host)
    return AppState(
        settings=settings,
        fetcher=fetcher,
        search_resolver=SearchResolver(fetcher, settings.site),
        content_resolver=ContentResolver(fetcher, settings.site),
        http_client=http_client,
    )
