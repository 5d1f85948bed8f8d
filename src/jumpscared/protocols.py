"""Protocol interfaces for swappable components.

Resolvers and AppState reference these protocols, not the concrete
implementations, so tests can pass lightweight in-memory fetchers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from jumpscared.models.site import RawDocument


class FetcherProtocol(Protocol):
    """Interface for the target-site fetcher."""

    async def fetch(self, url: str, accept: str | None = None) -> RawDocument: ...
