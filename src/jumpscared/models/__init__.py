from __future__ import annotations

from jumpscared.models.api import (
    HealthOutput,
    SearchInput,
    TimestampsInput,
    TimestampsOutput,
)
from jumpscared.models.site import (
    CanonicalUrl,
    ContentApiEntry,
    PageContent,
    RawDocument,
    ResolvedPage,
    SearchResult,
)

__all__ = [
    # site
    "CanonicalUrl",
    "RawDocument",
    "SearchResult",
    "PageContent",
    "ResolvedPage",
    "ContentApiEntry",
    # api
    "SearchInput",
    "TimestampsInput",
    "TimestampsOutput",
    "HealthOutput",
]
