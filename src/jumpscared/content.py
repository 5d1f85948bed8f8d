"""Content page resolution.

A page URL is resolved through an ordered tuple of named strategies. Each
strategy produces a ResolvedPage or raises JumpScaredError; its predicate
decides whether the result is good enough to stop. Non-final failures and
insufficient results fall through to the next strategy; the final strategy's
outcome (result or error) is returned as-is.

A timeout in the final strategy after an earlier one failed is reported as
UPSTREAM_FAILED: every tier failed, whatever the last one did.

Default order:
  1. ``content_api`` — WordPress REST lookup by slug (no anti-bot markup)
  2. ``html``        — direct page fetch with interstitial detection
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING
from urllib.parse import urlencode

import structlog
from pydantic import TypeAdapter, ValidationError

from jumpscared.errors import ErrorCode, JumpScaredError
from jumpscared.fetcher import ensure_success
from jumpscared.interstitial import is_blocked
from jumpscared.markup import html_to_text, parse_page_content
from jumpscared.models.site import ContentApiEntry, ResolvedPage
from jumpscared.timecodes import extract_timestamps

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence

    from jumpscared.config import SiteSettings
    from jumpscared.models.site import CanonicalUrl
    from jumpscared.protocols import FetcherProtocol

log = structlog.get_logger()

_API_ENTRIES = TypeAdapter(list[ContentApiEntry])


def has_timestamps(page: ResolvedPage) -> bool:
    return bool(page.timestamps)


@dataclass(frozen=True)
class ResolutionStrategy:
    name: str
    resolve: Callable[[CanonicalUrl, str], Awaitable[ResolvedPage]]
    accept: Callable[[ResolvedPage], bool] = has_timestamps


async def run_strategies(
    strategies: Sequence[ResolutionStrategy],
    page_url: CanonicalUrl,
    slug: str,
) -> ResolvedPage:
    """Try ``strategies`` in order and return the first accepted page."""
    if not strategies:
        raise ValueError("at least one resolution strategy is required")

    final_index = len(strategies) - 1
    earlier_failed = False
    for index, strategy in enumerate(strategies):
        is_final = index == final_index
        try:
            page = await strategy.resolve(page_url, slug)
        except JumpScaredError as exc:
            if is_final and earlier_failed and exc.code == ErrorCode.UPSTREAM_TIMEOUT:
                # Every tier failed: an upstream failure, still worded as a timeout
                raise JumpScaredError(
                    code=ErrorCode.UPSTREAM_FAILED,
                    message=exc.message,
                    suggestion=exc.suggestion,
                ) from exc
            if is_final:
                raise
            earlier_failed = True
            log.info(
                "strategy_failed",
                strategy=strategy.name,
                code=exc.code,
                message=exc.message,
            )
            continue

        if is_final or strategy.accept(page):
            return page
        log.info("strategy_insufficient", strategy=strategy.name, url=page_url.url)

    # Unreachable: the final strategy either returns or raises
    raise AssertionError("resolution strategies exhausted")


class ContentResolver:
    """Canonical page URL → title and timecodes."""

    def __init__(self, fetcher: FetcherProtocol, site: SiteSettings) -> None:
        self._fetcher = fetcher
        self._site = site
        self.strategies: tuple[ResolutionStrategy, ...] = (
            ResolutionStrategy("content_api", self._from_content_api),
            ResolutionStrategy("html", self._from_html),
        )

    async def resolve(self, page_url: CanonicalUrl) -> ResolvedPage:
        slug = page_url.slug
        if slug is None:
            raise JumpScaredError(
                code=ErrorCode.INVALID_INPUT,
                message=f"URL has no page slug: {page_url.url}",
                suggestion="Pass the URL of a specific jump-scare page, not the site root.",
            )
        return await run_strategies(self.strategies, page_url, slug)

    def content_api_url(self, slug: str) -> str:
        query = urlencode({"slug": slug, "_fields": "title,content"})
        return f"{self._site.base_url}{self._site.content_api_path}?{query}"

    async def _from_content_api(self, page_url: CanonicalUrl, slug: str) -> ResolvedPage:
        document = await self._fetcher.fetch(self.content_api_url(slug), accept="application/json")
        ensure_success(document, what="content API")

        try:
            entries = _API_ENTRIES.validate_json(document.body)
        except ValidationError as exc:
            raise JumpScaredError(
                code=ErrorCode.PARSE_FAILED,
                message=f"Unexpected content API response for {slug}",
            ) from exc
        if not entries:
            raise JumpScaredError(
                code=ErrorCode.PARSE_FAILED,
                message=f"Content API has no entry for {slug}",
            )

        entry = entries[0]
        title = html_to_text(entry.title.rendered) or slug
        timestamps = extract_timestamps(html_to_text(entry.content.rendered))
        return ResolvedPage(title=title, timestamps=timestamps, source="content_api")

    async def _from_html(self, page_url: CanonicalUrl, slug: str) -> ResolvedPage:
        document = await self._fetcher.fetch(page_url.url, accept="text/html")

        # Challenge pages usually arrive as 403/503, so check before the status
        if document.body and is_blocked(html_to_text(document.body)):
            log.warning("page_blocked", url=page_url.url, status_code=document.status_code)
            raise JumpScaredError(
                code=ErrorCode.PAGE_BLOCKED,
                message="Page is behind an anti-bot check and no structured data was available",
                suggestion="Try again later; the site is challenging automated requests.",
            )
        ensure_success(document, what="page")

        content = parse_page_content(document.body, fallback_title=slug)
        timestamps = extract_timestamps(content.body_text)
        return ResolvedPage(title=content.title, timestamps=timestamps, source="html")
