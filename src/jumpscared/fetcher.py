"""HTTP fetcher for the target site.

All network I/O goes through a single Fetcher instance. The Fetcher receives
an httpx.AsyncClient via constructor injection — the app lifespan owns the
client lifecycle. Outcomes are returned as RawDocument values: network
errors, non-2xx statuses and timeouts are data, not exceptions.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING
from urllib.parse import urljoin

import httpx
import structlog

from jumpscared.errors import ErrorCode, JumpScaredError
from jumpscared.models.site import RawDocument
from jumpscared.urls import is_url_allowed

if TYPE_CHECKING:
    from jumpscared.config import FetcherSettings

log = structlog.get_logger()


def build_http_client(settings: FetcherSettings) -> httpx.AsyncClient:
    """Create the shared httpx client. Called once at startup."""
    return httpx.AsyncClient(
        follow_redirects=False,
        timeout=httpx.Timeout(settings.timeout_seconds),
        limits=httpx.Limits(
            max_connections=10,
            max_keepalive_connections=5,
        ),
    )


def ensure_success(document: RawDocument, *, what: str) -> RawDocument:
    """Raise the matching JumpScaredError for a failed RawDocument."""
    if document.succeeded:
        return document

    if document.timed_out:
        raise JumpScaredError(
            code=ErrorCode.UPSTREAM_TIMEOUT,
            message=f"Timed out fetching {what}",
            suggestion="The site is slow to respond; try again shortly.",
        )
    detail = f"HTTP {document.status_code}" if document.status_code else document.error
    raise JumpScaredError(
        code=ErrorCode.UPSTREAM_FAILED,
        message=f"Failed to fetch {what} ({detail})",
        suggestion="The site may be temporarily unavailable.",
    )


class Fetcher:
    """Bounded-time fetcher with browser-like headers and host-locked redirects."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        settings: FetcherSettings,
        allowed_host: str,
    ) -> None:
        self._client = client
        self._settings = settings
        self._allowed_host = allowed_host

    def _headers(self, accept: str | None) -> dict[str, str]:
        headers = {
            "User-Agent": self._settings.user_agent,
            "Accept-Language": self._settings.accept_language,
        }
        if accept:
            headers["Accept"] = accept
        return headers

    async def fetch(self, url: str, accept: str | None = None) -> RawDocument:
        """Fetch ``url`` within the configured timeout. Never raises for I/O failures."""
        timeout = self._settings.timeout_seconds
        try:
            # wait_for bounds the whole redirect chain, not just one hop
            return await asyncio.wait_for(self._fetch(url, accept), timeout=timeout)
        except (TimeoutError, httpx.TimeoutException):
            log.warning("fetch_timeout", url=url, timeout=timeout)
            return RawDocument(
                succeeded=False,
                status_code=0,
                body="",
                url=url,
                timed_out=True,
                error=f"timed out after {timeout}s",
            )
        except httpx.HTTPError as exc:
            log.warning("fetch_failed", url=url, error=str(exc))
            return RawDocument(
                succeeded=False,
                status_code=0,
                body="",
                url=url,
                error=f"network error: {exc}",
            )

    async def _fetch(self, url: str, accept: str | None) -> RawDocument:
        current_url = url
        headers = self._headers(accept)
        max_redirects = self._settings.max_redirects

        for hop in range(max_redirects + 1):
            if not is_url_allowed(current_url, self._allowed_host):
                log.warning("fetch_blocked", url=url, current_url=current_url, hop=hop)
                return RawDocument(
                    succeeded=False,
                    status_code=0,
                    body="",
                    url=current_url,
                    error=f"URL not allowed: {current_url}",
                )

            response = await self._client.get(current_url, headers=headers)

            if response.is_redirect and "location" in response.headers:
                if hop == max_redirects:
                    log.warning("redirect_limit_reached", url=url, hops=hop)
                    return RawDocument(
                        succeeded=False,
                        status_code=response.status_code,
                        body="",
                        url=current_url,
                        error=f"too many redirects fetching {url}",
                    )
                current_url = urljoin(current_url, response.headers["location"])
                continue

            log.info(
                "fetch_complete",
                url=current_url,
                status_code=response.status_code,
                content_length=len(response.text),
            )
            return RawDocument(
                succeeded=response.is_success,
                status_code=response.status_code,
                body=response.text,
                url=current_url,
            )

        # Unreachable: the final hop always returns above
        raise AssertionError("redirect loop exhausted")
