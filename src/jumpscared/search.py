"""Site search resolution.

Scrapes the target site's own search page and keeps only links that look like
jump-scare listings. Pure parsing lives in ``parse_search_results`` so it can
be tested without I/O; ``SearchResolver`` adds the fetch.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from urllib.parse import quote, urlencode, urljoin, urlparse

import structlog
from bs4 import BeautifulSoup

from jumpscared.fetcher import ensure_success
from jumpscared.markup import collapse_whitespace
from jumpscared.models.site import SearchResult
from jumpscared.urls import is_url_allowed

if TYPE_CHECKING:
    from jumpscared.config import SiteSettings
    from jumpscared.protocols import FetcherProtocol

log = structlog.get_logger()


def title_from_url(url: str, prefix: str) -> str:
    """Build a readable title from the last path segment of ``url``.

    ``/jump-scares-in-the-conjuring-2013/`` → ``"The Conjuring 2013"``
    """
    segments = [segment for segment in urlparse(url).path.split("/") if segment]
    if not segments:
        return url
    slug = segments[-1]
    if slug.startswith(prefix):
        slug = slug[len(prefix) :]
    words = slug.replace("-", " ").replace("_", " ").split()
    return " ".join(word[:1].upper() + word[1:] for word in words) or url


def _is_content_link(url: str, site: SiteSettings) -> bool:
    if not is_url_allowed(url, site.host):
        return False
    if site.content_marker not in urlparse(url).path:
        return False
    return not any(marker in url for marker in site.excluded_markers)


def parse_search_results(html: str, site: SiteSettings) -> list[SearchResult]:
    """Extract unique content-page links from a search results page.

    First occurrence of each resolved URL wins; the list is capped at
    ``site.max_search_results``.
    """
    soup = BeautifulSoup(html, "html.parser")
    base = site.base_url + "/"

    results: list[SearchResult] = []
    seen: set[str] = set()
    for anchor in soup.find_all("a", href=True):
        url = urljoin(base, anchor["href"].strip())
        if url in seen or not _is_content_link(url, site):
            continue
        seen.add(url)

        title = collapse_whitespace(anchor.get_text(separator=" "))
        if not title:
            title = title_from_url(url, site.title_prefix)
        results.append(SearchResult(title=title, url=url))

        if len(results) >= site.max_search_results:
            break
    return results


class SearchResolver:
    """Query → list of jump-scare pages via the site's search page."""

    def __init__(self, fetcher: FetcherProtocol, site: SiteSettings) -> None:
        self._fetcher = fetcher
        self._site = site

    def search_url(self, query: str) -> str:
        return f"{self._site.base_url}{self._site.search_path}?" + urlencode(
            {"s": query}, quote_via=quote
        )

    async def search(self, query: str) -> list[SearchResult]:
        """Run a site search for an already-normalised query.

        Raises JumpScaredError (UPSTREAM_FAILED / UPSTREAM_TIMEOUT) when the
        search page cannot be fetched. No partial results on failure.
        """
        document = await self._fetcher.fetch(self.search_url(query), accept="text/html")
        ensure_success(document, what="site search")

        results = parse_search_results(document.body, self._site)
        log.info("search_complete", query=query, result_count=len(results))
        return results
