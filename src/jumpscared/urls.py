"""Target-site URL validation.

Every user-supplied URL passes through ``validate_page_url`` before any
network action. The fetcher reuses ``is_url_allowed`` to re-check each
redirect hop, so a redirect cannot carry a request off the target host.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from urllib.parse import urlparse

import structlog

from jumpscared.errors import ErrorCode, JumpScaredError
from jumpscared.models.site import CanonicalUrl

if TYPE_CHECKING:
    from jumpscared.config import SiteSettings

log = structlog.get_logger()


def is_url_allowed(url: str, host: str) -> bool:
    """Check that ``url`` is https and its hostname equals ``host`` exactly.

    Subdomains and lookalike suffixes are rejected: ``evil.wheresthejump.com``
    and ``wheresthejump.com.evil.net`` both fail.
    """
    parsed = urlparse(url)
    if parsed.scheme != "https":
        return False
    if parsed.username is not None or parsed.password is not None:
        return False
    try:
        port = parsed.port
    except ValueError:
        return False
    if port not in (None, 443):
        return False
    return (parsed.hostname or "") == host.lower()


def validate_page_url(raw: str, site: SiteSettings) -> CanonicalUrl:
    """Return a CanonicalUrl for ``raw`` or raise JumpScaredError.

    Checks run in order: absolute URL, https scheme, exact host match.
    """
    parsed = urlparse(raw.strip())
    if not parsed.scheme or not parsed.netloc:
        raise JumpScaredError(
            code=ErrorCode.INVALID_INPUT,
            message=f"Not an absolute URL: {raw}",
            suggestion=f"Pass a full page URL such as {site.base_url}/jump-scares-in-alien-1979/.",
        )

    if not is_url_allowed(parsed.geturl(), site.host):
        log.warning("url_rejected", url=raw, host=parsed.hostname, scheme=parsed.scheme)
        raise JumpScaredError(
            code=ErrorCode.URL_NOT_ALLOWED,
            message=f"URL not allowed: {raw}",
            suggestion=f"Only https URLs on {site.host} are accepted.",
        )

    return CanonicalUrl(parsed.geturl())
