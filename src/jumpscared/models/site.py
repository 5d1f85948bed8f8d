from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlparse

from pydantic import BaseModel


@dataclass(frozen=True)
class CanonicalUrl:
    """A page URL confirmed to be https on the target host.

    Only ``jumpscared.urls.validate_page_url`` constructs these. Anything that
    dereferences user-supplied URLs takes this type, never a bare ``str``.
    """

    url: str

    @property
    def slug(self) -> str | None:
        """Last non-empty path segment, or None for the site root."""
        segments = [segment for segment in urlparse(self.url).path.split("/") if segment]
        return segments[-1] if segments else None

    def __str__(self) -> str:
        return self.url


@dataclass(frozen=True)
class RawDocument:
    """Outcome of a single fetch. Always returned, never raised."""

    succeeded: bool
    status_code: int
    body: str
    url: str = ""
    timed_out: bool = False
    error: str | None = None


class SearchResult(BaseModel):
    """Single result returned by the site search."""

    title: str
    url: str


class PageContent(BaseModel):
    """Title and body text of a content page, whichever tier produced it."""

    title: str
    body_text: str


class ResolvedPage(BaseModel):
    """Timecodes resolved for a content page and the tier that produced them."""

    title: str
    timestamps: list[str]
    source: str  # strategy name: "content_api" | "html"


class RenderedField(BaseModel):
    rendered: str = ""


class ContentApiEntry(BaseModel):
    """One post from the site's WordPress REST API (``_fields=title,content``)."""

    title: RenderedField = RenderedField()
    content: RenderedField = RenderedField()
