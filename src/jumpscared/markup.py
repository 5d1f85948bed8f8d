"""HTML-to-text helpers for site pages and API fragments."""

from __future__ import annotations

import re

from bs4 import BeautifulSoup

from jumpscared.models.site import PageContent

_WHITESPACE_RE = re.compile(r"\s+")
_NON_CONTENT_TAGS = ["script", "style", "noscript", "template"]
_CONTENT_SELECTORS = (".entry-content", "article", "main")
_HEADING_SELECTORS = ("h1.entry-title", "h1")


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def _soup(markup: str) -> BeautifulSoup:
    soup = BeautifulSoup(markup, "html.parser")
    for element in soup(_NON_CONTENT_TAGS):
        element.decompose()
    return soup


def html_to_text(fragment: str) -> str:
    """Strip tags and entities from an HTML fragment."""
    return collapse_whitespace(_soup(fragment).get_text(separator=" "))


def parse_page_content(html: str, fallback_title: str) -> PageContent:
    """Pull the title and main body text out of a full content page.

    Title: primary heading, then ``<title>``, then ``fallback_title``.
    Body: the first content container found, else the whole document.
    """
    soup = _soup(html)

    title = ""
    for selector in _HEADING_SELECTORS:
        heading = soup.select_one(selector)
        if heading is not None:
            title = collapse_whitespace(heading.get_text(separator=" "))
            if title:
                break
    if not title and soup.title is not None:
        title = collapse_whitespace(soup.title.get_text())
    if not title:
        title = fallback_title

    container = None
    for selector in _CONTENT_SELECTORS:
        container = soup.select_one(selector)
        if container is not None:
            break
    root = container if container is not None else soup
    body_text = collapse_whitespace(root.get_text(separator=" "))

    return PageContent(title=title, body_text=body_text)
