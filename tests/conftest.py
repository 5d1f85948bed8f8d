"""Shared test fixtures for the jumpscared test suite."""

from __future__ import annotations

import pytest

from jumpscared.config import FetcherSettings, Settings, SiteSettings

BASE_URL = "https://wheresthejump.com"

SEARCH_PAGE = """
<html><body>
  <header><a href="https://wheresthejump.com/category/movies/">Movies</a></header>
  <article>
    <a href="https://wheresthejump.com/jump-scares-in-the-conjuring-2013/"><img src="x.jpg"></a>
    <h2><a href="https://wheresthejump.com/jump-scares-in-the-conjuring-2013/">
      Jump Scares In   The Conjuring (2013)
    </a></h2>
  </article>
  <article>
    <h2><a href="/jump-scares-in-sinister-2012/">Jump Scares In Sinister (2012)</a></h2>
  </article>
  <a href="https://wheresthejump.com/tag/jump-scares-in-ghosts/">Ghost tag</a>
  <a href="https://wheresthejump.com/jump-scares-in-tv-series/">TV Series</a>
  <a href="https://evil.example.com/jump-scares-in-the-conjuring-2013/">Mirror</a>
</body></html>
"""

PAGE_HTML = """
<html>
<head><title>Jump Scares In Alien (1979) - Where's The Jump?</title></head>
<body>
  <h1 class="entry-title">Jump Scares In Alien (1979)</h1>
  <div class="sidebar">Recently updated 10:15</div>
  <div class="entry-content">
    <p>Jump Scare Count: 3</p>
    <p>0:12:30 – A cat jumps out.</p>
    <p>45:02 – Dallas in the vents.</p>
    <p>1:02:10 – The android.</p>
    <p>45:02 – Dallas in the vents (repeat mention).</p>
  </div>
  <script>var t = "09:09";</script>
</body>
</html>
"""

BLOCKED_HTML = """
<html><head><title>Just a moment...</title></head>
<body><h1>Checking your browser before accessing wheresthejump.com.</h1></body></html>
"""


@pytest.fixture()
def site_settings() -> SiteSettings:
    return SiteSettings(base_url=BASE_URL)


@pytest.fixture()
def fetcher_settings() -> FetcherSettings:
    return FetcherSettings(timeout_seconds=2.0, max_redirects=3)


@pytest.fixture()
def settings(site_settings: SiteSettings, fetcher_settings: FetcherSettings) -> Settings:
    return Settings(site=site_settings, fetcher=fetcher_settings)


@pytest.fixture()
def search_page_html() -> str:
    return SEARCH_PAGE


@pytest.fixture()
def page_html() -> str:
    return PAGE_HTML


@pytest.fixture()
def blocked_html() -> str:
    return BLOCKED_HTML
