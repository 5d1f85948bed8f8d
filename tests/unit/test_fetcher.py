"""Unit tests for jumpscared.fetcher."""

from __future__ import annotations

import httpx
import pytest
import respx

from jumpscared.config import FetcherSettings
from jumpscared.errors import ErrorCode, JumpScaredError
from jumpscared.fetcher import Fetcher, build_http_client, ensure_success
from jumpscared.models.site import RawDocument

HOST = "wheresthejump.com"
PAGE = "https://wheresthejump.com/jump-scares-in-alien-1979/"

# ---------------------------------------------------------------------------
# build_http_client
# ---------------------------------------------------------------------------


class TestBuildHttpClient:
    async def test_client_configuration(self) -> None:
        client = build_http_client(FetcherSettings(timeout_seconds=7.0))
        try:
            assert isinstance(client, httpx.AsyncClient)
            # follow_redirects is False (we handle redirects manually)
            assert client.follow_redirects is False
            assert client.timeout.read == 7.0
        finally:
            await client.aclose()


# ---------------------------------------------------------------------------
# ensure_success
# ---------------------------------------------------------------------------


class TestEnsureSuccess:
    def test_success_passes_through(self) -> None:
        doc = RawDocument(succeeded=True, status_code=200, body="ok")
        assert ensure_success(doc, what="page") is doc

    def test_timeout_maps_to_upstream_timeout(self) -> None:
        doc = RawDocument(succeeded=False, status_code=0, body="", timed_out=True)
        with pytest.raises(JumpScaredError) as exc_info:
            ensure_success(doc, what="site search")
        assert exc_info.value.code == ErrorCode.UPSTREAM_TIMEOUT
        assert "Timed out" in exc_info.value.message

    def test_bad_status_maps_to_upstream_failed(self) -> None:
        doc = RawDocument(succeeded=False, status_code=503, body="")
        with pytest.raises(JumpScaredError) as exc_info:
            ensure_success(doc, what="page")
        assert exc_info.value.code == ErrorCode.UPSTREAM_FAILED
        assert exc_info.value.http_status == 502
        assert "HTTP 503" in exc_info.value.message

    def test_network_error_maps_to_upstream_failed(self) -> None:
        doc = RawDocument(succeeded=False, status_code=0, body="", error="network error: boom")
        with pytest.raises(JumpScaredError) as exc_info:
            ensure_success(doc, what="page")
        assert exc_info.value.code == ErrorCode.UPSTREAM_FAILED
        assert "network error" in exc_info.value.message


# ---------------------------------------------------------------------------
# Fetcher
# ---------------------------------------------------------------------------


class TestFetcher:
    async def test_successful_fetch(self, fetcher_settings: FetcherSettings) -> None:
        with respx.mock:
            respx.get(PAGE).mock(return_value=httpx.Response(200, text="<h1>Alien</h1>"))
            async with httpx.AsyncClient() as client:
                fetcher = Fetcher(client, fetcher_settings, HOST)
                doc = await fetcher.fetch(PAGE)
        assert doc.succeeded is True
        assert doc.status_code == 200
        assert doc.body == "<h1>Alien</h1>"
        assert doc.url == PAGE

    async def test_sends_browser_identity(self, fetcher_settings: FetcherSettings) -> None:
        with respx.mock:
            route = respx.get(PAGE).mock(return_value=httpx.Response(200, text=""))
            async with httpx.AsyncClient() as client:
                fetcher = Fetcher(client, fetcher_settings, HOST)
                await fetcher.fetch(PAGE, accept="text/html")
        request = route.calls.last.request
        assert request.headers["user-agent"] == fetcher_settings.user_agent
        assert "Mozilla/5.0" in request.headers["user-agent"]
        assert request.headers["accept-language"] == "en-US,en;q=0.9"
        assert request.headers["accept"] == "text/html"

    async def test_non_2xx_returned_as_data(self, fetcher_settings: FetcherSettings) -> None:
        with respx.mock:
            respx.get(PAGE).mock(return_value=httpx.Response(403, text="nope"))
            async with httpx.AsyncClient() as client:
                fetcher = Fetcher(client, fetcher_settings, HOST)
                doc = await fetcher.fetch(PAGE)
        assert doc.succeeded is False
        assert doc.status_code == 403
        assert doc.body == "nope"
        assert doc.timed_out is False

    async def test_network_error_returned_as_data(self, fetcher_settings: FetcherSettings) -> None:
        with respx.mock:
            respx.get(PAGE).mock(side_effect=httpx.ConnectError("Connection refused"))
            async with httpx.AsyncClient() as client:
                fetcher = Fetcher(client, fetcher_settings, HOST)
                doc = await fetcher.fetch(PAGE)
        assert doc.succeeded is False
        assert doc.status_code == 0
        assert doc.timed_out is False
        assert doc.error is not None and "Connection refused" in doc.error

    async def test_timeout_returned_as_data(self, fetcher_settings: FetcherSettings) -> None:
        with respx.mock:
            respx.get(PAGE).mock(side_effect=httpx.ReadTimeout("read timed out"))
            async with httpx.AsyncClient() as client:
                fetcher = Fetcher(client, fetcher_settings, HOST)
                doc = await fetcher.fetch(PAGE)
        assert doc.succeeded is False
        assert doc.timed_out is True
        assert doc.status_code == 0

    async def test_redirect_on_host_followed(self, fetcher_settings: FetcherSettings) -> None:
        with respx.mock:
            respx.get("https://wheresthejump.com/old/").mock(
                return_value=httpx.Response(301, headers={"location": "/new/"})
            )
            respx.get("https://wheresthejump.com/new/").mock(
                return_value=httpx.Response(200, text="moved")
            )
            async with httpx.AsyncClient() as client:
                fetcher = Fetcher(client, fetcher_settings, HOST)
                doc = await fetcher.fetch("https://wheresthejump.com/old/")
        assert doc.succeeded is True
        assert doc.body == "moved"
        assert doc.url == "https://wheresthejump.com/new/"

    async def test_redirect_off_host_not_followed(self, fetcher_settings: FetcherSettings) -> None:
        with respx.mock:
            respx.get(PAGE).mock(
                return_value=httpx.Response(302, headers={"location": "https://evil.com/steal"})
            )
            async with httpx.AsyncClient() as client:
                fetcher = Fetcher(client, fetcher_settings, HOST)
                doc = await fetcher.fetch(PAGE)
        assert doc.succeeded is False
        assert doc.status_code == 0
        assert doc.error is not None and "evil.com" in doc.error

    async def test_off_host_url_not_fetched(self, fetcher_settings: FetcherSettings) -> None:
        with respx.mock:
            async with httpx.AsyncClient() as client:
                fetcher = Fetcher(client, fetcher_settings, HOST)
                doc = await fetcher.fetch("https://evil.wheresthejump.com/x/")
            assert not respx.calls
        assert doc.succeeded is False
        assert doc.error is not None and "not allowed" in doc.error

    async def test_too_many_redirects(self, fetcher_settings: FetcherSettings) -> None:
        with respx.mock(assert_all_called=False) as router:
            # 4 redirects (max is 3)
            for i in range(4):
                router.get(f"https://wheresthejump.com/r{i}").mock(
                    return_value=httpx.Response(
                        301, headers={"location": f"https://wheresthejump.com/r{i + 1}"}
                    )
                )
            r4 = router.get("https://wheresthejump.com/r4").mock(
                return_value=httpx.Response(200, text="Final")
            )
            async with httpx.AsyncClient() as client:
                fetcher = Fetcher(client, fetcher_settings, HOST)
                doc = await fetcher.fetch("https://wheresthejump.com/r0")
        assert doc.succeeded is False
        assert doc.status_code == 301
        assert not r4.called
