"""
Test suite for LatexCompilerClient using httpx.MockTransport.

System role: Verification of the compilation service adapter
"""

import httpx
import pytest

from draftsmith.boundary.compiler import LatexCompilerClient
from draftsmith.configs.compiler import CompilerSettings
from draftsmith.core.exceptions import CompilationError, CompilerUnavailableError

URL = "http://compiler.test/compile"


@pytest.fixture
def settings() -> CompilerSettings:
    return CompilerSettings(url=URL, transport_retries=3)


def make_client(settings: CompilerSettings, handler) -> LatexCompilerClient:
    """Client whose requests are answered by handler, with near-zero backoff."""
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return LatexCompilerClient(
        settings,
        client=http,
        backoff_initial_seconds=0.001,
        backoff_max_seconds=0.002,
    )


class TestCompile:
    @pytest.mark.asyncio
    async def test_success_returns_pdf_bytes(self, settings) -> None:
        """Test raw LaTeX is posted as text/plain and the body is returned."""
        # Arrange
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, content=b"%PDF-1.5")

        client = make_client(settings, handler)

        # Act
        artifact = await client.compile("\\documentclass{article}")

        # Assert
        assert artifact == b"%PDF-1.5"
        assert str(seen[0].url) == URL
        assert seen[0].headers["content-type"] == "text/plain"
        assert seen[0].content == b"\\documentclass{article}"

    @pytest.mark.asyncio
    async def test_error_body_becomes_diagnostic(self, settings) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(400, text="! Undefined control sequence.\n")

        client = make_client(settings, handler)

        with pytest.raises(CompilationError) as exc_info:
            await client.compile("\\foo")

        assert exc_info.value.diagnostic == "! Undefined control sequence."
        assert exc_info.value.details["status_code"] == 400

    @pytest.mark.asyncio
    async def test_empty_error_body_uses_status_line(self, settings) -> None:
        client = make_client(settings, lambda request: httpx.Response(400))

        with pytest.raises(CompilationError) as exc_info:
            await client.compile("\\foo")

        assert exc_info.value.diagnostic == "HTTP 400 Bad Request"

    @pytest.mark.asyncio
    async def test_compile_failures_are_not_retried(self, settings) -> None:
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            return httpx.Response(500, text="boom")

        client = make_client(settings, handler)

        with pytest.raises(CompilationError):
            await client.compile("x")
        assert calls == 1


class TestTransportFailures:
    @pytest.mark.asyncio
    async def test_unreachable_after_retries(self, settings) -> None:
        """Test connection errors are retried, then surface as unavailable."""
        # Arrange
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            raise httpx.ConnectError("connection refused", request=request)

        client = make_client(settings, handler)

        # Act / Assert
        with pytest.raises(CompilerUnavailableError):
            await client.compile("x")
        assert calls == settings.transport_retries

    @pytest.mark.asyncio
    async def test_recovers_when_a_retry_succeeds(self, settings) -> None:
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            if calls == 1:
                raise httpx.ReadTimeout("timed out", request=request)
            return httpx.Response(200, content=b"%PDF")

        client = make_client(settings, handler)

        assert await client.compile("x") == b"%PDF"
        assert calls == 2

    @pytest.mark.asyncio
    async def test_aclose_leaves_injected_client_open(self, settings) -> None:
        http = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        client = LatexCompilerClient(settings, client=http)

        await client.aclose()

        assert http.is_closed is False
        await http.aclose()
