"""
HTTP client for the external LaTeX compilation service.

Sends raw LaTeX as text/plain and returns the PDF bytes. A non-2xx
response is a compile failure carrying the service's diagnostic text.
Connection and timeout errors are retried with exponential backoff; once
retries are spent the service counts as unavailable.

Dependencies: httpx, tenacity, draftsmith.configs
System role: Compilation service adapter
"""

import logging

import httpx
from tenacity import (
    AsyncRetrying,
    RetryError,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from draftsmith.configs.compiler import CompilerSettings
from draftsmith.core.exceptions import CompilationError, CompilerUnavailableError

logger = logging.getLogger(__name__)


class LatexCompilerClient:
    """Compile LaTeX through a remote HTTP compiler."""

    def __init__(
        self,
        settings: CompilerSettings,
        client: httpx.AsyncClient | None = None,
        backoff_initial_seconds: float = 1.0,
        backoff_max_seconds: float = 10.0,
    ) -> None:
        """
        Args:
            settings: Compiler endpoint, timeout and retry count
            client: Shared AsyncClient (created lazily when None)
            backoff_initial_seconds: First retry delay
            backoff_max_seconds: Retry delay ceiling
        """
        self._settings = settings
        self._client = client
        self._owns_client = client is None
        self._backoff_initial = backoff_initial_seconds
        self._backoff_max = backoff_max_seconds

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._settings.timeout_seconds)
        return self._client

    async def compile(self, markup: str) -> bytes:
        """
        Compile LaTeX source into a PDF.

        Args:
            markup: Full LaTeX document

        Returns:
            bytes: Compiled artifact

        Raises:
            CompilationError: Compiler rejected the source (diagnostic attached)
            CompilerUnavailableError: Service unreachable after retries
        """
        try:
            async for attempt in AsyncRetrying(
                retry=retry_if_exception_type(httpx.TransportError),
                stop=stop_after_attempt(self._settings.transport_retries),
                wait=wait_exponential_jitter(
                    initial=self._backoff_initial,
                    max=self._backoff_max,
                    jitter=self._backoff_initial,
                ),
                reraise=True,
            ):
                with attempt:
                    response = await self._get_client().post(
                        self._settings.url,
                        content=markup.encode("utf-8"),
                        headers={"Content-Type": "text/plain"},
                    )
        except (httpx.TransportError, RetryError) as e:
            logger.error(
                f"{__name__}:compile - Compiler unreachable",
                extra={"url": self._settings.url, "error_type": type(e).__name__},
            )
            raise CompilerUnavailableError(
                f"Compilation service unavailable: {e}",
                {"url": self._settings.url},
            ) from e

        if response.is_success:
            logger.info(
                f"{__name__}:compile - Compiled",
                extra={"markup_len": len(markup), "artifact_bytes": len(response.content)},
            )
            return response.content

        error_text = response.text.strip()
        diagnostic = error_text or f"HTTP {response.status_code} {response.reason_phrase}"
        logger.warning(
            f"{__name__}:compile - Compiler rejected source",
            extra={"status_code": response.status_code, "diagnostic_len": len(diagnostic)},
        )
        raise CompilationError(diagnostic, status_code=response.status_code)

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
