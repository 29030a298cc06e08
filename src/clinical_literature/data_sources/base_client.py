"""
Base client for external data source clients.

Provides: lazy aiohttp session management, per-call timeouts, a single
configurable retry wrapper with exponential backoff, and structured logging.
"""

import asyncio
import json
import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import aiohttp
from pydantic import BaseModel

from clinical_literature.constants import (
    BASE_RETRY_DELAY,
    DEFAULT_MAX_RETRIES,
    DEFAULT_TIMEOUT,
    RETRY_BACKOFF_FACTOR,
)

logger = logging.getLogger("clinical_literature.data_sources")

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class RetryConfig(BaseModel):
    """Retry behaviour for failed requests.

    ``max_retries`` counts retries only; a call makes at most
    ``max_retries + 1`` attempts.
    """

    max_retries: int = DEFAULT_MAX_RETRIES
    base_delay: float = BASE_RETRY_DELAY  # seconds
    backoff_factor: float = RETRY_BACKOFF_FACTOR

    def delay_for(self, attempt: int) -> float:
        """Backoff before retry number ``attempt + 1`` (0-based attempt)."""
        return self.base_delay * (self.backoff_factor**attempt)


class ClientConfig(BaseModel):
    """Top-level transport config."""

    retry: RetryConfig = RetryConfig()
    timeout_seconds: float = DEFAULT_TIMEOUT


# ---------------------------------------------------------------------------
# Request context (for structured logging)
# ---------------------------------------------------------------------------


class RequestContext(BaseModel):
    """Metadata attached to every outgoing request for logging."""

    source: str  # e.g. "pubmed"
    method: str  # e.g. "search"
    params: dict[str, Any] = {}


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class DataSourceError(Exception):
    """Base exception for data source failures."""

    def __init__(self, source: str, message: str, status_code: int | None = None):
        self.source = source
        self.status_code = status_code
        super().__init__(f"[{source}] {message}")


class RequestTimeoutError(DataSourceError):
    """Raised when a request times out or is aborted."""

    pass


# ---------------------------------------------------------------------------
# Retry
# ---------------------------------------------------------------------------


def is_retryable_error(error: Exception) -> bool:
    """Only 5xx responses and timeouts are worth another attempt."""
    if isinstance(error, RequestTimeoutError):
        return True
    if isinstance(error, DataSourceError) and error.status_code is not None:
        return 500 <= error.status_code < 600
    return False


async def retry_async(
    operation: Callable[[], Awaitable[T]],
    *,
    retry: RetryConfig,
    is_retryable: Callable[[Exception], bool] = is_retryable_error,
    context: RequestContext | None = None,
) -> T:
    """
    Await ``operation()`` until it succeeds or retries run out.

    Only ``DataSourceError`` is considered for retry; anything else
    propagates straight away. On exhaustion, or for a non-retryable error,
    the last error is re-raised unchanged so callers can inspect
    ``status_code``.
    """
    ctx = context or RequestContext(source="unknown", method="unknown")
    attempt = 0
    start = time.monotonic()

    while True:
        try:
            return await operation()
        except DataSourceError as e:
            if not is_retryable(e):
                raise
            if attempt >= retry.max_retries:
                logger.error(
                    "All retries exhausted [%s.%s] after %d attempts (%.1fs): %s",
                    ctx.source,
                    ctx.method,
                    attempt + 1,
                    time.monotonic() - start,
                    e,
                )
                raise

            delay = retry.delay_for(attempt)
            attempt += 1
            logger.warning(
                "Retryable failure [%s.%s] attempt=%d/%d, retrying in %.1fs: %s",
                ctx.source,
                ctx.method,
                attempt,
                retry.max_retries + 1,
                delay,
                e,
            )
            await asyncio.sleep(delay)


# ---------------------------------------------------------------------------
# Base client
# ---------------------------------------------------------------------------


class BaseClient(ABC):
    """
    Abstract base for REST data source clients.

    Subclasses implement `_source_name` and their own typed methods that
    call `_rest_get()` / `_rest_get_xml()`. The client holds only static
    configuration and its HTTP session, so one instance can serve
    concurrent callers.
    """

    def __init__(self, config: ClientConfig | None = None):
        self.config = config or ClientConfig()
        self._session: aiohttp.ClientSession | None = None

    @property
    @abstractmethod
    def _source_name(self) -> str:
        """Identifier for this data source, e.g. 'pubmed'."""
        ...

    # -- Session management --------------------------------------------------

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self.config.timeout_seconds)
            self._session = aiohttp.ClientSession(timeout=timeout)
        return self._session

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        await self.close()

    # -- Core request with retry ---------------------------------------------

    async def _request(
        self,
        url: str,
        params: dict[str, Any],
        parse: Callable[[aiohttp.ClientResponse], Awaitable[T]],
        *,
        headers: dict[str, str] | None = None,
        retry: RetryConfig | None = None,
        is_retryable: Callable[[Exception], bool] = is_retryable_error,
        context: RequestContext | None = None,
    ) -> T:
        """
        Make a GET request with timeout and retry.

        Parameters
        ----------
        url : str
            Full URL.
        params : dict
            Query string parameters.
        parse : callable
            Turns a successful response into the returned value.
        headers : dict, optional
            Additional HTTP headers.
        retry : RetryConfig, optional
            Overrides the client-wide retry settings for this call.
        is_retryable : callable, optional
            Decides whether a failed attempt is retried.
        context : RequestContext, optional
            Logging context.
        """
        ctx = context or RequestContext(source=self._source_name, method="unknown")

        async def attempt() -> T:
            return await self._send(url, params, parse, headers, ctx)

        return await retry_async(
            attempt,
            retry=retry or self.config.retry,
            is_retryable=is_retryable,
            context=ctx,
        )

    async def _send(
        self,
        url: str,
        params: dict[str, Any],
        parse: Callable[[aiohttp.ClientResponse], Awaitable[T]],
        headers: dict[str, str] | None,
        ctx: RequestContext,
    ) -> T:
        """One attempt. Every failure surfaces as a DataSourceError."""
        start = time.monotonic()
        try:
            session = await self._get_session()
            logger.info("Request [%s.%s] url=%s", ctx.source, ctx.method, url)
            resp = await session.get(url, params=params, headers=headers)

            if resp.status >= 400:
                body = await resp.text()
                raise DataSourceError(
                    ctx.source,
                    f"HTTP {resp.status}: {body[:500]}",
                    status_code=resp.status,
                )

            try:
                data = await parse(resp)
            except (aiohttp.ContentTypeError, json.JSONDecodeError, ValueError) as e:
                raise DataSourceError(
                    ctx.source, f"Failed to parse response: {e}"
                ) from e

        except asyncio.TimeoutError as e:
            raise RequestTimeoutError(
                ctx.source, f"Timeout after {time.monotonic() - start:.1f}s"
            ) from e
        except aiohttp.ClientError as e:
            raise DataSourceError(ctx.source, f"Connection error: {e}") from e

        logger.info(
            "Success [%s.%s] elapsed=%.2fs",
            ctx.source,
            ctx.method,
            time.monotonic() - start,
        )
        return data

    # -- Convenience methods for subclasses ----------------------------------

    async def _rest_get(
        self,
        url: str,
        params: dict[str, Any],
        *,
        retry: RetryConfig | None = None,
        context: RequestContext | None = None,
    ) -> Any:
        """GET a JSON document."""
        return await self._request(
            url,
            params,
            lambda resp: resp.json(content_type=None),
            headers={"Accept": "application/json"},
            retry=retry,
            context=context,
        )

    async def _rest_get_xml(
        self,
        url: str,
        params: dict[str, Any],
        *,
        retry: RetryConfig | None = None,
        context: RequestContext | None = None,
    ) -> str:
        """GET a raw XML body."""
        return await self._request(
            url,
            params,
            lambda resp: resp.text(),
            headers={"Accept": "application/xml"},
            retry=retry,
            context=context,
        )
