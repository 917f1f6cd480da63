"""HTTP transport for the KML CGI endpoint.

Client construction walks an ordered chain of factories, one per host
environment (HTTP/2 capable, proxy-aware HTTP/1.1, direct HTTP/1.1). The first
that constructs wins; exhausting the chain raises `TransportUnavailableError`.
"""
from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from pathlib import Path

import httpx

from kml_client.domain.models import FetchResult
from kml_client.errors import TransportUnavailableError
from kml_client.infrastructure.fs import append_jsonl_line
from kml_client.runtime import RuntimeConfig

logger = logging.getLogger(__name__)

ClientFactory = Callable[[RuntimeConfig], httpx.AsyncClient]


def _http2_client(settings: RuntimeConfig) -> httpx.AsyncClient:
    # raises ImportError when the optional h2 package is missing
    return httpx.AsyncClient(base_url=settings.base_url, timeout=settings.timeout, http2=True)


def _proxied_client(settings: RuntimeConfig) -> httpx.AsyncClient:
    return httpx.AsyncClient(base_url=settings.base_url, timeout=settings.timeout, trust_env=True)


def _direct_client(settings: RuntimeConfig) -> httpx.AsyncClient:
    return httpx.AsyncClient(base_url=settings.base_url, timeout=settings.timeout, trust_env=False)


CLIENT_FACTORIES: tuple[ClientFactory, ...] = (_http2_client, _proxied_client, _direct_client)


def create_http_client(
    settings: RuntimeConfig,
    factories: Sequence[ClientFactory] | None = None,
) -> httpx.AsyncClient:
    if factories is None:
        factories = CLIENT_FACTORIES
    causes: list[BaseException] = []
    for factory in factories:
        name = getattr(factory, "__name__", repr(factory))
        try:
            client = factory(settings)
        except (ImportError, ValueError, TypeError, httpx.InvalidURL) as exc:
            logger.debug("client factory %s failed: %s", name, exc)
            causes.append(exc)
            continue
        logger.debug("using client factory %s", name)
        return client
    raise TransportUnavailableError(causes)


class KmlHttpClient:
    """Single-shot GET against the CGI; status codes are passed through untouched."""

    def __init__(self, http_client: httpx.AsyncClient, *, request_log: Path | None = None) -> None:
        self._client = http_client
        self._request_log = request_log

    def _append_log(self, record: dict) -> None:
        if self._request_log is None:
            return
        try:
            append_jsonl_line(self._request_log, record)
        except OSError as exc:
            logger.warning("request log write failed: %s", exc)

    async def fetch(self, url: str) -> FetchResult:
        """Issue one GET for ``url`` and return the body text whatever the status.

        Raises:
            httpx.HTTPError: On transport failures (connect, read, timeout).
        """
        full_url = str(self._client.base_url.join(url))
        self._append_log({"event": "http_request", "method": "GET", "url": full_url})
        logger.debug("GET %s", full_url)
        start = time.perf_counter()
        try:
            response = await self._client.get(url)
        except httpx.HTTPError as exc:
            latency_ms = (time.perf_counter() - start) * 1000
            self._append_log({"event": "response", "error": str(exc), "latency_ms": latency_ms})
            raise
        latency_ms = (time.perf_counter() - start) * 1000
        self._append_log(
            {
                "event": "response",
                "status_code": response.status_code,
                "bytes": len(response.content),
                "latency_ms": latency_ms,
            }
        )
        logger.info("KML response %s (%.1f ms)", response.status_code, latency_ms)
        return FetchResult(
            url=str(response.request.url),
            status_code=response.status_code,
            text=response.text,
            latency_ms=latency_ms,
        )


__all__ = ["CLIENT_FACTORIES", "KmlHttpClient", "create_http_client"]
