"""Fetch-and-render: build the URL, issue one GET, hand the result to a readiness callback."""
from __future__ import annotations

import logging
import random
from collections.abc import Callable

import httpx

from kml_client.domain.models import Action, FetchResult, KmlForm, Page
from kml_client.infrastructure.http.client import KmlHttpClient, create_http_client
from kml_client.runtime import RuntimeConfig
from kml_client.services.query import build_request_url
from kml_client.services.render import render_response

logger = logging.getLogger(__name__)

ReadyCallback = Callable[[FetchResult], None]


def _render_into(page: Page, element_id: str) -> ReadyCallback:
    def _ready(result: FetchResult) -> None:
        render_response(page, result.text, element_id)

    return _ready


async def ajax_function(
    action: Action | int,
    form: KmlForm,
    page: Page,
    *,
    settings: RuntimeConfig,
    on_ready: ReadyCallback | None = None,
    rng: Callable[[], float] = random.random,
    client_factory: Callable[[RuntimeConfig], httpx.AsyncClient] = create_http_client,
) -> FetchResult | None:
    """Run a single request/render cycle.

    Returns ``None`` without touching the network when ``action`` builds no URL.
    `TransportUnavailableError` from ``client_factory`` and transport errors from
    the request propagate; the page is left untouched in both cases.
    """
    url = build_request_url(action, form, cgi=settings.cgi, rng=rng)
    if not url:
        logger.debug("action %s builds no request", action)
        return None
    callback = on_ready or _render_into(page, settings.element_id)
    async with client_factory(settings) as http_client:
        client = KmlHttpClient(http_client, request_log=settings.request_log)
        result = await client.fetch(url)
    callback(result)
    return result


__all__ = ["ReadyCallback", "ajax_function"]
