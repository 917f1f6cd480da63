"""Shared fixtures: isolated runtime context and a test CGI base URL."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from kml_client.domain.models import KmlForm, Page
from kml_client.runtime import AppContext, RuntimeConfig

BASE_URL = "http://kml.test/cgi-bin/"
CGI_URL = f"{BASE_URL}google_earth.cgi"


@pytest.fixture(autouse=True)
def isolated_runtime(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Fresh AppContext per test, with no KML_CLIENT_* env leaking in."""
    for key in (
        "KML_CLIENT_BASE_URL",
        "KML_CLIENT_CGI",
        "KML_CLIENT_ELEMENT_ID",
        "KML_CLIENT_TIMEOUT",
        "KML_CLIENT_REQUEST_LOG",
        "KML_CLIENT_CONFIG",
    ):
        monkeypatch.delenv(key, raising=False)
    AppContext.reset()
    yield
    AppContext.reset()


@pytest.fixture
def settings() -> RuntimeConfig:
    return RuntimeConfig(raw={"base_url": BASE_URL}, path=Path("test.yaml"))


@pytest.fixture
def form() -> KmlForm:
    return KmlForm(
        layer="LS8:NBAR",
        region="au",
        west="110",
        south="-45",
        east="155",
        north="-10",
        time="2013-03-17T00:00:00.000Z",
    )


@pytest.fixture
def page() -> Page:
    return Page.with_elements("kml")
