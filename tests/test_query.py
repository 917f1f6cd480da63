"""Tests for query string and request URL construction."""

from __future__ import annotations

import pytest

from kml_client.domain.models import Action, KmlForm
from kml_client.services.query import build_query_string, build_request_url, js_escape

EXPECTED_QUERY = (
    "%26layer%3DLS8%3ANBAR%26region%3Dau%26west%3D110%26south%3D-45"
    "%26east%3D155%26north%3D-10%26time%3D2013-03-17T00%3A00%3A00.000Z"
)


@pytest.mark.parametrize(
    ("raw", "escaped"),
    [
        ("abcXYZ019", "abcXYZ019"),
        ("@*_+-./", "@*_+-./"),
        ("a b", "a%20b"),
        ("~!'()", "%7E%21%27%28%29"),
        ("line\n", "line%0A"),
        ("café", "caf%E9"),
        ("☃", "%u2603"),
        ("\U0001f600", "%uD83D%uDE00"),
        ("\ud800", "%uD800"),
        ("x\udcff", "x%uDCFF"),
        ("", ""),
    ],
)
def test_js_escape_matches_legacy_escape(raw: str, escaped: str) -> None:
    """Escaping follows the legacy browser escape() character classes."""
    assert js_escape(raw) == escaped


def test_build_query_string_orders_fields(form: KmlForm) -> None:
    """Fields are emitted as layer, region, west, south, east, north, time."""
    assert build_query_string(form) == EXPECTED_QUERY


def test_build_query_string_reescapes_first_plus_only() -> None:
    """Only the first literal plus is re-escaped as %2B, like the browser client."""
    form = KmlForm(layer="a+b", time="2013-03-17T00:00:00+10:00")

    query = build_query_string(form)

    assert query.count("%2B") == 1
    assert "%26layer%3Da%2Bb" in query
    assert query.endswith("%26time%3D2013-03-17T00%3A00%3A00+10%3A00")


def test_build_query_string_single_plus_in_time() -> None:
    form = KmlForm(time="2013-03-17T00:00:00+10:00")

    assert build_query_string(form).endswith("%3A00%2B10%3A00")


def test_build_query_string_empty_form() -> None:
    """Empty fields still contribute their key."""
    query = build_query_string(KmlForm())

    assert query == (
        "%26layer%3D%26region%3D%26west%3D%26south%3D%26east%3D%26north%3D%26time%3D"
    )


def test_numeric_fields_are_rendered_as_text() -> None:
    """Numbers are passed through with str()."""
    form = KmlForm(west=110, south=-45.5)

    assert "%26west%3D110%26south%3D-45.5" in build_query_string(form)


def test_build_request_url_for_kml(form: KmlForm) -> None:
    """KML action produces createKML+<random>+<query> against the CGI."""
    url = build_request_url(Action.KML, form, rng=lambda: 0.25)

    assert url == f"google_earth.cgi?createKML+1250.0+{EXPECTED_QUERY}"


def test_build_request_url_custom_cgi(form: KmlForm) -> None:
    url = build_request_url(1, form, cgi="other.cgi", rng=lambda: 0.0)

    assert url is not None
    assert url.startswith("other.cgi?createKML+0.0+%26layer")


def test_build_request_url_random_is_cache_busting(form: KmlForm) -> None:
    """The cache-busting number lies in [0, 5000)."""
    url = build_request_url(Action.KML, form)

    assert url is not None
    ran_number = float(url.split("+")[1])
    assert 0 <= ran_number < 5000


@pytest.mark.parametrize("action", [0, 2, 99])
def test_build_request_url_other_actions_build_nothing(form: KmlForm, action: int) -> None:
    assert build_request_url(action, form) is None
