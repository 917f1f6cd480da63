"""Query string construction for the KML CGI endpoint.

The CGI splits its query on ``+`` (``createKML+<random>+<params>``), so the
parameter block is escaped with the legacy browser ``escape()`` rules and the
first literal ``+`` is re-escaped as ``%2B``, as the browser client did.
"""
from __future__ import annotations

import random
import string
from collections.abc import Callable

from kml_client.domain.models import Action, KmlForm

DEFAULT_CGI = "google_earth.cgi"
CACHE_BUST_RANGE = 5000

# escape() leaves these untouched
_SAFE = frozenset(string.ascii_letters + string.digits + "@*_+-./")

_FIELD_ORDER = ("layer", "region", "west", "south", "east", "north", "time")


def js_escape(text: str) -> str:
    out: list[str] = []
    for ch in text:
        if ch in _SAFE:
            out.append(ch)
            continue
        raw = ch.encode("utf-16-be", "surrogatepass")
        for i in range(0, len(raw), 2):
            unit = (raw[i] << 8) | raw[i + 1]
            out.append(f"%{unit:02X}" if unit < 256 else f"%u{unit:04X}")
    return "".join(out)


def build_query_string(form: KmlForm) -> str:
    """Return the escaped ``&key=value`` block for ``form``."""
    raw = "".join(f"&{name}={getattr(form, name)}" for name in _FIELD_ORDER)
    return js_escape(raw).replace("+", "%2B", 1)


def build_request_url(
    action: Action | int,
    form: KmlForm,
    *,
    cgi: str = DEFAULT_CGI,
    rng: Callable[[], float] = random.random,
) -> str | None:
    """Build the relative request URL, or ``None`` when ``action`` issues no request."""
    if action != Action.KML:
        return None
    ran_number = rng() * CACHE_BUST_RANGE
    return f"{cgi}?createKML+{ran_number}+{build_query_string(form)}"


__all__ = ["DEFAULT_CGI", "build_query_string", "build_request_url", "js_escape"]
