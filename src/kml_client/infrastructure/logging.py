"""Logging & console helpers.

Features:
    * RichHandler based console logging (color, tracebacks)
    * Optional JSON logging mode (machine ingest)
    * Helper utilities (`get_console`, `render_panel`, `render_alert`) so service
        layers avoid importing rich directly, keeping presentation centralized.
"""

from __future__ import annotations

import json
import logging
import os

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.text import Text

_INITIALIZED = False
_JSON_MODE = False
_CONSOLE: Console | None = None


class _JsonHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:  # pragma: no cover - simple
        try:
            data = {
                "level": record.levelname,
                "name": record.name,
                "message": record.getMessage(),
            }
            if record.exc_info:
                data["exc_info"] = logging.Formatter().formatException(record.exc_info)
            print(json.dumps(data, ensure_ascii=False))
        except Exception:  # pragma: no cover
            self.handleError(record)


def setup_logging(level: str | None = None, json_mode: bool | None = None) -> None:
    global _INITIALIZED, _JSON_MODE
    if _INITIALIZED:
        return
    if json_mode is not None:
        _JSON_MODE = json_mode
    lvl_name = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    lvl = getattr(logging, lvl_name, logging.INFO)
    handler: logging.Handler
    if _JSON_MODE:
        handler = _JsonHandler()
    else:
        handler = RichHandler(rich_tracebacks=True, markup=True, show_path=False)
    logging.basicConfig(level=lvl, handlers=[handler], force=True, format="%(message)s")
    _INITIALIZED = True


def enable_json_logging() -> None:
    """Switch to JSON logging (re-initializes handlers)."""
    global _INITIALIZED
    _INITIALIZED = False
    setup_logging(json_mode=True)


def get_console() -> Console:
    """Return the shared rich Console."""
    global _CONSOLE
    if _CONSOLE is None:
        _CONSOLE = Console()
    return _CONSOLE


def render_panel(title: str, body: str, *, style: str = "cyan", markup: bool = True) -> None:
    """Render a panel; pass markup=False for raw response text."""
    content = body if markup else Text(body)
    get_console().print(Panel.fit(content, title=title, border_style=style))


def render_alert(message: str) -> None:
    """User-facing blocking alert (red panel)."""
    logging.getLogger("kml_client.console").error(message)
    render_panel("alert", f"[bold red]{message}[/bold red]", style="red")


__all__ = [
    "enable_json_logging",
    "get_console",
    "render_alert",
    "render_panel",
    "setup_logging",
]
