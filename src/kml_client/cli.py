"""CLI layer: build a KML request from form options, fetch it and render the result."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Annotated

import httpx
import typer
from rich.json import JSON

from kml_client.domain.models import Action, KmlForm, Page
from kml_client.errors import ConfigError, TransportUnavailableError
from kml_client.infrastructure.fs import write_text
from kml_client.infrastructure.logging import (
    enable_json_logging,
    get_console,
    render_alert,
    render_panel,
)
from kml_client.runtime import RuntimeConfig, bootstrap
from kml_client.services.ajax import ajax_function
from kml_client.services.query import build_request_url

app = typer.Typer(help="KML overlay request client")


@app.callback()
def init(
    json_logs: Annotated[bool, typer.Option("--json-logs", help="Emit JSON log lines")] = False,
) -> None:
    """Bootstrap environment (dotenv + logging) before any command."""
    if json_logs:
        enable_json_logging()
    bootstrap()


def _settings(config: Path | None, base_url: str | None) -> RuntimeConfig:
    settings = bootstrap(config, force=config is not None).config
    if base_url:
        settings = RuntimeConfig(raw={**settings.raw, "base_url": base_url}, path=settings.path)
    try:
        settings.as_dict()
    except ConfigError as exc:
        render_panel("config error", str(exc), style="red", markup=False)
        raise typer.Exit(code=1) from exc
    return settings


@app.command("fetch")
def fetch_cmd(
    layer: Annotated[str, typer.Option(help="Layer identifier")] = "",
    region: Annotated[str, typer.Option(help="Region identifier")] = "",
    west: Annotated[str, typer.Option(help="West bound")] = "",
    south: Annotated[str, typer.Option(help="South bound")] = "",
    east: Annotated[str, typer.Option(help="East bound")] = "",
    north: Annotated[str, typer.Option(help="North bound")] = "",
    time: Annotated[str, typer.Option(help="Time value")] = "",
    config: Annotated[Path | None, typer.Option(help="YAML config file")] = None,
    base_url: Annotated[str | None, typer.Option(help="Override CGI base URL")] = None,
    dry_run: Annotated[bool, typer.Option(help="Print the request URL, skip the call")] = False,
    output: Annotated[Path | None, typer.Option(help="Also write the KML text here")] = None,
    json_out: Annotated[bool, typer.Option("--json", help="Emit fetch result JSON")] = False,
) -> None:
    """Request KML for the given bounds and render it into the page element."""
    settings = _settings(config, base_url)
    form = KmlForm(
        layer=layer, region=region, west=west, south=south, east=east, north=north, time=time
    )
    if dry_run:
        url = build_request_url(Action.KML, form, cgi=settings.cgi)
        get_console().print(f"{settings.base_url.rstrip('/')}/{url}", markup=False, soft_wrap=True)
        return
    page = Page.with_elements(settings.element_id)
    try:
        result = asyncio.run(ajax_function(Action.KML, form, page, settings=settings))
    except TransportUnavailableError as exc:
        render_alert(str(exc))
        raise typer.Exit(code=1) from exc
    except httpx.HTTPError as exc:
        render_panel("request failed", f"[red]{exc}[/red]", style="red")
        raise typer.Exit(code=1) from exc
    if result is None:
        return
    element = page.get_element(settings.element_id)
    if output is not None:
        write_text(output, element.content)
    if json_out:
        get_console().print(JSON.from_data(result.model_dump()))
        return
    render_panel(
        f"#{element.id} ({element.display})",
        element.content or "<empty response>",
        markup=False,
        style="green" if result.status_code < 400 else "yellow",
    )


@app.command("show-config")
def show_config_cmd(
    config: Annotated[Path | None, typer.Option(help="YAML config file")] = None,
) -> None:
    """Print the effective settings as JSON."""
    settings = _settings(config, None)
    get_console().print(JSON.from_data(settings.as_dict()))


if __name__ == "__main__":  # pragma: no cover
    app()
