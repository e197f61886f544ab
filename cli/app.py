from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer

from cli.client import ApiClient
from cli.config import CLIConfig, load_config
from cli.render import render_lines, render_response
from services.line_protocol import encode_records
from services.reconstruction import NoValidPairsError, parse_heart_rate_text
from settings import get_settings


@dataclass
class CLIState:
    config: CLIConfig
    client: ApiClient


app = typer.Typer(
    help="Utilities for sending heart rate exports to the proxy service.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=1, message="CLI state is uninitialized.")
    return state


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="Proxy base URL (defaults to API_BASE_URL env or http://localhost:3000).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Seconds to wait for the proxy to respond.",
    ),
) -> None:
    """Entry point for the CLI."""
    config = load_config(base_url=base_url, timeout=timeout)
    client = ApiClient(config)
    ctx.obj = CLIState(config=config, client=client)
    ctx.call_on_close(client.close)


@app.command("send")
def send_command(
    ctx: typer.Context,
    file: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Path to a text export."),
    device_id: Optional[str] = typer.Option(
        None,
        "--device-id",
        "-d",
        help="Device tag for the records (server default when omitted).",
    ),
) -> None:
    """Forward a text export through the proxy."""
    state = _get_state(ctx)
    typer.echo(f"Sending {file} to {state.config.base_url} ...")
    payload = state.client.send_export(file, device_id=device_id)
    render_response(payload)
    if not payload.get("success"):
        raise typer.Exit(code=1)


@app.command("preview")
def preview_command(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Path to a text export."),
    device_id: Optional[str] = typer.Option(
        None,
        "--device-id",
        "-d",
        help="Device tag for the records (DEFAULT_DEVICE_ID env or apple-watch when omitted).",
    ),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", min=1, help="Show at most this many lines."),
) -> None:
    """Parse an export locally and print the line protocol it would produce."""
    try:
        text = file.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise typer.BadParameter(f"{file} is not valid UTF-8: {exc}") from exc

    try:
        records = parse_heart_rate_text(text)
    except NoValidPairsError as exc:
        typer.secho(f"Parse error: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc

    if device_id is None:
        device_id = get_settings().default_device_id

    render_lines(encode_records(records, device_id), limit=limit)


@app.command("health")
def health_command(ctx: typer.Context) -> None:
    """Check that the proxy is up."""
    state = _get_state(ctx)
    typer.echo(state.client.health())
