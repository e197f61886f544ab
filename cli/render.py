from __future__ import annotations

from typing import Any, Dict, Iterable, Sequence

import typer


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def render_response(payload: Dict[str, Any]) -> None:
    echo_heading("Ingest Result")
    echo_key_values(
        [
            ("success", payload.get("success")),
            ("processed_count", payload.get("processed_count")),
            ("message", payload.get("message")),
        ]
    )


def render_lines(lines: Sequence[str], limit: int | None = None) -> None:
    echo_heading(f"Line Protocol ({len(lines)} records)")
    shown = lines if limit is None else lines[:limit]
    for line in shown:
        typer.echo(line)
    hidden = len(lines) - len(shown)
    if hidden > 0:
        typer.echo(f"... and {hidden} more lines")
