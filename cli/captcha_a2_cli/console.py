"""Terminal output for the CLI: status lines, service results and errors."""
from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from captcha_a2_client import ClientError

console = Console()
# Diagnostics and log records go to stderr so --json output stays parseable.
err_console = Console(stderr=True)

_CELL_LIMIT = 48


def info(msg: str) -> None:
    console.print(f"[bold cyan]•[/] {escape(msg)}")


def ok(msg: str) -> None:
    console.print(f"[bold green]OK[/] {escape(msg)}")


def warn(msg: str) -> None:
    console.print(f"[bold yellow]WARN[/] {escape(msg)}")


def err(msg: str) -> None:
    console.print(f"[bold red]ERR[/] {escape(msg)}")


def print_json(data: Any) -> None:
    console.print_json(data=data)


def plain(text: str) -> None:
    console.print(text, markup=False, highlight=False)


def describe_client_error(e: ClientError) -> str:
    parts: list[Any] = [f"HTTP {e.status_code}"]
    if e.code not in (None, ""):
        parts.append(f"code={e.code}")
    if e.error:
        parts.append(f"error={e.error}")
    if e.message:
        parts.append(e.message)
    return " ".join(str(p) for p in parts)


def service_error(e: ClientError) -> None:
    err(describe_client_error(e))
    if e.data is not None:
        print_json(e.data)


def result(data: Any, *, json_output: bool, text: str) -> None:
    """Print a service ``data`` payload as JSON, or a one-line summary."""
    if json_output:
        print_json(data)
    else:
        ok(text)


def _shorten(value: Any) -> str:
    text = str(value)
    if len(text) <= _CELL_LIMIT:
        return text
    return f"{text[:_CELL_LIMIT]}… ({len(text)} chars)"


def challenge_table(payload: dict[str, Any]) -> None:
    # image/thumb are base64 blobs; only their head is shown.
    table = Table(title="Captcha challenge")
    table.add_column("Field")
    table.add_column("Value")
    for key, value in payload.items():
        table.add_row(key, escape(_shorten(value)))
    console.print(table)
