"""Root CLI application: clean, check, records and policy commands."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from foliosafe.content.records import RecordKind, parse_records, sanitize_record, unsafe_fields
from foliosafe.core.config import ConfigError, load_config
from foliosafe.core.models import AppConfig, SanitizeMode
from foliosafe.core.policy import build_policy
from foliosafe.engine.facade import HtmlSanitizer
from foliosafe.utils.text import truncate

console = Console()
err_console = Console(stderr=True)
app = typer.Typer(
    name="foliosafe",
    help="FOLIOSAFE: sanitize portfolio rich-text HTML before it is rendered.",
    no_args_is_help=True,
)


def _read_input(path: Optional[Path]) -> str:
    if path is None or str(path) == "-":
        return sys.stdin.read()
    if not path.exists():
        err_console.print(f"[red]File not found:[/red] {path}")
        raise typer.Exit(1)
    return path.read_text(encoding="utf-8")


def _get_config(ctx: typer.Context) -> AppConfig:
    return ctx.obj["config"]


@app.callback()
def main_callback(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to a YAML config file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log fallbacks and policy decisions"),
) -> None:
    """Load configuration and set up logging for every command."""
    try:
        cfg = load_config(str(config) if config else None)
    except ConfigError as exc:
        err_console.print(f"[red]Configuration error:[/red] {exc}")
        raise typer.Exit(2)

    level = logging.DEBUG if verbose else getattr(logging, cfg.log_level, logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    ctx.obj = {"config": cfg}


@app.command()
def clean(
    ctx: typer.Context,
    path: Optional[Path] = typer.Argument(None, help="HTML file to sanitize (stdin if omitted)"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the result to this file"),
    textual: bool = typer.Option(False, "--textual", help="Force the regex-only fallback mode"),
) -> None:
    """Sanitize an HTML fragment and print the result."""
    cfg = _get_config(ctx)
    sanitizer = HtmlSanitizer.from_config(cfg)
    if textual:
        sanitizer = HtmlSanitizer(policy=sanitizer.policy, structured=False)

    result = sanitizer.sanitize(_read_input(path))

    if output:
        output.write_text(result, encoding="utf-8")
        console.print(f"Sanitized HTML written to [cyan]{output}[/cyan]")
    else:
        typer.echo(result)


@app.command()
def check(
    ctx: typer.Context,
    path: Optional[Path] = typer.Argument(None, help="HTML file to check (stdin if omitted)"),
) -> None:
    """Flag content that looks dangerous. Exits 1 when flagged."""
    sanitizer = HtmlSanitizer.from_config(_get_config(ctx))
    if sanitizer.is_safe_content(_read_input(path)):
        console.print("[green]No dangerous patterns found.[/green]")
    else:
        console.print("[red]Dangerous patterns found.[/red] Sanitize before rendering.")
        raise typer.Exit(1)


@app.command()
def records(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="JSON file holding a list of records"),
    kind: RecordKind = typer.Option(..., "--kind", "-k", help="Record type"),
    report: bool = typer.Option(False, "--report", help="Show flagged fields instead of the sanitized JSON"),
) -> None:
    """Sanitize the rich-text fields of a list of portfolio records."""
    sanitizer = HtmlSanitizer.from_config(_get_config(ctx))
    try:
        items = json.loads(_read_input(path))
        parsed = parse_records(kind, items if isinstance(items, list) else [items])
    except (json.JSONDecodeError, ValueError) as exc:
        err_console.print(f"[red]Invalid records file:[/red] {exc}")
        raise typer.Exit(1)

    if report:
        table = Table(title=f"{kind.value.title()} records")
        table.add_column("#", style="dim", width=4)
        table.add_column("Flagged fields", style="white")
        table.add_column("Description", style="white")
        for idx, record in enumerate(parsed):
            flagged = unsafe_fields(record, sanitizer)
            status = f"[red]{', '.join(flagged)}[/red]" if flagged else "[green]clean[/green]"
            table.add_row(str(idx), status, truncate(getattr(record, "description", None) or "", 60))
        console.print(table)
        return

    cleaned = [sanitize_record(r, sanitizer).model_dump(by_alias=True) for r in parsed]
    typer.echo(json.dumps(cleaned, indent=2, ensure_ascii=False))


@app.command()
def policy(ctx: typer.Context) -> None:
    """Show the effective sanitization policy."""
    cfg = _get_config(ctx)
    pol = build_policy(cfg.sanitizer)

    console.print("\n[bold]FOLIOSAFE Policy[/bold]")
    mode_style = "green" if cfg.sanitizer.mode == SanitizeMode.STRUCTURED else "yellow"
    console.print(f"Mode: [{mode_style}]{cfg.sanitizer.mode.value}[/{mode_style}] "
                  f"(parser: [cyan]{cfg.sanitizer.parser}[/cyan])\n")

    table = Table(title="Allow-lists and deny-list")
    table.add_column("Set", style="cyan")
    table.add_column("Values", style="white")
    table.add_row("Allowed tags", ", ".join(sorted(pol.allowed_tags)))
    table.add_row("Allowed attributes", ", ".join(sorted(pol.allowed_attributes)))
    table.add_row("Style properties", ", ".join(sorted(pol.allowed_style_properties)))
    table.add_row("URL schemes", ", ".join(sorted(pol.allowed_url_schemes)))
    table.add_row("Dangerous tags", f"[red]{', '.join(sorted(pol.dangerous_tags))}[/red]")
    console.print(table)
