"""CLI entry point for richmark."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import structlog
import typer
import yaml
from rich import print as rprint
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from richmark.config import RichmarkConfig, load_config
from richmark.config.loader import DEFAULT_CONFIG_TEMPLATE
from richmark.converter import ConversionState, DocumentConverter, to_document
from richmark.converter.assembler import analyze_paragraph
from richmark.output import MarkdownWriter
from richmark.sources import SOURCE_EXTENSIONS, SourceError, can_read, read_source

app = typer.Typer(
    name="richmark",
    help="Convert rich text (docx, HTML, styled runs) into markdown.",
)

config_app = typer.Typer(help="Manage richmark configuration.")
app.add_typer(config_app, name="config")

# Global state
_config: RichmarkConfig | None = None

_LOG_LEVELS = {"debug": logging.DEBUG, "info": logging.INFO, "warn": logging.WARNING, "error": logging.ERROR}


def _get_config() -> RichmarkConfig:
    if _config is None:
        return load_config()
    return _config


def _json_formatter() -> logging.Formatter:
    """structlog formatter rendering stdlib records as one JSON object per line."""
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
        ],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
    )


def _configure_logging(cfg: RichmarkConfig) -> None:
    if cfg.log_format == "json":
        handler: logging.Handler = logging.StreamHandler()
        handler.setFormatter(_json_formatter())
    else:
        handler = RichHandler(console=Console(stderr=True), show_path=False)
    logging.basicConfig(level=_LOG_LEVELS[cfg.log_level], handlers=[handler], force=True)


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to richmark.yaml")
    ] = None,
) -> None:
    """Global options."""
    global _config
    try:
        _config = load_config(config)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    _configure_logging(_config)


def _with_base_font_size(cfg: RichmarkConfig, base_font_size: float | None) -> RichmarkConfig:
    """Apply a --base-font-size override; an explicit size disables detection."""
    if base_font_size is None:
        return cfg
    if base_font_size <= 0:
        rprint(f"[red]Error:[/red] --base-font-size must be positive, got {base_font_size}")
        raise typer.Exit(1)
    conversion = cfg.conversion.model_copy(
        update={"base_font_size": base_font_size, "detect_base_font_size": False}
    )
    return cfg.model_copy(update={"conversion": conversion})


def _require_readable(file: str) -> None:
    if not can_read(file):
        supported = ", ".join(sorted(SOURCE_EXTENSIONS))
        rprint(f"[red]Error:[/red] Unsupported source '{escape(file)}' (supported: {supported})")
        raise typer.Exit(1)


@app.command()
def convert(
    file: str = typer.Argument(..., help="Rich-text source (.docx, .html, .yaml, .json)"),
    output: str | None = typer.Option(None, "--output", "-o", help="Override output directory"),
    stdout: bool = typer.Option(False, "--stdout", help="Print markdown instead of writing a file"),
    base_font_size: float | None = typer.Option(
        None, "--base-font-size", help="Body text size for heading detection"
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Preview without writing"),
) -> None:
    """Convert a rich-text file to markdown."""
    cfg = _with_base_font_size(_get_config(), base_font_size)
    _require_readable(file)

    result = DocumentConverter(cfg).convert(file)
    if result is None:
        rprint(f"[red]Error:[/red] Could not convert '{escape(file)}'")
        raise typer.Exit(1)

    if stdout:
        # Raw output: the markdown itself may contain rich markup brackets.
        typer.echo(result.markdown)
        return

    if not result.markdown.strip():
        rprint(f"[yellow]Nothing to write:[/yellow] '{escape(file)}' has no text.")
        raise typer.Exit(1)

    out_cfg = cfg.output
    if output:
        out_cfg = out_cfg.model_copy(update={"base_dir": output})
    dest = MarkdownWriter(out_cfg).write(result, dry_run=dry_run)

    label = "Would write" if dry_run else "Written to"
    rprint(
        Panel(
            f"[dim]Source:[/dim]      {escape(result.source_path)}\n"
            f"[dim]Format:[/dim]      {result.format}\n"
            f"[dim]Title:[/dim]       {escape(result.title)}\n"
            f"[dim]Paragraphs:[/dim]  {result.paragraph_count}\n"
            f"[dim]{label}:[/dim]  {escape(str(dest))}",
            title="Conversion Result",
            border_style="yellow" if dry_run else "green",
        )
    )


@app.command()
def inspect(
    file: str = typer.Argument(..., help="Rich-text source to analyse"),
    base_font_size: float | None = typer.Option(
        None, "--base-font-size", help="Body text size for heading detection"
    ),
) -> None:
    """Show how each paragraph of a source is classified."""
    cfg = _with_base_font_size(_get_config(), base_font_size)
    _require_readable(file)

    try:
        buffer = read_source(file, cfg.sources, cfg.conversion.base_font_size)
    except SourceError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    base = DocumentConverter(cfg).base_font_size(buffer)
    document = to_document(buffer)
    state = ConversionState()

    table = Table(title=f"Paragraphs ({len(document.paragraphs)}, base size {base:g})")
    table.add_column("#", justify="right", style="dim")
    table.add_column("List", style="cyan")
    table.add_column("Ordinal", justify="right")
    table.add_column("Heading", justify="center", style="magenta")
    table.add_column("Markdown", style="green")

    for index, paragraph in enumerate(document.paragraphs, start=1):
        rendered = analyze_paragraph(paragraph, base, state)
        if rendered.blank:
            table.add_row(str(index), "-", "-", "-", "[dim](blank)[/dim]")
            continue
        table.add_row(
            str(index),
            rendered.list_kind.value,
            str(rendered.ordinal) if rendered.ordinal is not None else "-",
            f"h{rendered.heading_level}" if rendered.heading_level else "-",
            escape(rendered.line),
        )
    rprint(table)


@config_app.command("show")
def config_show() -> None:
    """Show current resolved configuration."""
    cfg = _get_config()
    rprint(Syntax(yaml.dump(cfg.model_dump(), default_flow_style=False), "yaml"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create default richmark.yaml in current directory."""
    target = Path("richmark.yaml")
    if target.exists() and not force:
        rprint("[yellow]richmark.yaml already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")


if __name__ == "__main__":
    app()
