"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from gemsite.config import Settings, load_config
from gemsite.core.index import EventKind
from gemsite.core.pipeline import run_index, run_make


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )


def make_cmd(
    out_dir: Annotated[Path, typer.Argument(help="Output folder for all generated content")],
    site_dir: Annotated[Path, typer.Argument(help="Input folder for the site itself")] = Path("."),
    private: Annotated[bool, typer.Option("--private", "-p", help="Include private content in the build")] = False,
    html_template: Annotated[Optional[str], typer.Option("--html-template", help="HTML template file")] = None,
    gmi_template: Annotated[Optional[str], typer.Option("--gmi-template", help="Gemini template file")] = None,
    shell: Annotated[Optional[str], typer.Option("--shell", help="Shell for command blocks")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log every generated file")] = False,
    ):
    """Render every document under SITE_DIR to OUT_DIR/html and OUT_DIR/gmi."""
    _setup_logging(verbose)
    settings = _settings(overrides={
        "include_private": private or None, "html_template": html_template,
        "gmi_template": gmi_template, "shell": shell,
    })
    if not site_dir.is_dir():
        _fail(f"Site directory not found: {site_dir}")

    try:
        results = run_make(site_dir, out_dir, settings)
    except RuntimeError as e:
        _fail(str(e))
    for src, written in results:
        if written:
            typer.echo(f"  {src} -> {', '.join(str(w) for w in written)}")
        else:
            typer.echo(f"  {src} skipped (private)")
    typer.echo(f"Rendered {sum(1 for _, w in results if w)} document(s) to {out_dir}/")


def index_cmd(
    files: Annotated[list[Path], typer.Argument(help="Documents to list")],
    private: Annotated[bool, typer.Option("--private", "-p", help="Include private documents")] = False,
    written: Annotated[bool, typer.Option("--written", help="Only list when documents were written")] = False,
    updated: Annotated[bool, typer.Option("--updated", help="Only list document updates")] = False,
    limit: Annotated[Optional[int], typer.Option("--limit", "-n", min=1, help="Show at most N entries")] = None,
    ):
    """Print a newest-first list of written/updated events as link lines."""
    if written and updated:
        _fail("--written and --updated are mutually exclusive")
    settings = _settings(overrides={"include_private": private or None})
    kind = EventKind.written if written else EventKind.updated if updated else None
    try:
        listing = run_index(files, settings, kind, limit)
    except RuntimeError as e:
        _fail(str(e))
    typer.echo(listing, nl=False)
