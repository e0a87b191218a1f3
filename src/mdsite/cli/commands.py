"""CLI command implementations"""

from pathlib import Path
from typing import Annotated, Optional

import typer

from mdsite.config import Settings, load_settings, load_site_config
from mdsite.core.export import render_site
from mdsite.core.logging import setup_logging
from mdsite.core.notify import read_recipients, render_digest, send_digest
from mdsite.core.parse import load_document
from mdsite.core.pipeline import load_corpus, pages_path
from mdsite.core.render import render_markdown
from mdsite.core.scaffold import new_site
from mdsite.errors import SiteError


RootOpt  = Annotated[str, typer.Option("--root", help="Site root containing config.yaml and pages/")]
PagesOpt = Annotated[Optional[str], typer.Option("--pages", help="Pages directory (default <root>/pages)")]


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load settings and configure logging, with standard CLI error handling."""
    try:
        settings = load_settings(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    setup_logging(settings.log_level, Path(settings.log_file) if settings.log_file else None)
    return settings


def _corpus(root: str, pages: Optional[str], config: Optional[str] = None):
    settings = _settings(overrides={"pages": pages})
    try:
        site_config, corpus = load_corpus(root, config, settings.pages or None)
    except SiteError as e:
        _fail(str(e))
    return settings, site_config, corpus


def web_cmd(
    root: RootOpt = ".",
    pages: PagesOpt = None,
    config: Annotated[Optional[str], typer.Option("--config", help="Config file (default <root>/config.yaml)")] = None,
    outdir: Annotated[Optional[str], typer.Option("--outdir", help="Output directory")] = None,
    ):
    """Build the whole site into the output directory."""
    settings = _settings(overrides={"pages": pages, "outdir": outdir})
    try:
        site_config, corpus = load_corpus(root, config, settings.pages or None)
        errors = render_site(corpus, site_config, Path(settings.outdir))
    except SiteError as e:
        _fail(str(e))
    if errors:
        _fail(f"{len(errors)} artifact(s) failed validation", errors[0])


def drafts_cmd(root: RootOpt = ".", pages: PagesOpt = None):
    """List the pages that are not published."""
    _, _, corpus = _corpus(root, pages)
    typer.echo("\n---- Drafts ----")
    for doc in corpus.documents:
        if not doc.published:
            typer.echo(f"{doc.filename:<30} {doc.title}")


def todo_cmd(root: RootOpt = ".", pages: PagesOpt = None):
    """List the todo notes of every page that has some."""
    settings, _, corpus = _corpus(root, pages)
    path = pages_path(Path(root), settings.pages or None)
    for doc in corpus.documents:
        if doc.todo:
            typer.echo(f"{path / doc.filename} {doc.title}")
            for note in doc.todo:
                typer.echo(f"   {note}")


def recent_cmd(
    root: RootOpt = ".",
    pages: PagesOpt = None,
    days: Annotated[int, typer.Option("--days", min=0, help="Include pages from the last N days")] = 7,
    ):
    """Print the email digest of recently stamped pages."""
    _, site_config, corpus = _corpus(root, pages)
    typer.echo(render_digest(corpus, site_config, days))


def new_cmd(root: Annotated[str, typer.Option("--root", help="Directory to create")]):
    """Create the skeleton of a new site."""
    _settings()
    try:
        new_site(root)
    except SiteError as e:
        _fail(str(e))


def notify_cmd(
    mail: Annotated[str, typer.Option("--mail", help="Markdown file to send")],
    to: Annotated[str, typer.Option("--to", help="File of recipient addresses")],
    root: RootOpt = ".",
    ):
    """Send a page as an HTML email to every recipient."""
    settings = _settings()
    try:
        site_config = load_site_config(Path(root))
        if site_config.sender is None:
            _fail("The 'from' field is missing from the config file")
        path = Path(mail) if Path(mail).exists() else Path(root) / mail
        doc = load_document(path)
        recipients = read_recipients(to)
    except SiteError as e:
        _fail(str(e))

    sent, failed = send_digest(settings, site_config.sender, recipients, doc.title, render_markdown(doc.content))
    typer.echo(f"Sent {sent} email(s), {failed} failed")
    if failed:
        raise typer.Exit(1)
