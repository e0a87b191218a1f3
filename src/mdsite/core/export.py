"""Output renderers: pages, tag pages, archive, sitemap, robots.txt, and the orchestrator"""

import logging
from pathlib import Path
from typing import Any

from markupsafe import escape

from mdsite.config import SiteConfig
from mdsite.core.feed import render_atom
from mdsite.core.models import ARCHIVE_SLUG, Corpus, Document
from mdsite.core.render import render_markdown
from mdsite.core.templating import TemplateLoader
from mdsite.core.utils.slug import keywords, topath
from mdsite.errors import FeedValidationError, SiteError
from mdsite.util.fs import write_file


logger = logging.getLogger(__name__)

REDIRECT_STUB = '<meta http-equiv="refresh" content="0; url={target}" />\n'
TAGS_DIR = "tags"


def _base_context(config: SiteConfig, title: str, description: str, pagepath: str) -> dict[str, Any]:
    return {
        "config": config,
        "url": config.url.rstrip("/"),
        "site_name": config.site_name,
        "title": title,
        "description": description,
        "pagepath": pagepath,
        "keywords": [],
        "footer": render_markdown(config.footer) if config.footer else "",
    }


def page_footer(doc: Document, config: SiteConfig) -> str:
    """Configured footer, plus a link to the page source when link_to_source is set."""
    parts = [config.footer] if config.footer else []
    if config.link_to_source:
        parts.append(f"[source]({config.repo}/blob/{config.branch}/pages/{doc.filename})")
    return render_markdown("\n\n".join(parts)) if parts else ""


def render_page(doc: Document, corpus: Corpus, config: SiteConfig, loader: TemplateLoader) -> str:
    """HTML for one document, or a refresh stub for a redirect."""
    if doc.redirect is not None:
        return REDIRECT_STUB.format(target=escape(doc.redirect))
    context = _base_context(config, doc.title, doc.description, doc.url_path)
    context.update(
        page=doc,
        keywords=keywords(doc.tags),
        author=corpus.author(doc.author) if doc.author else None,
        footer=page_footer(doc, config),
    )
    return loader.render_template("page.html", **context)


def render_pages(corpus: Corpus, config: SiteConfig, outdir: Path, loader: TemplateLoader) -> list[Path]:
    """One '<slug or index>.html' per document; the archive is rendered separately."""
    return [
        write_file(outdir / doc.outfile, render_page(doc, corpus, config, loader))
        for doc in corpus.documents
        if not doc.is_archive
    ]


def valid_tag(tag: str) -> bool:
    """Tags that would escape the tags directory are rejected."""
    if tag == "/":
        return True
    return tag != ".." and "/" not in tag


def render_tag_pages(corpus: Corpus, config: SiteConfig, outdir: Path, loader: TemplateLoader) -> list[Path]:
    """tags/<topath(tag)>.html per tag, plus the tags/index.html listing."""
    written: list[Path] = []
    tags = sorted(corpus.tags())
    for tag in tags:
        if not valid_tag(tag):
            logger.error("Invalid tag '%s', skipping", tag)
            continue
        path = f"{TAGS_DIR}/{topath(tag)}"
        context = _base_context(config, tag, f"Pages tagged '{tag}'", path)
        context.update(pages=corpus.tagged(tag))
        written.append(write_file(outdir / f"{path}.html", loader.render_template("tag.html", **context)))

    context = _base_context(config, config.tags.title, config.tags.description, f"{TAGS_DIR}/")
    context.update(tags=[t for t in tags if valid_tag(t)])
    written.append(write_file(outdir / TAGS_DIR / "index.html", loader.render_template("tags.html", **context)))
    logger.info("Rendered %d tag page(s)", len(written) - 1)
    return written


def render_archive(corpus: Corpus, config: SiteConfig, outdir: Path, loader: TemplateLoader) -> Path:
    archive = corpus.get(ARCHIVE_SLUG)
    context = _base_context(
        config,
        archive.title if archive else config.archive.title,
        archive.description if archive else config.archive.description,
        "archive",
    )
    context.update(pages=[d for d in corpus.public() if not d.is_root])
    return write_file(outdir / "archive.html", loader.render_template("archive.html", **context))


def render_sitemap(corpus: Corpus, config: SiteConfig, outdir: Path, loader: TemplateLoader) -> Path:
    pages = [d for d in corpus.documents if d.published and d.redirect is None]
    xml = loader.render_template("sitemap.xml", url=config.url.rstrip("/"), pages=pages)
    return write_file(outdir / "sitemap.xml", xml)


def render_robots_txt(config: SiteConfig, outdir: Path) -> Path:
    return write_file(outdir / "robots.txt", f"Sitemap: {config.url.rstrip('/')}/sitemap.xml\n\nUser-agent: *\n")


def render_site(corpus: Corpus, config: SiteConfig, outdir: str | Path, loader: TemplateLoader | None = None) -> list[SiteError]:
    """Produce every artifact under outdir.

    Errors from any renderer propagate, except a FeedValidationError which is
    logged and returned so the remaining artifacts are still written.
    """
    outdir = Path(outdir)
    loader = loader or TemplateLoader()
    errors: list[SiteError] = []

    pages = render_pages(corpus, config, outdir, loader)
    logger.info("Rendered %d page(s) into '%s'", len(pages), outdir)
    render_tag_pages(corpus, config, outdir, loader)
    render_archive(corpus, config, outdir, loader)
    render_sitemap(corpus, config, outdir, loader)
    try:
        render_atom(corpus, config, outdir, loader)
    except FeedValidationError as e:
        logger.error("Feed not written: %s", e)
        errors.append(e)
    render_robots_txt(config, outdir)
    return errors
