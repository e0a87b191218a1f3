"""Corpus assembly: load -> validate -> order -> expand macros -> render -> link"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, Sequence

from mdsite.config import PAGES_DIR, SiteConfig, load_authors, load_site_config
from mdsite.core.links import attach_backlinks, collect_links
from mdsite.core.macros import MacroContext, check_macro_syntax, expand_macros
from mdsite.core.models import ARCHIVE_SLUG, TIMESTAMP_FORMAT, Author, Corpus, Document
from mdsite.core.parse import discover_files, load_document
from mdsite.core.render import render_markdown
from mdsite.errors import DuplicateSlug, DuplicateTimestamp, NotFound, UnknownAuthor


logger = logging.getLogger(__name__)

Loader = Callable[[Path], Document]


def pages_path(root: Path, pages: str | Path | None = None) -> Path:
    """The pages directory: explicit when given, else <root>/pages."""
    return Path(pages) if pages else Path(root) / PAGES_DIR


def _check_unique(docs: Sequence[Document]) -> None:
    """Slugs and timestamps must be unique; the archive slug is reserved."""
    slugs: dict[str, str] = {ARCHIVE_SLUG: "the generated archive"}
    stamps: dict[str, str] = {}
    for doc in docs:
        if doc.slug in slugs:
            raise DuplicateSlug(f"Duplicate slug '{doc.slug}' in '{slugs[doc.slug]}' and '{doc.filename}'")
        if doc.timestamp in stamps:
            raise DuplicateTimestamp(
                f"Duplicate timestamp '{doc.timestamp}' in '{stamps[doc.timestamp]}' and '{doc.filename}'"
            )
        slugs[doc.slug] = doc.filename
        stamps[doc.timestamp] = doc.filename


def _check_authors(docs: Sequence[Document], authors: Sequence[Author]) -> None:
    known = {a.nickname for a in authors}
    for doc in docs:
        if doc.author and doc.author not in known:
            raise UnknownAuthor(
                f"The nickname '{doc.author}' used in the file '{doc.filename}' is not in the config.yaml file."
            )


def archive_document(docs: Sequence[Document], config: SiteConfig, now: datetime | None = None) -> Document:
    """Synthetic archive entry stamped with the newest timestamp, or now for an empty corpus."""
    if docs:
        timestamp = max(d.timestamp for d in docs)
    else:
        timestamp = (now or datetime.now()).strftime(TIMESTAMP_FORMAT)
    return Document(
        slug=ARCHIVE_SLUG,
        filename=ARCHIVE_SLUG,
        title=config.archive.title,
        description=config.archive.description,
        timestamp=timestamp,
        published=True,
    )


def load_documents(path: Path, loader: Loader = load_document) -> list[Document]:
    """Load every content file under path. The first failure aborts the whole read."""
    if not path.is_dir():
        raise NotFound(f"Pages directory '{path}' not found")
    return [loader(p) for p in discover_files(path)]


def assemble_corpus(
    path: Path,
    config: SiteConfig,
    authors: Sequence[Author] = (),
    root: Path | None = None,
    loader: Loader = load_document,
    now: datetime | None = None,
    ) -> Corpus:
    """Build the immutable, fully rendered and linked Corpus from a pages directory.

    Includes resolve against root (defaults to the parent of path). Raises a
    SiteError subclass on the first problem; no partial corpus is returned.
    """
    path = Path(path)
    root = Path(root) if root is not None else path.parent

    docs = load_documents(path, loader)
    logger.info("Loaded %d document(s) from '%s'", len(docs), path)
    _check_unique(docs)
    _check_authors(docs, authors)

    docs.sort(key=lambda d: d.timestamp, reverse=True)
    snapshot = (archive_document(docs, config, now), *docs)

    expanded = []
    for doc in snapshot:
        ctx = MacroContext(root=root, repo=config.repo, branch=config.branch, filename=doc.filename)
        expanded.append(doc.model_copy(update={"content": expand_macros(doc.content, snapshot, ctx)}))
    for doc in expanded:
        check_macro_syntax(doc)

    links = collect_links(expanded)
    logger.info("Collected %d internal link(s)", len(links))

    rendered = [d.model_copy(update={"content": render_markdown(d.content)}) for d in expanded]
    return Corpus(documents=tuple(attach_backlinks(rendered, links)), authors=tuple(authors))


def load_corpus(root: str | Path, config_path: str | Path | None = None, pages: str | Path | None = None) -> tuple[SiteConfig, Corpus]:
    """Read config.yaml, the author roster and the pages directory of a site root."""
    root = Path(root)
    config = load_site_config(root, Path(config_path) if config_path else None)
    authors = load_authors(root, config)
    corpus = assemble_corpus(pages_path(root, pages), config, authors, root=root)
    return config, corpus
