"""Atom feed rendering, checked by parsing the output back with lxml before it is written"""

import logging
from pathlib import Path

from lxml import etree

from mdsite.config import SiteConfig
from mdsite.core.models import Corpus
from mdsite.core.templating import TemplateLoader
from mdsite.errors import FeedValidationError
from mdsite.util.fs import write_file


logger = logging.getLogger(__name__)

ATOM_NS = "http://www.w3.org/2005/Atom"
REQUIRED_ENTRY_FIELDS = ("id", "title", "updated")


def _atom(tag: str) -> str:
    return f"{{{ATOM_NS}}}{tag}"


def validate_feed(xml: str) -> int:
    """Parse an Atom document and return its entry count.

    Raises FeedValidationError when the text is not well-formed XML, the root
    is not an Atom feed, or an entry lacks id, title or updated.
    """
    try:
        root = etree.fromstring(xml.encode("utf-8"))
    except etree.XMLSyntaxError as e:
        raise FeedValidationError(f"Feed is not well-formed XML: {e}") from e

    if root.tag != _atom("feed"):
        raise FeedValidationError(f"Feed root is '{root.tag}', expected an Atom feed")

    entries = root.findall(_atom("entry"))
    for n, entry in enumerate(entries, 1):
        for field in REQUIRED_ENTRY_FIELDS:
            el = entry.find(_atom(field))
            if el is None or not (el.text or "").strip():
                raise FeedValidationError(f"Feed entry {n} has no '{field}'")
    return len(entries)


def build_atom(corpus: Corpus, config: SiteConfig, loader: TemplateLoader) -> str:
    """Atom XML for the public documents, newest first, limited by atom.max when set."""
    pages = corpus.public()
    if config.atom and config.atom.max:
        pages = pages[:config.atom.max]
    updated = pages[0].timestamp if pages else corpus.documents[0].timestamp
    return loader.render_template(
        "atom.xml",
        url=config.url.rstrip("/"),
        site_name=config.site_name,
        updated=updated,
        pages=pages,
        authors={a.nickname: a.name for a in corpus.authors},
    )


def render_atom(corpus: Corpus, config: SiteConfig, outdir: Path, loader: TemplateLoader | None = None) -> Path:
    xml = build_atom(corpus, config, loader or TemplateLoader())
    count = validate_feed(xml)
    logger.info("Feed has %d entr%s", count, "y" if count == 1 else "ies")
    return write_file(Path(outdir) / "atom.xml", xml)
