"""Unit tests for core/pipeline.py (corpus assembly)"""

from datetime import datetime

import pytest

from mdsite.config import load_authors, load_site_config
from mdsite.core.pipeline import assemble_corpus, load_corpus, pages_path
from mdsite.errors import (
    DuplicateSlug, DuplicateTimestamp, InvalidMacroSyntax, NotFound, UnknownAuthor,
)


def test_load_corpus_orders_archive_first(site_root):
    """The archive comes first, then documents by timestamp, newest first."""
    _, corpus = load_corpus(site_root)
    assert [d.slug for d in corpus.documents] == ["archive", "rust", "about", ""]


def test_archive_stamped_with_newest(site_root):
    """The archive entry carries the newest document timestamp and the configured title."""
    _, corpus = load_corpus(site_root)
    archive = corpus.documents[0]
    assert archive.timestamp == "2024-01-03T10:00:00"
    assert archive.title == "Archive"
    assert archive.description == "Every page"


def test_empty_corpus_yields_archive_only(site_root, config):
    """An empty pages directory produces just the archive, stamped with the build time."""
    empty = site_root / "empty"
    empty.mkdir()
    now = datetime(2024, 6, 1, 8, 30, 0)
    corpus = assemble_corpus(empty, config, root=site_root, now=now)
    assert len(corpus.documents) == 1
    assert corpus.documents[0].slug == "archive"
    assert corpus.documents[0].timestamp == "2024-06-01T08:30:00"


def test_content_rendered_to_html(site_root, add_page):
    """Document content leaves assembly as HTML."""
    add_page("plain.md", "---\ntitle: Plain\ntimestamp: 2015-10-11T12:30:01\n---\nSome Text.\n")
    _, corpus = load_corpus(site_root)
    assert corpus.get("plain").content == "<p>Some Text.</p>\n"


def test_include_expanded_and_rendered(site_root):
    """The include macro becomes a rust code block."""
    _, corpus = load_corpus(site_root)
    html = corpus.get("rust").content
    assert '<code class="language-rust">' in html
    assert "Hello, world!" in html
    assert "https://github.com/example/site/tree/main/examples/hello_world.rs" in html


def test_latest_expanded_on_root(site_root):
    """The latest macro on the root page lists the other documents."""
    _, corpus = load_corpus(site_root)
    html = corpus.get("").content
    assert '<a href="/rust">Rust</a>' in html
    assert '<a href="/about">About</a>' in html
    assert "archive" not in html


def test_backlinks_attached(site_root):
    """Links found in one document appear as backlinks on their targets."""
    _, corpus = load_corpus(site_root)
    # the root page links to /rust through its latest macro
    assert [l.from_title for l in corpus.get("rust").backlinks] == ["Home", "About"]
    root_backlinks = [l.from_path for l in corpus.get("").backlinks]
    assert "about" in root_backlinks


def test_unknown_author(site_root, add_page):
    """A page naming an author missing from config fails with nickname and filename."""
    add_page("author-not-in-config.md", (
        "---\ntitle: George\ntimestamp: 2024-02-01T00:00:00\nauthor: george\n---\nText\n"
    ))
    with pytest.raises(UnknownAuthor) as info:
        load_corpus(site_root)
    assert "'george'" in str(info.value)
    assert "'author-not-in-config.md'" in str(info.value)


def test_duplicate_timestamp(site_root, add_page):
    """Two documents with the same timestamp fail, naming both files."""
    add_page("twin.md", "---\ntitle: Twin\ntimestamp: 2024-01-02T10:00:00\n---\n")
    with pytest.raises(DuplicateTimestamp, match="about.md") as info:
        load_corpus(site_root)
    assert "twin.md" in str(info.value)


def test_duplicate_slug(tmp_path, config, make_doc):
    """Two documents with the same slug fail."""
    (tmp_path / "pages").mkdir()
    for name in ("a.md", "b.md"):
        (tmp_path / "pages" / name).write_text("x")
    stamps = iter(["2024-01-01T00:00:00", "2024-01-02T00:00:00"])
    loader = lambda path: make_doc("same", next(stamps))
    with pytest.raises(DuplicateSlug):
        assemble_corpus(tmp_path / "pages", config, root=tmp_path, loader=loader)


def test_archive_slug_reserved(site_root, add_page):
    """A page named archive.md collides with the generated archive entry."""
    add_page("archive.md", "---\ntitle: My archive\ntimestamp: 2024-02-01T00:00:00\n---\n")
    with pytest.raises(DuplicateSlug, match="archive.md"):
        load_corpus(site_root)


def test_invalid_curly_code(site_root, add_page):
    """Macro syntax that nothing expanded fails the pre-publish scan."""
    add_page("invalid_curly.md", "---\ntitle: Curly\ntimestamp: 2024-02-01T00:00:00\n---\n{% opening liquid tag\n")
    with pytest.raises(InvalidMacroSyntax, match="invalid_curly.md"):
        load_corpus(site_root)


def test_missing_pages_dir(tmp_path, config):
    """A missing pages directory is NotFound."""
    with pytest.raises(NotFound):
        assemble_corpus(tmp_path / "pages", config)


def test_pages_path_default_and_override(tmp_path):
    """pages defaults to <root>/pages unless given explicitly."""
    assert pages_path(tmp_path) == tmp_path / "pages"
    assert pages_path(tmp_path, tmp_path / "other") == tmp_path / "other"


def test_authors_loaded_with_bio(site_root):
    """Authors carry the rendered biography from authors/<nickname>.md."""
    config = load_site_config(site_root)
    authors = load_authors(site_root, config)
    assert authors[0].nickname == "foobar"
    assert "<strong>things</strong>" in authors[0].text
