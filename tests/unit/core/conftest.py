"""Shared fixtures for core unit tests"""

import pytest

from mdsite.config import SectionText, SiteConfig
from mdsite.core.models import Author, Corpus, Document


def make_doc(slug: str, timestamp: str, **kw) -> Document:
    kw.setdefault("title", slug.title() or "Home")
    return Document(slug=slug, filename=f"{slug or 'index'}.md", timestamp=timestamp, **kw)


@pytest.fixture(name="make_doc")
def make_doc_fixture():
    return make_doc


@pytest.fixture(name="config")
def config_fixture() -> SiteConfig:
    return SiteConfig(
        url="https://example.com/",
        repo="https://github.com/example/site",
        site_name="Example",
        tags=SectionText(title="Tags", description="All the tags"),
        archive=SectionText(title="Archive", description="Every page"),
    )


@pytest.fixture(name="corpus")
def corpus_fixture() -> Corpus:
    """Archive first, then documents newest first, as the assembler produces them."""
    return Corpus(
        documents=(
            make_doc("archive", "2024-01-05T10:00:00", title="Archive"),
            make_doc("draft", "2024-01-05T10:00:00", published=False, tags=["blog"]),
            make_doc("moved", "2024-01-04T10:00:00", redirect="/rust", tags=["blog"]),
            make_doc("rust", "2024-01-03T10:00:00", tags=["Rust", "blog"], content="<p>Rust</p>\n"),
            make_doc("about", "2024-01-02T10:00:00", tags=["about"], author="foobar"),
            make_doc("", "2024-01-01T10:00:00", title="Home", tags=["blog"]),
        ),
        authors=(Author(nickname="foobar", name="Foo Bar", text="<p>bio</p>\n"),),
    )
