"""Unit tests for core/links.py"""

import pytest

from mdsite.core.links import attach_backlinks, collect_links, find_links, group_by_target, normalize_path
from mdsite.core.models import Link


@pytest.mark.parametrize("target,expected", [
    ("/", "/"),
    ("", "/"),
    ("/about", "/about"),
    ("about", "/about"),
    ("/about/", "/about"),
    ("/about#team", "/about"),
    ("/search?q=x", "/search"),
])
def test_normalize_path(target, expected):
    """Targets are compared without fragment, query or trailing slash."""
    assert normalize_path(target) == expected


def test_find_links_internal_only(make_doc):
    """External links and images are not part of the graph."""
    doc = make_doc("a", "2024-01-01T00:00:00", title="A", content=(
        "[home](/) [b](/b) [ext](https://example.com) ![img](/logo.png)\n"
    ))
    links = find_links(doc)
    assert [(l.to_title, l.to_path) for l in links] == [("home", "/"), ("b", "/b")]
    assert all(l.from_path == "a" and l.from_title == "A" for l in links)


def test_group_by_target_orders_by_title_descending():
    """Links to one target are ordered by origin title, descending."""
    links = [
        Link(from_title="Alpha", from_path="alpha", to_title="x", to_path="/x"),
        Link(from_title="Gamma", from_path="gamma", to_title="x", to_path="/x"),
        Link(from_title="Beta", from_path="beta", to_title="x", to_path="/x"),
    ]
    grouped = group_by_target(links)
    assert [l.from_title for l in grouped["/x"]] == ["Gamma", "Beta", "Alpha"]


def test_attach_backlinks(make_doc):
    """Each document receives exactly the links whose target is its own path."""
    home = make_doc("", "2024-01-01T00:00:00", title="Home", content="[b](/b)\n")
    a = make_doc("a", "2024-01-02T00:00:00", title="A", content="[home](/) [b](/b/)\n")
    b = make_doc("b", "2024-01-03T00:00:00", title="B")
    docs = attach_backlinks([home, a, b], collect_links([home, a, b]))

    assert [l.from_path for l in docs[0].backlinks] == ["a"]
    assert docs[1].backlinks == []
    assert [l.from_title for l in docs[2].backlinks] == ["Home", "A"]


def test_attach_backlinks_returns_copies(make_doc):
    """The input documents are not modified."""
    a = make_doc("a", "2024-01-02T00:00:00", content="[b](/b)\n")
    b = make_doc("b", "2024-01-03T00:00:00")
    attach_backlinks([a, b], collect_links([a, b]))
    assert b.backlinks == []
