"""Internal link extraction and backlink grouping across the corpus"""

import re
from collections import defaultdict
from typing import Iterable, Sequence

from mdsite.core.models import Document, Link


# [text](target) not preceded by '!' (images are not links)
LINK_RE = re.compile(r'(?<!!)\[([^\]]+)\]\(([^)\s]+)(?:\s+"[^"]*")?\)')
EXTERNAL_PREFIXES = ('http://', 'https://')


def normalize_path(target: str) -> str:
    """Drop fragment and query, ensure a leading '/', drop a trailing '/' except for the root."""
    path = re.split(r'[#?]', target, maxsplit=1)[0]
    if not path.startswith('/'):
        path = '/' + path
    if len(path) > 1:
        path = path.rstrip('/') or '/'
    return path


def find_links(doc: Document) -> list[Link]:
    """Internal links in a document's Markdown content."""
    return [
        Link(from_title=doc.title, from_path=doc.slug, to_title=text, to_path=normalize_path(target))
        for text, target in LINK_RE.findall(doc.content)
        if not target.startswith(EXTERNAL_PREFIXES)
    ]


def collect_links(documents: Iterable[Document]) -> list[Link]:
    return [link for doc in documents for link in find_links(doc)]


def group_by_target(links: Iterable[Link]) -> dict[str, list[Link]]:
    """Map target path -> links pointing at it, ordered by origin title descending."""
    grouped: dict[str, list[Link]] = defaultdict(list)
    for link in links:
        grouped[link.to_path].append(link)
    return {path: sorted(ls, key=lambda l: l.from_title, reverse=True) for path, ls in grouped.items()}


def attach_backlinks(documents: Sequence[Document], links: Iterable[Link]) -> list[Document]:
    """Return copies of documents with backlinks whose target is '/' + slug."""
    grouped = group_by_target(links)
    return [
        doc.model_copy(update={"backlinks": grouped.get(normalize_path(doc.slug), [])})
        for doc in documents
    ]
