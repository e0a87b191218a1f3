"""Expansion of {% youtube %}, {% latest %} and {% include %} macros against the corpus

Macros are expanded one line at a time and never inside fenced code blocks, so
pages can show the macro syntax itself as example code.
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from mdsite.core.languages import language_for
from mdsite.core.models import Document
from mdsite.errors import IncludeNotFound, InvalidMacroSyntax, UnknownLanguage


logger = logging.getLogger(__name__)

FENCE = '```'
OPEN_TAG = '{%'

YOUTUBE_RE = re.compile(r'\{%\s*youtube\s+id\s*=\s*"([^"]*)"(?:\s+file\s*=\s*"[^"]*")?\s*%\}')
LATEST_RE = re.compile(r'\{%\s*latest\s+limit\s*=\s*"?(\d+)"?(?:\s+tag\s*=\s*"?([^"\s%]+)"?)?\s*%\}')
INCLUDE_RE = re.compile(r'\{%\s*include\s+file\s*=\s*"([^"]*)"\s*%\}')

YOUTUBE_EMBED = (
    '<iframe width="560" height="315" src="https://www.youtube.com/embed/{id}" '
    'title="YouTube video player" frameborder="0" allow="accelerometer; autoplay; '
    'clipboard-write; encrypted-media; gyroscope; picture-in-picture; web-share" '
    'allowfullscreen></iframe>\n'
)


@dataclass(frozen=True)
class MacroContext:
    """Site-wide values the macros need besides the corpus."""
    root:     Path                  # include paths resolve against this
    repo:     str
    branch:   str
    filename: str = ''              # document being expanded, for error messages


def youtube(video_id: str) -> str:
    return YOUTUBE_EMBED.format(id=video_id)


def latest(documents: Sequence[Document], limit: int, tag: str | None = None) -> str:
    """Markdown list of up to limit documents in corpus order; limit=0 means all."""
    items = []
    for doc in documents:
        if doc.is_root or doc.is_archive:
            continue
        if tag is not None and tag not in doc.tags:
            continue
        items.append(f"* [{doc.title}](/{doc.slug})\n")
        if limit and len(items) >= limit:
            break
    return ''.join(items)


def include(path: str, ctx: MacroContext, line: str = '') -> str:
    """Fenced code block with the contents of root/path, preceded by a source link."""
    language = language_for(path)
    if language is None:
        raise UnknownLanguage(f"Unhandled extension in include of '{path}'", line, ctx.filename)

    include_path = Path(ctx.root) / path
    try:
        text = include_path.read_text(encoding='utf-8')
    except OSError as e:
        raise IncludeNotFound(f"Failed to read file '{include_path}' ({e.strerror})", line, ctx.filename) from e
    except UnicodeDecodeError as e:
        raise IncludeNotFound(f"Failed to read file '{include_path}' (not valid UTF-8)", line, ctx.filename) from e

    logger.debug("Included '%s' as %s", include_path, language)
    return (
        f"**[{path}]({ctx.repo}/tree/{ctx.branch}/{path})**\n"
        f"```{language}\n{text}\n```\n"
    )


def _expand_line(line: str, documents: Sequence[Document], ctx: MacroContext) -> str:
    if OPEN_TAG not in line:
        return line
    line = YOUTUBE_RE.sub(lambda m: youtube(m.group(1)), line)
    line = LATEST_RE.sub(lambda m: latest(documents, int(m.group(1)), m.group(2)), line)
    return INCLUDE_RE.sub(lambda m: include(m.group(1), ctx, m.group(0)), line)


def _outside_code(lines: list[str]):
    """Yield (line, in_code) pairs; fence lines themselves count as code."""
    in_code = False
    for line in lines:
        if line.startswith(FENCE):
            in_code = not in_code
            yield line, True
        else:
            yield line, in_code


def expand_macros(body: str, documents: Sequence[Document], ctx: MacroContext) -> str:
    """Return body with every macro outside fenced code replaced by its expansion.

    documents is the full corpus snapshot and is only read.
    """
    return '\n'.join(
        line if in_code else _expand_line(line, documents, ctx)
        for line, in_code in _outside_code(body.split('\n'))
    )


def check_macro_syntax(doc: Document) -> None:
    """Raise InvalidMacroSyntax if any '{%' survived expansion outside code fences."""
    for line, in_code in _outside_code(doc.content.split('\n')):
        if not in_code and OPEN_TAG in line:
            raise InvalidMacroSyntax("Invalid curly code", line, doc.filename)
