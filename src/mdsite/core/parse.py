"""File discovery, front matter extraction, and Document loading"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from mdsite.core.models import Document, FrontMatter, TIMESTAMP_FORMAT
from mdsite.errors import (
    EmptyTag, InvalidEncoding, InvalidTimestamp, MetadataParseError, MissingTitle, NotFound,
)


logger = logging.getLogger(__name__)

DELIMITER = '---'
MD_EXTENSIONS = {'.md'}
ROOT_STEM = 'index'


class FrontMatterLoader(yaml.SafeLoader):
    """SafeLoader that keeps timestamps as plain strings."""


FrontMatterLoader.yaml_implicit_resolvers = {
    first: [(tag, rx) for tag, rx in resolvers if tag != 'tag:yaml.org,2002:timestamp']
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def _split_frontmatter(text: str, path: Path) -> tuple[dict[str, Any], str]:
    """Return (frontmatter_dict, body). The block is only recognized on the very first line."""
    lines = text.splitlines()
    if not lines or lines[0] != DELIMITER:
        return {}, ''.join(f"{line}\n" for line in lines)

    try:
        end = lines.index(DELIMITER, 1)
    except ValueError:
        raise MetadataParseError(f"Invalid front matter in '{path}': missing closing '{DELIMITER}'") from None

    try:
        fm = yaml.load('\n'.join(lines[1:end]), Loader=FrontMatterLoader) or {}
    except yaml.YAMLError as e:
        raise MetadataParseError(f"Invalid front matter in '{path}': {e}") from e
    if not isinstance(fm, dict):
        raise MetadataParseError(
            f"Invalid front matter in '{path}': expected a mapping, got {type(fm).__name__}"
        )
    return fm, ''.join(f"{line}\n" for line in lines[end + 1:])


def _describe(error: ValidationError) -> str:
    """Name the first offending field of a pydantic validation error."""
    first = error.errors()[0]
    field = '.'.join(str(p) for p in first['loc'])
    if first['type'] == 'extra_forbidden':
        return f"unknown field '{field}'"
    return f"field '{field}': {first['msg']}"


def parse_frontmatter(raw: dict[str, Any], path: Path) -> FrontMatter:
    try:
        return FrontMatter.model_validate(raw)
    except ValidationError as e:
        raise MetadataParseError(f"Invalid front matter in '{path}': {_describe(e)}") from e


def slug_for(path: Path) -> str:
    """Filename without extension; 'index' is the site root and maps to ''."""
    return '' if path.stem == ROOT_STEM else path.stem


def discover_files(path: Path) -> list[Path]:
    """Return sorted content files directly under path, or [path] if a single file."""
    if path.is_file():
        return [path] if path.suffix in MD_EXTENSIONS else []
    files = []
    for p in sorted(path.iterdir()):
        if p.is_dir() or p.suffix not in MD_EXTENSIONS:
            logger.debug("Skipping non-content entry '%s'", p)
            continue
        files.append(p)
    return files


def load_document(path: Path) -> Document:
    """Read one content file into a Document with its raw body as content."""
    path = Path(path)
    if not path.exists():
        raise NotFound(f"File '{path}' not found")

    logger.info("Loading '%s'", path)
    try:
        text = path.read_text(encoding='utf-8')
    except UnicodeDecodeError as e:
        raise InvalidEncoding(f"File '{path}' is not valid UTF-8: {e}") from e
    raw, body = _split_frontmatter(text, path)
    fm = parse_frontmatter(raw, path)

    if any(tag == '' for tag in fm.tags):
        raise EmptyTag(f"There is an empty tag in {path}")
    if not fm.title:
        raise MissingTitle(f"Missing title in '{path}'")
    try:
        datetime.strptime(fm.timestamp, TIMESTAMP_FORMAT)
    except ValueError as e:
        raise InvalidTimestamp(f"Invalid date '{fm.timestamp}' in {path}: {e}") from e

    return Document(
        slug=slug_for(path),
        filename=path.name,
        content=body,
        **fm.model_dump(),
    )
