"""Application configuration: settings schema, site config.yaml schema, and their loaders"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from mdsite.core.models import Author
from mdsite.core.render import render_markdown
from mdsite.errors import ConfigError, DuplicateNickname, InvalidEncoding, NotFound


SETTINGS_FILE = "mdsite.yaml"
SITE_CONFIG_FILE = "config.yaml"
AUTHORS_DIR = "authors"
PAGES_DIR = "pages"


class Settings(BaseModel):
    app_name:      str = "mdsite"
    outdir:        str = Field(default="_site", description="Directory the generated site is written to")
    pages:         str = Field(default="",      description="Pages directory; empty means <root>/pages")
    log_level:     str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    log_file:      Optional[str] = Field(default=None, description="Also write log records to this file")
    smtp_host:     str = "localhost"
    smtp_port:     int = Field(default=25, ge=1, le=65535)
    smtp_user:     Optional[str] = None
    smtp_password: Optional[str] = None
    smtp_tls:      bool = False


def load_settings(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from mdsite.yaml, then MDSITE_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(SETTINGS_FILE).exists():
        try:
            data = yaml.safe_load(Path(SETTINGS_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {SETTINGS_FILE}: {e}") from e

    for name in Settings.model_fields:
        if val := os.getenv(f"MDSITE_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)


# --- per-site config.yaml ---

class _Strict(BaseModel):
    model_config = ConfigDict(extra="forbid")


class NavLink(_Strict):
    path:  str
    title: str


class Navbar(_Strict):
    start: list[NavLink] = Field(default_factory=list)
    end:   list[NavLink] = Field(default_factory=list)


class Sender(_Strict):
    name:  str
    email: str


class SectionText(_Strict):
    """Title and description of a generated listing page (archive, tag index)."""
    title:       str
    description: str = ""


class AtomSettings(_Strict):
    max: int = Field(default=0, ge=0, description="Max feed entries; 0 = unlimited")


class AuthorEntry(_Strict):
    name:     str
    nickname: str
    picture:  str = ""


class SiteConfig(_Strict):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    url:              str
    repo:             str
    branch:           str = "main"
    link_to_source:   bool = False
    site_name:        str = ""
    footer:           str = ""
    google_analytics: str = ""
    tags:             SectionText
    archive:          SectionText
    navbar:           Navbar = Field(default_factory=Navbar)
    sender:           Optional[Sender] = Field(default=None, alias="from")
    authors:          list[AuthorEntry] = Field(default_factory=list)
    atom:             Optional[AtomSettings] = None


def _describe(error: ValidationError) -> str:
    first = error.errors()[0]
    field = '.'.join(str(p) for p in first['loc'])
    if first['type'] == 'extra_forbidden':
        return f"unknown field '{field}'"
    return f"field '{field}': {first['msg']}"


def load_site_config(root: Path, path: Path | None = None) -> SiteConfig:
    """Read and strictly validate <root>/config.yaml, or path when given."""
    path = Path(path) if path else Path(root) / SITE_CONFIG_FILE
    if not path.exists():
        raise NotFound(f"Config file '{path}' not found")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except UnicodeDecodeError as e:
        raise ConfigError(f"Config file '{path}' is not valid UTF-8: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML format in '{path}': {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid config in '{path}': expected a mapping, got {type(data).__name__}")
    try:
        return SiteConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config in '{path}': {_describe(e)}") from e


def load_authors(root: Path, config: SiteConfig) -> list[Author]:
    """Authors from the config with their bio rendered from <root>/authors/<nickname>.md."""
    authors: list[Author] = []
    seen: set[str] = set()
    for entry in config.authors:
        if entry.nickname in seen:
            raise DuplicateNickname(f"Duplicate author nickname '{entry.nickname}' in {SITE_CONFIG_FILE}")
        seen.add(entry.nickname)

        bio = Path(root) / AUTHORS_DIR / f"{entry.nickname}.md"
        if not bio.exists():
            raise NotFound(f"File '{bio}' not found")
        try:
            text = bio.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise InvalidEncoding(f"File '{bio}' is not valid UTF-8: {e}") from e
        authors.append(Author(
            nickname=entry.nickname,
            name=entry.name,
            picture=entry.picture,
            text=render_markdown(text),
        ))
    return authors
