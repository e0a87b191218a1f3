"""Data models for documents, authors, links and the assembled corpus"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"
ARCHIVE_SLUG = "archive"


class FrontMatter(BaseModel):
    """Strict schema for the YAML header of a content file; unknown keys are rejected."""
    model_config = ConfigDict(extra="forbid")

    title:        str = ""
    timestamp:    str = ""
    description:  str = ""
    todo:         list[str] = Field(default_factory=list)
    tags:         list[str] = Field(default_factory=list)
    author:       str = ""
    redirect:     Optional[str] = None
    published:    bool = True
    show_related: bool = True

    @field_validator("tags", "todo", mode="before")
    @classmethod
    def _null_entries(cls, value: Any) -> Any:
        if isinstance(value, list):
            return ["" if v is None else v for v in value]
        return value


class Link(BaseModel):
    """A directed edge from one document to an internal path."""
    model_config = ConfigDict(frozen=True)

    from_title: str
    from_path:  str
    to_title:   str
    to_path:    str


class Document(BaseModel):
    """The unit of content. Frozen: each pipeline stage returns a copy."""
    model_config = ConfigDict(frozen=True)

    slug:         str
    filename:     str
    title:        str
    timestamp:    str
    description:  str = ""
    tags:         list[str] = Field(default_factory=list)
    todo:         list[str] = Field(default_factory=list)
    author:       str = ""
    redirect:     Optional[str] = None
    published:    bool = True
    show_related: bool = True
    content:      str = ""          # raw body -> macro-expanded Markdown -> HTML
    backlinks:    list[Link] = Field(default_factory=list)

    @property
    def url_path(self) -> str:
        return self.slug

    @property
    def is_archive(self) -> bool:
        return self.slug == ARCHIVE_SLUG

    @property
    def is_root(self) -> bool:
        return self.slug == ""

    @property
    def is_public(self) -> bool:
        """Published, not a redirect stub, not the synthetic archive entry."""
        return self.published and self.redirect is None and not self.is_archive

    @property
    def outfile(self) -> str:
        return f"{self.slug or 'index'}.html"

    @property
    def modified(self) -> datetime:
        return datetime.strptime(self.timestamp, TIMESTAMP_FORMAT)


class Author(BaseModel):
    model_config = ConfigDict(frozen=True)

    nickname: str
    name:     str
    picture:  str = ""
    text:     str = ""              # rendered biography HTML


class Corpus(BaseModel):
    """The full ordered document set plus author roster handed to every renderer."""
    model_config = ConfigDict(frozen=True)

    documents: tuple[Document, ...]
    authors:   tuple[Author, ...] = ()

    def get(self, slug: str) -> Document | None:
        return next((d for d in self.documents if d.slug == slug), None)

    def author(self, nickname: str) -> Author | None:
        return next((a for a in self.authors if a.nickname == nickname), None)

    def public(self) -> list[Document]:
        return [d for d in self.documents if d.is_public]

    def tags(self) -> set[str]:
        """Lower-cased tags of all published, non-redirect documents."""
        return {t.lower() for d in self.public() for t in d.tags}

    def tagged(self, tag: str) -> list[Document]:
        return [d for d in self.public() if tag in (t.lower() for t in d.tags)]
