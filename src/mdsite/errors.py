"""Exception hierarchy for the content pipeline and its renderers"""


class SiteError(Exception):
    """Base exception for all mdsite errors."""


class NotFound(SiteError):
    """A referenced file (document, include target, author bio) does not exist."""


class SchemaViolation(SiteError):
    """Front matter or configuration contains an unknown or malformed field."""


class MetadataParseError(SchemaViolation):
    """Front matter block failed YAML parsing or schema validation."""


class ConfigError(SchemaViolation):
    """Site configuration file failed YAML parsing or schema validation."""


class ContentError(SiteError):
    """The corpus is not in a state where cross-document computations are meaningful."""


class MissingTitle(ContentError):
    pass


class InvalidTimestamp(ContentError):
    pass


class InvalidEncoding(ContentError):
    """A source file is not valid UTF-8."""


class EmptyTag(ContentError):
    pass


class DuplicateSlug(ContentError):
    pass


class DuplicateTimestamp(ContentError):
    pass


class DuplicateNickname(ContentError):
    pass


class UnknownAuthor(ContentError):
    pass


class MacroError(ContentError):
    """A macro could not be expanded. Carries the offending line and source file."""

    def __init__(self, message: str, line: str = "", filename: str = ""):
        self.line = line
        self.filename = filename
        where = f" in '{filename}'" if filename else ""
        super().__init__(f"{message}{where}: '{line.strip()}'" if line else f"{message}{where}")


class UnknownLanguage(MacroError):
    pass


class IncludeNotFound(MacroError, NotFound):
    pass


class InvalidMacroSyntax(MacroError):
    pass


class DeliveryError(SiteError):
    """A single notification recipient could not be reached."""


class FeedValidationError(SiteError):
    """The generated Atom feed did not parse back as a feed."""
