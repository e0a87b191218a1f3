"""Jinja2 environment for the site templates shipped in mdsite/templates"""

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, select_autoescape

from mdsite.core.utils.slug import topath


TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"


def date_part(timestamp: str) -> str:
    """'2015-10-11T12:30:01' -> '2015-10-11'"""
    return timestamp[:10]


class TemplateLoader:
    """Loads and renders the page, listing, feed and email templates.

    HTML and XML templates are autoescaped; already-rendered HTML is passed
    through with the `safe` filter.
    """

    def __init__(self, template_dir: Path | None = None) -> None:
        self.template_dir = Path(template_dir) if template_dir else TEMPLATE_DIR
        self.env = Environment(
            loader=FileSystemLoader(self.template_dir),
            autoescape=select_autoescape(["html", "xml"]),
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.env.filters["topath"] = topath
        self.env.filters["date"] = date_part

    def load_template(self, template_name: str) -> Template:
        return self.env.get_template(template_name)

    def render_template(self, template_name: str, **context: Any) -> str:
        return self.load_template(template_name).render(**context)
