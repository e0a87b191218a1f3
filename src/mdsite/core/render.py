"""Markdown to HTML conversion with heading class injection"""

from markdown_it import MarkdownIt


HEADING_CLASSES = {
    '<h1>': '<h1 class="title">',
    '<h2>': '<h2 class="title is-4">',
    '<h3>': '<h3 class="title is-5">',
}


def _make_parser(preset: str = 'gfm-like') -> MarkdownIt:
    """Build a MarkdownIt instance; raw HTML is allowed so macros can emit embeds."""
    return MarkdownIt(preset, options_update={"linkify": False, "html": True})


_md = _make_parser()


def render_markdown(text: str) -> str:
    html = _md.render(text)
    for plain, classed in HEADING_CLASSES.items():
        html = html.replace(plain, classed)
    return html
