"""
Markdown rendering for note content.
"""

from markdown_it import MarkdownIt
from markupsafe import Markup

# "js-default": CommonMark plus tables and strikethrough. Raw HTML is
# disabled, so tags in a note are rendered as text, and unsafe link
# schemes such as javascript: are refused.
_md = MarkdownIt("js-default")


def render_markdown(text: str) -> Markup:
    """Render note content to HTML."""
    return Markup(_md.render(text or ""))
