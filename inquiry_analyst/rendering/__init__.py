"""Rendering of model responses for display.

Markdown is parsed into block and inline nodes, then rendered to HTML for the
transcript or to plain text for the copy action.
"""

from inquiry_analyst.rendering.markdown import (
    markdown_to_html,
    markdown_to_text,
    parse_markdown,
    render_html,
    render_plain_text,
)

__all__ = [
    "markdown_to_html",
    "markdown_to_text",
    "parse_markdown",
    "render_html",
    "render_plain_text",
]
