"""Small markdown parser and renderers for model responses.

Parsing and rendering are separate steps: ``parse_markdown`` turns text into
block and inline nodes, ``render_html`` and ``render_plain_text`` map the
nodes to output. Supported syntax is what the analysis responses use:
headings (``#`` to ``####``), list lines (``- `` or ``* ``), strong
(``**``/``__``) and emphasis (``*``/``_``). Unclosed delimiters stay literal,
so a half-received response renders sensibly while it streams.
"""

import html
import re
from dataclasses import dataclass

_STRONG_RE = re.compile(r"(\*\*|__)(.+?)\1")
_EMPHASIS_RE = re.compile(r"(\*|_)(.+?)\1")
_HEADING_RE = re.compile(r"^(#{1,4}) (.*)$")
_LIST_ITEM_RE = re.compile(r"^[*-] (.*)$")


@dataclass(frozen=True)
class Text:
    value: str


@dataclass(frozen=True)
class Emphasis:
    children: tuple["Inline", ...]


@dataclass(frozen=True)
class Strong:
    children: tuple["Inline", ...]


Inline = Text | Emphasis | Strong


@dataclass(frozen=True)
class Heading:
    level: int
    children: tuple[Inline, ...]


@dataclass(frozen=True)
class ListItem:
    children: tuple[Inline, ...]


@dataclass(frozen=True)
class Paragraph:
    """A plain line of text. Blank lines are empty paragraphs."""

    children: tuple[Inline, ...]


Block = Heading | ListItem | Paragraph


def _parse_emphasis(text: str) -> list[Inline]:
    nodes: list[Inline] = []
    position = 0
    for match in _EMPHASIS_RE.finditer(text):
        if match.start() > position:
            nodes.append(Text(text[position : match.start()]))
        nodes.append(Emphasis((Text(match.group(2)),)))
        position = match.end()
    if position < len(text):
        nodes.append(Text(text[position:]))
    return nodes


def parse_inline(text: str) -> tuple[Inline, ...]:
    """Parse strong spans first, then emphasis inside and between them."""
    nodes: list[Inline] = []
    position = 0
    for match in _STRONG_RE.finditer(text):
        nodes.extend(_parse_emphasis(text[position : match.start()]))
        nodes.append(Strong(tuple(_parse_emphasis(match.group(2)))))
        position = match.end()
    nodes.extend(_parse_emphasis(text[position:]))
    return tuple(nodes)


def parse_line(line: str) -> Block:
    if heading := _HEADING_RE.match(line):
        return Heading(len(heading.group(1)), parse_inline(heading.group(2)))
    if item := _LIST_ITEM_RE.match(line):
        return ListItem(parse_inline(item.group(1)))
    return Paragraph(parse_inline(line))


def parse_markdown(text: str) -> list[Block]:
    """Parse text into one block per line."""
    return [parse_line(line) for line in text.split("\n")]


def _inline_html(nodes: tuple[Inline, ...]) -> str:
    parts: list[str] = []
    for node in nodes:
        if isinstance(node, Text):
            parts.append(html.escape(node.value, quote=False))
        elif isinstance(node, Strong):
            parts.append(f"<strong>{_inline_html(node.children)}</strong>")
        else:
            parts.append(f"<em>{_inline_html(node.children)}</em>")
    return "".join(parts)


def _inline_text(nodes: tuple[Inline, ...]) -> str:
    return "".join(
        node.value if isinstance(node, Text) else _inline_text(node.children)
        for node in nodes
    )


def render_html(blocks: list[Block]) -> str:
    """Render blocks to HTML, separating lines with ``<br>``."""
    lines: list[str] = []
    for block in blocks:
        content = _inline_html(block.children)
        if isinstance(block, Heading):
            lines.append(f"<h{block.level}>{content}</h{block.level}>")
        elif isinstance(block, ListItem):
            lines.append(f"<ul><li>{content}</li></ul>")
        else:
            lines.append(content)
    return "<br>".join(lines)


def render_plain_text(blocks: list[Block]) -> str:
    """Render blocks to plain text without any markup."""
    return "\n".join(_inline_text(block.children) for block in blocks)


def markdown_to_html(text: str) -> str:
    """Convert markdown to HTML for chat display."""
    return render_html(parse_markdown(text))


def markdown_to_text(text: str) -> str:
    """Strip markdown syntax, keeping the visible text."""
    return render_plain_text(parse_markdown(text))
