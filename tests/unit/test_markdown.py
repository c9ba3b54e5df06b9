"""Unit tests for markdown parsing and rendering."""

import pytest
import pytest_check as check

from inquiry_analyst.rendering.markdown import (
    Emphasis,
    Heading,
    ListItem,
    Paragraph,
    Strong,
    Text,
    markdown_to_html,
    markdown_to_text,
    parse_inline,
    parse_markdown,
)


class TestParse:
    """Tests for the markdown node tree."""

    def test_heading_levels(self) -> None:
        blocks = parse_markdown("# Um\n#### Quatro")

        check.equal(blocks[0], Heading(1, (Text("Um"),)))
        check.equal(blocks[1], Heading(4, (Text("Quatro"),)))

    def test_list_items(self) -> None:
        blocks = parse_markdown("- item\n* outro")

        check.equal(blocks, [ListItem((Text("item"),)), ListItem((Text("outro"),))])

    def test_strong_with_nested_emphasis(self) -> None:
        nodes = parse_inline("**forte _enfase_**")

        check.equal(nodes, (Strong((Text("forte "), Emphasis((Text("enfase"),)))),))

    def test_blank_lines_are_empty_paragraphs(self) -> None:
        check.equal(parse_markdown("a\n\nb")[1], Paragraph(()))


class TestRenderHtml:
    """Tests for HTML rendering."""

    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("# Título", "<h1>Título</h1>"),
            ("### Fatos", "<h3>Fatos</h3>"),
            ("- item", "<ul><li>item</li></ul>"),
            ("**Conclusão**", "<strong>Conclusão</strong>"),
            ("__Conclusão__", "<strong>Conclusão</strong>"),
            ("*art. 28*", "<em>art. 28</em>"),
            ("_art. 28_", "<em>art. 28</em>"),
        ],
    )
    def test_supported_syntax(self, source: str, expected: str) -> None:
        check.equal(markdown_to_html(source), expected)

    def test_lines_joined_with_breaks(self) -> None:
        check.equal(markdown_to_html("um\ndois"), "um<br>dois")

    def test_escapes_html(self) -> None:
        """Raw markup from the model is shown as text."""
        check.equal(
            markdown_to_html("<script>alert(1)</script> & mais"),
            "&lt;script&gt;alert(1)&lt;/script&gt; &amp; mais",
        )

    def test_unclosed_delimiter_stays_literal(self) -> None:
        """A half-received strong span renders as typed."""
        check.equal(markdown_to_html("**Conclu"), "**Conclu")

    def test_heading_needs_space(self) -> None:
        check.equal(markdown_to_html("#hashtag"), "#hashtag")

    def test_mixed_document(self) -> None:
        source = "## Relatório\n- **Fato:** furto\n- Data: *01/02*"

        check.equal(
            markdown_to_html(source),
            "<h2>Relatório</h2><br>"
            "<ul><li><strong>Fato:</strong> furto</li></ul><br>"
            "<ul><li>Data: <em>01/02</em></li></ul>",
        )


class TestRenderPlainText:
    """Tests for the copy-to-clipboard text."""

    def test_strips_markup(self) -> None:
        source = "## Relatório\n- **Fato:** furto\n- Data: *01/02*"

        check.equal(markdown_to_text(source), "Relatório\nFato: furto\nData: 01/02")

    def test_keeps_literal_text(self) -> None:
        """Text without markup is unchanged, including symbols."""
        check.equal(markdown_to_text("Art. 28 < 30 & 2 * 3"), "Art. 28 < 30 & 2 * 3")
