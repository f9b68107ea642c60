"""Tests for vaultsite.store.outline."""

from __future__ import annotations

from conftest import STRUCTURE, dedent

from vaultsite.store.outline import list_item_text, parse_outline


def test_parse_outline_reads_frontmatter_and_headings() -> None:
    outline = parse_outline(STRUCTURE)

    assert outline.frontmatter == {"title": "Test Site"}
    assert [(h.text, h.line) for h in outline.headings] == [
        ("Blog", 7),
        ("Pages", 11),
        ("Navbar", 19),
        ("Sidebars", 26),
    ]


def test_marker_line_is_not_a_heading() -> None:
    outline = parse_outline("#docusaurus/test/_\n# Real\n")
    assert [h.text for h in outline.headings] == ["Real"]


def test_parse_outline_separates_embeds_from_links() -> None:
    outline = parse_outline(STRUCTURE)

    assert [(e.target, e.display_text) for e in outline.embeds] == [("logo.png", "logo")]
    assert all(not link.embed for link in outline.links)
    navbar_link = next(link for link in outline.links if link.line == 21)
    assert navbar_link.target == "Docs Landing Page"
    assert navbar_link.display_text == "My Docs"


def test_list_items_reference_parent_start_lines() -> None:
    outline = parse_outline(STRUCTURE)
    by_line = {item.start_line: item for item in outline.list_items}

    assert by_line[28].parent is None
    assert by_line[29].parent == 28
    assert by_line[33].parent == 28
    assert by_line[34].parent == 33
    assert by_line[22].parent is None
    assert by_line[23].parent == 22


def test_markdown_links_are_decoded() -> None:
    outline = parse_outline("- [Simple](Page%20Simple.md)\n- [Site](https://example.com)\n")

    assert [(l.display_text, l.target) for l in outline.links] == [
        ("Simple", "Page Simple.md"),
        ("Site", "https://example.com"),
    ]


def test_wikilink_anchor_is_kept_in_target() -> None:
    outline = parse_outline("See [[Page#Section]].\n")
    link = outline.links[0]
    assert link.target == "Page#Section"
    assert link.display_text == "Page#Section"
    assert "See [[Page#Section]]."[link.start_offset : link.end_offset] == "[[Page#Section]]"


def test_multiline_item_spans_continuation_lines() -> None:
    body = dedent(
        """
        - first line
          continues here
        - second
        """
    )
    outline = parse_outline(body)
    first, second = outline.list_items

    assert (first.start_line, first.end_line) == (0, 1)
    assert (second.start_line, second.end_line) == (2, 2)
    assert second.parent is None
    assert list_item_text(body, first) == "first line continues here"


def test_code_fences_are_ignored() -> None:
    body = dedent(
        """
        ```
        # not a heading
        - not an item
        ```
        - item
        """
    )
    outline = parse_outline(body)

    assert outline.headings == []
    assert [item.start_line for item in outline.list_items] == [4]


def test_unindented_paragraph_closes_the_list() -> None:
    body = "- one\nparagraph\n  - two\n"
    outline = parse_outline(body)

    assert [(i.start_line, i.parent) for i in outline.list_items] == [(0, None), (2, None)]


def test_list_item_text_strips_bullets() -> None:
    body = "1. numbered\n\t* starred\n"
    outline = parse_outline(body)

    assert [list_item_text(body, item) for item in outline.list_items] == ["numbered", "starred"]
    assert outline.list_items[1].parent == 0


def test_invalid_frontmatter_is_ignored() -> None:
    outline = parse_outline("---\n: [\n---\n# Title\n")

    assert outline.frontmatter == {}
    assert [h.line for h in outline.headings] == [3]
