"""Unit tests for core/blocks.py"""

import pytest

from gemsite.core.blocks import parse_blocks, parse_image, parse_link, parse_wrapper
from gemsite.core.models import (
    BulletList, Empty, Heading, Image, LineBreak, Link, Paragraph, Preformatted,
    Quote, Raw, Strong, Subheading, Target, Text, Unknown,
)


def _blocks(text: str, ctx=None):
    return parse_blocks(text.split("\n"), 0, ctx)


def test_list_two_items():
    assert parse_blocks(["- a", "- b"]) == (BulletList(((Text("a"),), (Text("b"),))),)


def test_list_empty_item_is_kept():
    """`- ` with nothing after is an empty item, not a missing one."""
    assert parse_blocks(["- a", "- ", "- c"]) == (
        BulletList(((Text("a"),), (), (Text("c"),))),
    )


def test_paragraph_lines_join_with_line_break():
    assert parse_blocks(["one", "*two*"]) == (
        Paragraph((Text("one"), LineBreak(), Strong((Text("two"),)))),
    )


def test_blank_line_ends_paragraph_and_is_kept():
    assert parse_blocks(["one", "", "two"]) == (
        Paragraph((Text("one"),)), Empty(), Paragraph((Text("two"),)),
    )


def test_block_interrupts_paragraph():
    """A new block flushes the pending paragraph first."""
    assert parse_blocks(["text", "# Head", "more"]) == (
        Paragraph((Text("text"),)), Heading("Head"), Paragraph((Text("more"),)),
    )


def test_heading_and_subheading():
    assert parse_blocks(["# One", "## Two"]) == (Heading("One"), Subheading("Two"))


def test_raw_blocks_per_target():
    assert parse_blocks([".html <b>x</b>", ".html <i>y</i>", ".gmi plain"]) == (
        Raw(Target.html, ("<b>x</b>", "<i>y</i>")),
        Raw(Target.gmi, ("plain",)),
    )


def test_preformatted_strips_indent():
    assert parse_blocks(["  code *not bold*", "    indented", "after"]) == (
        Preformatted(("code *not bold*", "  indented")),
        Paragraph((Text("after"),)),
    )


def test_quote_paragraphs():
    """Bare `> ` lines split paragraphs without closing the quote."""
    res = parse_wrapper(["> a", "> b", "> ", ">", "> c", "after"], 0)
    assert res.data == Quote((
        (Text("a"), LineBreak(), Text("b")),
        (Text("c"),),
    ))
    assert res.new_pos == 5


@pytest.mark.parametrize("line,expected", [
    ("=> https://example.org Example", Link("https://example.org", "Example")),
    ("=> page.* A page",               Link("page", "A page", auto_ext=True)),
    ("=> page.*#part A part",          Link("page", "A part", auto_ext=True, fragment="part")),
    ("=> https://x.org/#top",          Link("https://x.org/#top")),
    ("=> ",                            Unknown("=> ")),
])
def test_parse_link(line, expected):
    assert parse_link([line], 0).data == expected


def test_image_two_line_construct():
    res = parse_image(["!> cat.png A cat", "  a sleeping cat", "next"], 0)
    assert res.data == Image(source="cat.png", title="A cat", alt="a sleeping cat")
    assert res.new_pos == 2


def test_image_without_alt_is_unknown():
    assert _blocks("!> cat.png A cat\ntext") == (
        Unknown("!> cat.png A cat"), Paragraph((Text("text"),)),
    )


def test_command_without_context_is_unknown():
    """With no command context nothing runs and the lines are marked unknown."""
    assert parse_blocks([": echo hi", ": echo there"]) == (
        Unknown(": echo hi"), Unknown(": echo there"),
    )


def test_body_after_info_starts_with_empty():
    lines = ["Title", "Written 2021-01-01", "", "Hi"]
    assert parse_blocks(lines, 2) == (Empty(), Paragraph((Text("Hi"),)))
