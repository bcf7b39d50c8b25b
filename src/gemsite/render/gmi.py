"""Gemini (gemtext) renderer.

Gemtext has no inline markup, so strong, emphasis and anchor spans are
written as their plain text. Spacing between blocks comes from the Empty
blocks of the source.
"""

import io
from typing import TextIO

from gemsite.core.models import (
    Anchor, BulletList, Document, Empty, Emphasis, Heading, Image, LineBreak, Link,
    Paragraph, Preformatted, Quote, Raw, Strong, Subheading, Target, Text, Unknown,
)


EXTENSION = ".gmi"
FENCE = "```"


def render_spans(spans: tuple, out: TextIO, prefix: str = "") -> None:
    for span in spans:
        if isinstance(span, Text):
            out.write(span.text)
        elif isinstance(span, (Strong, Emphasis, Anchor)):
            render_spans(span.spans, out, prefix)
        elif isinstance(span, LineBreak):
            out.write(f"\n{prefix}")
        else:
            raise TypeError(f"Unhandled span {span!r}")


def render_paragraph(spans: tuple, out: TextIO, prefix: str = "") -> None:
    """Write spans as lines, repeating prefix on every physical line."""
    out.write(prefix)
    render_spans(spans, out, prefix)
    out.write("\n")


def render_block(block, out: TextIO) -> None:
    if isinstance(block, Paragraph):
        render_paragraph(block.spans, out)
    elif isinstance(block, Raw):
        if block.target == Target.gmi:
            for line in block.lines:
                out.write(f"{line}\n")
    elif isinstance(block, Heading):
        out.write(f"## {block.text}\n")
    elif isinstance(block, Subheading):
        out.write(f"### {block.text}\n")
    elif isinstance(block, Quote):
        for i, paragraph in enumerate(block.paragraphs):
            if i:
                out.write("> \n")
            render_paragraph(paragraph, out, "> ")
    elif isinstance(block, BulletList):
        for item in block.items:
            out.write("* ")
            render_spans(item, out)
            out.write("\n")
    elif isinstance(block, Link):
        out.write(f"=> {block.url}{EXTENSION if block.auto_ext else ''}")
        if block.text:
            out.write(f" {block.text}")
        out.write("\n")
    elif isinstance(block, Preformatted):
        out.write(f"{FENCE}\n")
        for line in block.lines:
            out.write(f"{line}\n")
        out.write(f"{FENCE}\n")
    elif isinstance(block, Image):
        out.write(f"=> {block.source}")
        if block.title:
            out.write(f" {block.title}")
        out.write("\n")
    elif isinstance(block, Empty):
        out.write("\n")
    elif isinstance(block, Unknown):
        out.write(f"UNKNOWN COMMAND: {block.line}\n")
    else:
        raise TypeError(f"Unhandled block {block!r}")


def render_gmi(doc: Document, out: TextIO) -> None:
    for block in doc.blocks:
        render_block(block, out)


def to_gmi(doc: Document) -> str:
    out = io.StringIO()
    render_gmi(doc, out)
    return out.getvalue()
