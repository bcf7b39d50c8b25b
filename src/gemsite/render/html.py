"""HTML renderer"""

import io
from typing import TextIO

from gemsite.core.models import (
    Anchor, BulletList, Document, Empty, Emphasis, Heading, Image, LineBreak, Link,
    Paragraph, Preformatted, Quote, Raw, Strong, Subheading, Target, Text, Unknown,
)


EXTENSION = ".html"
_ESCAPES = str.maketrans({"&": "&amp;", "<": "&lt;", ">": "&gt;", '"': "&quot;"})


def escape_html(text: str) -> str:
    return text.translate(_ESCAPES)


def format_id(text: str) -> str:
    """Derive an in-page anchor id from heading text."""
    return text.replace(" ", "-").replace("?", "")


def link_href(link: Link) -> str:
    href = link.url + (EXTENSION if link.auto_ext else "")
    if link.fragment:
        href += f"#{link.fragment}"
    return href


def render_spans(spans: tuple, out: TextIO) -> None:
    for span in spans:
        if isinstance(span, Text):
            out.write(escape_html(span.text))
        elif isinstance(span, Strong):
            out.write("<strong>")
            render_spans(span.spans, out)
            out.write("</strong>")
        elif isinstance(span, Emphasis):
            out.write("<em>")
            render_spans(span.spans, out)
            out.write("</em>")
        elif isinstance(span, Anchor):
            out.write(f'<a href="{escape_html(span.url)}">')
            render_spans(span.spans, out)
            out.write("</a>")
        elif isinstance(span, LineBreak):
            out.write("<br>\n")
        else:
            raise TypeError(f"Unhandled span {span!r}")


def render_block(block, out: TextIO) -> None:
    if isinstance(block, Paragraph):
        out.write("<p>")
        render_spans(block.spans, out)
        out.write("</p>\n")
    elif isinstance(block, Raw):
        if block.target == Target.html:
            for line in block.lines:
                out.write(f"{line}\n")
    elif isinstance(block, Heading):
        out.write(f'<h2 id="{escape_html(format_id(block.text))}">{escape_html(block.text)}</h2>\n')
    elif isinstance(block, Subheading):
        out.write(f'<h3 id="{escape_html(format_id(block.text))}">{escape_html(block.text)}</h3>\n')
    elif isinstance(block, Quote):
        out.write("<blockquote>\n")
        for paragraph in block.paragraphs:
            render_block(Paragraph(paragraph), out)
        out.write("</blockquote>\n")
    elif isinstance(block, BulletList):
        out.write("<ul>\n")
        for item in block.items:
            out.write("  <li>")
            render_spans(item, out)
            out.write("</li>\n")
        out.write("</ul>\n")
    elif isinstance(block, Link):
        text = block.text if block.text is not None else block.url
        out.write(f'<p><a href="{escape_html(link_href(block))}">{escape_html(text)}</a></p>\n')
    elif isinstance(block, Preformatted):
        out.write("<pre>\n")
        for line in block.lines:
            out.write(f"{escape_html(line)}\n")
        out.write("</pre>\n")
    elif isinstance(block, Image):
        # The title is the gemini link label; HTML only needs the alt text.
        out.write(f'<img src="{escape_html(block.source)}" alt="{escape_html(block.alt)}">\n')
    elif isinstance(block, Empty):
        pass
    elif isinstance(block, Unknown):
        out.write(f"<p>UNKNOWN COMMAND: {escape_html(block.line)}</p>\n")
    else:
        raise TypeError(f"Unhandled block {block!r}")


def render_html(doc: Document, out: TextIO) -> None:
    """Write the document body as HTML; the template supplies the page around it."""
    for block in doc.blocks:
        render_block(block, out)


def to_html(doc: Document) -> str:
    out = io.StringIO()
    render_html(doc, out)
    return out.getvalue()
