"""Block parsing: turn document lines into a sequence of blocks.

Each parse_* function receives the full line list and the current index
and returns None when its construct does not start there, or a
ParseResult with the block and the index of the first unconsumed line.
"""

import logging
from typing import Optional

from gemsite.core.command import CommandContext, ProcessError
from gemsite.core.errors import CommandError
from gemsite.core.lines import read_lines
from gemsite.core.models import (
    BulletList,
    Empty,
    Heading,
    Image,
    LineBreak,
    Link,
    Paragraph,
    ParseResult,
    Preformatted,
    Quote,
    Raw,
    Subheading,
    Target,
    Unknown,
)
from gemsite.core.spans import parse_line


COMMAND_PREFIX = ": "
PREFORMATTED_PREFIX = "  "
QUOTE_PREFIX = "> "
HEADING_PREFIX = "# "
SUBHEADING_PREFIX = "## "
LINK_PREFIX = "=> "
LIST_PREFIX = "- "
IMAGE_PREFIX = "!> "
AUTO_EXT = ".*"


def parse_prefixed_lines(lines: list[str], start: int, prefix: str) -> Optional[ParseResult]:
    """Collect the run of lines starting with prefix, prefix removed."""
    if not lines[start].startswith(prefix):
        return None
    line = start
    result = []
    while line < len(lines) and lines[line].startswith(prefix):
        result.append(lines[line][len(prefix):])
        line += 1
    return ParseResult(tuple(result), line)


def parse_raw(lines: list[str], start: int) -> Optional[ParseResult]:
    for target in Target:
        if (res := parse_prefixed_lines(lines, start, f".{target.value} ")) is not None:
            return ParseResult(Raw(target, res.data), res.new_pos)
    return None


def _is_quote_line(line: str, prefix: str) -> bool:
    return line.startswith(prefix) or line == prefix.rstrip()


def parse_wrapper(lines: list[str], start: int, prefix: str = QUOTE_PREFIX) -> Optional[ParseResult]:
    """Parse a run of prefixed lines into paragraphs split by bare prefix lines."""
    if not lines[start].startswith(prefix):
        return None
    line = start
    paragraphs = []
    spans: list = []
    while line < len(lines) and _is_quote_line(lines[line], prefix):
        content = lines[line][len(prefix):]
        if not content:
            if spans:
                paragraphs.append(tuple(spans))
                spans = []
        else:
            if spans:
                spans.append(LineBreak())
            spans.extend(parse_line(content))
        line += 1
    if spans:
        paragraphs.append(tuple(spans))
    return ParseResult(Quote(tuple(paragraphs)), line)


def parse_heading(line: str) -> Optional[Heading]:
    if line.startswith(HEADING_PREFIX):
        return Heading(line[len(HEADING_PREFIX):])
    return None


def parse_subheading(line: str) -> Optional[Subheading]:
    if line.startswith(SUBHEADING_PREFIX):
        return Subheading(line[len(SUBHEADING_PREFIX):])
    return None


def parse_link(lines: list[str], start: int) -> Optional[ParseResult]:
    """Parse `=> url[ text]`; `url.*[#fragment]` links get the target's extension."""
    line = lines[start]
    if not line.startswith(LINK_PREFIX):
        return None
    url, _, text = line[len(LINK_PREFIX):].strip().partition(" ")
    if not url:
        return ParseResult(Unknown(line), start + 1)

    fragment = None
    auto_ext = False
    page, sep, frag = url.partition("#")
    if page.endswith(AUTO_EXT):
        auto_ext = True
        url = page[:-len(AUTO_EXT)]
        fragment = frag if sep and frag else None
    return ParseResult(
        Link(url=url, text=text.strip() or None, auto_ext=auto_ext, fragment=fragment),
        start + 1,
    )


def parse_list(lines: list[str], start: int, symbol: str = LIST_PREFIX) -> Optional[ParseResult]:
    """Parse a contiguous run of list items, keeping empty items."""
    if not lines[start].startswith(symbol):
        return None
    line = start
    items = []
    while line < len(lines) and lines[line].startswith(symbol):
        items.append(parse_line(lines[line], len(symbol)))
        line += 1
    return ParseResult(BulletList(tuple(items)), line)


def parse_image(lines: list[str], start: int) -> Optional[ParseResult]:
    """Parse `!> url title` followed by a two-space indented alt text line."""
    line = lines[start]
    if not line.startswith(IMAGE_PREFIX):
        return None
    source, _, title = line[len(IMAGE_PREFIX):].strip().partition(" ")
    has_alt = start + 1 < len(lines) and lines[start + 1].startswith(PREFORMATTED_PREFIX)
    if not source or not has_alt:
        return ParseResult(Unknown(line), start + 1)
    alt = lines[start + 1][len(PREFORMATTED_PREFIX):]
    return ParseResult(Image(source=source, title=title.strip(), alt=alt), start + 2)


def parse_command(lines: list[str], start: int, ctx: Optional[CommandContext]) -> Optional[ParseResult]:
    """Run a `: ` block through the shell and parse its output as blocks.

    The output is parsed from a fresh state: it never joins a paragraph
    that was pending before the command. Without a context nothing runs and
    each command line becomes an Unknown block.
    """
    res = parse_prefixed_lines(lines, start, COMMAND_PREFIX)
    if res is None:
        return None
    if ctx is None:
        return ParseResult(tuple(Unknown(text) for text in lines[start:res.new_pos]), res.new_pos)

    script = "".join(f"{text}\n" for text in res.data).encode("utf-8")
    logging.debug(f"Running command block at line {start + 1} with {ctx.shell}")
    try:
        output = ctx.run(ctx.shell, ctx.cwd, ctx.env, script)
    except ProcessError as e:
        raise CommandError(start + 1, returncode=e.returncode) from e
    except OSError as e:
        raise CommandError(start + 1, cause=e) from e

    out_lines = read_lines(output, ctx.include_private)
    return ParseResult(parse_blocks(out_lines, 0, ctx), res.new_pos)


def parse_block(lines: list[str], start: int) -> Optional[ParseResult]:
    """Try every single-block construct at start in priority order."""
    line = lines[start]
    if (res := parse_raw(lines, start)) is not None:
        return res
    if (res := parse_prefixed_lines(lines, start, PREFORMATTED_PREFIX)) is not None:
        return ParseResult(Preformatted(res.data), res.new_pos)
    if (res := parse_wrapper(lines, start)) is not None:
        return res
    if (heading := parse_heading(line)) is not None:
        return ParseResult(heading, start + 1)
    if (subheading := parse_subheading(line)) is not None:
        return ParseResult(subheading, start + 1)
    if (res := parse_link(lines, start)) is not None:
        return res
    if (res := parse_list(lines, start)) is not None:
        return res
    if (res := parse_image(lines, start)) is not None:
        return res
    return None


def _flush(blocks: list, spans: list) -> None:
    """Close the pending paragraph, if any."""
    if spans:
        blocks.append(Paragraph(tuple(spans)))
        spans.clear()


def parse_blocks(lines: list[str], start: int = 0, ctx: Optional[CommandContext] = None) -> tuple:
    """Parse lines[start:] into blocks.

    Lines that start no block are joined into a paragraph with LineBreak
    spans; a blank line ends the paragraph and is kept as an Empty block.
    """
    blocks: list = []
    spans: list = []
    index = start
    while index < len(lines):
        if (res := parse_command(lines, index, ctx)) is not None:
            _flush(blocks, spans)
            blocks.extend(res.data)
            index = res.new_pos
        elif (res := parse_block(lines, index)) is not None:
            _flush(blocks, spans)
            blocks.append(res.data)
            index = res.new_pos
        elif not lines[index]:
            _flush(blocks, spans)
            blocks.append(Empty())
            index += 1
        else:
            if spans:
                spans.append(LineBreak())
            spans.extend(parse_line(lines[index]))
            index += 1
    _flush(blocks, spans)
    return tuple(blocks)
