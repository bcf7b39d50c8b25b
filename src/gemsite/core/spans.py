"""Inline span parsing within a single line.

Every function takes the whole line plus a starting column and returns
either None (no match) or a ParseResult with the new column. Nothing is
consumed on failure, so a caller can try the next alternative from the
same column.

Results are memoized per line in `memo`, keyed on (start, open, close),
so a failed attempt at a column is never retried. Without it a run of
unclosed `[` takes exponential time.
"""

from typing import Optional

from gemsite.core.models import Anchor, Emphasis, ParseResult, Strong, Text


def parse_spans(
    line: str,
    start: int,
    open_: Optional[str] = None,
    close: Optional[str] = None,
    memo: Optional[dict] = None,
    ) -> Optional[ParseResult]:
    """Parse spans from start until close (or end of line when close is None).

    With a close delimiter, reaching the end of the line first is a failed
    match. An empty result is also a failed match, so `**` stays literal.
    """
    if memo is None:
        memo = {}
    key = (start, open_, close)
    if key not in memo:
        memo[key] = _parse_spans(line, start, open_, close, memo)
    return memo[key]


def _parse_spans(line: str, start: int, open_: Optional[str], close: Optional[str], memo: dict) -> Optional[ParseResult]:
    col = start
    if open_ is not None:
        if not line.startswith(open_, col):
            return None
        col += len(open_)

    spans = []
    text: list[str] = []
    closed = close is None
    while col < len(line):
        if close is not None and line.startswith(close, col):
            closed = True
            break
        res = parse_span(line, col, memo)
        if res is not None:
            if text:
                spans.append(Text("".join(text)))
                text = []
            spans.append(res.data)
            col = res.new_pos
        else:
            text.append(line[col])
            col += 1

    if not closed:
        return None
    if text:
        spans.append(Text("".join(text)))
    if not spans:
        return None
    consumed = col + len(close) if close is not None else col
    return ParseResult(tuple(spans), consumed)


def parse_span(line: str, start: int, memo: Optional[dict] = None) -> Optional[ParseResult]:
    """Try each inline construct at start: emphasis, strong, then anchor."""
    if memo is None:
        memo = {}
    if (res := parse_spans(line, start, "_", "_", memo)) is not None:
        return ParseResult(Emphasis(res.data), res.new_pos)
    if (res := parse_spans(line, start, "*", "*", memo)) is not None:
        return ParseResult(Strong(res.data), res.new_pos)
    if (res := parse_anchor(line, start, memo)) is not None:
        return res
    return None


def parse_anchor(line: str, start: int, memo: Optional[dict] = None) -> Optional[ParseResult]:
    """Parse `[text](url)`; the url is taken literally up to the next `)`."""
    res = parse_spans(line, start, "[", "](", memo)
    if res is None:
        return None
    end = line.find(")", res.new_pos)
    if end == -1:
        return None
    return ParseResult(Anchor(url=line[res.new_pos:end], spans=res.data), end + 1)


def parse_line(line: str, start: int = 0) -> tuple:
    """Parse the rest of a line as spans; an empty remainder gives ()."""
    res = parse_spans(line, start)
    return res.data if res is not None else ()
