"""Info parser: the title and metadata block at the top of every document"""

import logging

from gemsite.core.dates import parse_date
from gemsite.core.errors import InfoError
from gemsite.core.models import Change, Info, ParseResult


WRITTEN_PREFIX = "Written "
UPDATED_PREFIX = "Updated "


def _date(text: str, line: int, raw: str):
    try:
        return parse_date(text)
    except ValueError:
        raise InfoError("Invalid date", line + 1, raw) from None


def parse_info(lines: list[str]) -> ParseResult:
    """Parse the title line and metadata lines up to the first blank line.

    Returns a ParseResult whose new_pos is the index of the blank separator
    (or len(lines)). Line numbers in errors are 1-based.
    """
    if not lines:
        raise InfoError("Empty document")
    title = lines[0]
    created = None
    changes: list[Change] = []
    private = unlisted = False

    line = 1
    while line < len(lines) and lines[line]:
        text = lines[line]
        if text.startswith(WRITTEN_PREFIX):
            created = _date(text[len(WRITTEN_PREFIX):], line, text)
        elif text.startswith(UPDATED_PREFIX):
            value, _, description = text[len(UPDATED_PREFIX):].partition(" ")
            changes.append(Change(_date(value, line, text), description or None))
        elif text == "Private":
            private = True
        elif text == "Unlisted":
            unlisted = True
        else:
            logging.error(f"Could not parse info on line {line + 1}: {text}")
            raise InfoError("Unexpected metadata", line + 1, text)
        line += 1

    if created is None:
        raise InfoError("Missing 'Written' date")
    return ParseResult(
        Info(title=title, created=created, changes=tuple(changes),
             private=private, unlisted=unlisted),
        line,
    )
