"""Index listing: written/updated events across many documents, newest first"""

import datetime
from enum import Enum
from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict

from gemsite.core.dates import format_date
from gemsite.core.models import Info


class EventKind(str, Enum):
    written = "written"
    updated = "updated"


class IndexEntry(BaseModel):
    """One dated event for one document."""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    filename: str
    date: datetime.date
    event: EventKind
    description: Optional[str] = None   # updated events only
    info: Info


def _events(filename: str, info: Info) -> list[IndexEntry]:
    entries = [IndexEntry(filename=filename, date=info.created, event=EventKind.written, info=info)]
    for change in info.changes:
        entries.append(IndexEntry(
            filename=filename,
            date=change.date,
            event=EventKind.updated,
            description=change.description,
            info=info,
        ))
    return entries


def build_index(
    pages: Iterable[tuple[str, Info]],
    include_private: bool = False,
    kind: Optional[EventKind] = None,
    limit: Optional[int] = None,
    ) -> list[IndexEntry]:
    """Collect events from (filename, info) pairs, most recent first.

    Unlisted documents never appear; private ones only when included.
    Ties keep input order.
    """
    entries = []
    for filename, info in pages:
        if info.unlisted or (info.private and not include_private):
            continue
        entries.extend(e for e in _events(filename, info) if kind is None or e.event == kind)
    entries.sort(key=lambda e: e.date, reverse=True)
    return entries[:limit] if limit else entries


def format_entry(entry: IndexEntry, date_format: str = "YYYY-MM-DD") -> str:
    """Render an entry as a gemsite link line."""
    line = f"=> {entry.filename}.* {format_date(entry.date, date_format)} – {entry.info.title}"
    if entry.event == EventKind.updated:
        line += f" (updated: {entry.description})" if entry.description else " (updated)"
    if entry.info.private:
        line = "; " + line
    return line


def format_index(entries: Iterable[IndexEntry], date_format: str = "YYYY-MM-DD") -> str:
    return "".join(format_entry(e, date_format) + "\n" for e in entries)
