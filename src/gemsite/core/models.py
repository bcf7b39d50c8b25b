"""Document model: the typed tree shared by the parser and the renderers"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional, Union


class Target(str, Enum):
    """Output formats a document can be rendered to"""
    html = "html"
    gmi = "gmi"


# ---- spans ----

@dataclass(frozen=True)
class Text:
    text: str


@dataclass(frozen=True)
class Strong:
    spans: tuple


@dataclass(frozen=True)
class Emphasis:
    spans: tuple


@dataclass(frozen=True)
class Anchor:
    url: str
    spans: tuple    # link text, itself parsed inline


@dataclass(frozen=True)
class LineBreak:
    pass


Span = Union[Text, Strong, Emphasis, Anchor, LineBreak]


# ---- blocks ----

@dataclass(frozen=True)
class Paragraph:
    spans: tuple


@dataclass(frozen=True)
class Raw:
    """Verbatim lines emitted only when rendering for `target`."""
    target: Target
    lines: tuple


@dataclass(frozen=True)
class Heading:
    text: str


@dataclass(frozen=True)
class Subheading:
    text: str


@dataclass(frozen=True)
class Quote:
    paragraphs: tuple   # one span tuple per paragraph


@dataclass(frozen=True)
class BulletList:
    items: tuple        # one span tuple per item; an item may be empty


@dataclass(frozen=True)
class Link:
    url: str
    text: Optional[str] = None
    auto_ext: bool = False
    fragment: Optional[str] = None


@dataclass(frozen=True)
class Preformatted:
    lines: tuple


@dataclass(frozen=True)
class Image:
    source: str
    title: str
    alt: str


@dataclass(frozen=True)
class Empty:
    pass


@dataclass(frozen=True)
class Unknown:
    """A construct the parser recognised the start of but could not complete."""
    line: str


Block = Union[Paragraph, Raw, Heading, Subheading, Quote, BulletList, Link,
              Preformatted, Image, Empty, Unknown]


# ---- document ----

@dataclass(frozen=True)
class Change:
    date: date
    description: Optional[str] = None


@dataclass(frozen=True)
class Info:
    title: str
    created: date
    changes: tuple = ()
    private: bool = False
    unlisted: bool = False

    @property
    def updated(self) -> Optional[date]:
        """Date of the most recently authored change, if any."""
        return self.changes[-1].date if self.changes else None


@dataclass(frozen=True)
class Document:
    info: Info
    blocks: tuple = field(default_factory=tuple)


@dataclass(frozen=True)
class ParseResult:
    """A parsed node plus the position to resume from."""
    data: object
    new_pos: int
