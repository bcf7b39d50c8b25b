"""Output templates: boilerplate around rendered content.

Template source is literal text with three kinds of escape:

    {{name}}           the value of a variable
    {{name|format}}    a date variable rendered with a format string
    {{name?body}}      body (itself a template) only if the variable exists

`{{content}}` marks where the rendered document goes and splits the
template into header and footer at its first occurrence; any later
`{{content}}` is literal text. `\\{{` is a literal `{{`.
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Union

from gemsite.core.dates import DEFAULT_FORMAT, format_date
from gemsite.core.errors import TemplateError
from gemsite.core.models import Info, Target


VARIABLES = {"title", "file", "dir", "written", "updated", "back", "back_text"}
ALIASES = {"parent": "back", "parent_name": "back_text"}
CONTENT = "content"
NAME_RE = re.compile(r"[a-z_]+")


@dataclass(frozen=True)
class TextNode:
    text: str


@dataclass(frozen=True)
class Variable:
    name: str
    format: Optional[str] = None


@dataclass(frozen=True)
class Conditional:
    name: str
    nodes: tuple


TemplateNode = Union[TextNode, Variable, Conditional]


@dataclass(frozen=True)
class Template:
    header: tuple
    footer: tuple = ()


class _ContentMarker:
    pass


_MARKER = _ContentMarker()


def _canonical(name: str) -> str:
    name = ALIASES.get(name, name)
    if name not in VARIABLES:
        raise TemplateError(f"Unknown template variable {name!r}")
    return name


def _parse_nodes(source: str, pos: int, nested: bool) -> tuple[list, int]:
    """Parse from pos until the end of source, or the closing `}}` when nested."""
    nodes: list = []
    text: list[str] = []

    def flush():
        if text:
            nodes.append(TextNode("".join(text)))
            text.clear()

    while pos < len(source):
        if source.startswith("\\{{", pos):
            text.append("{{")
            pos += 3
            continue
        if nested and source.startswith("}}", pos):
            flush()
            return nodes, pos + 2
        if not source.startswith("{{", pos):
            text.append(source[pos])
            pos += 1
            continue

        m = NAME_RE.match(source, pos + 2)
        if m is None:
            text.append("{{")
            pos += 2
            continue
        name, after = m.group(0), m.end()

        if source.startswith("}}", after):
            if name == CONTENT:
                if nested:
                    raise TemplateError("{{content}} cannot appear inside a conditional")
                node = _MARKER
            else:
                node = Variable(_canonical(name))
            pos = after + 2
        elif source.startswith("|", after):
            end = source.find("}}", after)
            if end == -1:
                raise TemplateError(f"Unterminated {{{{{name}|...")
            node = Variable(_canonical(name), source[after + 1:end])
            pos = end + 2
        elif source.startswith("?", after):
            body, pos = _parse_nodes(source, after + 1, nested=True)
            node = Conditional(_canonical(name), tuple(body))
        else:
            text.append("{{")
            pos += 2
            continue
        flush()
        nodes.append(node)

    if nested:
        raise TemplateError("Unterminated conditional")
    flush()
    return nodes, pos


def parse_template(source: str) -> Template:
    """Parse template source, splitting at the first {{content}} marker."""
    nodes, _ = _parse_nodes(source, 0, nested=False)
    if _MARKER not in nodes:
        return Template(header=tuple(nodes))
    split = nodes.index(_MARKER)
    # later markers are plain text in the footer
    footer = (TextNode("{{content}}") if n is _MARKER else n for n in nodes[split + 1:])
    return Template(header=tuple(nodes[:split]), footer=tuple(footer))


@dataclass(frozen=True)
class TemplateContext:
    """Document metadata and file location a template is rendered against."""
    info: Info
    file: str
    dir: Optional[str] = None
    is_index: bool = False
    parent_title: Optional[str] = None
    date_format: str = DEFAULT_FORMAT

    def value(self, name: str, fmt: Optional[str] = None) -> Optional[str]:
        """Return the variable's value, or None when it does not exist here."""
        if name == "title":
            return self.info.title
        if name == "file":
            return self.file
        if name == "dir":
            return self.dir
        if name == "written":
            return format_date(self.info.created, fmt or self.date_format)
        if name == "updated":
            updated = self.info.updated
            return format_date(updated, fmt or self.date_format) if updated else None
        if name == "back":
            if self.is_index:
                return ".." if self.dir else None
            return "."
        if name == "back_text":
            if self.is_index:
                return (self.parent_title or "home") if self.dir else None
            return self.parent_title or (f"{self.dir} index" if self.dir else "home")
        raise TemplateError(f"Unknown template variable {name!r}")


def render_nodes(nodes: tuple, ctx: TemplateContext, escape: Callable[[str], str] = str) -> str:
    out = []
    for node in nodes:
        if isinstance(node, TextNode):
            out.append(node.text)
        elif isinstance(node, Variable):
            value = ctx.value(node.name, node.format)
            if value is not None:
                out.append(escape(value))
        elif isinstance(node, Conditional):
            if ctx.value(node.name) is not None:
                out.append(render_nodes(node.nodes, ctx, escape))
        else:
            raise TypeError(f"Unhandled template node {node!r}")
    return "".join(out)


def render_page(template: Template, ctx: TemplateContext, content: str, escape: Callable[[str], str] = str) -> str:
    """Wrap rendered content in the template's header and footer."""
    return render_nodes(template.header, ctx, escape) + content + render_nodes(template.footer, ctx, escape)


DEFAULT_HTML = """\
<!DOCTYPE html>
<html>
<head>
<meta charset="UTF-8"/>
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<link rel="stylesheet" type="text/css" href="/style.css" />
<title>{{title}}</title>
</head>
<body>
{{back?<a href="{{back}}">{{back_text}}</a>
}}<main>
<header>
<h1>{{title}}</h1>
Written {{written}}{{updated?, updated {{updated}}}}
</header>
{{content}}</main>
</body>
</html>
"""

DEFAULT_GMI = """\
{{back?=> {{back}} {{back_text}}
}}# {{title}}
Written {{written}}{{updated?, updated {{updated}}}}
{{content}}"""

DEFAULTS = {Target.html: DEFAULT_HTML, Target.gmi: DEFAULT_GMI}


def load_template(target: Target, path: Optional[Path] = None) -> Template:
    """Parse the template at path, or the built-in one for target."""
    source = path.read_text(encoding="utf-8") if path else DEFAULTS[target]
    return parse_template(source)
