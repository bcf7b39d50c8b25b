"""Source discovery and whole-document parsing"""

from pathlib import Path
from typing import Optional

from gemsite.core.blocks import parse_blocks
from gemsite.core.command import CommandContext
from gemsite.core.info import parse_info
from gemsite.core.lines import read_lines
from gemsite.core.models import Document, Info


def discover_files(path: Path, suffix: str = "") -> list[Path]:
    """Return sorted source files directly inside path, skipping hidden files."""
    return sorted(
        p for p in path.iterdir()
        if p.is_file() and not p.name.startswith(".") and (not suffix or p.suffix == suffix)
    )


def parse_document(
    data: bytes,
    ctx: Optional[CommandContext] = None,
    include_private: bool = False,
    ) -> Document:
    """Parse a full document: metadata block, then body blocks.

    When a command context is given its include_private flag wins.
    """
    if ctx is not None:
        include_private = ctx.include_private
    lines = read_lines(data, include_private)
    info_res = parse_info(lines)
    return Document(info=info_res.data, blocks=parse_blocks(lines, info_res.new_pos, ctx))


def read_info(path: Path, include_private: bool = False) -> Info:
    """Parse only the metadata of path; the body is never read into blocks."""
    lines = read_lines(path.read_bytes(), include_private)
    end = lines.index("", 1) if "" in lines[1:] else len(lines)
    return parse_info(lines[:end]).data
