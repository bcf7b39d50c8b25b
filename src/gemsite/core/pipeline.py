"""Pipeline step functions: render a site directory tree and build index listings"""

import logging
import os
from pathlib import Path
from typing import Mapping, Optional

from gemsite.config import Settings
from gemsite.core.command import CommandContext
from gemsite.core.index import EventKind, build_index, format_index
from gemsite.core.models import Target
from gemsite.core.parse import discover_files, parse_document, read_info
from gemsite.render.gmi import EXTENSION as GMI_EXTENSION, to_gmi
from gemsite.render.html import EXTENSION as HTML_EXTENSION, escape_html, to_html
from gemsite.render.template import Template, TemplateContext, load_template, render_page


RENDERERS = {
    Target.html: (to_html, escape_html, HTML_EXTENSION),
    Target.gmi:  (to_gmi, str, GMI_EXTENSION),
}


def load_templates(settings: Settings) -> dict[Target, Template]:
    """Parse each target's template once for the whole build."""
    paths = {Target.html: settings.html_template, Target.gmi: settings.gmi_template}
    templates = {}
    for target, p in paths.items():
        try:
            templates[target] = load_template(target, Path(p) if p else None)
        except Exception as e:
            raise RuntimeError(f"Failed to load template {p or target.value}: {e}") from e
    return templates


def source_stem(path: Path, suffix: str = "") -> str:
    """Output name for a source file: its name without the configured source suffix."""
    name = path.name
    return name[:-len(suffix)] if suffix and name.endswith(suffix) else name


def _index_title(directory: Path, settings: Settings) -> Optional[str]:
    """Title of directory's index document, if it has one."""
    index = directory / f"{settings.index_file}{settings.source_suffix}"
    if not index.is_file():
        return None
    try:
        return read_info(index, settings.include_private).title
    except Exception as e:
        raise RuntimeError(f"Failed to read {index}: {e}") from e


def render_document(
    path: Path,
    out_dir: Path,
    dirname: Optional[str],
    settings: Settings,
    templates: dict[Target, Template],
    parent_title: Optional[str] = None,
    base_env: Optional[Mapping[str, str]] = None,
    ) -> list[Path]:
    """Render one source file for every target. Returns the written paths.

    Private documents are skipped (nothing written) unless private content
    is included.
    """
    info = read_info(path, settings.include_private)
    if info.private and not settings.include_private:
        logging.info(f"Skipping private document {path}")
        return []

    ctx = CommandContext.for_document(
        filename=path.name,
        shell=settings.shell,
        cwd=path.parent,
        dirname=dirname,
        parent_title=parent_title,
        include_private=settings.include_private,
        base_env=base_env,
    )
    doc = parse_document(path.read_bytes(), ctx)

    stem = source_stem(path, settings.source_suffix)
    tctx = TemplateContext(
        info=doc.info,
        file=stem,
        dir=dirname,
        is_index=stem == settings.index_file,
        parent_title=parent_title,
        date_format=settings.date_format,
    )
    written = []
    for target, (render, escape, ext) in RENDERERS.items():
        dest_dir = out_dir / target.value / (dirname or "")
        dest_dir.mkdir(parents=True, exist_ok=True)
        dest = dest_dir / f"{stem}{ext}"
        dest.write_text(render_page(templates[target], tctx, render(doc), escape), encoding="utf-8")
        written.append(dest)
    return written


def render_dir(
    site_dir: Path,
    dirname: Optional[str],
    out_dir: Path,
    settings: Settings,
    templates: dict[Target, Template],
    base_env: Optional[Mapping[str, str]] = None,
    ) -> list[tuple[Path, list[Path]]]:
    """Render every source file directly inside site_dir/dirname."""
    src_dir = site_dir / dirname if dirname else site_dir
    dir_title = _index_title(src_dir, settings)
    root_title = _index_title(site_dir, settings) if dirname else dir_title

    results = []
    for path in discover_files(src_dir, settings.source_suffix):
        logging.info(f"Generating {dirname or '.'}/{path.name}")
        is_index = source_stem(path, settings.source_suffix) == settings.index_file
        parent_title = root_title if is_index else dir_title
        try:
            written = render_document(path, out_dir, dirname, settings, templates, parent_title, base_env)
        except Exception as e:
            raise RuntimeError(f"Failed to render {path}: {e}") from e
        results.append((path, written))
    return results


def run_make(
    site_dir: Path,
    out_dir: Path,
    settings: Settings,
    base_env: Optional[Mapping[str, str]] = None,
    ) -> list[tuple[Path, list[Path]]]:
    """Render the site root and each of its immediate sub-directories.

    Returns (source_path, written_paths) pairs; written_paths is empty for
    skipped private documents.
    """
    site_dir = site_dir.resolve()
    templates = load_templates(settings)
    env = dict(os.environ if base_env is None else base_env)

    results = render_dir(site_dir, None, out_dir, settings, templates, env)
    output = out_dir.resolve()
    subdirs = sorted(
        p for p in site_dir.iterdir()
        if p.is_dir() and not p.name.startswith(".") and p != output
    )
    for sub in subdirs:
        results.extend(render_dir(site_dir, sub.name, out_dir, settings, templates, env))
    logging.info("Done!")
    return results


def run_index(
    paths: list[Path],
    settings: Settings,
    kind: Optional[EventKind] = None,
    limit: Optional[int] = None,
    ) -> str:
    """Read metadata of each path and return the formatted index listing."""
    pages = []
    for p in paths:
        try:
            info = read_info(p, settings.include_private)
        except Exception as e:
            raise RuntimeError(f"Failed to read {p}: {e}") from e
        pages.append(((p.parent / source_stem(p, settings.source_suffix)).as_posix(), info))
    entries = build_index(pages, settings.include_private, kind, limit)
    return format_index(entries, settings.index_date_format)
