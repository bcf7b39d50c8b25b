"""Integration tests for the make and index commands"""

import pytest
from typer.testing import CliRunner

from gemsite.cli.cli import app


@pytest.fixture(autouse=True)
def clean_env(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("SHELL", "/bin/sh")
    monkeypatch.delenv("GEMSITE_INCLUDE_PRIVATE", raising=False)


def test_make_renders_site(site, tmp_path):
    """make writes html/ and gmi/ trees for the site."""
    out = tmp_path / "out"
    result = CliRunner().invoke(app, ["make", str(out), str(site)])

    assert result.exit_code == 0, result.output
    assert (out / "html" / "blog" / "first.html").exists()
    assert (out / "gmi" / "index.gmi").exists()
    assert "skipped (private)" in result.output
    assert "Rendered 4 document(s)" in result.output


def test_make_private_flag(site, tmp_path):
    out = tmp_path / "out"
    result = CliRunner().invoke(app, ["make", "-p", str(out), str(site)])

    assert result.exit_code == 0, result.output
    assert (out / "html" / "blog" / "draft.html").exists()


def test_make_command_block(site, tmp_path):
    (site / "generated").write_text("Gen\nWritten 2021-01-01\n\n: echo '## From shell'\n")
    out = tmp_path / "out"
    result = CliRunner().invoke(app, ["make", str(out), str(site)])

    assert result.exit_code == 0, result.output
    assert '<h3 id="From-shell">From shell</h3>' in (out / "html" / "generated.html").read_text()


def test_make_fails_on_bad_document(site, tmp_path):
    (site / "oops").write_text("Oops\nWritten 2021-01-01\n\n: exit 1\n")
    result = CliRunner().invoke(app, ["make", str(tmp_path / "out"), str(site)])

    assert result.exit_code == 1
    assert "oops" in result.output
    assert "line 4" in result.output


def test_make_missing_site_dir(tmp_path):
    result = CliRunner().invoke(app, ["make", str(tmp_path / "out"), str(tmp_path / "missing")])
    assert result.exit_code == 1


def test_index_lists_events(site):
    result = CliRunner().invoke(app, ["index", str(site / "about"), str(site / "blog" / "first")])

    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert len(lines) == 3
    assert "(updated: Typos)" in lines[0]


def test_index_updated_only(site):
    result = CliRunner().invoke(app, ["index", "--updated", str(site / "about"), str(site / "blog" / "first")])
    assert result.exit_code == 0, result.output
    assert len(result.output.splitlines()) == 1


def test_index_conflicting_filters(site):
    result = CliRunner().invoke(app, ["index", "--written", "--updated", str(site / "about")])
    assert result.exit_code == 1


def test_make_fails_on_bad_directory_index(site, tmp_path):
    (site / "blog" / "index").write_text("Blog\nWritten 2021-01-03\nTags: x\n\nBody\n")
    result = CliRunner().invoke(app, ["make", str(tmp_path / "out"), str(site)])

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "Error: Failed to read" in result.output
    assert "index" in result.output
    assert "line 3" in result.output


def test_make_fails_on_missing_template(site, tmp_path):
    result = CliRunner().invoke(app, ["make", "--html-template", "nope.html", str(tmp_path / "out"), str(site)])

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "Error: Failed to load template nope.html" in result.output
