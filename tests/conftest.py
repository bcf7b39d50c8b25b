"""Root test configuration: shared sample documents and a sample site tree"""

from pathlib import Path

import pytest


SAMPLE_DOC = b"Site Generator\nWritten 2021-02-04\nUpdated 2021-03-09 Added templates\n\nHello *world*.\n"


@pytest.fixture(name="sample_doc")
def sample_doc_fixture() -> bytes:
    return SAMPLE_DOC


@pytest.fixture(name="site")
def site_fixture(tmp_path) -> Path:
    """A two-level site: root index + post, and a blog directory with its own index."""
    site = tmp_path / "site"
    blog = site / "blog"
    blog.mkdir(parents=True)
    (site / "index").write_text("Home Page\nWritten 2021-01-01\n\nWelcome.\n")
    (site / "about").write_text("About\nWritten 2021-01-02\n\n# Who\nMe.\n")
    (blog / "index").write_text("Blog\nWritten 2021-01-03\n\n=> first.* First post\n")
    (blog / "first").write_text(
        "First post\nWritten 2021-02-04\nUpdated 2021-03-09 Typos\n\nSome _text_.\n; secret line\n"
    )
    (blog / "draft").write_text("Draft\nWritten 2021-05-05\nPrivate\n\nNot yet.\n")
    return site
