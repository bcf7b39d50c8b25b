"""Shared fixtures for renderer tests"""

from datetime import date

import pytest

from gemsite.core.blocks import parse_blocks
from gemsite.core.models import Document, Info


@pytest.fixture(name="make_doc")
def make_doc_fixture():
    """Build a Document from body text with fixed metadata."""
    def _make(body: str) -> Document:
        info = Info(title="T", created=date(2021, 2, 4))
        return Document(info=info, blocks=parse_blocks(body.split("\n")))
    return _make
