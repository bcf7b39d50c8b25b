"""Shared fixtures for core unit tests"""

import shutil

import pytest

from gemsite.core.command import CommandContext


@pytest.fixture(name="sh_ctx")
def sh_ctx_fixture(tmp_path):
    """A command context running /bin/sh in a temp directory with a minimal environment."""
    shell = shutil.which("sh") or "/bin/sh"
    return CommandContext.for_document(
        filename="post",
        shell=shell,
        cwd=tmp_path,
        dirname="blog",
        parent_title="Blog",
        base_env={"PATH": "/usr/bin:/bin"},
    )
