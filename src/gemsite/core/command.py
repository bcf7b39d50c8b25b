"""Command blocks: run `: ` prefixed lines through a shell and capture the output"""

import logging
import os
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Mapping, Optional


DEFAULT_SHELL = "/bin/sh"


class ProcessError(Exception):
    """The shell process ended with a non-zero status or was killed."""

    def __init__(self, returncode: int):
        self.returncode = returncode
        super().__init__(f"process ended with status {returncode}")


def run_process(shell: str, cwd: Optional[Path], env: Mapping[str, str], stdin: bytes) -> bytes:
    """Feed stdin to a fresh shell and return its stdout.

    Blocks until the process exits; there is no timeout. stderr is left
    attached to ours. Raises ProcessError on a non-zero or signal exit.
    """
    proc = subprocess.run(
        [shell],
        input=stdin,
        stdout=subprocess.PIPE,
        cwd=cwd,
        env=dict(env),
    )
    if proc.returncode != 0:
        raise ProcessError(proc.returncode)
    return proc.stdout


@dataclass(frozen=True)
class CommandContext:
    """Everything a command block needs to run, fixed before parsing starts."""
    shell: str = DEFAULT_SHELL
    cwd: Optional[Path] = None
    env: Mapping[str, str] = field(default_factory=dict)
    include_private: bool = False
    run: Callable[[str, Optional[Path], Mapping[str, str], bytes], bytes] = run_process

    @classmethod
    def for_document(
        cls,
        filename: str,
        shell: Optional[str] = None,
        cwd: Optional[Path] = None,
        dirname: Optional[str] = None,
        parent_title: Optional[str] = None,
        include_private: bool = False,
        base_env: Optional[Mapping[str, str]] = None,
        ) -> "CommandContext":
        """Build a context whose environment describes the document being parsed."""
        env = dict(os.environ if base_env is None else base_env)
        env["GEMSITE_FILE"] = filename
        env["GEMSITE_DIR"] = dirname or ""
        env["GEMSITE_PARENT"] = parent_title or ""
        if include_private:
            env["INCLUDE_PRIVATE"] = "true"
        shell = shell or env.get("SHELL") or DEFAULT_SHELL
        logging.debug(f"Command context for {filename}: shell={shell} cwd={cwd}")
        return cls(shell=shell, cwd=cwd, env=env, include_private=include_private)
