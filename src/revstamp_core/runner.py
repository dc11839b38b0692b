"""Command execution used by the VCS adapters."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, Sequence

from .errors import BackendUnavailable

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Captured output of a finished command."""
    out: str
    err: str
    ret: int


class CommandRunner(Protocol):
    """Runs an argument list and returns its captured output."""

    def run(self, args: Sequence[str], cwd: Path) -> CommandResult:
        ...


class SubprocessRunner:
    """Runs commands as child processes and waits for them to finish."""

    def run(self, args: Sequence[str], cwd: Path) -> CommandResult:
        argv = list(args)
        logger.debug(f"Running {' '.join(argv)} in {cwd}")
        try:
            process = subprocess.run(
                argv,
                cwd=cwd,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
        except OSError as e:
            # Missing executable or not permitted to run it
            raise BackendUnavailable(argv[0], f"cannot launch {argv[0]!r}: {e}") from e
        return CommandResult(out=process.stdout, err=process.stderr, ret=process.returncode)
