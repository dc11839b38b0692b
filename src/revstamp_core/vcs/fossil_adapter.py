"""Fossil VCS adapter."""

import logging
import re
from pathlib import Path

from ..errors import BackendUnavailable, RevisionNotFound
from ..runner import CommandRunner, SubprocessRunner
from .base import RevisionTag

logger = logging.getLogger(__name__)

# "checkout:     1234567890abcdef... 2024-01-01 12:00:00 UTC"
CHECKOUT_PATTERN = re.compile(r"^checkout:\s*(.{10})")


def parse_checkout(output: str) -> str:
    """Return the 10-character checkout token from ``fossil info`` output.

    Only the first ``checkout:`` line counts.
    """
    for line in output.splitlines():
        match = CHECKOUT_PATTERN.match(line)
        if match:
            return match.group(1)
    raise RevisionNotFound("no checkout: line in fossil info output")


class FossilAdapter:
    """Fossil VCS adapter."""

    name = "fossil"

    def __init__(self, executable: str = "fossil", marker: str = ".fslckout", runner: CommandRunner | None = None):
        self.executable = executable
        self.marker = marker
        self.runner = runner or SubprocessRunner()

    def detect(self, repo_root: Path) -> bool:
        """Check for the checkout marker; its content is never read."""
        return (repo_root / self.marker).exists()

    def query(self, repo_root: Path) -> RevisionTag:
        result = self.runner.run([self.executable, "info"], repo_root)
        if result.ret != 0:
            raise BackendUnavailable(
                self.name,
                f"info exited with status {result.ret}: {result.err.strip()}",
            )
        token = parse_checkout(result.out)
        logger.debug(f"fossil checkout is {token}")
        return RevisionTag(backend=self.name, identifier=token)
