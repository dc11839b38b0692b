"""Git VCS adapter."""

import logging
from pathlib import Path

from ..errors import BackendUnavailable
from ..runner import CommandRunner, SubprocessRunner
from .base import RevisionTag

logger = logging.getLogger(__name__)

HASH_LENGTH = 7


class GitAdapter:
    """Git VCS adapter."""

    name = "git"

    def __init__(self, executable: str = "git", ref: str = "HEAD", runner: CommandRunner | None = None):
        self.executable = executable
        self.ref = ref
        self.runner = runner or SubprocessRunner()

    def detect(self, repo_root: Path) -> bool:
        """Git is the fallback backend and is assumed present."""
        return True

    def query(self, repo_root: Path) -> RevisionTag:
        """Resolve the ref to a commit and keep the short hash."""
        result = self.runner.run([self.executable, "rev-parse", self.ref], repo_root)
        if result.ret != 0:
            raise BackendUnavailable(
                self.name,
                f"rev-parse {self.ref} exited with status {result.ret}: {result.err.strip()}",
            )
        revision = result.out.strip()
        if not revision:
            raise BackendUnavailable(self.name, f"rev-parse {self.ref} printed nothing")
        logger.debug(f"git {self.ref} resolved to {revision}")
        return RevisionTag(backend=self.name, identifier=revision[:HASH_LENGTH])
