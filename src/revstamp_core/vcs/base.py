"""VCS abstraction base types."""

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

UNKNOWN_TAG = "unknown"


@dataclass(frozen=True)
class RevisionTag:
    """Short revision identifier tagged with the backend that produced it."""
    backend: str  # fossil, git
    identifier: str  # checkout token or commit hash prefix

    def __str__(self) -> str:
        return f"{self.backend}-{self.identifier}"


class VcsAdapter(Protocol):
    """VCS adapter protocol."""

    name: str

    def detect(self, repo_root: Path) -> bool:
        """Check if this VCS manages repo_root."""
        ...

    def query(self, repo_root: Path) -> RevisionTag:
        """Ask the VCS for the current revision."""
        ...
