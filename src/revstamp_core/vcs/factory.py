import logging
from pathlib import Path
from typing import List, Optional

from ..config import StampConfig
from ..errors import RevisionNotFound
from ..runner import CommandRunner, SubprocessRunner
from .base import UNKNOWN_TAG, VcsAdapter
from .fossil_adapter import FossilAdapter
from .git_adapter import GitAdapter

logger = logging.getLogger(__name__)


def build_adapters(config: StampConfig, runner: Optional[CommandRunner] = None) -> List[VcsAdapter]:
    """Adapters in detection order; the last one always matches."""
    runner = runner or SubprocessRunner()
    backends = config.backends
    return [
        FossilAdapter(executable=backends.fossil.executable, marker=backends.fossil.marker, runner=runner),
        GitAdapter(executable=backends.git.executable, ref=backends.git.ref, runner=runner),
    ]


def resolve_adapter(
    repo_root: Path,
    config: Optional[StampConfig] = None,
    runner: Optional[CommandRunner] = None,
) -> VcsAdapter:
    """
    Pick the adapter managing repo_root.

    Fossil wins when its checkout marker exists; otherwise Git is used
    without further checks.
    """
    adapters = build_adapters(config or StampConfig(), runner)
    for adapter in adapters:
        if adapter.detect(repo_root):
            logger.debug(f"Detected {adapter.name} backend in {repo_root}")
            return adapter
    return adapters[-1]


def detect_backend(repo_root: Path, config: Optional[StampConfig] = None) -> str:
    """Name of the backend managing repo_root."""
    return resolve_adapter(repo_root, config).name


def query_revision(adapter: VcsAdapter, repo_root: Path) -> str:
    """
    Revision tag for the adapter, e.g. ``git-a1b2c3d``.

    A backend that runs but reports no revision yields ``unknown``; a backend
    that cannot run raises BackendUnavailable.
    """
    try:
        return str(adapter.query(repo_root))
    except RevisionNotFound as e:
        logger.warning(f"{adapter.name}: {e}; using '{UNKNOWN_TAG}'")
        return UNKNOWN_TAG
