from __future__ import annotations

import datetime
import logging
import os
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from revstamp_core.config import StampConfig
from revstamp_core.errors import WriteError
from revstamp_core.runner import CommandRunner
from revstamp_core.vcs import query_revision, resolve_adapter

logger = logging.getLogger(__name__)


@dataclass
class StampResult:
    """Outcome of one stamping run."""
    backend: str
    tag: str
    version: str
    line: str
    output_path: Path
    written: bool


def format_version_string(revision_tag: str, today: Optional[datetime.date] = None) -> str:
    """Prefix the tag with the local date, e.g. ``2024-03-15 git-a1b2c3d``."""
    day = today or datetime.date.today()
    return f"{day.strftime('%Y-%m-%d')} {revision_tag}"


def render_version_line(formatted: str, constant: str = "VERSION") -> str:
    return f'{constant} = "{formatted}"\n'


def write_output(formatted: str, path: Path, constant: str = "VERSION") -> bool:
    """Write the constant declaration to path.

    The content goes to a temporary file next to path which then replaces it,
    so a failed run leaves any previous file intact. A symlinked path updates
    the link target and an existing file keeps its mode. Returns False when
    path already held the same content and was left alone.
    """
    path = Path(path)
    content = render_version_line(formatted, constant).encode("utf-8")

    try:
        if path.read_bytes() == content:
            logger.info(f"{path} is up to date")
            return False
    except OSError:
        pass

    # Symlinks are followed so the link target is what gets replaced
    real = Path(os.path.realpath(path))
    existing = real.exists()
    if existing and not os.access(real, os.W_OK):
        raise WriteError(path, "permission denied")

    directory = real.parent
    try:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{real.name}.", suffix=".tmp", dir=directory)
    except OSError as e:
        raise WriteError(path, f"cannot create file in {directory}: {e}") from e

    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(content)
        if existing:
            shutil.copymode(real, tmp_name)
        else:
            os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, real)
    except OSError as e:
        try:
            os.unlink(tmp_name)
        except OSError:
            pass
        raise WriteError(path, str(e)) from e

    logger.info(f"Wrote {path}")
    return True


def stamp(
    repo_root: Path,
    config: Optional[StampConfig] = None,
    runner: Optional[CommandRunner] = None,
    today: Optional[datetime.date] = None,
    output_path: Optional[Path] = None,
    dry_run: bool = False,
) -> StampResult:
    """Detect the backend, query it, and write the version constant.

    Relative output paths are resolved against repo_root.
    """
    config = config or StampConfig()
    adapter = resolve_adapter(repo_root, config, runner)
    tag = query_revision(adapter, repo_root)
    version = format_version_string(tag, today)

    target = Path(output_path or config.output.path)
    if not target.is_absolute():
        target = repo_root / target

    line = render_version_line(version, config.output.constant)
    written = False
    if not dry_run:
        written = write_output(version, target, config.output.constant)

    return StampResult(
        backend=adapter.name,
        tag=tag,
        version=version,
        line=line.rstrip("\n"),
        output_path=target,
        written=written,
    )
