from pathlib import Path
from typing import List, Sequence, Tuple

import pytest
from hypothesis import settings

from revstamp_core.runner import CommandResult

# Prevent Hypothesis from writing a local example database (e.g. `.hypothesis/`) during tests.
settings.register_profile("revstamp-tests", database=None)
settings.load_profile("revstamp-tests")


class FakeRunner:
    """Stands in for SubprocessRunner; records every command it is given."""

    def __init__(self, out: str = "", err: str = "", ret: int = 0):
        self.result = CommandResult(out=out, err=err, ret=ret)
        self.calls: List[Tuple[List[str], Path]] = []

    def run(self, args: Sequence[str], cwd: Path) -> CommandResult:
        self.calls.append((list(args), cwd))
        return self.result


@pytest.fixture
def fossil_checkout(tmp_path: Path) -> Path:
    (tmp_path / ".fslckout").write_bytes(b"")
    return tmp_path
