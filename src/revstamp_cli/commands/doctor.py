"""
doctor.py - Environment health check command.

Checks that the backend for the working copy can be queried and that the
output file can be written.
"""

from __future__ import annotations

import json
import os
import shutil
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional, List

import typer
from rich.console import Console
from rich.table import Table

from revstamp_core.config import StampConfig
from revstamp_core.vcs import resolve_adapter

console = Console()


@dataclass
class CheckResult:
    """Result of a single check."""
    name: str
    passed: bool
    message: str
    details: Optional[str] = None


@dataclass
class DoctorResult:
    """Overall doctor check result."""
    backend: str
    output_path: Path
    all_passed: bool
    checks: List[CheckResult]


def check_backend_detected(root: Path, config: StampConfig) -> CheckResult:
    """Report which backend manages the working copy."""
    marker = config.backends.fossil.marker
    backend = resolve_adapter(root, config).name
    if backend == "fossil":
        message = f"Found {marker}; using fossil"
    else:
        message = f"No {marker}; using git"
    return CheckResult(name="Backend", passed=True, message=message)


def check_executable(name: str, executable: str) -> CheckResult:
    """Check that a backend executable is on PATH."""
    found = shutil.which(executable)
    if found is None:
        return CheckResult(
            name=f"{name} executable",
            passed=False,
            message=f"'{executable}' not found on PATH",
            details=f"Install {name} or set [backends.{name}].executable in revstamp.toml",
        )
    return CheckResult(name=f"{name} executable", passed=True, message=found)


def _output_target(root: Path, config: StampConfig) -> Path:
    target = config.output.path
    return target if target.is_absolute() else root / target


def check_output_writable(root: Path, config: StampConfig) -> CheckResult:
    """Check that the output file's directory accepts new files."""
    target = _output_target(root, config)
    directory = target.parent
    if not directory.is_dir():
        return CheckResult(
            name="Output",
            passed=False,
            message=f"Directory does not exist: {directory}",
        )
    if not os.access(directory, os.W_OK):
        return CheckResult(
            name="Output",
            passed=False,
            message=f"Directory is not writable: {directory}",
        )
    return CheckResult(name="Output", passed=True, message=str(target))


def run_doctor(root: Path, config: Optional[StampConfig] = None) -> DoctorResult:
    """Run all doctor checks."""
    config = config or StampConfig()
    backend = resolve_adapter(root, config).name
    backend_cfg = getattr(config.backends, backend)
    checks = [
        check_backend_detected(root, config),
        check_executable(backend, backend_cfg.executable),
        check_output_writable(root, config),
    ]

    all_passed = all(c.passed for c in checks)
    return DoctorResult(
        backend=backend,
        output_path=_output_target(root, config),
        all_passed=all_passed,
        checks=checks,
    )


def format_result_plain(result: DoctorResult) -> None:
    """Print result in plain text format."""
    table = Table(title=f"revstamp doctor: {result.backend} -> {result.output_path}", show_header=True)
    table.add_column("Check", style="bold")
    table.add_column("Status")
    table.add_column("Message")

    for check in result.checks:
        status = "[green]✓ PASS[/green]" if check.passed else "[red]✗ FAIL[/red]"
        table.add_row(check.name, status, check.message)
        if check.details:
            table.add_row("", "", f"[dim]{check.details}[/dim]")

    console.print(table)

    if result.all_passed:
        console.print(f"\n[green bold]Ready to stamp {result.output_path} from {result.backend}.[/green bold]")
    else:
        console.print(f"\n[red bold]Cannot stamp {result.output_path} from {result.backend}.[/red bold]")


def format_result_json(result: DoctorResult) -> None:
    """Print result in JSON format."""
    output = {
        "backend": result.backend,
        "output_path": str(result.output_path),
        "all_passed": result.all_passed,
        "checks": [asdict(c) for c in result.checks],
    }
    typer.echo(json.dumps(output, indent=2))


def doctor(
    ctx: typer.Context,
    format: str = typer.Option(
        "plain", "--format", "-f",
        help="Output format: plain, json",
    ),
) -> None:
    """
    Check environment health.

    Verifies:
    - Which backend manages the working copy
    - The backend executable is on PATH
    - The output directory is writable
    """
    config = ctx.obj if isinstance(ctx.obj, StampConfig) else None
    result = run_doctor(Path.cwd(), config)

    if format == "json":
        format_result_json(result)
    else:
        format_result_plain(result)

    raise typer.Exit(0 if result.all_passed else 1)
