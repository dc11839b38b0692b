from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from revstamp_core.config import ConfigLoader
from revstamp_core.errors import RevstampError
from revstamp_ops.stamp import stamp

from .util import configure_logging

app = typer.Typer(help="revstamp: write the working copy revision into a version constant file")


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output file (default: version.cr)"),
    config: Optional[Path] = typer.Option(None, "--config", help="Config file (default: ./revstamp.toml if present)"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print the version line without writing it"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Stamp the current revision into the output file."""
    root = Path.cwd()
    try:
        cfg = ConfigLoader.load(root, config)
    except RevstampError as e:
        configure_logging(verbose=verbose)
        typer.echo(f"{type(e).__name__}: {e}", err=True)
        raise typer.Exit(1)

    configure_logging(cfg.log.verbosity, verbose)
    if output is not None:
        cfg = cfg.model_copy(update={"output": cfg.output.model_copy(update={"path": output})})
    ctx.obj = cfg
    if ctx.invoked_subcommand is not None:
        return

    try:
        result = stamp(root, cfg, dry_run=dry_run)
    except RevstampError as e:
        typer.echo(f"{type(e).__name__}: {e}", err=True)
        raise typer.Exit(1)

    if dry_run:
        typer.echo(result.line)


# Subcommands are registered in commands/*.py
from .commands.doctor import doctor as doctor_fn  # noqa: E402

app.command(name="doctor")(doctor_fn)


def main():
    app()
