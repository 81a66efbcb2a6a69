"""stitcher CLI (Typer).

Usage:
- `stitcher -i ./sounds` stitches every WAV/MP3 in `./sounds` into
  `STITCH_OUTPUT_<date>.wav`.
- `stitcher -i ./sounds -o episode.mp3` picks the output name.
- `stitcher doctor run` checks the ffmpeg setup.

Exit codes: 2 usage error (Click), 3 missing input directory, 4 no matching
files, 5 ffmpeg not found, 6 concat list path taken, else ffmpeg's status.

The CLI only parses arguments and renders results; the run itself lives in
`core.services.stitch_pipeline`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from cli import doctor
from cli.ui_components import (
    build_command_panel,
    build_inputs_table,
    build_result_panel,
    format_command,
    print_banner,
)
from core.config import AppSettings
from core.domain.errors import StitcherError, ToolExecutionFailed
from core.log import configure_logging
from core.services.stitch_pipeline import PipelineHooks, StitchRequest, stitch

app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help="Stitch the WAV/MP3 files of a directory into one file using ffmpeg.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)

# Keep the tail of ffmpeg's diagnostics readable on failure.
_STDERR_TAIL_LINES = 20


def _print_error(exc: StitcherError) -> None:
    _err_console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
    if isinstance(exc, ToolExecutionFailed) and exc.stderr.strip():
        tail = exc.stderr.strip().splitlines()[-_STDERR_TAIL_LINES:]
        _err_console.print("[dim]ffmpeg output:[/dim]")
        _err_console.print(escape("\n".join(tail)), style="dim")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    input_path: Optional[Path] = typer.Option(
        None,
        "--input_path",
        "-i",
        help="Directory to look for .wav/.mp3 files in.",
    ),
    out: Optional[Path] = typer.Option(
        None,
        "--out",
        "-o",
        help="Output file name (default: STITCH_OUTPUT_<date>.wav). Its type should match the inputs.",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Print the ffmpeg command without running it.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging.",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only print errors.",
    ),
) -> None:
    """Concatenate the audio files found in INPUT_PATH, in file-name order."""

    settings = AppSettings()
    configure_logging("DEBUG" if verbose else settings.log_level, console=_err_console)

    if ctx.invoked_subcommand is not None:
        return

    if input_path is None:
        raise typer.BadParameter("an input directory is required", param_hint="'--input_path' / '-i'")

    if not quiet:
        print_banner(_console)

    hooks = PipelineHooks()
    if not quiet:
        hooks.inputs_resolved = lambda inputs: _console.print(build_inputs_table(inputs))
        hooks.command_built = lambda plan: _console.print(build_command_panel(plan))
    elif dry_run:
        hooks.command_built = lambda plan: typer.echo(format_command(plan))

    request = StitchRequest(input_path=input_path, out=out, dry_run=dry_run)
    try:
        result = stitch(settings=settings, request=request, hooks=hooks)
    except StitcherError as exc:
        _print_error(exc)
        raise typer.Exit(code=exc.exit_code) from exc

    if quiet:
        return
    _console.print(build_result_panel(result))


def run() -> None:
    app()


if __name__ == "__main__":
    run()
