"""CLI UI components (Rich).

Keeps command logic apart from presentation so tables and panels can be
reused by `stitch` and `doctor`.
"""

from __future__ import annotations

import os
import shlex
import subprocess

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.formats import AudioFormat
from core.domain.models import InputSet, StitchPlan, StitchResult


def print_banner(console: Console) -> None:
    title = Text("stitcher", style="bold cyan")
    subtitle = Text("WAV/MP3 concatenation via ffmpeg", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_inputs_table(inputs: InputSet) -> Table:
    """Table of the files to stitch, in stitch order."""

    table = Table(title=f"Inputs ({inputs.directory})")
    table.add_column("#", style="dim", justify="right")
    table.add_column("File", style="white")
    table.add_column("Format", style="cyan", no_wrap=True)
    for index, path in enumerate(inputs.files, start=1):
        fmt = AudioFormat.from_path(path)
        table.add_row(str(index), path.name, fmt.value if fmt else "?")
    return table


def format_command(plan: StitchPlan) -> str:
    """Shell-ready command line for the current platform."""

    if os.name == "nt":
        return subprocess.list2cmdline(list(plan.argv))
    return shlex.join(plan.argv)


def build_command_panel(plan: StitchPlan) -> Panel:
    body = Text(format_command(plan), style="white")
    mode = "stream copy" if plan.stream_copy else "re-encode"
    return Panel(body, title=f"ffmpeg ({mode})", border_style="blue")


def build_result_panel(result: StitchResult) -> Panel:
    """Summary panel for a finished (or dry) run."""

    body = Text()
    if result.dry_run:
        body.append("Dry run: nothing was written.\n", style="yellow")
    else:
        body.append("Successfully concatenated the files.\n", style="bold green")
    body.append(f"\nInputs: {len(result.inputs)}")
    body.append(f"\nOutput: {result.output.path}")
    if result.output.derived:
        body.append(" (date-derived)", style="dim")
    body.append(f"\nffmpeg: {result.tool.path} [{result.tool.source.value}]", style="dim")
    return Panel(body, title=Text("Stitch", style="bold green"), border_style="green")
