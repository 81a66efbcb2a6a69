"""Doctor command for environment diagnostics."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from adapters.ffmpeg_command import default_output_target
from adapters.ffmpeg_locator import locate_ffmpeg, check_ffmpeg_version
from core.config import AppSettings, get_user_env_file, write_user_env_vars
from core.domain.errors import ToolNotFound
from core.domain.models import ToolLocation, ToolSource

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="stitcher Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Locator
    location: ToolLocation | None = None
    try:
        location = locate_ffmpeg(settings)
        table.add_row("ffmpeg", "OK", f"{location.path} ({location.source.value})")
    except ToolNotFound as exc:
        table.add_row("ffmpeg", "FAIL", ", ".join(exc.candidates))

    # Version
    ok_version = False
    if location is not None:
        ok_version, detail_version = check_ffmpeg_version(location)
        table.add_row("ffmpeg -version", "OK" if ok_version else "FAIL", detail_version)

    # Config
    vendor = settings.vendor_path
    table.add_row("Vendor fallback", "OK" if vendor.exists() else "MISSING", str(vendor))
    table.add_row("Default output", "OK", str(default_output_target(settings).path))
    env_file = get_user_env_file()
    table.add_row("User config", "OK" if env_file.exists() else "OPTIONAL", str(env_file))

    _console.print(table)

    if location is None:
        _console.print(
            "\n[yellow]Note:[/yellow] install ffmpeg on your PATH, place a build at "
            f"{vendor} or run `stitcher doctor setup-ffmpeg`."
        )
        raise typer.Exit(code=ToolNotFound.exit_code)
    if not ok_version:
        raise typer.Exit(code=1)
    if location.source is ToolSource.FALLBACK:
        _console.print("\n[dim]Using the bundled vendor build; ffmpeg is not on your PATH.[/dim]")


@app.command(name="setup-ffmpeg")
def setup_ffmpeg() -> None:
    """Interactive ffmpeg setup (stores the path in the user config .env).

    For machines where ffmpeg is neither on PATH nor in the vendor folder.
    """

    raw = typer.prompt("Path to the ffmpeg executable").strip()
    if not raw:
        raise typer.BadParameter("a path is required")

    path = Path(raw).expanduser().resolve()
    location = ToolLocation(path=path, source=ToolSource.CONFIGURED)
    ok, detail = check_ffmpeg_version(location)
    if not ok:
        raise typer.BadParameter(f"{path} does not look like ffmpeg: {detail}")

    env_path = write_user_env_vars({"STITCHER_FFMPEG_PATH": str(path)})

    _console.print(f"[green]Saved ffmpeg config to:[/green] {env_path}")
    _console.print(f"[dim]{detail}[/dim]")
