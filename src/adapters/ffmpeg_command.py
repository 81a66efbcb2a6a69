"""ffmpeg concat command construction.

Two strategies:
- same format in and out: concat demuxer reading a list file (one
  `file '<path>'` line per input) with `-c copy`, lossless;
- mixed formats, or a format different from the output: every file is its
  own `-i` and the `concat` filter joins the decoded audio, which is then
  encoded for the output. The demuxer cannot join streams whose codec
  parameters differ.

Everything here is pure: same inputs, same settings and same day give the
same argv.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from core.config import AppSettings
from core.domain.models import InputSet, OutputTarget, StitchPlan, ToolLocation


def default_output_target(settings: AppSettings, *, now: datetime | None = None) -> OutputTarget:
    """`<prefix><date>.<ext>` in the working directory, e.g. `STITCH_OUTPUT_2024-05-01.wav`."""

    now = now or datetime.now()
    stamp = now.strftime(settings.output_date_format)
    name = f"{settings.output_prefix}{stamp}{settings.output_extension.extension}"
    return OutputTarget(path=Path(name), derived=True)


def resolve_output_target(
    out: Path | None,
    settings: AppSettings,
    *,
    now: datetime | None = None,
) -> OutputTarget:
    if out is None:
        return default_output_target(settings, now=now)
    return OutputTarget(path=Path(out).expanduser(), derived=False)


def _escape_concat_path(path: Path) -> str:
    return str(path).replace("'", "'\\''")


def render_concat_list(inputs: InputSet) -> str:
    """Concat demuxer list with absolute paths, in `InputSet` order."""

    lines = []
    for path in inputs.files:
        absolute = path if path.is_absolute() else path.resolve()
        lines.append(f"file '{_escape_concat_path(absolute)}'")
    return "\n".join(lines) + "\n"



def can_stream_copy(inputs: InputSet, output: OutputTarget) -> bool:
    """True when every input already has the output's format."""

    out_format = output.format
    return out_format is not None and inputs.formats == {out_format}


def _absolute(path: Path) -> str:
    return str(path if path.is_absolute() else path.resolve())


def concat_filter(count: int) -> str:
    """`[0:a][1:a]...concat=n=<count>:v=0:a=1[out]`."""

    pads = "".join(f"[{i}:a]" for i in range(count))
    return f"{pads}concat=n={count}:v=0:a=1[out]"


def build_concat_command(
    tool: ToolLocation,
    inputs: InputSet,
    output: OutputTarget,
    list_path: Path | None = None,
) -> list[str]:
    """Full argv for concatenating `inputs` into `output`.

    Stream copy needs `list_path` (the demuxer list); the re-encode form
    ignores it.
    """

    argv = [str(tool.path), "-hide_banner", "-nostdin", "-y"]

    if can_stream_copy(inputs, output):
        if list_path is None:
            raise ValueError("stream copy needs a concat list path")
        argv += ["-f", "concat", "-safe", "0", "-i", str(list_path), "-vn", "-c", "copy"]
        argv.append(str(output.path))
        return argv

    for path in inputs.files:
        argv += ["-i", _absolute(path)]
    argv += ["-filter_complex", concat_filter(len(inputs)), "-map", "[out]"]
    # Unknown output extensions are left to ffmpeg's default encoder.
    out_format = output.format
    if out_format is not None:
        argv += ["-c:a", out_format.encoder()]
    argv.append(str(output.path))
    return argv


def concat_list_path(output: OutputTarget, settings: AppSettings) -> Path:
    """Fixed list file location next to the output file."""

    return output.path.parent / settings.list_file_name


def plan_stitch(
    *,
    tool: ToolLocation,
    inputs: InputSet,
    output: OutputTarget,
    settings: AppSettings,
) -> StitchPlan:
    if not can_stream_copy(inputs, output):
        return StitchPlan(
            argv=tuple(build_concat_command(tool, inputs, output)),
            output=output,
            stream_copy=False,
        )

    list_path = concat_list_path(output, settings)
    return StitchPlan(
        argv=tuple(build_concat_command(tool, inputs, output, list_path)),
        list_path=list_path,
        list_contents=render_concat_list(inputs),
        output=output,
        stream_copy=True,
    )
