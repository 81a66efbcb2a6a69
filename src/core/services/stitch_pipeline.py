"""Stitch orchestration.

The CLI delegates the whole run to `stitch`: resolve inputs, locate ffmpeg,
plan the command, write the concat list, run, clean up. Printing stays in the
CLI layer; callers observe progress through `PipelineHooks`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable

from adapters.ffmpeg_command import plan_stitch, resolve_output_target
from adapters.ffmpeg_locator import locate_ffmpeg
from adapters.input_resolver import resolve_inputs
from adapters.process_runner import SubprocessRunner
from core.config import AppSettings
from core.domain.errors import ListFileExists, ToolExecutionFailed
from core.domain.models import InputSet, StitchPlan, StitchResult, ToolLocation
from core.interfaces.runner import ProcessRunner

logger = logging.getLogger(__name__)


@dataclass
class StitchRequest:
    """Parameters of one stitch run."""

    input_path: Path
    out: Path | None = None
    dry_run: bool = False
    now: datetime | None = None


@dataclass
class PipelineHooks:
    """Optional callbacks for UI layers."""

    inputs_resolved: Callable[[InputSet], None] | None = None
    tool_located: Callable[[ToolLocation], None] | None = None
    command_built: Callable[[StitchPlan], None] | None = None


def _remove_list_file(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as exc:
        logger.warning("Failed to clean up the concat list %s: %s", path, exc)


def stitch(
    *,
    settings: AppSettings,
    request: StitchRequest,
    runner: ProcessRunner | None = None,
    hooks: PipelineHooks | None = None,
) -> StitchResult:
    """Concatenate the audio files of `request.input_path` into one file.

    The output file is never taken as an input. The tool is located before
    anything is written or spawned. The concat list file is removed whether
    ffmpeg succeeds or not, and an existing file at its path aborts the run.
    """

    hooks = hooks or PipelineHooks()
    runner = runner or SubprocessRunner()

    output = resolve_output_target(request.out, settings, now=request.now)
    inputs = resolve_inputs(request.input_path, exclude=[output.path])
    if hooks.inputs_resolved:
        hooks.inputs_resolved(inputs)

    tool = locate_ffmpeg(settings)
    logger.debug("Using ffmpeg from %s: %s", tool.source.value, tool.path)
    if hooks.tool_located:
        hooks.tool_located(tool)

    plan = plan_stitch(tool=tool, inputs=inputs, output=output, settings=settings)
    if not plan.stream_copy:
        logger.info("Inputs do not all match %s; re-encoding", output.path.suffix or "the output")
    if hooks.command_built:
        hooks.command_built(plan)

    if request.dry_run:
        return StitchResult(output=output, inputs=inputs, tool=tool, plan=plan)

    if plan.list_path is not None and plan.list_path.exists():
        raise ListFileExists(plan.list_path)

    output.path.parent.mkdir(parents=True, exist_ok=True)
    if plan.list_path is None:
        outcome = runner.run(plan.argv)
    else:
        plan.list_path.write_text(plan.list_contents or "", encoding="utf-8")
        try:
            outcome = runner.run(plan.argv)
        finally:
            _remove_list_file(plan.list_path)

    if not outcome.ok:
        raise ToolExecutionFailed(outcome.returncode, outcome.stderr)

    logger.info("Concatenated %d file(s) into %s", len(inputs), output.path)
    return StitchResult(output=output, inputs=inputs, tool=tool, plan=plan, outcome=outcome)
