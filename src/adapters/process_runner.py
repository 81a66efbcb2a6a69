"""Subprocess adapter implementing `core.interfaces.runner.ProcessRunner`."""

from __future__ import annotations

import logging
import subprocess
from typing import Sequence

from core.domain.errors import ToolExecutionFailed
from core.domain.models import ProcessOutcome
from core.interfaces.runner import ProcessRunner

logger = logging.getLogger(__name__)


class SubprocessRunner(ProcessRunner):
    """Runs a command synchronously and captures its output as text."""

    def run(self, argv: Sequence[str]) -> ProcessOutcome:
        args = [str(a) for a in argv]
        logger.debug("Spawning: %s", subprocess.list2cmdline(args))
        try:
            completed = subprocess.run(
                args,
                capture_output=True,
                text=True,
                errors="replace",
                check=False,
            )
        except OSError as exc:
            raise ToolExecutionFailed(None, reason=f"could not start {args[0]}: {exc}") from exc

        logger.debug("%s exited with status %d", args[0], completed.returncode)
        return ProcessOutcome(
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )
