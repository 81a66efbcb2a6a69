"""Process runner contract.

A structural Protocol: the subprocess adapter and test doubles are
interchangeable without inheriting from a shared base.
"""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from core.domain.models import ProcessOutcome


@runtime_checkable
class ProcessRunner(Protocol):
    """Minimal contract for running the external binary.

    Rules:
    - `run` blocks until the child exits.
    - A non-zero exit is reported in the outcome, not raised.
    - Failing to spawn the child raises `ToolExecutionFailed`.
    """

    def run(self, argv: Sequence[str]) -> ProcessOutcome:
        """Run `argv` and return its exit status and captured output."""

        ...
