"""Domain models (Pydantic v2).

These models describe *what* a stitch run works with, not *how* it is
obtained: directory scanning, binary lookup and subprocess handling live in
`adapters/`. Every model is frozen; a run builds them once and only reads
them afterwards.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict

from core.domain.formats import AudioFormat


class InputSet(BaseModel):
    """Ordered audio files found in one directory."""

    model_config = ConfigDict(frozen=True)

    directory: Path = Field(
        ...,
        description="Directory the files were discovered in.",
    )
    files: tuple[Path, ...] = Field(
        ...,
        min_length=1,
        description="Audio files in stitch order (lexicographic by file name).",
    )

    @field_validator("files")
    @classmethod
    def _only_supported(cls, value: tuple[Path, ...]) -> tuple[Path, ...]:
        for path in value:
            if AudioFormat.from_path(path) is None:
                raise ValueError(f"unsupported audio file: {path}")
        return value

    @property
    def formats(self) -> set[AudioFormat]:
        return {AudioFormat.from_path(path) for path in self.files}  # type: ignore[misc]

    @property
    def is_mixed(self) -> bool:
        return len(self.formats) > 1

    def __len__(self) -> int:
        return len(self.files)


class OutputTarget(BaseModel):
    """Where the stitched file is written."""

    model_config = ConfigDict(frozen=True)

    path: Path = Field(
        ...,
        description="Output file path, user supplied or derived from the date.",
    )
    derived: bool = Field(
        default=False,
        description="True when the name was computed from the current date.",
    )

    @property
    def format(self) -> AudioFormat | None:
        return AudioFormat.from_path(self.path)


class ToolSource(str, Enum):
    CONFIGURED = "configured"
    PATH = "path"
    FALLBACK = "fallback"


class ToolLocation(BaseModel):
    """Resolved ffmpeg binary."""

    model_config = ConfigDict(frozen=True)

    path: Path = Field(
        ...,
        description="Absolute path to the executable.",
    )
    source: ToolSource = Field(
        ...,
        description="Which lookup step produced the path.",
    )


class StitchPlan(BaseModel):
    """Everything needed to run one concatenation."""

    model_config = ConfigDict(frozen=True)

    argv: tuple[str, ...] = Field(
        ...,
        min_length=1,
        description="Full argument vector, binary first.",
    )
    list_path: Path | None = Field(
        default=None,
        description="Concat list file referenced by the argv (stream copy only).",
    )
    list_contents: str | None = Field(
        default=None,
        description="Text written to `list_path` before ffmpeg runs.",
    )
    output: OutputTarget
    stream_copy: bool = Field(
        default=True,
        description="False when the inputs are re-encoded to the output format.",
    )


class ProcessOutcome(BaseModel):
    """Exit status and captured output of a finished child process."""

    model_config = ConfigDict(frozen=True)

    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class StitchResult(BaseModel):
    """Summary of a stitch run."""

    model_config = ConfigDict(frozen=True)

    output: OutputTarget
    inputs: InputSet
    tool: ToolLocation
    plan: StitchPlan
    outcome: ProcessOutcome | None = Field(
        default=None,
        description="None for dry runs.",
    )
    finished_at: datetime = Field(
        default_factory=datetime.now,
        description="Local time the run completed.",
    )

    @property
    def dry_run(self) -> bool:
        return self.outcome is None
