"""Errors raised by the stitch pipeline.

All of them are terminal: core and adapters raise, the CLI prints the
message and exits with `exit_code`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence


class StitcherError(Exception):
    """Base class for every user-facing failure."""

    exit_code: int = 1


class InputDirectoryNotFound(StitcherError):
    exit_code = 3

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"input directory not found: {path}")


class NoMatchingFiles(StitcherError):
    exit_code = 4

    def __init__(self, path: Path, extensions: Sequence[str]) -> None:
        self.path = path
        self.extensions = tuple(extensions)
        super().__init__(
            f"found no files to stitch in {path} (looked for {', '.join(self.extensions)})"
        )


class ToolNotFound(StitcherError):
    exit_code = 5

    def __init__(self, candidates: Sequence[Path | str], vendor_path: Path) -> None:
        self.candidates = tuple(str(c) for c in candidates)
        self.vendor_path = vendor_path
        checked = ", ".join(self.candidates) or "<none>"
        super().__init__(
            "failed to find a valid ffmpeg binary. "
            f"checked: {checked}. Install ffmpeg on your PATH, place a build at "
            f"{vendor_path} (see vendor/ffmpeg/README) or run `stitcher doctor setup-ffmpeg`."
        )


class ListFileExists(StitcherError):
    """A file already sits where the concat list would be written."""

    exit_code = 6

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(
            f"refusing to overwrite {path}; move it or set STITCHER_LIST_FILE_NAME to another name"
        )


class ToolExecutionFailed(StitcherError):
    """ffmpeg could not be spawned or exited with a non-zero status."""

    def __init__(self, returncode: int | None, stderr: str = "", *, reason: str | None = None) -> None:
        self.returncode = returncode
        self.stderr = stderr
        if returncode is not None and returncode > 0:
            self.exit_code = returncode
        detail = reason or f"ffmpeg exited with status {returncode}"
        super().__init__(f"did not concatenate the files: {detail}")
