"""Input discovery.

Lists a directory (non-recursive) and keeps the supported audio files, in
lexicographic order by file name so repeated runs stitch identically.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from core.domain.errors import InputDirectoryNotFound, NoMatchingFiles
from core.domain.formats import AudioFormat
from core.domain.models import InputSet

logger = logging.getLogger(__name__)


def filter_supported_extensions(paths: Iterable[Path]) -> list[Path]:
    """Keep paths whose extension is a supported format, preserving order."""

    return [p for p in paths if AudioFormat.from_path(p) is not None]


def resolve_inputs(directory: Path, *, exclude: Iterable[Path] = ()) -> InputSet:
    """Build the `InputSet` for `directory`.

    Files resolving to a path in `exclude` (the run's own output) are left out.

    Raises:
    - `InputDirectoryNotFound` when the path is missing or not a directory.
    - `NoMatchingFiles` when no regular file has a supported extension.
    """

    directory = Path(directory).expanduser()
    if not directory.is_dir():
        raise InputDirectoryNotFound(directory)

    excluded = {Path(p).resolve() for p in exclude}
    entries = [p for p in directory.iterdir() if p.is_file()]
    if excluded:
        kept = [p for p in entries if p.resolve() not in excluded]
        if len(kept) != len(entries):
            logger.info("Ignoring the output file found in %s", directory)
        entries = kept
    matches = sorted(filter_supported_extensions(entries), key=lambda p: p.name)

    skipped = len(entries) - len(matches)
    if skipped:
        logger.debug("Skipped %d unsupported file(s) in %s", skipped, directory)

    if not matches:
        raise NoMatchingFiles(directory, [fmt.extension for fmt in AudioFormat])

    logger.debug("Found %d audio file(s) in %s", len(matches), directory)
    return InputSet(directory=directory, files=tuple(matches))
