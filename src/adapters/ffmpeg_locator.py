"""ffmpeg lookup.

Order:
1) `STITCHER_FFMPEG_PATH` (explicit configuration)
2) the process search path (`shutil.which`)
3) the bundled vendor build (`vendor/ffmpeg/ffmpeg` by default)

Lookup only inspects the filesystem; nothing is spawned until the stitch
itself runs. `check_ffmpeg_version` is the opt-in health check used by `doctor`.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from pathlib import Path

from core.config import AppSettings
from core.domain.errors import ToolNotFound
from core.domain.models import ToolLocation, ToolSource

logger = logging.getLogger(__name__)


def _is_executable(path: Path) -> bool:
    return path.is_file() and os.access(path, os.X_OK)


def _absolute(path: Path) -> Path:
    path = path.expanduser()
    if not path.is_absolute():
        path = Path.cwd() / path
    return path


def locate_ffmpeg(settings: AppSettings | None = None) -> ToolLocation:
    """Return the first existing, executable ffmpeg candidate.

    Raises `ToolNotFound` listing every checked candidate.
    """

    settings = settings or AppSettings()
    checked: list[str] = []

    if settings.ffmpeg_path is not None:
        configured = _absolute(settings.ffmpeg_path)
        checked.append(str(configured))
        logger.debug("Checking configured ffmpeg: %s", configured)
        if _is_executable(configured):
            return ToolLocation(path=configured, source=ToolSource.CONFIGURED)
        logger.warning("Configured ffmpeg is not an executable file: %s", configured)

    logger.debug("Checking search path for %r", settings.ffmpeg_binary)
    checked.append(f"$PATH:{settings.ffmpeg_binary}")
    found = shutil.which(settings.ffmpeg_binary)
    if found:
        return ToolLocation(path=Path(found).resolve(), source=ToolSource.PATH)

    vendor = _absolute(settings.vendor_path)
    checked.append(str(vendor))
    logger.debug("Checking vendor ffmpeg: %s", vendor)
    if _is_executable(vendor):
        return ToolLocation(path=vendor, source=ToolSource.FALLBACK)

    raise ToolNotFound(checked, settings.vendor_path)


def check_ffmpeg_version(location: ToolLocation) -> tuple[bool, str]:
    """Run `ffmpeg -version` and return (ok, first line of output or error)."""

    try:
        completed = subprocess.run(
            [str(location.path), "-hide_banner", "-version"],
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as exc:
        return False, str(exc)

    lines = (completed.stdout or completed.stderr).strip().splitlines()
    first = lines[0] if lines else ""
    if completed.returncode != 0:
        return False, first or f"exit status {completed.returncode}"
    return True, first
