"""Audio formats understood by stitcher.

The set of supported extensions lives in the domain layer so the input
resolver, the command builder and the settings share one source of truth.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path


class AudioFormat(str, Enum):
    """Supported audio containers, keyed by file extension."""

    WAV = "wav"
    MP3 = "mp3"

    @classmethod
    def from_path(cls, path: Path) -> "AudioFormat | None":
        """Map a path's extension (case-insensitive) to a format, or None."""

        suffix = path.suffix.lower().lstrip(".")
        for fmt in cls:
            if fmt.value == suffix:
                return fmt
        return None

    @property
    def extension(self) -> str:
        return f".{self.value}"

    def encoder(self) -> str:
        """ffmpeg audio encoder used when inputs must be re-encoded."""

        return "libmp3lame" if self is AudioFormat.MP3 else "pcm_s16le"
