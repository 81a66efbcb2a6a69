"""Core configuration.

Responsibilities:
- Centralize environment variables (pydantic-settings) away from the CLI.
- Give adapters (locator, command builder) one consistent settings contract.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.formats import AudioFormat


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "stitcher"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "stitcher"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "stitcher"
    return Path.home() / ".config" / "stitcher"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def default_vendor_path() -> Path:
    name = "ffmpeg.exe" if os.name == "nt" else "ffmpeg"
    return Path("vendor") / "ffmpeg" / name


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str]) -> Path:
    """Write or update variables in the user's global .env."""

    env_path = get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# stitcher user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Application-wide settings.

    Every field can be overridden with a `STITCHER_`-prefixed environment
    variable or a `.env` entry.
    """

    model_config = SettingsConfigDict(
        env_prefix="STITCHER_",
        extra="ignore",
        case_sensitive=False,
        # Project .env first (dev), then the user-level config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    ffmpeg_binary: str = Field(
        default="ffmpeg",
        min_length=1,
        description="Executable name looked up on the search path.",
    )
    ffmpeg_path: Path | None = Field(
        default=None,
        description="Explicit ffmpeg path; checked before the search path when set.",
    )
    vendor_path: Path = Field(
        default_factory=default_vendor_path,
        description="Bundled fallback binary, relative to the working directory.",
    )

    output_prefix: str = Field(
        default="STITCH_OUTPUT_",
        description="Prefix for the date-derived output file name.",
    )
    output_date_format: str = Field(
        default="%Y-%m-%d",
        min_length=1,
        description="strftime format used for the default output name.",
    )
    output_extension: AudioFormat = Field(
        default=AudioFormat.WAV,
        description="Container for the default output file (wav/mp3).",
    )
    list_file_name: str = Field(
        default="_stitcher_tmp_.txt",
        min_length=1,
        description="Concat list file written next to the output while ffmpeg runs.",
    )

    log_level: str = Field(
        default="WARNING",
        description="Root log level (DEBUG, INFO, WARNING, ...).",
    )
