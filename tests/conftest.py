from __future__ import annotations

import os
import stat
from pathlib import Path
from typing import Sequence

import pytest

from core.config import AppSettings
from core.domain.models import ProcessOutcome

POSIX_ONLY = pytest.mark.skipif(os.name == "nt", reason="relies on executable shell scripts")


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for key in list(os.environ):
        if key.upper().startswith("STITCHER_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))


@pytest.fixture
def sounds_dir(tmp_path: Path) -> Path:
    """a.wav, b.mp3, c.wav plus files that must be ignored."""

    directory = tmp_path / "sounds"
    directory.mkdir()
    for name in ("c.wav", "a.wav", "b.mp3", "notes.txt", "cover.jpg"):
        (directory / name).write_bytes(b"\x00")
    (directory / "nested.wav").mkdir()
    return directory


@pytest.fixture
def empty_path_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point PATH at an empty directory so no ffmpeg can be found there."""

    empty = tmp_path / "empty-bin"
    empty.mkdir()
    monkeypatch.setenv("PATH", str(empty))
    return empty


def write_script(path: Path, body: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("#!/bin/sh\n" + body + "\n", encoding="utf-8")
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


@pytest.fixture
def fake_ffmpeg(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """An executable `ffmpeg` that exits 0, alone on PATH."""

    bin_dir = tmp_path / "bin"
    script = write_script(bin_dir / "ffmpeg", 'echo "ffmpeg version 6.1-fake"\nexit 0')
    monkeypatch.setenv("PATH", str(bin_dir))
    return script


@pytest.fixture
def settings(tmp_path: Path) -> AppSettings:
    return AppSettings(_env_file=None, vendor_path=tmp_path / "vendor" / "ffmpeg" / "ffmpeg")


class FakeRunner:
    """Records every argv and, for stream copies, the concat list seen at run time."""

    def __init__(self, returncode: int = 0, stderr: str = "") -> None:
        self.returncode = returncode
        self.stderr = stderr
        self.calls: list[list[str]] = []
        self.list_contents: list[str] = []

    def run(self, argv: Sequence[str]) -> ProcessOutcome:
        args = list(argv)
        self.calls.append(args)
        if "concat" in args and "-f" in args:
            list_path = Path(args[args.index("-i") + 1])
            self.list_contents.append(list_path.read_text(encoding="utf-8"))
        return ProcessOutcome(returncode=self.returncode, stderr=self.stderr)


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()
