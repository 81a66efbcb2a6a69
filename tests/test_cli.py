from __future__ import annotations

import shlex
from pathlib import Path

import pytest
from typer.testing import CliRunner

from cli.main import app
from conftest import POSIX_ONLY, write_script

runner = CliRunner()


@pytest.fixture(autouse=True)
def _in_tmp(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)


def test_missing_input_directory(tmp_path: Path) -> None:
    result = runner.invoke(app, ["-i", str(tmp_path / "missing")])

    assert result.exit_code == 3
    assert "Error" in result.output


def test_empty_input_directory(tmp_path: Path) -> None:
    empty = tmp_path / "empty"
    empty.mkdir()

    result = runner.invoke(app, ["--input_path", str(empty)])

    assert result.exit_code == 4


def test_input_path_is_required() -> None:
    result = runner.invoke(app, ["--out", "x.wav"])

    assert result.exit_code == 2


@POSIX_ONLY
def test_tool_not_found(empty_path_dir: Path, sounds_dir: Path) -> None:
    result = runner.invoke(app, ["-i", str(sounds_dir)])

    assert result.exit_code == 5


@POSIX_ONLY
def test_dry_run_prints_command(fake_ffmpeg: Path, sounds_dir: Path, tmp_path: Path) -> None:
    result = runner.invoke(app, ["-i", str(sounds_dir), "-o", "joined.wav", "--dry-run", "--quiet"])

    assert result.exit_code == 0, result.output
    line = result.output.strip()
    assert "concat" in line
    assert line.endswith("joined.wav")
    assert not (tmp_path / "joined.wav").exists()
    assert not (tmp_path / "_stitcher_tmp_.txt").exists()


@POSIX_ONLY
def test_successful_stitch(fake_ffmpeg: Path, sounds_dir: Path, tmp_path: Path) -> None:
    result = runner.invoke(app, ["-i", str(sounds_dir), "-o", "joined.wav"])

    assert result.exit_code == 0, result.output
    assert "Successfully concatenated" in result.output
    assert not (tmp_path / "_stitcher_tmp_.txt").exists()


@POSIX_ONLY
def test_ffmpeg_failure_exit_code(sounds_dir: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    bin_dir = tmp_path / "bad-bin"
    write_script(bin_dir / "ffmpeg", 'echo "Invalid data" >&2\nexit 7')
    monkeypatch.setenv("PATH", str(bin_dir))

    result = runner.invoke(app, ["-i", str(sounds_dir), "-q"])

    assert result.exit_code == 7
    assert "Invalid data" in result.output
    assert not (tmp_path / "_stitcher_tmp_.txt").exists()


@POSIX_ONLY
def test_doctor_run_ok(fake_ffmpeg: Path) -> None:
    result = runner.invoke(app, ["doctor", "run"])

    assert result.exit_code == 0, result.output
    assert "Doctor" in result.output


@POSIX_ONLY
def test_doctor_run_without_ffmpeg(empty_path_dir: Path) -> None:
    result = runner.invoke(app, ["doctor", "run"])

    assert result.exit_code == 5


@POSIX_ONLY
@pytest.mark.skipif(not __import__("sys").platform.startswith("linux"), reason="XDG config dir")
def test_doctor_setup_ffmpeg_writes_user_env(tmp_path: Path) -> None:
    script = write_script(tmp_path / "tools" / "ffmpeg", 'echo "ffmpeg version 7.0-fake"')

    result = runner.invoke(app, ["doctor", "setup-ffmpeg"], input=f"{script}\n")

    assert result.exit_code == 0, result.output
    env_file = tmp_path / "xdg" / "stitcher" / ".env"
    assert f"STITCHER_FFMPEG_PATH={script.resolve()}" in env_file.read_text(encoding="utf-8")


@POSIX_ONLY
def test_dry_run_command_is_shell_quoted(fake_ffmpeg: Path, tmp_path: Path) -> None:
    spaced = tmp_path / "my sounds"
    spaced.mkdir()
    for name in ("a.wav", "b.mp3"):
        (spaced / name).write_bytes(b"\x00")

    result = runner.invoke(app, ["-i", str(spaced), "-o", "joined.wav", "--dry-run", "-q"])

    assert result.exit_code == 0, result.output
    line = result.output.strip()
    assert f"'{spaced / 'a.wav'}'" in line
    tokens = shlex.split(line)
    first = tokens.index(str(spaced / "a.wav"))
    assert tokens[first + 1 : first + 3] == ["-i", str(spaced / "b.mp3")]
