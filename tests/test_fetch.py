from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

import pytest

from gothkit.errors import FetchError, Stage
from gothkit.fetch import GitTreeFetcher


def test_command_includes_depth_when_requested(tmp_path: Path):
    assert GitTreeFetcher().command("https://example.com/t.git", tmp_path) == [
        "git",
        "clone",
        "https://example.com/t.git",
        str(tmp_path),
    ]
    assert GitTreeFetcher(depth=1).command("src", tmp_path)[2:4] == ["--depth", "1"]


def test_fetch_success(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    calls = []

    def fake_run(args, **kwargs):
        calls.append((args, kwargs))
        return subprocess.CompletedProcess(args, 0, stdout="", stderr="Cloning into...")

    monkeypatch.setattr(subprocess, "run", fake_run)
    GitTreeFetcher().fetch("https://example.com/t.git", tmp_path)

    assert calls[0][0] == ["git", "clone", "https://example.com/t.git", str(tmp_path)]
    assert calls[0][1]["check"] is False


def test_fetch_nonzero_exit_raises(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    def fake_run(args, **kwargs):
        return subprocess.CompletedProcess(args, 128, stdout="", stderr="fatal: repository not found\n")

    monkeypatch.setattr(subprocess, "run", fake_run)
    with pytest.raises(FetchError) as excinfo:
        GitTreeFetcher().fetch("https://example.com/missing.git", tmp_path)

    error = excinfo.value
    assert str(error) == "fatal: repository not found"
    assert error.returncode == 128
    assert error.source == "https://example.com/missing.git"
    assert error.stage is Stage.FETCH_TEMPLATE


def test_fetch_nonzero_exit_without_output(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    monkeypatch.setattr(
        subprocess, "run", lambda args, **kwargs: subprocess.CompletedProcess(args, 1, stdout="", stderr="")
    )
    with pytest.raises(FetchError, match=r"exit 1"):
        GitTreeFetcher().fetch("src", tmp_path)


def test_fetch_missing_executable(tmp_path: Path):
    with pytest.raises(FetchError, match="could not run"):
        GitTreeFetcher(executable=str(tmp_path / "no-such-git")).fetch("src", tmp_path / "dest")


@pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")
def test_fetch_clones_local_repository(template_dir: Path, tmp_path: Path):
    git = ["git", "-c", "user.name=gothkit", "-c", "user.email=gothkit@example.com", "-c", "commit.gpgsign=false"]
    shutil.rmtree(template_dir / ".git")
    subprocess.run([*git, "init", "-q", str(template_dir)], check=True)
    subprocess.run([*git, "-C", str(template_dir), "add", "-A"], check=True)
    subprocess.run([*git, "-C", str(template_dir), "commit", "-q", "-m", "template"], check=True)

    destination = tmp_path / "clone"
    destination.mkdir()
    GitTreeFetcher().fetch(str(template_dir), destination)

    assert (destination / ".git").is_dir()
    assert (destination / "go.mod").read_text(encoding="utf-8") == (template_dir / "go.mod").read_text(
        encoding="utf-8"
    )
