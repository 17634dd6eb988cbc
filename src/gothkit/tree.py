"""Directory tree traversal, metadata stripping and materialization."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Callable

from .errors import Stage, io_guard

__all__ = ["materialize", "strip_metadata", "walk_tree"]


LOGGER = logging.getLogger(__name__)

Visitor = Callable[[Path], None]


def walk_tree(
    root: Path,
    on_file: Visitor,
    *,
    stage: Stage,
    on_directory: Visitor | None = None,
    skip: Callable[[Path], bool] | None = None,
) -> None:
    """Visit every entry below ``root`` depth first.

    Directories are passed to ``on_directory`` before their children are
    visited; everything else goes to ``on_file``. Entries for which ``skip``
    returns true are ignored along with their contents. Entries are visited in
    the order the directory listing yields them. Listing failures raise
    :class:`~gothkit.errors.TreeIOError` tagged with ``stage``.
    """

    with io_guard(stage, root):
        entries = list(root.iterdir())

    for entry in entries:
        if skip is not None and skip(entry):
            continue
        with io_guard(stage, entry):
            is_dir = entry.is_dir()
        if is_dir:
            if on_directory is not None:
                on_directory(entry)
            walk_tree(entry, on_file, stage=stage, on_directory=on_directory, skip=skip)
        else:
            on_file(entry)


def strip_metadata(root: Path, *, name: str = ".git") -> bool:
    """Delete the version control directory ``name`` at the top of ``root``.

    Returns ``False`` when there was nothing to remove.
    """

    target = root / name
    with io_guard(Stage.STRIP_METADATA, target):
        if target.is_dir() and not target.is_symlink():
            shutil.rmtree(target)
        elif target.exists() or target.is_symlink():
            # worktrees and submodules use a plain ``.git`` file
            target.unlink()
        else:
            return False
    LOGGER.debug("removed %s", target)
    return True


def materialize(source: Path, destination: Path, *, hidden_prefix: str = ".") -> list[Path]:
    """Copy ``source`` into ``destination``, leaving out hidden files.

    Every directory is recreated, hidden ones included, so only files whose
    name starts with ``hidden_prefix`` are left behind. Missing directories
    are created along with their ancestors and existing files are truncated. A failure aborts the copy and may leave
    ``destination`` partially populated. Returns the copied files relative to
    ``destination``.
    """

    copied: list[Path] = []

    def _target(entry: Path) -> Path:
        return destination / entry.relative_to(source)

    def _make_directory(entry: Path) -> None:
        path = _target(entry)
        with io_guard(Stage.MATERIALIZE, path):
            path.mkdir(parents=True, exist_ok=True)

    def _copy_file(entry: Path) -> None:
        if entry.name.startswith(hidden_prefix):
            return
        with io_guard(Stage.MATERIALIZE, entry):
            content = entry.read_bytes()
        path = _target(entry)
        with io_guard(Stage.MATERIALIZE, path):
            path.write_bytes(content)
        LOGGER.debug("copied %s", path)
        copied.append(path.relative_to(destination))

    _make_directory(source)
    walk_tree(
        source,
        _copy_file,
        stage=Stage.MATERIALIZE,
        on_directory=_make_directory,
    )
    return copied
