"""Literal rewriting of the module identity across a template tree."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from .errors import Stage, TreeIOError, io_guard
from .tree import walk_tree

__all__ = ["rewrite_file", "rewrite_identity"]


LOGGER = logging.getLogger(__name__)


def rewrite_file(path: Path, old: str, new: str) -> int:
    """Replace every occurrence of ``old`` with ``new`` inside ``path``.

    The replacement is a plain text substitution, not a pattern match. The
    file is written back even when nothing matched, leaving the content byte
    for byte identical. Returns the number of replaced occurrences.
    """

    needle = old.encode("utf-8")
    with io_guard(Stage.REWRITE_IDENTITY, path):
        content = path.read_bytes()
    count = content.count(needle)
    with io_guard(Stage.REWRITE_IDENTITY, path):
        path.write_bytes(content.replace(needle, new.encode("utf-8")))
    return count


def rewrite_identity(
    root: Path,
    old: str,
    new: str,
    *,
    extensions: Iterable[str] = (".go", ".templ"),
    manifest: str = "go.mod",
) -> list[Path]:
    """Rewrite the identity ``old`` to ``new`` across the tree at ``root``.

    Files are selected by suffix or by matching the ``manifest`` filename;
    hidden files are included. The manifest must be present at the root of
    the tree. The walk stops at the first I/O failure, so some files may
    already have been rewritten. Returns the rewritten files relative to
    ``root``.
    """

    if not old:
        raise ValueError("old identity must not be empty")

    manifest_path = root / manifest
    if not manifest_path.is_file():
        raise TreeIOError(
            f"{manifest_path}: manifest not found in template",
            path=manifest_path,
            stage=Stage.REWRITE_IDENTITY,
        )

    suffixes = frozenset(extensions)
    rewritten: list[Path] = []

    def _rewrite(entry: Path) -> None:
        if entry.name != manifest and entry.suffix not in suffixes:
            return
        count = rewrite_file(entry, old, new)
        LOGGER.debug("rewrote %s (%d occurrence(s))", entry, count)
        rewritten.append(entry.relative_to(root))

    walk_tree(root, _rewrite, stage=Stage.REWRITE_IDENTITY)
    return rewritten
