"""Collaborators that place a snapshot of the template tree on local disk."""

from __future__ import annotations

import logging
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from .errors import FetchError

__all__ = ["GitTreeFetcher", "TreeFetcher"]


LOGGER = logging.getLogger(__name__)


class TreeFetcher(ABC):
    """Retrieve a directory tree given a source location."""

    @abstractmethod
    def fetch(self, source: str, destination: Path) -> None:
        """Populate ``destination`` with the tree found at ``source``.

        ``destination`` exists and is empty. Implementations raise
        :class:`~gothkit.errors.FetchError` on failure and never retry.
        """


@dataclass(slots=True)
class GitTreeFetcher(TreeFetcher):
    """Fetch a tree with ``git clone``."""

    executable: str = "git"
    depth: int | None = None

    def command(self, source: str, destination: Path) -> list[str]:
        args = [self.executable, "clone"]
        if self.depth is not None:
            args.extend(["--depth", str(self.depth)])
        args.extend([source, str(destination)])
        return args

    def fetch(self, source: str, destination: Path) -> None:
        args = self.command(source, destination)
        LOGGER.debug("running %s", " ".join(args))
        try:
            proc = subprocess.run(args, capture_output=True, text=True, check=False)
        except OSError as exc:
            raise FetchError(
                f"could not run {self.executable}: {exc.strerror or exc}", source=source
            ) from exc

        if proc.returncode == 0:
            return
        msg = proc.stderr.strip() or proc.stdout.strip()
        if not msg:
            msg = f"git clone failed (exit {proc.returncode})"
        raise FetchError(msg, source=source, returncode=proc.returncode)
