"""Exception types raised while creating a project."""

from __future__ import annotations

from contextlib import contextmanager
from enum import Enum
from pathlib import Path
from typing import Iterator

__all__ = [
    "CreateError",
    "FetchError",
    "InvalidInputError",
    "Stage",
    "TreeIOError",
    "io_guard",
]


class Stage(str, Enum):
    """Steps of the project creation pipeline, in execution order."""

    RESOLVE_IDENTITY = "resolve-identity"
    ACQUIRE_SCRATCH = "acquire-scratch"
    FETCH_TEMPLATE = "fetch-template"
    STRIP_METADATA = "strip-metadata"
    REWRITE_IDENTITY = "rewrite-identity"
    CREATE_TARGET = "create-target"
    MATERIALIZE = "materialize"
    RELEASE_SCRATCH = "release-scratch"


class CreateError(RuntimeError):
    """Base class for failures that abort project creation."""

    def __init__(self, message: str, *, stage: Stage) -> None:
        super().__init__(message)
        self.stage = stage


class InvalidInputError(CreateError):
    """Raised when the project name or account is empty."""

    def __init__(self, message: str) -> None:
        super().__init__(message, stage=Stage.RESOLVE_IDENTITY)


class FetchError(CreateError):
    """Raised when the template tree cannot be fetched."""

    def __init__(self, message: str, *, source: str, returncode: int | None = None) -> None:
        super().__init__(message, stage=Stage.FETCH_TEMPLATE)
        self.source = source
        self.returncode = returncode


class TreeIOError(CreateError):
    """Raised when a filesystem operation on a tree fails.

    The offending path is kept on :attr:`path` and the original
    :class:`OSError` is chained as ``__cause__``.
    """

    def __init__(self, message: str, *, path: Path, stage: Stage) -> None:
        super().__init__(message, stage=stage)
        self.path = Path(path)

    @property
    def partial(self) -> bool:
        """Whether the failure may have left a tree partially written."""

        return self.stage in {Stage.REWRITE_IDENTITY, Stage.MATERIALIZE}


@contextmanager
def io_guard(stage: Stage, path: str | Path) -> Iterator[None]:
    """Convert :class:`OSError` raised inside the block into :class:`TreeIOError`."""

    try:
        yield
    except OSError as exc:
        reason = exc.strerror or str(exc)
        raise TreeIOError(f"{path}: {reason}", path=Path(path), stage=stage) from exc
