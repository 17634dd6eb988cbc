"""Create a project from the template repository."""

from __future__ import annotations

import logging
import tempfile
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterator

from .config import TemplateSettings
from .errors import Stage, TreeIOError, io_guard
from .fetch import GitTreeFetcher, TreeFetcher
from .naming import resolve_identity
from .rewrite import rewrite_identity
from .tree import materialize, strip_metadata

__all__ = ["CreateResult", "ProjectCreator"]


LOGGER = logging.getLogger(__name__)

StageCallback = Callable[[Stage], None]


@dataclass(slots=True)
class CreateResult:
    """Outcome of a successful :meth:`ProjectCreator.create` call."""

    project_name: str
    identity: str
    target: Path
    rewritten: list[Path] = field(default_factory=list)
    copied: list[Path] = field(default_factory=list)


@dataclass(slots=True)
class ProjectCreator:
    """Fetch the template, rewrite its identity and copy it into place.

    The scratch directory holding the fetched template is removed on every
    exit path. The target directory is never removed, so a failure during
    materialization can leave it partially populated.
    """

    settings: TemplateSettings
    fetcher: TreeFetcher
    scratch_root: Path | None

    def __init__(
        self,
        settings: TemplateSettings | None = None,
        fetcher: TreeFetcher | None = None,
        *,
        scratch_root: str | Path | None = None,
    ) -> None:
        self.settings = settings or TemplateSettings()
        self.fetcher = fetcher or GitTreeFetcher()
        self.scratch_root = Path(scratch_root) if scratch_root is not None else None

    def create(
        self,
        project_name: str,
        account: str,
        cwd: str | Path,
        *,
        force: bool = False,
        on_stage: StageCallback | None = None,
    ) -> CreateResult:
        """Create ``project_name`` inside ``cwd`` for the given ``account``."""

        def enter(stage: Stage) -> None:
            LOGGER.info("stage %s", stage.value)
            if on_stage is not None:
                on_stage(stage)

        settings = self.settings
        enter(Stage.RESOLVE_IDENTITY)
        identity = resolve_identity(account, project_name, host=settings.host)
        project_name = project_name.strip()
        target = Path(cwd) / project_name

        with self._scratch(enter) as scratch:
            enter(Stage.FETCH_TEMPLATE)
            self.fetcher.fetch(settings.template_url, scratch)

            enter(Stage.STRIP_METADATA)
            strip_metadata(scratch, name=settings.metadata_dir)

            enter(Stage.REWRITE_IDENTITY)
            rewritten = rewrite_identity(
                scratch,
                settings.template_identity,
                identity,
                extensions=settings.extensions,
                manifest=settings.manifest,
            )

            enter(Stage.CREATE_TARGET)
            self._create_target(target, force=force)

            enter(Stage.MATERIALIZE)
            copied = materialize(scratch, target, hidden_prefix=settings.hidden_prefix)

        LOGGER.info("created %s with identity %s", target, identity)
        return CreateResult(
            project_name=project_name,
            identity=identity,
            target=target,
            rewritten=rewritten,
            copied=copied,
        )

    @contextmanager
    def _scratch(self, enter: StageCallback) -> Iterator[Path]:
        enter(Stage.ACQUIRE_SCRATCH)
        root = self.scratch_root
        with io_guard(Stage.ACQUIRE_SCRATCH, root or tempfile.gettempdir()):
            if root is not None:
                root.mkdir(parents=True, exist_ok=True)
            scratch = tempfile.TemporaryDirectory(prefix="gothkit-template-", dir=root)
        path = Path(scratch.name)
        LOGGER.debug("scratch directory %s", path)
        try:
            yield path
        except BaseException:
            self._release(scratch, enter, failing=True)
            raise
        self._release(scratch, enter, failing=False)

    @staticmethod
    def _release(scratch: tempfile.TemporaryDirectory, enter: StageCallback, *, failing: bool) -> None:
        path = Path(scratch.name)
        try:
            enter(Stage.RELEASE_SCRATCH)
        finally:
            try:
                with io_guard(Stage.RELEASE_SCRATCH, path):
                    scratch.cleanup()
            except TreeIOError as exc:
                # the error that aborted the run is the one worth reporting
                if not failing:
                    raise
                LOGGER.warning("could not remove scratch directory %s: %s", path, exc)

    @staticmethod
    def _create_target(target: Path, *, force: bool) -> None:
        with io_guard(Stage.CREATE_TARGET, target):
            if target.is_dir() and any(target.iterdir()) and not force:
                raise TreeIOError(
                    f"{target}: directory exists and is not empty (use --force to write into it)",
                    path=target,
                    stage=Stage.CREATE_TARGET,
                )
            target.mkdir(parents=True, exist_ok=True)
