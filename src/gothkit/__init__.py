"""Bootstrap Goth Stack projects from the starter template.

The package fetches the template repository, rewrites its Go module identity
to ``github.com/<account>/<project>`` and copies the result into a new
directory. The pipeline is available programmatically through
:class:`ProjectCreator` and from the command line via ``gothkit create``.
"""

from __future__ import annotations

from .config import TemplateSettings
from .errors import CreateError, FetchError, InvalidInputError, Stage, TreeIOError
from .fetch import GitTreeFetcher, TreeFetcher
from .naming import resolve_identity
from .rewrite import rewrite_file, rewrite_identity
from .scaffold import CreateResult, ProjectCreator
from .tree import materialize, strip_metadata, walk_tree

__all__ = [
    "CreateError",
    "CreateResult",
    "FetchError",
    "GitTreeFetcher",
    "InvalidInputError",
    "ProjectCreator",
    "Stage",
    "TemplateSettings",
    "TreeFetcher",
    "TreeIOError",
    "materialize",
    "resolve_identity",
    "rewrite_file",
    "rewrite_identity",
    "strip_metadata",
    "walk_tree",
]

__version__ = "0.1.0"
