"""Module identity helpers."""

from __future__ import annotations

from .errors import InvalidInputError

__all__ = ["DEFAULT_HOST", "resolve_identity"]


DEFAULT_HOST = "github.com"


def _require(value: str, label: str) -> str:
    cleaned = value.strip()
    if not cleaned:
        raise InvalidInputError(f"{label} cannot be empty")
    return cleaned


def resolve_identity(account: str, project_name: str, *, host: str = DEFAULT_HOST) -> str:
    """Return the module identity ``<host>/<account>/<project_name>``.

    Both tokens are trimmed of surrounding whitespace before use. An empty
    token raises :class:`~gothkit.errors.InvalidInputError`.
    """

    account = _require(account, "GitHub username")
    project_name = _require(project_name, "Project name")
    return "/".join((host, account, project_name))
