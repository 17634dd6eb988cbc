"""Settings describing the template a new project is created from."""

from __future__ import annotations

from typing import Mapping, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .naming import DEFAULT_HOST

__all__ = ["ENV_PREFIX", "TemplateSettings"]


ENV_PREFIX = "GOTHKIT_"

DEFAULT_TEMPLATE_URL = "https://github.com/dtg-lucifer/goth-stack-starter-template.git"
DEFAULT_TEMPLATE_IDENTITY = "github.com/dtg-lucifer/goth-stack-starter"


class TemplateSettings(BaseModel):
    """Where the template lives and how its identity is rewritten.

    Attributes
    ----------
    template_url:
        Location handed to the tree fetcher.
    template_identity:
        Module identity declared by the template. Every literal occurrence is
        replaced with the identity resolved for the new project.
    host:
        Host segment of the new identity.
    manifest:
        Manifest filename that declares the module identity. It must exist at
        the root of the template.
    extensions:
        File suffixes whose content is rewritten in addition to the manifest.
    metadata_dir:
        Version control directory removed from the fetched template.
    hidden_prefix:
        Entries whose name starts with this prefix are not copied into the
        target directory.
    next_steps:
        Hints printed after a successful run. ``{project}`` is replaced with
        the project name.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    template_url: str = Field(DEFAULT_TEMPLATE_URL, min_length=1, description="Template repository URL.")
    template_identity: str = Field(DEFAULT_TEMPLATE_IDENTITY, min_length=1, description="Identity declared by the template.")
    host: str = Field(DEFAULT_HOST, min_length=1, description="Host segment of the new identity.")
    manifest: str = Field("go.mod", min_length=1, description="Manifest declaring the module identity.")
    extensions: Tuple[str, ...] = Field((".go", ".templ"), description="Suffixes of files to rewrite.")
    metadata_dir: str = Field(".git", min_length=1, description="Version control directory to strip.")
    hidden_prefix: str = Field(".", min_length=1, description="Prefix marking entries that are not copied.")
    project_label: str = Field("Goth Stack", description="Human readable name of the template.")
    next_steps: Tuple[str, ...] = Field(
        ("cd {project}", "make setup", "make dev"),
        description="Hints printed after the project is created.",
    )

    @field_validator("extensions")
    @classmethod
    def _check_extensions(cls, value: Tuple[str, ...]) -> Tuple[str, ...]:
        for suffix in value:
            if not suffix.startswith(".") or len(suffix) < 2:
                raise ValueError(f"extension '{suffix}' must look like '.ext'")
        return value

    @classmethod
    def from_env(cls, environ: Mapping[str, str], **overrides: object) -> "TemplateSettings":
        """Build settings from ``GOTHKIT_*`` variables in ``environ``.

        Recognised variables are ``GOTHKIT_TEMPLATE_URL``,
        ``GOTHKIT_TEMPLATE_IDENTITY`` and ``GOTHKIT_HOST``. Empty values are
        ignored. Keyword ``overrides`` win over the environment.
        """

        values: dict[str, object] = {}
        for field_name in ("template_url", "template_identity", "host"):
            raw = environ.get(f"{ENV_PREFIX}{field_name.upper()}", "").strip()
            if raw:
                values[field_name] = raw
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)

    def render_next_steps(self, project_name: str) -> list[str]:
        """Return :attr:`next_steps` with ``{project}`` filled in."""

        return [step.replace("{project}", project_name) for step in self.next_steps]
