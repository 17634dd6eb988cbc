from __future__ import annotations

import pytest
from pydantic import ValidationError

from gothkit.config import TemplateSettings


def test_defaults_describe_goth_stack_template():
    settings = TemplateSettings()
    assert settings.template_url.endswith("goth-stack-starter-template.git")
    assert settings.template_identity == "github.com/dtg-lucifer/goth-stack-starter"
    assert settings.manifest == "go.mod"
    assert settings.extensions == (".go", ".templ")
    assert settings.metadata_dir == ".git"
    assert settings.hidden_prefix == "."


def test_from_env_applies_overrides():
    environ = {
        "GOTHKIT_TEMPLATE_URL": "/srv/templates/goth",
        "GOTHKIT_HOST": "gitlab.example.com",
        "GOTHKIT_TEMPLATE_IDENTITY": "  ",
    }
    settings = TemplateSettings.from_env(environ)
    assert settings.template_url == "/srv/templates/goth"
    assert settings.host == "gitlab.example.com"
    assert settings.template_identity == TemplateSettings().template_identity


def test_from_env_keyword_overrides_win():
    settings = TemplateSettings.from_env(
        {"GOTHKIT_TEMPLATE_URL": "from-env"}, template_url="from-cli"
    )
    assert settings.template_url == "from-cli"

    settings = TemplateSettings.from_env({"GOTHKIT_TEMPLATE_URL": "from-env"}, template_url=None)
    assert settings.template_url == "from-env"


def test_settings_are_validated_and_frozen():
    with pytest.raises(ValidationError):
        TemplateSettings(extensions=("go",))
    with pytest.raises(ValidationError):
        TemplateSettings(template_identity="")
    with pytest.raises(ValidationError):
        TemplateSettings(unknown="value")

    settings = TemplateSettings()
    with pytest.raises(ValidationError):
        settings.host = "example.com"


def test_render_next_steps():
    assert TemplateSettings().render_next_steps("myapp") == ["cd myapp", "make setup", "make dev"]
