from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from tests.fixtures.template_tree import TEMPLATE_IDENTITY, FakeTreeFetcher, write_template  # noqa: E402


@pytest.fixture()
def template_dir(tmp_path: Path) -> Path:
    """A populated template tree on disk, including VCS metadata and dotfiles."""

    root = tmp_path / "template"
    write_template(root)
    return root


@pytest.fixture()
def fetcher() -> FakeTreeFetcher:
    return FakeTreeFetcher()


@pytest.fixture()
def template_identity() -> str:
    return TEMPLATE_IDENTITY
