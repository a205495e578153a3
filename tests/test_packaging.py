import pytest

from conftest import REPO_ROOT

tomllib = pytest.importorskip("tomllib")


def _pyproject():
    with open(REPO_ROOT / "pyproject.toml", "rb") as f:
        return tomllib.load(f)


def test_only_fts_package_is_installed():
    setuptools_cfg = _pyproject()["tool"]["setuptools"]
    assert setuptools_cfg["packages"] == ["fts"]
    assert "build_index" not in setuptools_cfg.get("py-modules", [])


def test_cli_entry_point():
    assert _pyproject()["project"]["scripts"]["fts-search"] == "fts.search_cli:main"
