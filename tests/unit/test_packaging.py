from __future__ import annotations

import tomllib
from pathlib import Path

import pytest

import zinepress
from zinepress.web.app import create_app

pytestmark = pytest.mark.unit

ROOT = Path(__file__).resolve().parents[2]


def _pyproject() -> dict:
    return tomllib.loads((ROOT / "pyproject.toml").read_text(encoding="utf-8"))


def test_setuptools_discovery_is_scoped_to_zinepress_package() -> None:
    find_config = _pyproject()["tool"]["setuptools"]["packages"]["find"]
    assert find_config["where"] == ["."]
    assert find_config["include"] == ["zinepress*"]


def test_web_assets_are_shipped_as_package_data() -> None:
    package_data = _pyproject()["tool"]["setuptools"]["package-data"]["zinepress.web"]
    assert "templates/*.html" in package_data
    assert (ROOT / "zinepress" / "web" / "templates" / "index.html").is_file()


def test_imported_package_resolves_to_active_checkout() -> None:
    package_path = Path(zinepress.__file__).resolve()
    assert ROOT in package_path.parents


def test_create_app_import_resolves_to_active_checkout() -> None:
    source_path = Path(create_app.__code__.co_filename).resolve()
    assert ROOT in source_path.parents
