"""Tests for version lookup."""

from __future__ import annotations

import tomllib
from pathlib import Path

import pytest

from wcal import _version
from wcal._version import get_version

REPO_ROOT = Path(__file__).resolve().parents[2]


def test_source_checkout_version() -> None:
    with open(REPO_ROOT / "pyproject.toml", "rb") as f:
        expected = tomllib.load(f)["project"]["version"]
    assert get_version() == expected


def test_other_project_pyproject_is_ignored(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    pyproject = tmp_path / "pyproject.toml"
    pyproject.write_text('[project]\nname = "other"\nversion = "9.9.9"\n')
    monkeypatch.setattr(_version, "_PYPROJECT", pyproject)
    assert get_version() != "9.9.9"


def test_missing_pyproject_falls_back_to_metadata(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(_version, "_PYPROJECT", tmp_path / "pyproject.toml")
    monkeypatch.setattr(_version, "_metadata_version", lambda name: "1.2.3")
    assert get_version() == "1.2.3"
