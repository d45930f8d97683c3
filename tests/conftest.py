"""Shared fixtures and helpers for tests."""

import importlib
import json
import sys
from pathlib import Path
from typing import Any

import pytest

from schemagen.core.config import CodegenConfig
from tests.schemas import sample_schema

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: everything under tests/unit is a unit test
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        rel = Path(str(item.fspath)).relative_to(_REPO_ROOT / "tests")
        if rel.parts and rel.parts[0] == "unit":
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def write_schema(tmp_path: Path):
    """Write an introspection document and return its path."""

    def _write(document: dict[str, Any], name: str = "schema.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(document), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def make_config(tmp_path: Path, write_schema):
    """Build a config for a document, writing into ``tmp_path / "out"``."""

    def _make(document: dict[str, Any] | None = None, **overrides: Any) -> CodegenConfig:
        values: dict[str, Any] = {
            "schema_path": write_schema(document if document is not None else sample_schema()),
            "output_dir": tmp_path / "out",
            "namespace": "acme.api",
        }
        values.update(overrides)
        return CodegenConfig(**values)

    return _make


@pytest.fixture
def import_generated(monkeypatch: pytest.MonkeyPatch):
    """Import modules from a generated output directory, isolated per test."""
    roots: set[str] = set()

    def _import(output_dir: Path, module: str):
        monkeypatch.syspath_prepend(str(output_dir))
        roots.add(module.split(".")[0])
        importlib.invalidate_caches()
        return importlib.import_module(module)

    yield _import

    for name in list(sys.modules):
        if name.split(".")[0] in roots:
            del sys.modules[name]
