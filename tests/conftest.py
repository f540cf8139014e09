"""Shared fixtures and helpers for tests."""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from schemagen.core.resolver import TypeResolver

_REPO_ROOT = Path(__file__).parent.parent
_FIXTURES = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def ocpp_schema_dir() -> Path:
    """Return the directory with the sample OCPP 2.1 schemas."""
    return _FIXTURES / "schemas" / "v2.1"


@pytest.fixture
def constraints_schema_path() -> Path:
    """Return the schema exercising every constraint keyword."""
    return _FIXTURES / "constraints" / "TestConstraints.json"


@pytest.fixture
def resolver() -> TypeResolver:
    return TypeResolver("ocpp.v2_1")


@pytest.fixture
def write_schema(tmp_path: Path) -> Callable[..., Path]:
    """Write a schema document into a temporary schema directory."""
    schema_dir = tmp_path / "schemas"
    schema_dir.mkdir()

    def _write(name: str, document: dict[str, Any] | str, subdir: str | None = None) -> Path:
        target_dir = schema_dir / subdir if subdir else schema_dir
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / f"{name}.json"
        text = document if isinstance(document, str) else json.dumps(document, indent=2)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def schema_dir(tmp_path: Path, write_schema: Callable[..., Path]) -> Path:
    """The directory ``write_schema`` writes into."""
    return tmp_path / "schemas"


def object_schema(properties: dict[str, Any], required: list[str] | None = None) -> dict[str, Any]:
    return {
        "$schema": "http://json-schema.org/draft-06/schema#",
        "type": "object",
        "additionalProperties": False,
        "properties": properties,
        "required": required or [],
    }
