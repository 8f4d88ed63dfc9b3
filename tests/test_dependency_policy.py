"""Tests keeping declared dependencies in step with the package imports."""

from __future__ import annotations

import ast
import sys
from pathlib import Path

import tomllib

ROOT = Path(__file__).resolve().parent.parent
PACKAGE = ROOT / "src" / "ledger_auth"

# Import name -> distribution name where they differ
_DISTRIBUTIONS = {"pydantic_settings": "pydantic-settings"}


def _project() -> dict[str, object]:
    return tomllib.loads((ROOT / "pyproject.toml").read_text(encoding="utf-8"))["project"]


def _declared(requirements: list[str]) -> dict[str, str]:
    pins = {}
    for requirement in requirements:
        name, _, version = requirement.partition("==")
        pins[name.strip()] = version.strip()
    return pins


def _third_party_imports() -> set[str]:
    found: set[str] = set()
    for path in PACKAGE.rglob("*.py"):
        tree = ast.parse(path.read_text(encoding="utf-8"))
        for node in ast.walk(tree):
            if isinstance(node, ast.Import):
                names = [alias.name for alias in node.names]
            elif isinstance(node, ast.ImportFrom) and node.level == 0 and node.module:
                names = [node.module]
            else:
                continue
            for name in names:
                top = name.split(".")[0]
                if top not in sys.stdlib_module_names and top != "__future__":
                    found.add(_DISTRIBUTIONS.get(top, top))
    return found


def test_every_requirement_is_pinned() -> None:
    project = _project()
    groups = {"core": project["dependencies"], **project.get("optional-dependencies", {})}
    for group, requirements in groups.items():
        for name, version in _declared(requirements).items():
            assert version, f"{group} dependency not pinned: {name}"


def test_package_imports_are_declared_core_dependencies() -> None:
    declared = set(_declared(_project()["dependencies"]))
    assert _third_party_imports() <= declared


def test_ed25519_comes_from_cryptography() -> None:
    assert "cryptography" in _third_party_imports()
