"""Checks that the package declares every distribution it imports."""

from __future__ import annotations

import re
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]

# Import names that differ from their distribution names.
IMPORT_TO_DISTRIBUTION = {
    "dotenv": "python-dotenv",
    "flask_cors": "flask-cors",
}

_IMPORT_RE = re.compile(r"^(?:from|import) ([A-Za-z_][A-Za-z0-9_]*)", re.MULTILINE)


def _declared_dependencies():
    text = (PROJECT_ROOT / "pyproject.toml").read_text(encoding="utf-8")
    block = re.search(r"^dependencies = \[(.*?)^\]", text, re.MULTILINE | re.DOTALL).group(1)
    return {re.split(r"[<>=!~\[; ]", entry, maxsplit=1)[0].lower() for entry in re.findall(r'"([^"]+)"', block)}


def _imported_top_level_names():
    sources = list((PROJECT_ROOT / "mentor_api").rglob("*.py"))
    sources += [PROJECT_ROOT / "app.py", PROJECT_ROOT / "reset_database.py"]
    names = set()
    for source in sources:
        names.update(_IMPORT_RE.findall(source.read_text(encoding="utf-8")))
    return names


def test_every_third_party_import_is_declared():
    stdlib = getattr(sys, "stdlib_module_names", None)
    if stdlib is None:
        pytest.skip("interpreter does not list its standard library modules")

    third_party = {
        name for name in _imported_top_level_names() if name not in stdlib and name not in {"mentor_api", "__future__"}
    }
    required = {IMPORT_TO_DISTRIBUTION.get(name, name).lower() for name in third_party}

    assert "werkzeug" in required
    assert required <= _declared_dependencies()
