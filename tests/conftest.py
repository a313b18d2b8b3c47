"""Pytest configuration for mapper-profiles tests."""

import importlib
import itertools
import sys
import textwrap

import pytest

_module_ids = itertools.count()


@pytest.fixture
def make_module(tmp_path, monkeypatch):
    """Write Python source to a temporary file and import it as a real module.

    Each module gets a unique name so import caches never leak between tests.
    With import_module=False only the module name is returned, for sources
    that fail while importing.
    """
    monkeypatch.syspath_prepend(str(tmp_path))
    created = []

    def factory(source: str, name: str | None = None, import_module: bool = True):
        name = name or f"mapping_fixture_{next(_module_ids)}"
        (tmp_path / f"{name}.py").write_text(textwrap.dedent(source))
        importlib.invalidate_caches()
        created.append(name)
        if not import_module:
            return name
        return importlib.import_module(name)

    yield factory

    for name in created:
        sys.modules.pop(name, None)
