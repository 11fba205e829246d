# tests/unit/transform/test_unit_loader.py — v1
"""Tests for transform/loader.py — import-path backends and tool versions."""

from __future__ import annotations

import sys
import types

import pytest

from transcache.transform.loader import BackendImportError, import_backend, installed_version


@pytest.fixture
def backend_module(monkeypatch):
    module = types.ModuleType("fake_transform_backend")

    class Compiler:
        def transform(self, source, options):
            return source[::-1]

    def make_compiler():
        return Compiler()

    module.Compiler = Compiler
    module.make_compiler = make_compiler
    module.instance = Compiler()
    monkeypatch.setitem(sys.modules, "fake_transform_backend", module)
    return module


class TestImportBackend:
    def test_invalid_path(self):
        with pytest.raises(BackendImportError):
            import_backend("no_colon_here")

    def test_lazy(self):
        loader = import_backend("module_that_does_not_exist_xyz:Thing")
        with pytest.raises(BackendImportError):
            loader()

    def test_class_is_instantiated(self, backend_module):
        backend = import_backend("fake_transform_backend:Compiler")()
        assert isinstance(backend, backend_module.Compiler)

    def test_factory_is_called(self, backend_module):
        backend = import_backend("fake_transform_backend:make_compiler")()
        assert backend.transform(b"ab", {}) == b"ba"

    def test_instance_used_as_is(self, backend_module):
        assert import_backend("fake_transform_backend:instance")() is backend_module.instance

    def test_missing_attribute(self, backend_module):
        with pytest.raises(BackendImportError, match="no attribute"):
            import_backend("fake_transform_backend:Missing")()


class TestInstalledVersion:
    def test_installed(self):
        assert installed_version("pydantic")

    def test_not_installed(self):
        assert installed_version("definitely-not-installed-dist-xyz") == ""
