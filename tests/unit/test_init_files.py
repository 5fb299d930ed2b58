"""
Unit tests for __init__.py files

This module provides tests for package initialization files to ensure:
- Version attributes are defined
- __all__ exports resolve to real attributes
- Module imports work without errors
"""

import importlib

import pytest

PACKAGES = ["schema", "transformation", "transformation.transformers", "overrides", "utils.logging", "utils.tracing"]


class TestPackageExports:
    """Test that every name in __all__ is importable"""

    @pytest.mark.parametrize("package_name", PACKAGES)
    def test_all_names_resolve(self, package_name):
        """Test that __all__ lists only existing attributes"""
        # Arrange
        module = importlib.import_module(package_name)

        # Act & Assert
        assert isinstance(module.__all__, list)
        for name in module.__all__:
            assert hasattr(module, name), f"{package_name}.{name} missing"

    @pytest.mark.parametrize("package_name", PACKAGES)
    def test_module_imports_without_errors(self, package_name):
        """Test that module can be re-imported without errors"""
        try:
            importlib.reload(importlib.import_module(package_name))
        except ImportError as e:
            pytest.fail(f"Failed to import {package_name}: {e}")


class TestVersions:
    """Test __version__ attributes"""

    @pytest.mark.parametrize("package_name", ["schema", "overrides", "utils"])
    def test_version_attribute_exists(self, package_name):
        """Test that __version__ attribute is defined"""
        module = importlib.import_module(package_name)
        assert module.__version__ == "1.0.0"


class TestUtilsInit:
    """Test utils/__init__.py"""

    def test_submodules_can_be_imported(self):
        """Test that submodules listed in __all__ can be imported"""
        import utils

        assert utils.__all__ == ["logging", "tracing"]
        for module_name in utils.__all__:
            module = importlib.import_module(f"utils.{module_name}")
            assert module is not None
