"""
ABOUTME: Unit tests for the process-wide default variable set
ABOUTME: Tests program-name derivation, lazy construction, reset and the module-level functions
"""

from datetime import timedelta
from unittest.mock import patch

import pytest

import envset
from envset import cmd
from envset.exceptions import EnvErrors


class TestCmdName:
    """Test cmd_name."""

    def test_uses_program_base_name(self):
        """Test that the directory and extension are dropped."""
        with patch("sys.argv", ["/usr/local/bin/my-service.py", "--flag"]):
            assert cmd.cmd_name() == "my-service"

    def test_empty_argv(self):
        """Test that a missing program name yields an empty name."""
        with patch("sys.argv", []):
            assert cmd.cmd_name() == ""
        with patch("sys.argv", [""]):
            assert cmd.cmd_name() == ""


class TestDefaultSet:
    """Test construction and reset of the default set."""

    def test_lazy_construction_uses_cmd_name(self, monkeypatch):
        """Test that the default set is built on first use from cmd_name."""
        monkeypatch.setattr(cmd, "_cmd_var", None)
        monkeypatch.setattr(cmd, "cmd_name", lambda: "lazy-app")
        vs = cmd.cmd_var()
        assert vs.name == "lazy-app"
        assert vs.prefix == "LAZY_APP"
        assert cmd.cmd_var() is vs

    def test_reset_rebuilds(self, default_set):
        """Test that reset discards declared variables."""
        envset.string("HOST", "host")
        assert len(cmd.cmd_var()) == 1
        fresh = cmd.reset()
        assert fresh is not default_set
        assert len(fresh) == 0
        assert fresh.prefix == "TEST_APP"

    def test_patched_cmd_name_applies_after_reset(self, default_set, monkeypatch):
        """Test that replacing envset.cmd.cmd_name changes the prefix of a reset set."""
        monkeypatch.setattr(cmd, "cmd_name", lambda: "patched-app")
        assert cmd.reset().prefix == "PATCHED_APP"
        envset.string("HOST", "host")
        assert cmd.cmd_var().lookup("PATCHED_APP_HOST") is not None

    def test_rebinding_package_cmd_name_is_ignored(self, default_set, monkeypatch):
        """Test that rebinding the re-exported envset.cmd_name leaves the default prefix alone."""
        monkeypatch.setattr(envset, "cmd_name", lambda: "ignored")
        assert cmd.reset().prefix == "TEST_APP"

    def test_reset_with_explicit_name(self, default_set):
        """Test that reset accepts a name overriding cmd_name."""
        assert cmd.reset("other").prefix == "OTHER"
        assert cmd.reset("").prefix == ""


class TestModuleFunctions:
    """Test the module-level mirrors of VarSet methods."""

    def test_factories_register_on_default_set(self, default_set):
        """Test that every module-level factory declares on the default set."""
        envset.string("NAME", "")
        envset.string_required("TOKEN", "")
        envset.int("WORKERS", "")
        envset.float("RATIO", "")
        envset.bool("DEBUG", "")
        envset.duration("TIMEOUT", "")
        envset.string_list("TAGS", "")
        envset.bind_addr("LISTEN", "")
        envset.dial_addr("UPSTREAM", "")
        envset.path("DATA_DIR", "")
        envset.declare(envset.StringValue(), "RAW", "")

        names = []
        envset.visit(lambda var: names.append(var.name))
        assert names == [
            "TEST_APP_NAME",
            "TEST_APP_TOKEN",
            "TEST_APP_WORKERS",
            "TEST_APP_RATIO",
            "TEST_APP_DEBUG",
            "TEST_APP_TIMEOUT",
            "TEST_APP_TAGS",
            "TEST_APP_LISTEN",
            "TEST_APP_UPSTREAM",
            "TEST_APP_DATA_DIR",
            "TEST_APP_RAW",
        ]

    def test_parse_from_mapping(self, default_set):
        """Test resolving the default set from an explicit source."""
        timeout = envset.duration("TIMEOUT", "")
        envset.parse({"TEST_APP_TIMEOUT": "5s"})
        assert timeout.value == timedelta(seconds=5)

    def test_parse_from_environment(self, default_set, monkeypatch):
        """Test that parse reads the process environment by default."""
        monkeypatch.setenv("TEST_APP_WORKERS", "3")
        monkeypatch.delenv("TEST_APP_HOST", raising=False)
        workers = envset.int("WORKERS", "")
        envset.string("HOST", "")
        with pytest.raises(EnvErrors, match="missing environment variable TEST_APP_HOST"):
            envset.parse()
        assert workers.value == 3

    def test_builtins_not_exported_by_star(self):
        """Test that a star import cannot shadow int, float or bool."""
        assert "int" not in envset.__all__
        assert "float" not in envset.__all__
        assert "bool" not in envset.__all__

    def test_version_is_defined(self):
        """Test that the package exposes its version."""
        assert envset.__version__ == "0.1.0"
