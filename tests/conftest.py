"""
ABOUTME: Pytest configuration and shared fixtures
ABOUTME: Provides in-memory lookup sources, variable sets and a recording console
"""

import os
from io import StringIO
from unittest.mock import patch

import pytest
from rich.console import Console

from envset import cmd
from envset.lookup import MappingLookup
from envset.varset import VarSet


@pytest.fixture
def test_env_vars():
    """Provide a complete, valid environment for the service_vars set."""
    return {
        "MY_SERVICE_NAME": "billing",
        "MY_SERVICE_TOKEN": "s3cret",
        "MY_SERVICE_WORKERS": "8",
        "MY_SERVICE_RATIO": "0.25",
        "MY_SERVICE_DEBUG": "true",
        "MY_SERVICE_TIMEOUT": "1m30s",
        "MY_SERVICE_TAGS": "a, b,c",
        "MY_SERVICE_LISTEN": ":8080",
        "MY_SERVICE_UPSTREAM": "db.internal:5432",
        "MY_SERVICE_DATA_DIR": "/var/lib/billing",
    }


@pytest.fixture
def lookup(test_env_vars):
    """Provide an in-memory lookup over test_env_vars."""
    return MappingLookup(test_env_vars)


@pytest.fixture
def service_vars():
    """Provide a VarSet with one variable of every built-in kind, plus the handles."""
    vs = VarSet("my-service")
    handles = {
        "name": vs.string("NAME", "Service name"),
        "token": vs.string_required("TOKEN", "API token"),
        "workers": vs.int("WORKERS", "Worker count"),
        "ratio": vs.float("RATIO", "Sample ratio"),
        "debug": vs.bool("DEBUG", "Enable debug mode"),
        "timeout": vs.duration("TIMEOUT", "Request timeout"),
        "tags": vs.string_list("TAGS", "Tags"),
        "listen": vs.bind_addr("LISTEN", "Listen address"),
        "upstream": vs.dial_addr("UPSTREAM", "Upstream address"),
        "data_dir": vs.path("DATA_DIR", "Data directory"),
    }
    return vs, handles


@pytest.fixture
def mock_env_vars(test_env_vars):
    """Mock environment variables for testing."""
    with patch.dict(os.environ, test_env_vars, clear=False):
        yield test_env_vars


@pytest.fixture
def record_console():
    """Provide a Rich console that records output instead of writing it."""
    return Console(record=True, width=200, file=StringIO())


@pytest.fixture
def default_set(monkeypatch):
    """Rebuild the process-wide default set under a fixed program name."""
    monkeypatch.setattr(cmd, "_cmd_var", None)
    monkeypatch.setattr(cmd, "cmd_name", lambda: "test-app")
    return cmd.reset()
