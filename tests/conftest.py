import os

import pytest

from eventemitter import EmitterConfig, set_default_config


@pytest.fixture(autouse=True)
def clean_default_config(monkeypatch):
    """Isolate tests from EVENTEMITTER_* variables and the cached default config."""
    for key in list(os.environ):
        if key.startswith("EVENTEMITTER_"):
            monkeypatch.delenv(key)
    set_default_config(None)
    yield
    set_default_config(None)


@pytest.fixture
def traced_config():
    return EmitterConfig(trace_dispatch=True)
