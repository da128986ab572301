from __future__ import annotations

import os

import pytest


@pytest.fixture(autouse=True)
def _clean_eventbus_env(monkeypatch):
    """BusConfig reads EVENTBUS_* variables; keep the host environment out."""
    for key in list(os.environ):
        if key.startswith("EVENTBUS_"):
            monkeypatch.delenv(key)
