# tests/conftest.py
from __future__ import annotations

import pytest

from incident.config import set_config, CONFIG_ENV_VAR


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep the developer's own config out of the tests"""
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    set_config(None)
    yield
    set_config(None)
