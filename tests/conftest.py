"""Shared test fixtures."""

import pytest
from unittest.mock import patch

from curlgen import log
from curlgen.config import Config


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """no real ~/.curlgen, no stray .curlgen.json, no CURLGEN_* env."""
    for key in ("CURLGEN_TIMEOUT", "CURLGEN_CONNECT_TIMEOUT", "CURLGEN_RENDER_MODE",
                "CURLGEN_THEME", "CURLGEN_LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    with patch("curlgen.paths.GLOBAL_CONFIG", tmp_path / "home" / "config.json"):
        yield tmp_path
    log.set_level("info")
    log.set_sink(None)


@pytest.fixture
def config():
    return Config()
