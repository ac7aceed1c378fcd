"""tests for configuration management."""

import json

from curlgen import paths
from curlgen.config import Config, DEFAULTS, load_config, _env_layer, _read_layer


def _write(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data))


class TestConfig:

    def test_defaults(self):
        c = Config()
        assert c.get("timeout") == 30
        assert c.get("connect_timeout") == 10
        assert c.get("render_mode") == 0
        assert c.source == "defaults"

    def test_override(self):
        c = Config(values={"timeout": 5})
        assert c["timeout"] == 5

    def test_missing_key(self):
        assert Config().get("nonexistent", "fallback") == "fallback"

    def test_set(self):
        c = Config()
        c.set("highlight_theme", "default")
        assert c.get("highlight_theme") == "default"

    def test_contains(self):
        c = Config(values={"extra": 1})
        assert "extra" in c
        assert "timeout" in c
        assert "nope" not in c

    def test_to_dict(self):
        d = Config(values={"timeout": 1}).to_dict()
        assert d["timeout"] == 1
        assert d["connect_timeout"] == DEFAULTS["connect_timeout"]


class TestLayers:

    def test_no_files(self):
        c = load_config()
        assert c.source == "defaults"
        assert c.to_dict() == DEFAULTS

    def test_global(self):
        _write(paths.GLOBAL_CONFIG, {"timeout": 12})
        c = load_config()
        assert c.get("timeout") == 12
        assert c.source == "global"

    def test_project_beats_global(self, tmp_path):
        _write(paths.GLOBAL_CONFIG, {"timeout": 12, "connect_timeout": 4})
        _write(tmp_path / paths.PROJECT_CONFIG_NAME, {"timeout": 20})
        c = load_config(str(tmp_path))
        assert c.get("timeout") == 20
        assert c.get("connect_timeout") == 4
        assert c.source == "project"

    def test_env_beats_project(self, tmp_path, monkeypatch):
        _write(tmp_path / paths.PROJECT_CONFIG_NAME, {"timeout": 20})
        monkeypatch.setenv("CURLGEN_TIMEOUT", "99")
        c = load_config(str(tmp_path))
        assert c.get("timeout") == 99
        assert c.source == "env"

    def test_bad_json_ignored(self, tmp_path):
        (tmp_path / paths.PROJECT_CONFIG_NAME).write_text("{not json")
        assert _read_layer(tmp_path / paths.PROJECT_CONFIG_NAME) == {}

    def test_non_object_ignored(self, tmp_path):
        _write(tmp_path / paths.PROJECT_CONFIG_NAME, [1, 2])
        assert _read_layer(tmp_path / paths.PROJECT_CONFIG_NAME) == {}

    def test_unknown_keys_dropped(self, tmp_path):
        _write(tmp_path / paths.PROJECT_CONFIG_NAME, {"timeout": 3, "model": "x"})
        assert _read_layer(tmp_path / paths.PROJECT_CONFIG_NAME) == {"timeout": 3}


class TestEnv:

    def test_int_coercion(self, monkeypatch):
        monkeypatch.setenv("CURLGEN_CONNECT_TIMEOUT", "3")
        monkeypatch.setenv("CURLGEN_RENDER_MODE", "2")
        assert _env_layer() == {"connect_timeout": 3, "render_mode": 2}

    def test_bad_int_skipped(self, monkeypatch):
        monkeypatch.setenv("CURLGEN_TIMEOUT", "soon")
        assert _env_layer() == {}

    def test_strings(self, monkeypatch):
        monkeypatch.setenv("CURLGEN_THEME", "native")
        monkeypatch.setenv("CURLGEN_LOG_LEVEL", "debug")
        assert _env_layer() == {"highlight_theme": "native", "log_level": "debug"}
