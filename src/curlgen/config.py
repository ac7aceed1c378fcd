"""config.py - the knobs a snippet reaches for when the caller doesn't say.

default timeouts, the default render mode, the highlight theme, the log
level. a bare Config() is just DEFAULTS and touches nothing on disk.
load_config() stacks the layers: defaults -> ~/.curlgen/config.json ->
.curlgen.json -> CURLGEN_* environment variables.
"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path

from curlgen import paths


DEFAULTS = {
    "timeout": 30,
    "connect_timeout": 10,
    "render_mode": 0,
    "highlight_theme": "monokai",
    "log_level": "info",
}

ENV_PREFIX = "CURLGEN_"
_ENV_NAMES = {
    "timeout": "TIMEOUT",
    "connect_timeout": "CONNECT_TIMEOUT",
    "render_mode": "RENDER_MODE",
    "highlight_theme": "THEME",
    "log_level": "LOG_LEVEL",
}


@dataclass
class Config:
    """settings for a builder. unknown keys fall back to DEFAULTS."""
    values: dict = field(default_factory=dict)
    source: str = "defaults"  # highest layer that contributed

    def get(self, key: str, default=None):
        return self.values.get(key, DEFAULTS.get(key, default))

    def set(self, key: str, value):
        self.values[key] = value

    def __getitem__(self, key: str):
        return self.get(key)

    def __contains__(self, key: str):
        return key in self.values or key in DEFAULTS

    def to_dict(self) -> dict:
        return {**DEFAULTS, **self.values}


def _read_layer(path: Path) -> dict:
    """one json file. missing, unreadable, or not an object -> {}."""
    try:
        data = json.loads(path.read_text())
    except (json.JSONDecodeError, OSError):
        return {}
    if not isinstance(data, dict):
        return {}
    return {k: v for k, v in data.items() if k in DEFAULTS}


def _env_layer() -> dict:
    """CURLGEN_* variables, coerced to the type of their default.
    ints that don't parse are dropped."""
    layer = {}
    for key, name in _ENV_NAMES.items():
        raw = os.environ.get(ENV_PREFIX + name)
        if raw is None:
            continue
        if isinstance(DEFAULTS[key], int):
            try:
                layer[key] = int(raw)
            except ValueError:
                continue
        else:
            layer[key] = raw
    return layer


def load_config(root: str = ".") -> Config:
    """merge every layer. later layers win key by key."""
    layers = [
        ("global", _read_layer(paths.GLOBAL_CONFIG)),
        ("project", _read_layer(Path(root) / paths.PROJECT_CONFIG_NAME)),
        ("env", _env_layer()),
    ]
    config = Config()
    for name, layer in layers:
        if layer:
            config.values.update(layer)
            config.source = name
    return config
