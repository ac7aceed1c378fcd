"""paths.py - where curlgen looks for config files.

config lookups import from here. no Path.home() scattered around.
"""

from pathlib import Path


def curlgen_home() -> Path:
    """~/.curlgen/ - the root of all curlgen state."""
    return Path.home() / ".curlgen"


# -- ~/.curlgen/ paths --
GLOBAL_CONFIG = curlgen_home() / "config.json"

# -- per-project, relative to the project root --
PROJECT_CONFIG_NAME = ".curlgen.json"
