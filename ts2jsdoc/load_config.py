"""Logic for loading and merging generator configuration files."""

from pathlib import Path
from typing import Any

import yaml

from ts2jsdoc.deep_merge import deep_merge
from ts2jsdoc.errors import ConfigError

DEFAULT_CONFIG: dict[str, Any] = {
    "out": None,
    "externalIfNotMain": None,
    "examples": None,
    "outDir": None,
    "main": None,
    "packageName": None,
    "exampleWorkers": 4,
}


def load_config(path: str | None = None) -> dict[str, Any]:
    """Load configuration from a YAML file and merge it with defaults.

    A file holding just a string is shorthand for ``{out: <string>}``.
    """
    config = DEFAULT_CONFIG.copy()
    if path:
        p = Path(path)
        if p.exists():
            user_config = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
            if isinstance(user_config, str):
                user_config = {"out": user_config}
            if not isinstance(user_config, dict):
                msg = f"Configuration in {path} must be a mapping"
                raise ConfigError(msg)
            config = deep_merge(config, user_config)
    return config
