from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Dict


DEFAULT_CONFIG_PATH = Path("config.toml")
CONFIG_PATH_ENV = "ROLLCALL_CONFIG"
ROOT_TABLE = "rollcall"


def load_raw_config(path: str | Path | None = None) -> Dict[str, Any]:
    """
    Load the bot config file.

    The path is ``path`` if given, else ``$ROLLCALL_CONFIG``, else
    ``config.toml`` in the working directory. Returns an empty dict when the
    file is missing so callers can fall back to environment variables.
    """
    if path is None:
        path = os.getenv(CONFIG_PATH_ENV) or DEFAULT_CONFIG_PATH
    target = Path(path)
    if not target.is_file():
        return {}

    with target.open("rb") as handle:
        return tomllib.load(handle)


def section(config: Dict[str, Any] | None, name: str | None = None) -> Dict[str, Any]:
    """Return ``[rollcall]`` or ``[rollcall.<name>]`` from a raw config, or ``{}``."""
    root = (config or {}).get(ROOT_TABLE, {})
    if name is None:
        return root
    return root.get(name, {})


__all__ = ["load_raw_config", "section", "DEFAULT_CONFIG_PATH", "CONFIG_PATH_ENV"]
