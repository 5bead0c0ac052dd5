"""Monkey REPL configuration.

Settings come from three layers, later ones winning:
  1. built-in defaults
  2. the nearest .monkeyrc.json, searched upwards from the working directory
  3. MONKEY_PROMPT / MONKEY_MODE / MONKEY_LOG_LEVEL environment variables

Example .monkeyrc.json:
    {"prompt": "monkey> ", "mode": "ast", "log_level": "DEBUG"}
"""

import os
import json
import logging
from dataclasses import dataclass, fields
from typing import Optional, Dict, Any, Mapping

logger = logging.getLogger(__name__)

MODES = ("tokens", "ast")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_CONFIG_FILES = [
    ".monkeyrc.json",
]

_ENV_VARS = {
    "MONKEY_PROMPT": "prompt",
    "MONKEY_MODE": "mode",
    "MONKEY_LOG_LEVEL": "log_level",
}


@dataclass
class ReplConfig:
    """Settings for the interactive read-loop."""
    prompt: str = ">> "
    # "tokens" prints every token of a line, "ast" prints the parsed program
    mode: str = "tokens"
    log_level: str = "WARNING"

    def __post_init__(self):
        if self.mode not in MODES:
            raise ValueError(f"unknown REPL mode {self.mode!r}, expected one of {', '.join(MODES)}")
        self.log_level = self.log_level.upper()
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"unknown log level {self.log_level!r}, expected one of {', '.join(LOG_LEVELS)}")


def find_config(start_dir: str = ".") -> Optional[str]:
    """Find the nearest config file by walking up from start_dir."""
    current = os.path.abspath(start_dir)
    while True:
        for name in _CONFIG_FILES:
            path = os.path.join(current, name)
            if os.path.isfile(path):
                return path
        parent = os.path.dirname(current)
        if parent == current:
            break
        current = parent
    return None


def load_config(path: Optional[str] = None, start_dir: str = ".",
                environ: Optional[Mapping[str, str]] = None) -> ReplConfig:
    """Load configuration from file and environment.

    If no path is given, searches for a config file starting from start_dir.
    A missing or unreadable file just means defaults.
    """
    if environ is None:
        environ = os.environ

    data: Dict[str, Any] = {}

    if path is None:
        path = find_config(start_dir)

    if path is not None:
        data.update(_read_config_file(path))

    for var, key in _ENV_VARS.items():
        if var in environ:
            data[key] = environ[var]

    return _dict_to_config(data)


def _read_config_file(path: str) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("ignoring config file %s: %s", path, e)
        return {}

    if not isinstance(data, dict):
        logger.warning("ignoring config file %s: top level is not an object", path)
        return {}
    return data


def _dict_to_config(data: Dict[str, Any]) -> ReplConfig:
    """Build a ReplConfig from a dict, ignoring unknown keys and non-string values."""
    known = {f.name for f in fields(ReplConfig)}
    values = {}
    for key, value in data.items():
        if key not in known:
            continue
        if not isinstance(value, str):
            logger.warning("ignoring config value %s=%r: expected a string", key, value)
            continue
        values[key] = value
    return ReplConfig(**values)


def configure_logging(level: str = "WARNING") -> logging.Logger:
    """Send `monkey.*` log records to stderr at the given level."""
    package_logger = logging.getLogger("monkey")
    package_logger.setLevel(level)

    # Remove existing handlers so repeated calls don't duplicate output
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    package_logger.addHandler(handler)
    return package_logger
