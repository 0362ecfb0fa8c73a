"""Task file location.

The first of these that is set wins:
1. CLI option --file PATH
2. Environment variable MUMBOT_FILE
3. `data_file` in config.toml
4. ./tasks.jsonl if it exists, else ~/.mumbot/tasks.jsonl
"""

import logging
import os
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

ENV_VAR_NAME = "MUMBOT_FILE"
CONFIG_KEY = "data_file"
DEFAULT_FILE_NAME = "tasks.jsonl"


def config_file_path() -> Path:
    """Location of config.toml for this platform."""
    if sys.platform == "win32":
        base = os.environ.get("APPDATA")
    else:
        base = os.environ.get("XDG_CONFIG_HOME")
    root = Path(base) if base else Path.home() / ".config"
    return root / "mumbot" / "config.toml"


@dataclass(frozen=True)
class DataFileLocation:
    """A resolved task file path and where it came from.

    Attributes:
        path: Absolute path of the task file.
        source: One of 'cli', 'env', 'config', 'default'.
    """

    path: Path
    source: str

    def describe(self) -> str:
        """Human-readable origin of the path, e.g. for `config path`."""
        match self.source:
            case "cli":
                return "CLI option (--file)"
            case "env":
                return f"Environment variable ({ENV_VAR_NAME})"
            case "config":
                return f"Config file ({config_file_path()})"
        return "Default"


def read_config() -> dict:
    """Load config.toml; a missing or malformed file is empty."""
    path = config_file_path()
    if not path.exists():
        return {}
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.debug("Ignoring unreadable config %s: %s", path, e)
        return {}


def resolve_data_file(cli_path: str | None = None) -> DataFileLocation:
    """Find the task file to use.

    Args:
        cli_path: Value of the --file option, if given.

    Returns:
        The resolved location.
    """
    env_path = os.environ.get(ENV_VAR_NAME)
    configured = None if cli_path or env_path else read_config().get(CONFIG_KEY)

    if cli_path is not None:
        location = DataFileLocation(Path(cli_path).resolve(), "cli")
    elif env_path:
        location = DataFileLocation(Path(env_path).resolve(), "env")
    elif configured:
        location = DataFileLocation(Path(configured).resolve(), "config")
    elif Path(DEFAULT_FILE_NAME).exists():
        location = DataFileLocation(Path(DEFAULT_FILE_NAME).resolve(), "default")
    else:
        location = DataFileLocation(
            Path.home() / ".mumbot" / DEFAULT_FILE_NAME, "default"
        )

    logger.debug("Task file %s (from %s)", location.path, location.source)
    return location


def save_data_file(path: Path) -> Path:
    """Record `path` as the task file in config.toml.

    Returns:
        The config file that was written.
    """
    target = config_file_path()
    target.parent.mkdir(parents=True, exist_ok=True)
    # TOML basic strings need escaped backslashes (Windows paths)
    escaped = str(path).replace("\\", "\\\\")
    target.write_text(f'{CONFIG_KEY} = "{escaped}"\n', encoding="utf-8")
    return target
