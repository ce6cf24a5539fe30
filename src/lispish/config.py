"""
Configuration file support for lispish.

Provides hierarchical configuration loading from:
1. Project config: .lispish.toml or lispish.toml in project root
2. User config: ~/.config/lispish/config.toml

CLI arguments override config file values, and project config overrides user config.
"""

import logging
import sys
import warnings
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

from lispish.exceptions import ConfigError

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

logger = logging.getLogger(__name__)

# Config file names to search for in project directories
CONFIG_FILENAMES = [".lispish.toml", "lispish.toml"]

# User-level config path
USER_CONFIG_PATH = Path.home() / ".config" / "lispish" / "config.toml"

# All known config keys for validation
KNOWN_KEYS = {
    "defaults": {"format", "verbose", "quiet"},
    "parser": {"strict"},
    "display": {"kind_width", "show_tokens"},
}


@dataclass
class DefaultsConfig:
    """Default options for CLI commands."""

    format: str = "text"
    verbose: bool = False
    quiet: bool = False


@dataclass
class ParserConfig:
    """Parser behaviour."""

    strict: bool = True


@dataclass
class DisplayConfig:
    """Tree and token listing layout."""

    kind_width: int = 42
    show_tokens: bool = True


@dataclass
class Config:
    """Merged configuration from all sources."""

    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)
    parser: ParserConfig = field(default_factory=ParserConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)

    # Track which file each setting came from (for --show)
    _sources: dict = field(default_factory=dict, repr=False)

    @classmethod
    def load(cls, start_dir: Path | None = None) -> "Config":
        """
        Load configuration with precedence: project > user > defaults.

        Args:
            start_dir: Directory to start searching from (default: current directory)

        Returns:
            Merged configuration object
        """
        if start_dir is None:
            start_dir = Path.cwd()

        config = cls()
        sources: dict[str, str] = {}

        # Load user config first (lower precedence)
        if USER_CONFIG_PATH.exists():
            user_data = _load_toml_file(USER_CONFIG_PATH)
            _merge_config(config, user_data, str(USER_CONFIG_PATH), sources)

        # Load project config (higher precedence)
        project_config = _find_project_config(start_dir)
        if project_config:
            project_data = _load_toml_file(project_config)
            _merge_config(config, project_data, str(project_config), sources)

        config._sources = sources
        return config

    def get_source(self, key: str) -> str:
        """Get the source file for a config key."""
        return self._sources.get(key, "default")


def _find_project_config(start_dir: Path) -> Path | None:
    """
    Find project config by walking up the directory tree.

    Stops at .git directory or filesystem root.
    """
    current = start_dir.resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        # Stop at .git directory (project root)
        if (current / ".git").exists():
            break

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def _load_toml_file(path: Path) -> dict[str, Any]:
    """
    Load a TOML file.

    Raises:
        ConfigError: If the file cannot be read or the TOML is invalid
    """
    logger.debug("Loading config from %s", path)
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}", context={"file": str(path)}) from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}", context={"file": str(path)}) from e


def _merge_config(
    config: Config, data: dict[str, Any], source: str, sources: dict[str, str]
) -> None:
    """
    Merge loaded config data into Config object.

    Args:
        config: Config object to update
        data: Raw config data from TOML
        source: Source file path (for tracking)
        sources: Dict to update with source info
    """
    for key in data:
        if key not in KNOWN_KEYS:
            warnings.warn(f"Unknown config key '{key}' in {source}", stacklevel=3)

    for section, known in KNOWN_KEYS.items():
        if section not in data:
            continue
        section_data = data[section]
        _check_type(section_data, dict, section, source)
        _warn_unknown_keys(section_data, known, section, source)

        section_obj = getattr(config, section)
        field_types = {f.name: f.type for f in fields(section_obj)}
        for key in sorted(known):
            if key in section_data:
                value = section_data[key]
                _check_type(value, field_types[key], f"{section}.{key}", source)
                setattr(section_obj, key, value)
                sources[f"{section}.{key}"] = source


def _check_type(value: Any, expected: type, key: str, source: str) -> None:
    """Reject values whose TOML type does not match the config field."""
    # bool is a subclass of int, but `kind_width = true` is still a mistake
    if isinstance(value, expected) and not (expected is int and isinstance(value, bool)):
        return
    raise ConfigError(
        f"Invalid value for '{key}' in {source}: expected {expected.__name__}, "
        f"got {type(value).__name__}",
        context={"file": source, "key": key, "value": repr(value)},
    )


def _warn_unknown_keys(data: dict[str, Any], known: set[str], section: str, source: str) -> None:
    """Warn about unknown keys in a config section."""
    for key in data:
        if key not in known:
            warnings.warn(f"Unknown config key '{section}.{key}' in {source}", stacklevel=4)


def generate_template() -> str:
    """Generate a template config file with all options documented."""
    return """# lispish configuration file
# Place as .lispish.toml in project root or ~/.config/lispish/config.toml for user defaults

[defaults]
# Output format for `tokens` and `tree`: text, json
# format = "text"

# Enable debug logging by default
# verbose = false

# Suppress informational output
# quiet = false

[parser]
# Only accept ID, INT, REAL and STRING tokens as atoms.
# Set to false to take any token (e.g. a stray ')') as an atom.
# strict = true

[display]
# Column width for node kinds in tree listings
# kind_width = 42

# Print the token listing in `check` output
# show_tokens = true
"""


def get_config_paths() -> dict[str, Path | None]:
    """Get paths to config files that would be loaded."""
    project_config = _find_project_config(Path.cwd())

    return {
        "user": USER_CONFIG_PATH if USER_CONFIG_PATH.exists() else None,
        "project": project_config,
    }
