"""
Config command for lispish CLI.

Usage:
    lispish config --show          Show effective configuration with sources
    lispish config --init          Create template config file
    lispish config --paths         Show config file paths
"""

import sys
from pathlib import Path

from lispish.config import (
    CONFIG_FILENAMES,
    USER_CONFIG_PATH,
    KNOWN_KEYS,
    Config,
    generate_template,
    get_config_paths,
)
from lispish.exceptions import ConfigError


def run_config(args) -> int:
    """Handle the config command."""
    try:
        if args.init:
            return _init_config(args.user)
        elif args.paths:
            return _show_paths()
        return _show_config()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def _show_config() -> int:
    """Show effective configuration with sources."""
    config = Config.load()

    print("# Effective lispish configuration")
    for section, keys in KNOWN_KEYS.items():
        print()
        print(f"[{section}]")
        section_obj = getattr(config, section)
        for key in sorted(keys):
            _print_value(key, getattr(section_obj, key), config.get_source(f"{section}.{key}"))

    return 0


def _print_value(key: str, value, source: str) -> None:
    """Print a config value with its source."""
    if isinstance(value, str):
        formatted = f'"{value}"'
    elif isinstance(value, bool):
        formatted = "true" if value else "false"
    elif value is None:
        formatted = "# not set"
    else:
        formatted = str(value)

    # Show just filename for brevity
    source_display = Path(source).name if source != "default" else source

    print(f"{key} = {formatted}  # from: {source_display}")


def _show_paths() -> int:
    """Show config file paths."""
    paths = get_config_paths()

    print(f"User config: {USER_CONFIG_PATH}")
    print(f"  Status: {'exists' if paths['user'] else 'not found'}")
    print()

    print(f"Project config search: {', '.join(CONFIG_FILENAMES)}")
    if paths["project"]:
        print(f"  Found: {paths['project']}")
    else:
        print("  Status: not found")

    return 0


def _init_config(user: bool = False) -> int:
    """Create a template config file."""
    if user:
        target = USER_CONFIG_PATH
        target.parent.mkdir(parents=True, exist_ok=True)
    else:
        target = Path.cwd() / CONFIG_FILENAMES[0]  # .lispish.toml

    if target.exists():
        print(f"Error: Config file already exists: {target}", file=sys.stderr)
        print("Remove it first or edit manually.", file=sys.stderr)
        return 1

    try:
        target.write_text(generate_template())
    except OSError as e:
        print(f"Error writing config file: {e}", file=sys.stderr)
        return 1

    print(f"Created config template: {target}")
    return 0
