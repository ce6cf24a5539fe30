"""
Command-line interface for lispish.

Provides CLI commands via the `lispish` command:

    lispish check [file]        - Echo input, list tokens and print the parse tree
    lispish tokens <file>       - List tokens
    lispish tree <file>         - Print the parse tree
    lispish config              - Show or initialize configuration

Use '-' (or omit the file for `check`) to read from stdin.

Examples:
    echo '(+ 3 4)' | lispish check
    lispish tokens program.lsp --format table
    lispish tree program.lsp --format json
    lispish --lenient tree program.lsp
    lispish config --init
"""

import argparse
import logging
import sys
from typing import List, Optional

from lispish import __version__
from lispish.config import Config
from lispish.exceptions import ConfigError
from lispish.log import configure_logging

__all__ = ["main"]

logger = logging.getLogger(__name__)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for lispish CLI."""
    parser = argparse.ArgumentParser(
        prog="lispish",
        description="S-expression tokenizer and parser",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--version", action="version", version=f"lispish {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--lenient",
        action="store_true",
        help="Accept any token as an atom (e.g. a stray ')')",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # check subcommand
    check_parser = subparsers.add_parser(
        "check", help="Echo input, list tokens and print the parse tree"
    )
    check_parser.add_argument("file", nargs="?", default="-", help="Source file (default: stdin)")
    check_parser.add_argument("-q", "--quiet", action="store_true", help="Don't echo the input")
    check_parser.add_argument("--no-tokens", action="store_true", help="Omit the token listing")

    # tokens subcommand
    tokens_parser = subparsers.add_parser("tokens", help="List tokens")
    tokens_parser.add_argument("file", help="Source file ('-' for stdin)")
    tokens_parser.add_argument("--format", choices=["text", "table", "json"])

    # tree subcommand
    tree_parser = subparsers.add_parser("tree", help="Print the parse tree")
    tree_parser.add_argument("file", help="Source file ('-' for stdin)")
    tree_parser.add_argument("--format", choices=["text", "json"])

    # config subcommand
    config_parser = subparsers.add_parser("config", help="Show or initialize configuration")
    config_group = config_parser.add_mutually_exclusive_group()
    config_group.add_argument("--show", action="store_true", help="Show effective configuration")
    config_group.add_argument("--init", action="store_true", help="Create template config file")
    config_group.add_argument("--paths", action="store_true", help="Show config file paths")
    config_parser.add_argument(
        "--user",
        action="store_true",
        help="Use user config (~/.config/lispish/config.toml) for --init",
    )

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    try:
        config = Config.load()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    configure_logging(
        verbose=args.verbose or config.defaults.verbose,
        quiet=getattr(args, "quiet", False) or config.defaults.quiet,
    )
    logger.debug("Running command %r", args.command)

    if args.lenient:
        config.parser.strict = False

    if args.command == "check":
        from lispish.cli.commands import run_check

        return run_check(args, config)

    elif args.command == "tokens":
        from lispish.cli.commands import run_tokens

        return run_tokens(args, config)

    elif args.command == "tree":
        from lispish.cli.commands import run_tree

        return run_tree(args, config)

    elif args.command == "config":
        from lispish.cli.config_cmd import run_config

        return run_config(args)

    return 1


if __name__ == "__main__":
    sys.exit(main())
