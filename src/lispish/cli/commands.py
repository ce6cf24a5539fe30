"""Handlers for the check, tokens and tree commands."""

from __future__ import annotations

import json
import logging
import sys

from lispish.config import Config
from lispish.exceptions import LexError, LispishError, SyntaxError
from lispish.lexer import tokenize
from lispish.parser import parse
from lispish.reader import read_file, read_source, read_string
from lispish.tree import Token

__all__ = ["run_check", "run_tokens", "run_tree"]

logger = logging.getLogger(__name__)

RULE_WIDTH = 50
STDIN = "-"


def _read_source(file: str) -> str:
    """Read source text from a file path, or stdin for '-'."""
    if file == STDIN:
        logger.debug("Reading source from stdin")
        return sys.stdin.read()
    return read_source(file)


def _resolve_format(requested: str | None, config: Config, allowed: tuple[str, ...]) -> str:
    if requested:
        return requested
    if config.defaults.format in allowed:
        return config.defaults.format
    logger.warning(
        "defaults.format = %r is not available here, using %r",
        config.defaults.format,
        allowed[0],
    )
    return allowed[0]


def run_check(args, config: Config) -> int:
    """
    Echo the input, list its tokens and print its parse tree.

    Any lex or syntax error ends the listing with a single failure line.
    """
    try:
        source = _read_source(args.file)
    except LispishError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    quiet = args.quiet or config.defaults.quiet
    show_tokens = config.display.show_tokens and not args.no_tokens

    print("=" * RULE_WIDTH)
    if not quiet:
        print(f"Input: {source}")
        print("-" * RULE_WIDTH)

    try:
        tokens = tokenize(source)

        if show_tokens:
            print("Tokens")
            print("-" * RULE_WIDTH)
            for token in tokens:
                print(token)
            print("-" * RULE_WIDTH)

        tree = parse(tokens, strict=config.parser.strict)

        print("Parse Tree")
        print("-" * RULE_WIDTH)
        print(tree.pretty(kind_width=config.display.kind_width))
        print("-" * RULE_WIDTH)
    except (LexError, SyntaxError) as e:
        logger.debug("check failed: %s", e.message)
        print("Threw an exception on invalid input.")
        return 1

    return 0


def run_tokens(args, config: Config) -> int:
    """List tokens as text, a rich table, or JSON."""
    fmt = _resolve_format(args.format, config, ("text", "table", "json"))

    try:
        tokens = tokenize(_read_source(args.file))
    except LispishError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if fmt == "json":
        data = [{"kind": t.kind.value, "text": t.text, "offset": t.offset} for t in tokens]
        print(json.dumps(data, indent=2))
    elif fmt == "table":
        _print_token_table(tokens)
    else:
        for token in tokens:
            print(token)

    return 0


def _print_token_table(tokens: list[Token]) -> None:
    from rich.console import Console
    from rich.table import Table

    console = Console()
    table = Table(title=f"Tokens ({len(tokens)})")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Kind", style="cyan")
    table.add_column("Text")
    table.add_column("Offset", justify="right")

    for i, token in enumerate(tokens):
        table.add_row(str(i), token.kind.value, token.text, str(token.offset))

    console.print(table)


def run_tree(args, config: Config) -> int:
    """Print the parse tree as an indented listing or JSON."""
    fmt = _resolve_format(args.format, config, ("text", "json"))
    strict = config.parser.strict

    try:
        if args.file == STDIN:
            tree = read_string(_read_source(STDIN), strict=strict)
        else:
            tree = read_file(args.file, strict=strict)
    except LispishError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if fmt == "json":
        print(tree.to_json())
    else:
        print(tree.pretty(kind_width=config.display.kind_width))

    return 0
