"""
High-level entry points: text (or a file) in, parse tree out.

``read_string`` and ``read_file`` raise on failure. ``read_program`` never
raises on lex or syntax errors; it returns a ``Success`` or ``Failure`` that
the caller has to inspect.

Usage:
    from lispish.reader import read_program

    result = read_program("(define foo 3)")
    if result.ok:
        print(result.tree.pretty())
    else:
        print(f"{result.stage} failed: {result.error.message}")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from lispish.exceptions import FileNotFoundError, LexError, SourceDecodeError, SyntaxError
from lispish.lexer import tokenize
from lispish.parser import parse
from lispish.tree import Branch, Token

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Success:
    """Successful read: the token sequence and the ``Program`` tree."""

    tree: Branch
    tokens: tuple[Token, ...]

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """Failed read. ``stage`` is "lex" or "parse"."""

    error: Union[LexError, SyntaxError]
    stage: str

    @property
    def ok(self) -> bool:
        return False


ReadResult = Union[Success, Failure]


def read_string(text: str, *, strict: bool = True) -> Branch:
    """Tokenize and parse source text."""
    tokens = tokenize(text)
    logger.debug("Tokenized %d characters into %d tokens", len(text), len(tokens))
    tree = parse(tokens, strict=strict)
    logger.debug("Parsed %d top-level expressions", len(tree.children))
    return tree


def read_source(path: str | Path) -> str:
    """
    Read a UTF-8 source file.

    Raises:
        FileNotFoundError: If the path is not a file
        SourceDecodeError: If the file is not valid UTF-8
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(
            "Source file not found",
            file_path=path,
            suggestions=["Check the file path"],
        )
    logger.debug("Reading %s", path)
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise SourceDecodeError(
            "Source file is not valid UTF-8",
            file_path=path,
            offset=e.start,
            suggestions=["Re-save the file with UTF-8 encoding"],
        ) from e


def read_file(path: str | Path, *, strict: bool = True) -> Branch:
    """Tokenize and parse a UTF-8 source file."""
    return read_string(read_source(path), strict=strict)


def read_program(text: str, *, strict: bool = True) -> ReadResult:
    """Tokenize and parse, reporting failure as a value instead of raising."""
    try:
        tokens = tokenize(text)
    except LexError as e:
        logger.debug("Lexing failed at offset %d", e.offset)
        return Failure(error=e, stage="lex")

    try:
        tree = parse(tokens, strict=strict)
    except SyntaxError as e:
        logger.debug("Parsing failed: %s", e.message)
        return Failure(error=e, stage="parse")

    return Success(tree=tree, tokens=tuple(tokens))
