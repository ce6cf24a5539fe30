"""
Exception hierarchy for lispish.

Every error carries a message plus optional context and suggestions, so the
CLI can print something actionable without knowing which stage failed.

Example::

    from lispish.exceptions import LexError, SyntaxError

    raise SyntaxError(
        "Expected ')'",
        expected=")",
        found="end of input",
        offset=14,
        suggestions=["Check for a missing closing parenthesis"],
    )

Note that ``SyntaxError`` and ``FileNotFoundError`` intentionally shadow the
builtins of the same name when imported from this module.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Union


class LispishError(Exception):
    """
    Base exception for all lispish errors.

    Attributes:
        context: Dictionary of contextual information (offset, line, etc.)
        suggestions: List of actionable suggestions for fixing the error
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        self.message = message
        self.context = context or {}
        self.suggestions = suggestions or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context and suggestions."""
        parts = [self.message]

        if self.context:
            parts.append("\n\nContext:")
            for key, value in self.context.items():
                parts.append(f"\n  {key}: {value}")

        if self.suggestions:
            parts.append("\n\nSuggestions:")
            for suggestion in self.suggestions:
                parts.append(f"\n  - {suggestion}")

        return "".join(parts)

    def __str__(self) -> str:
        return self._format_message()


class LexError(LispishError):
    """
    No token pattern matched at some position in the source text.

    Example::

        raise LexError("Unrecognized input", offset=5, line=1, column=6, remaining='"abc')
    """

    def __init__(
        self,
        message: str,
        offset: int,
        line: Optional[int] = None,
        column: Optional[int] = None,
        remaining: str = "",
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        self.offset = offset
        self.line = line
        self.column = column
        self.remaining = remaining

        ctx = context or {}
        ctx.setdefault("offset", offset)
        if line is not None:
            ctx.setdefault("line", line)
        if column is not None:
            ctx.setdefault("column", column)
        if remaining:
            # Keep the report readable for long inputs
            snippet = remaining if len(remaining) <= 20 else remaining[:20] + "..."
            ctx.setdefault("near", repr(snippet))

        super().__init__(message, ctx, suggestions)


class SyntaxError(LispishError):  # noqa: A001
    """
    The token sequence does not match the grammar.

    Attributes:
        expected: Literal text the parser required, if any
        found: Text of the offending token, or "end of input"
        offset: Source offset of the offending token, if known
    """

    def __init__(
        self,
        message: str,
        expected: Optional[str] = None,
        found: Optional[str] = None,
        offset: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        self.expected = expected
        self.found = found
        self.offset = offset

        ctx = context or {}
        if expected is not None:
            ctx.setdefault("expected", repr(expected))
        if found is not None:
            ctx.setdefault("found", found)
        if offset is not None:
            ctx.setdefault("offset", offset)

        super().__init__(message, ctx, suggestions)


class FileNotFoundError(LispishError):  # noqa: A001
    """
    Source file was not found.

    Example::

        raise FileNotFoundError(
            "Source file not found",
            file_path="program.lsp",
            suggestions=["Check the file path", "Use '-' to read from stdin"],
        )
    """

    def __init__(
        self,
        message: str,
        file_path: Optional[Union[str, Path]] = None,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        ctx = context or {}
        if file_path and "file" not in ctx:
            ctx["file"] = str(file_path)
        super().__init__(message, ctx, suggestions)


class SourceDecodeError(LispishError):
    """
    Source file is not valid UTF-8.

    Attributes:
        offset: Byte offset of the first undecodable byte
    """

    def __init__(
        self,
        message: str,
        file_path: Optional[Union[str, Path]] = None,
        offset: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        self.offset = offset

        ctx = context or {}
        if file_path and "file" not in ctx:
            ctx["file"] = str(file_path)
        if offset is not None:
            ctx.setdefault("byte offset", offset)
        super().__init__(message, ctx, suggestions)


class ConfigError(LispishError):
    """Configuration file could not be read or parsed."""

    pass


__all__ = [
    "LispishError",
    "LexError",
    "SyntaxError",
    "FileNotFoundError",
    "SourceDecodeError",
    "ConfigError",
]
