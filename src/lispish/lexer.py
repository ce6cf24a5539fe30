"""
Tokenizer for lispish source text.

Patterns are tried in a fixed priority order at every position; the first
one that matches wins:

    whitespace  \\s                      (skipped)
    LITERAL     [()]
    REAL        [+-]?[0-9]*\\.[0-9]+
    INT         [+-]?[0-9]+
    STRING      "(?:\\\\.|[^\\\\"])*"
    ID          [^\\s"()]+

REAL is tried before INT so that "3.14" is never split into INT "3" and a
trailing ".14". Anything that matches none of these raises LexError.

Usage:
    from lispish.lexer import tokenize

    tokens = tokenize("(+ 3 4)")
    [(t.kind.value, t.text) for t in tokens]
    # [('LITERAL', '('), ('ID', '+'), ('INT', '3'), ('INT', '4'), ('LITERAL', ')')]
"""

from __future__ import annotations

import re
from typing import Iterator, Optional

from lispish.exceptions import LexError
from lispish.tree import Symbol, Token

WHITESPACE = re.compile(r"\s")

# Order matters: first match wins
TOKEN_PATTERNS: list[tuple[Symbol, re.Pattern]] = [
    (Symbol.LITERAL, re.compile(r"[()]")),
    (Symbol.REAL, re.compile(r"[+-]?[0-9]*\.[0-9]+")),
    (Symbol.INT, re.compile(r"[+-]?[0-9]+")),
    (Symbol.STRING, re.compile(r'"(?:\\.|[^\\"])*"')),
    (Symbol.ID, re.compile(r'[^\s"()]+')),
]


class Lexer:
    """Single-pass scanner over one source string."""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.length = len(text)

    def iter_tokens(self) -> Iterator[Token]:
        """Yield tokens in source order."""
        while self.pos < self.length:
            if WHITESPACE.match(self.text, self.pos):
                self.pos += 1
                continue

            token = self._match_token()
            if token is None:
                raise self._error()

            self.pos += len(token.text)
            yield token

    def _match_token(self) -> Optional[Token]:
        for kind, pattern in TOKEN_PATTERNS:
            m = pattern.match(self.text, self.pos)
            if m:
                return Token(kind, m.group(), self.pos)
        return None

    def _error(self) -> LexError:
        line = self.text.count("\n", 0, self.pos) + 1
        column = self.pos - (self.text.rfind("\n", 0, self.pos) + 1) + 1
        char = self.text[self.pos]

        suggestions = []
        if char == '"':
            suggestions.append("Check for an unterminated string literal")

        return LexError(
            f"Unrecognized input at position {self.pos}",
            offset=self.pos,
            line=line,
            column=column,
            remaining=self.text[self.pos :],
            suggestions=suggestions,
        )


def tokenize(text: str) -> list[Token]:
    """Split source text into tokens, raising LexError on invalid input."""
    return list(Lexer(text).iter_tokens())
