"""
Recursive-descent parser for the lispish grammar.

    Program ::= { SExpr }
    SExpr   ::= Atom | List
    List    ::= "(" ")" | "(" Seq ")"
    Seq     ::= SExpr Seq | SExpr
    Atom    ::= ID | INT | REAL | STRING

One method per rule, one token of lookahead, no backtracking. ``Seq`` is
kept right-nested: each ``Seq`` branch holds one ``SExpr`` and, unless the
list closes next, another ``Seq``. The chain is assembled iteratively, so
long lists are fine; only list nesting depth uses the call stack.

Usage:
    from lispish.lexer import tokenize
    from lispish.parser import parse

    tree = parse(tokenize("(+ 3.14 (* 4 7))"))
    print(tree.pretty())
"""

from __future__ import annotations

from typing import Optional, Sequence

from lispish.exceptions import SyntaxError
from lispish.tree import ATOM_KINDS, Branch, Leaf, Symbol, Token

END_OF_INPUT = "end of input"


class TokenCursor:
    """Read position over an immutable token sequence."""

    def __init__(self, tokens: Sequence[Token]):
        self.tokens = tuple(tokens)
        self.index = 0

    def at_end(self) -> bool:
        return self.index >= len(self.tokens)

    def peek(self) -> Optional[Token]:
        """Current token, or None at end of input."""
        if self.at_end():
            return None
        return self.tokens[self.index]

    def peek_text(self) -> str:
        """Text of the current token ("" at end of input)."""
        token = self.peek()
        return token.text if token is not None else ""

    def advance(self) -> Token:
        token = self.peek()
        if token is None:
            raise SyntaxError("Unexpected end of input", found=END_OF_INPUT)
        self.index += 1
        return token

    def end_token(self) -> Token:
        """Pseudo-token describing end of input, for error reports."""
        offset = 0
        if self.tokens:
            last = self.tokens[-1]
            offset = last.offset + len(last.text)
        return Token(Symbol.INVALID, "", offset)


class Parser:
    """
    Grammar-checking parser producing a ``Program`` branch.

    Args:
        tokens: Token sequence from the lexer
        strict: If True (default), ``Atom`` only accepts ID, INT, REAL and
            STRING tokens. If False, any token is taken as an atom, so a
            stray ``)`` becomes an atom leaf instead of an error.
    """

    def __init__(self, tokens: Sequence[Token], strict: bool = True):
        self.cursor = TokenCursor(tokens)
        self.strict = strict

    def parse(self) -> Branch:
        # Nested lists still recurse once per level
        try:
            return self.parse_program(self.cursor)
        except RecursionError as e:
            token = self.cursor.peek() or self.cursor.end_token()
            raise SyntaxError(
                "Lists nested too deeply to parse",
                offset=token.offset,
                suggestions=["Reduce the nesting depth of the program"],
            ) from e

    def parse_program(self, cursor: TokenCursor) -> Branch:
        children = []
        while not cursor.at_end():
            children.append(self.parse_sexpr(cursor))
        return Branch(Symbol.Program, tuple(children))

    def parse_sexpr(self, cursor: TokenCursor) -> Branch:
        if cursor.peek_text() == "(":
            return Branch(Symbol.SExpr, (self.parse_list(cursor),))
        return Branch(Symbol.SExpr, (self.parse_atom(cursor),))

    def parse_list(self, cursor: TokenCursor) -> Branch:
        lparen = self.parse_literal(cursor, "(")

        if cursor.peek_text() == ")":
            return Branch(Symbol.List, (lparen, self.parse_literal(cursor, ")")))

        children: list = [lparen]
        while not cursor.at_end() and cursor.peek_text() != ")":
            children.append(self.parse_seq(cursor))
        children.append(self.parse_literal(cursor, ")"))
        return Branch(Symbol.List, tuple(children))

    def parse_seq(self, cursor: TokenCursor) -> Branch:
        # Elements are collected in a loop and the chain is built from the
        # last element backwards, so list length does not grow the call stack.
        elements = [self.parse_sexpr(cursor)]
        while not cursor.at_end() and cursor.peek_text() != ")":
            elements.append(self.parse_sexpr(cursor))

        seq = Branch(Symbol.Seq, (elements.pop(),))
        while elements:
            seq = Branch(Symbol.Seq, (elements.pop(), seq))
        return seq

    def parse_atom(self, cursor: TokenCursor) -> Branch:
        token = cursor.peek()
        if token is None:
            raise SyntaxError(
                "Unexpected end of input, expected an atom",
                found=END_OF_INPUT,
                offset=cursor.end_token().offset,
                suggestions=["Check for a missing closing parenthesis"],
            )
        if self.strict and token.kind not in ATOM_KINDS:
            raise SyntaxError(
                f"Unexpected {token.text!r}, expected an atom",
                found=repr(token.text),
                offset=token.offset,
                suggestions=["Check for an unbalanced ')'"],
            )
        return Branch(Symbol.Atom, (Leaf.from_token(cursor.advance()),))

    def parse_literal(self, cursor: TokenCursor, literal: str) -> Leaf:
        token = cursor.peek()
        if token is not None and token.text == literal:
            return Leaf.from_token(cursor.advance())

        if token is None:
            found, offset = END_OF_INPUT, cursor.end_token().offset
        else:
            found, offset = repr(token.text), token.offset
        raise SyntaxError(
            f"Expected {literal!r}, found {found}",
            expected=literal,
            found=found,
            offset=offset,
        )


def parse(tokens: Sequence[Token], *, strict: bool = True) -> Branch:
    """Parse a token sequence into a ``Program`` branch."""
    return Parser(tokens, strict=strict).parse()
