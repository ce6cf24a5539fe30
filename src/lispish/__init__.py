"""
lispish: tokenizer and recursive-descent parser for a minimal S-expression language.

Grammar::

    Program ::= { SExpr }
    SExpr   ::= Atom | List
    List    ::= "(" ")" | "(" Seq ")"
    Seq     ::= SExpr Seq | SExpr
    Atom    ::= ID | INT | REAL | STRING

Modules:
    lexer: Text to token sequence
    parser: Token sequence to parse tree
    tree: Token and node data model
    reader: One-call text/file to tree helpers
    config: TOML configuration loading
    cli: The `lispish` command

Quick Start::

    from lispish import read_string, read_program

    tree = read_string("(+ 3.14 (* 4 7))")
    print(tree.pretty())

    result = read_program('(define foo "bananas"')
    if not result.ok:
        print(result.stage, result.error.message)
"""

__version__ = "0.1.0"

from lispish.exceptions import LexError, LispishError, SyntaxError
from lispish.lexer import Lexer, tokenize
from lispish.parser import Parser, TokenCursor, parse
from lispish.reader import Failure, ReadResult, Success, read_file, read_program, read_string
from lispish.tree import Branch, Leaf, Node, Symbol, Token

__all__ = [
    # Version
    "__version__",
    # Data model
    "Symbol",
    "Token",
    "Leaf",
    "Branch",
    "Node",
    # Pipeline
    "Lexer",
    "tokenize",
    "Parser",
    "TokenCursor",
    "parse",
    # Facade
    "read_string",
    "read_file",
    "read_program",
    "ReadResult",
    "Success",
    "Failure",
    # Errors
    "LispishError",
    "LexError",
    "SyntaxError",
]
