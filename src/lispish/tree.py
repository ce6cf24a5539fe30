"""
Token and parse tree data model.

A parse tree is built from two node shapes:

- ``Leaf``: a matched token placed in the tree (kind + exact text)
- ``Branch``: an interior node for one grammar production (kind + children)

Examples:
    (+ 3 4)
    → Branch(Program, (Branch(SExpr, (Branch(List, (Leaf(LITERAL, "("), ...)),)),))

    42
    → Branch(Program, (Branch(SExpr, (Branch(Atom, (Leaf(INT, "42"),)),)),))

Nodes are immutable and the tree has no back-references, so a subtree can be
handed to any consumer without copying.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator, Union


class Symbol(Enum):
    """Lexical and syntactic node kinds."""

    # Lexical kinds (token / leaf)
    LITERAL = "LITERAL"
    REAL = "REAL"
    INT = "INT"
    STRING = "STRING"
    ID = "ID"
    INVALID = "INVALID"

    # Syntax kinds (interior nodes)
    Program = "Program"
    SExpr = "SExpr"
    List = "List"
    Seq = "Seq"
    Atom = "Atom"

    @property
    def is_lexical(self) -> bool:
        """True for kinds produced by the lexer."""
        return self in LEXICAL_KINDS

    def __str__(self) -> str:
        return self.value


LEXICAL_KINDS = frozenset(
    {Symbol.LITERAL, Symbol.REAL, Symbol.INT, Symbol.STRING, Symbol.ID, Symbol.INVALID}
)

# Kinds the grammar allows under an Atom node
ATOM_KINDS = frozenset({Symbol.ID, Symbol.INT, Symbol.REAL, Symbol.STRING})


@dataclass(frozen=True)
class Token:
    """
    A classified run of source text.

    ``offset`` is where the match started in the source. It is only used for
    error reports and never ends up in the tree.
    """

    kind: Symbol
    text: str
    offset: int = 0

    def __str__(self) -> str:
        return f"{self.kind.value:<21}\t: {self.text}"


@dataclass(frozen=True)
class Leaf:
    """Terminal node carrying the exact text of a token."""

    kind: Symbol
    text: str

    def __post_init__(self):
        if not self.kind.is_lexical:
            raise ValueError(f"Leaf kind must be lexical, got {self.kind.value}")

    @classmethod
    def from_token(cls, token: Token) -> Leaf:
        return cls(kind=token.kind, text=token.text)

    @property
    def children(self) -> tuple:
        return ()

    @property
    def is_leaf(self) -> bool:
        return True

    def iter_all(self) -> Iterator[Node]:
        yield self

    def leaves(self) -> Iterator[Leaf]:
        yield self

    def atoms(self) -> Iterator[Leaf]:
        return iter(())

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "text": self.text}

    def pretty(self, prefix: str = "", kind_width: int = 42) -> str:
        return _format_line(self, prefix, kind_width)

    def __repr__(self) -> str:
        return f"Leaf({self.kind.value}, {self.text!r})"


@dataclass(frozen=True)
class Branch:
    """
    Interior node for a single grammar production.

    ``children`` reconstruct the production in source order. A ``List``
    branch, for example, always starts with the ``(`` leaf and ends with the
    ``)`` leaf.

    Traversals walk an explicit stack: a long list is a ``Seq`` chain as deep
    as the list is long.
    """

    kind: Symbol
    children: tuple[Node, ...] = ()

    def __post_init__(self):
        if self.kind.is_lexical:
            raise ValueError(f"Branch kind must be a grammar rule, got {self.kind.value}")

    @property
    def text(self) -> str:
        return ""

    @property
    def is_leaf(self) -> bool:
        return False

    def __getitem__(self, index: int) -> Node:
        return self.children[index]

    def iter_all(self) -> Iterator[Node]:
        """Iterate over this node and all descendants, depth-first."""
        stack: list[Node] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def leaves(self) -> Iterator[Leaf]:
        """Iterate over every leaf, left to right."""
        for node in self.iter_all():
            if node.is_leaf:
                yield node

    def atoms(self) -> Iterator[Leaf]:
        """Iterate over atom leaves only, skipping structural parentheses."""
        for node in self.iter_all():
            if node.kind is Symbol.Atom:
                yield from node.children

    def to_dict(self) -> dict[str, Any]:
        root: dict[str, Any] = {"kind": self.kind.value, "children": []}
        stack: list[tuple[Branch, dict[str, Any]]] = [(self, root)]
        while stack:
            node, out = stack.pop()
            for child in node.children:
                if child.is_leaf:
                    out["children"].append(child.to_dict())
                else:
                    entry: dict[str, Any] = {"kind": child.kind.value, "children": []}
                    out["children"].append(entry)
                    stack.append((child, entry))
        return root

    def to_json(self, indent: int = 2) -> str:
        """
        Serialize ``to_dict()`` as indented JSON.

        Same text as ``json.dumps(self.to_dict(), indent=indent)``, written
        from an explicit stack because the encoder recurses once per level.
        """
        lines = []
        stack: list[Union[str, tuple[Node, int, str]]] = [(self, 0, "")]
        while stack:
            item = stack.pop()
            if isinstance(item, str):
                lines.append(item)
                continue

            node, depth, tail = item
            pad = " " * (indent * depth)
            inner = " " * (indent * (depth + 1))
            lines.append(pad + "{")
            lines.append(f"{inner}\"kind\": {json.dumps(node.kind.value)},")
            if node.is_leaf:
                lines.append(f"{inner}\"text\": {json.dumps(node.text)}")
                lines.append(pad + "}" + tail)
            elif not node.children:
                lines.append(f"{inner}\"children\": []")
                lines.append(pad + "}" + tail)
            else:
                lines.append(f"{inner}\"children\": [")
                stack.append(pad + "}" + tail)
                stack.append(inner + "]")
                last = len(node.children) - 1
                for i in range(last, -1, -1):
                    stack.append((node.children[i], depth + 2, "," if i < last else ""))
        return "\n".join(lines)

    def pretty(self, prefix: str = "", kind_width: int = 42) -> str:
        """
        Render the tree as an indented listing, one node per line.

        Each line holds the kind padded to ``kind_width - len(prefix)``
        followed by the node text. Children are indented by two spaces.
        """
        lines = []
        stack: list[tuple[Node, str]] = [(self, prefix)]
        while stack:
            node, node_prefix = stack.pop()
            lines.append(_format_line(node, node_prefix, kind_width))
            stack.extend((child, node_prefix + "  ") for child in reversed(node.children))
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"Branch({self.kind.value}, [{len(self.children)} children])"


Node = Union[Leaf, Branch]


def _format_line(node: Node, prefix: str, kind_width: int) -> str:
    width = max(kind_width - len(prefix), 0)
    return f"{prefix}{node.kind.value.ljust(width)} {node.text}"
