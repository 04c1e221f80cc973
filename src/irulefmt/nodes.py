"""Typed tree nodes for irulefmt.

All nodes are frozen dataclasses with slots. Trees are built once by an
upstream parser and are read-only afterwards, so a tree may be formatted
any number of times and shared across threads.

Operands (names, conditions, values) are ``bytes`` holding pre-formatted DSL
text. Nothing in this package parses or escapes them.

Node Hierarchy:
Ast
├── Block          ordered children
├── Comment        # text
├── Procedure      proc name { params } { body }
├── If             if { cond } { body }
├── IfElse         if { cond } { ... } else { ... }
├── IfElseIf       if / elseif ... / else
├── Switch         switch cond { value { body } | value - }
├── Statement      one line, wraps a StatementKind
└── Newline        blank line marker

StatementKind
├── Set            set identifier value
├── Log            log bucket value
├── Snat           snat ip_address port
├── Node           node ip_address port
├── Pool           pool identifier
├── SnatPool       snatpool identifier
└── Return         return [value]

"""

from __future__ import annotations

from dataclasses import dataclass

# =============================================================================
# Statement kinds
# =============================================================================


@dataclass(frozen=True, slots=True)
class Set:
    """Variable assignment: ``set identifier value``."""

    identifier: bytes
    value: bytes


@dataclass(frozen=True, slots=True)
class Log:
    """Log a value to a bucket: ``log bucket value``."""

    bucket: bytes
    value: bytes


@dataclass(frozen=True, slots=True)
class Snat:
    """Source NAT translation: ``snat ip_address port``."""

    ip_address: bytes
    port: bytes


@dataclass(frozen=True, slots=True)
class Node:
    """Direct a connection to a node: ``node ip_address port``."""

    ip_address: bytes
    port: bytes


@dataclass(frozen=True, slots=True)
class Pool:
    """Select a server pool: ``pool identifier``."""

    identifier: bytes


@dataclass(frozen=True, slots=True)
class SnatPool:
    """Select a SNAT pool: ``snatpool identifier``."""

    identifier: bytes


@dataclass(frozen=True, slots=True)
class Return:
    """Return from a procedure, optionally with a value."""

    value: bytes | None = None


# =============================================================================
# Tree nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Block:
    """Ordered sequence of nodes rendered one after another."""

    children: tuple[Ast, ...] = ()


@dataclass(frozen=True, slots=True)
class Comment:
    """Comment line. Rendered as ``# text``."""

    text: bytes


@dataclass(frozen=True, slots=True)
class Procedure:
    """Procedure definition.

    DSL:
        proc name { a b } {
            ...
        }

    """

    name: bytes
    parameters: tuple[bytes, ...]
    body: Ast


@dataclass(frozen=True, slots=True)
class If:
    """Conditional without an else branch."""

    condition: bytes
    body: Ast


@dataclass(frozen=True, slots=True)
class IfElse:
    """Conditional with an else branch."""

    condition: bytes
    body_if_true: Ast
    body_if_false: Ast


@dataclass(frozen=True, slots=True)
class Branch:
    """One ``if``/``elseif`` arm of an IfElseIf."""

    condition: bytes
    body: Ast


@dataclass(frozen=True, slots=True)
class IfElseIf:
    """Chain of conditions with a trailing else.

    The first branch renders as ``if``, every later one as ``elseif``.
    At least one branch is required.

    """

    branches: tuple[Branch, ...]
    body_if_false: Ast


@dataclass(frozen=True, slots=True)
class Case:
    """One arm of a Switch.

    A case without a body is a fallthrough into the next case.
    """

    value: bytes
    body: Ast | None = None


@dataclass(frozen=True, slots=True)
class Switch:
    """Switch dispatch. Cases keep their declared order."""

    condition: bytes
    cases: tuple[Case, ...]


@dataclass(frozen=True, slots=True)
class Statement:
    """Single line of code wrapping one statement kind."""

    kind: StatementKind


@dataclass(frozen=True, slots=True)
class Newline:
    """Blank line request. Long runs are collapsed by the formatter."""


type StatementKind = Set | Log | Snat | Node | Pool | SnatPool | Return

type Ast = (
    Block
    | Comment
    | Procedure
    | If
    | IfElse
    | IfElseIf
    | Switch
    | Statement
    | Newline
)


__all__ = [
    "Ast",
    "Block",
    "Branch",
    "Case",
    "Comment",
    "If",
    "IfElse",
    "IfElseIf",
    "Log",
    "Newline",
    "Node",
    "Pool",
    "Procedure",
    "Return",
    "Set",
    "Snat",
    "SnatPool",
    "Statement",
    "StatementKind",
    "Switch",
]
