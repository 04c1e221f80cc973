"""
irulefmt — canonical formatter for rule DSL syntax trees

Renders an already-parsed tree (procedures, conditionals, switch dispatch
and statements such as ``set``, ``log``, ``snat``, ``node`` and ``pool``)
back into deterministically indented source. Parsing is left to an upstream
tool; irulefmt only ever sees the finished tree.

Quick Start:
    >>> from irulefmt import Block, Pool, Statement, format_ast
    >>> format_ast(Block((Statement(Pool(b"web")),)))
    b'pool web\\n'

Configuration:
    >>> from irulefmt import FormatConfig, format_config_context
    >>> with format_config_context(FormatConfig(indent=b"\\t")):
    ...     source = format_ast(tree)  # doctest: +SKIP
"""

from irulefmt.config import (
    FormatConfig,
    format_config_context,
    get_format_config,
    reset_format_config,
    set_format_config,
)
from irulefmt.errors import FormatError, IruleFmtError, SerializationError
from irulefmt.nodes import (
    Ast,
    Block,
    Branch,
    Case,
    Comment,
    If,
    IfElse,
    IfElseIf,
    Log,
    Newline,
    Node,
    Pool,
    Procedure,
    Return,
    Set,
    Snat,
    SnatPool,
    Statement,
    StatementKind,
    Switch,
)
from irulefmt.formatter import Formatter, format_ast
from irulefmt.serialization import from_dict, from_json, to_dict, to_json

__version__ = "0.1.0"

__all__ = [
    # Formatting
    "Formatter",
    "format_ast",
    # Configuration
    "FormatConfig",
    "format_config_context",
    "get_format_config",
    "reset_format_config",
    "set_format_config",
    # Errors
    "FormatError",
    "IruleFmtError",
    "SerializationError",
    # Tree nodes
    "Ast",
    "Block",
    "Branch",
    "Case",
    "Comment",
    "If",
    "IfElse",
    "IfElseIf",
    "Newline",
    "Procedure",
    "Statement",
    "Switch",
    # Statement kinds
    "Log",
    "Node",
    "Pool",
    "Return",
    "Set",
    "Snat",
    "SnatPool",
    "StatementKind",
    # Serialization
    "from_dict",
    "from_json",
    "to_dict",
    "to_json",
]
