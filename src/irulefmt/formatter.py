"""Formatter: renders a tree back into canonical DSL source.

One depth-first pass over the tree. Every line starts with the indentation
unit repeated once per nesting level, blocks close at the depth they were
opened at, and runs of blank lines are capped.

Example:
    >>> from irulefmt.nodes import Block, Procedure, Set, Statement
    >>> tree = Procedure(b"p", (b"a",), Block((Statement(Set(b"x", b"1")),)))
    >>> format_ast(tree)
    b'proc p { a } {\\n    set x 1\\n}\\n'

Thread Safety:
    A Formatter holds only its frozen config. Traversal state lives in a
    _FormatState created per format() call, so instances can be shared.

"""

from __future__ import annotations

from irulefmt.bytebuilder import ByteBuilder
from irulefmt.config import FormatConfig, get_format_config
from irulefmt.errors import FormatError
from irulefmt.nodes import (
    Ast,
    Block,
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
from irulefmt.utils.logger import get_logger

logger = get_logger(__name__)


class _FormatState:
    """Mutable state of a single format() pass."""

    __slots__ = ("consecutive_newlines", "depth", "out")

    def __init__(self) -> None:
        self.depth = 0
        self.consecutive_newlines = 0
        self.out = ByteBuilder()


class Formatter:
    """Render trees to DSL source bytes.

    Args:
        config: Format settings. Defaults to the active config
            (see ``irulefmt.config.get_format_config``).

    """

    __slots__ = ("_config",)

    def __init__(self, config: FormatConfig | None = None) -> None:
        self._config = config if config is not None else get_format_config()

    @property
    def config(self) -> FormatConfig:
        return self._config

    def format(self, tree: Ast) -> bytes:
        """Render ``tree`` and return the formatted source.

        Raises:
            FormatError: If the tree contains something with no rendering,
                e.g. an IfElseIf without branches.

        """
        state = _FormatState()
        self._run(tree, state)
        output = state.out.build()
        logger.debug("Formatted %s tree into %d bytes", type(tree).__name__, len(output))
        return output

    def _run(self, node: Ast, state: _FormatState) -> None:
        if isinstance(node, Newline):
            state.consecutive_newlines += 1
        else:
            state.consecutive_newlines = 0

        out = state.out
        match node:
            case Block():
                for child in node.children:
                    self._run(child, state)
            case Comment():
                self._indent(state)
                out.append(b"# ").append(node.text).append_line()
            case Procedure():
                self._indent(state)
                out.append(b"proc ").append(node.name).append(b" {")
                for parameter in node.parameters:
                    out.append(b" ").append(parameter)
                out.append_line(b" } {")
                self._run_nested(node.body, state)
                self._close_block(state)
            case If():
                self._open_condition(b"if", node.condition, state)
                self._run_nested(node.body, state)
                self._close_block(state)
            case IfElse():
                self._open_condition(b"if", node.condition, state)
                self._run_nested(node.body_if_true, state)
                self._close_block(state)
                self._open_else(node.body_if_false, state)
            case IfElseIf():
                if not node.branches:
                    raise FormatError("at least one condition branch is required", "IfElseIf")
                for index, branch in enumerate(node.branches):
                    keyword = b"if" if index == 0 else b"elseif"
                    self._open_condition(keyword, branch.condition, state)
                    self._run_nested(branch.body, state)
                    self._close_block(state)
                self._open_else(node.body_if_false, state)
            case Switch():
                # Cases are emitted in declared order, never sorted.
                self._indent(state)
                out.append(b"switch ").append(node.condition).append_line(b" {")
                state.depth += 1
                for case in node.cases:
                    self._indent(state)
                    out.append(case.value)
                    if case.body is None:
                        out.append_line(b" -")
                    else:
                        out.append_line(b" {")
                        self._run_nested(case.body, state)
                        self._close_block(state)
                state.depth -= 1
                self._close_block(state)
            case Statement():
                self._indent(state)
                self._write_statement(node.kind, out)
            case Newline():
                if state.consecutive_newlines <= self._config.max_blank_lines:
                    out.append_line()
                else:
                    logger.debug(
                        "Dropped blank line %d of a run (limit %d)",
                        state.consecutive_newlines,
                        self._config.max_blank_lines,
                    )
            case _:
                raise FormatError(f"not a tree node: {node!r}", type(node).__name__)

    def _run_nested(self, node: Ast, state: _FormatState) -> None:
        state.depth += 1
        self._run(node, state)
        state.depth -= 1

    def _write_statement(self, kind: StatementKind, out: ByteBuilder) -> None:
        """Write ``keyword operand...`` and a line break."""
        operands: tuple[bytes, ...]
        match kind:
            case Set():
                keyword, operands = b"set", (kind.identifier, kind.value)
            case Log():
                keyword, operands = b"log", (kind.bucket, kind.value)
            case Snat():
                keyword, operands = b"snat", (kind.ip_address, kind.port)
            case Node():
                keyword, operands = b"node", (kind.ip_address, kind.port)
            case Pool():
                keyword, operands = b"pool", (kind.identifier,)
            case SnatPool():
                keyword, operands = b"snatpool", (kind.identifier,)
            case Return(value=None):
                keyword, operands = b"return", ()
            case Return():
                keyword, operands = b"return", (kind.value,)
            case _:
                raise FormatError(f"not a statement kind: {kind!r}", type(kind).__name__)

        out.append(keyword)
        for operand in operands:
            out.append(b" ").append(operand)
        out.append_line()

    def _open_condition(self, keyword: bytes, condition: bytes, state: _FormatState) -> None:
        self._indent(state)
        state.out.append(keyword).append(b" { ").append(condition).append_line(b" } {")

    def _open_else(self, body: Ast, state: _FormatState) -> None:
        self._indent(state)
        state.out.append_line(b"else {")
        self._run_nested(body, state)
        self._close_block(state)

    def _close_block(self, state: _FormatState) -> None:
        self._indent(state)
        state.out.append_line(b"}")

    def _indent(self, state: _FormatState) -> None:
        state.out.append_repeated(self._config.indent, state.depth)


def format_ast(tree: Ast, *, config: FormatConfig | None = None) -> bytes:
    """Render a tree to formatted DSL source.

    Args:
        tree: Root node, usually a Block.
        config: Format settings (defaults to the active config).

    Returns:
        Formatted source, one newline-terminated line per emitted line.

    """
    return Formatter(config).format(tree)
