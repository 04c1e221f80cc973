"""Tests for the Formatter: one test class per tree construct."""

import pytest

from irulefmt import FormatConfig, Formatter, format_ast, format_config_context
from irulefmt.errors import FormatError
from irulefmt.nodes import (
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
    Switch,
)


def _block(*children) -> Block:  # type: ignore[no-untyped-def]
    return Block(children=tuple(children))


def _set(identifier: bytes, value: bytes) -> Statement:
    return Statement(Set(identifier, value))


# =============================================================================
# Statements
# =============================================================================


class TestStatements:
    """Each statement kind renders keyword + operands on one line."""

    @pytest.mark.parametrize(
        ("kind", "expected"),
        [
            (Set(b"x", b"1"), b"set x 1\n"),
            (Log(b"local0.", b'"hello"'), b'log local0. "hello"\n'),
            (Snat(b"10.0.0.1", b"80"), b"snat 10.0.0.1 80\n"),
            (Node(b"10.0.0.2", b"443"), b"node 10.0.0.2 443\n"),
            (Pool(b"web_pool"), b"pool web_pool\n"),
            (SnatPool(b"snat_pool"), b"snatpool snat_pool\n"),
            (Return(b"$result"), b"return $result\n"),
        ],
    )
    def test_statement_line(self, kind, expected: bytes) -> None:  # type: ignore[no-untyped-def]
        assert format_ast(Statement(kind)) == expected

    def test_bare_return(self) -> None:
        assert format_ast(Statement(Return())) == b"return\n"

    def test_operands_are_copied_verbatim(self) -> None:
        out = format_ast(_set(b"[HTTP::uri]", b"\"a  b\"\t\xff"))
        assert out == b"set [HTTP::uri] \"a  b\"\t\xff\n"

    def test_statement_is_indented(self) -> None:
        tree = If(b"$x", _block(Statement(Pool(b"p"))))
        assert format_ast(tree) == b"if { $x } {\n    pool p\n}\n"


# =============================================================================
# Block and Comment
# =============================================================================


class TestBlock:
    def test_children_in_order_without_separators(self) -> None:
        tree = _block(_set(b"a", b"1"), _set(b"b", b"2"), Statement(Pool(b"p")))
        assert format_ast(tree) == b"set a 1\nset b 2\npool p\n"

    def test_empty_block_renders_nothing(self) -> None:
        assert format_ast(Block()) == b""

    def test_nested_blocks_do_not_indent(self) -> None:
        tree = _block(_block(_set(b"a", b"1")), _block(_block(_set(b"b", b"2"))))
        assert format_ast(tree) == b"set a 1\nset b 2\n"


class TestComment:
    def test_top_level_comment(self) -> None:
        assert format_ast(Comment(b"hello world")) == b"# hello world\n"

    def test_comment_follows_depth(self) -> None:
        tree = Procedure(b"p", (), _block(Comment(b"inside")))
        assert format_ast(tree) == b"proc p { } {\n    # inside\n}\n"


# =============================================================================
# Procedure
# =============================================================================


class TestProcedure:
    def test_single_parameter(self) -> None:
        tree = Procedure(name=b"p", parameters=(b"a",), body=_block(_set(b"x", b"1")))
        assert format_ast(tree) == b"proc p { a } {\n    set x 1\n}\n"

    def test_many_parameters(self) -> None:
        tree = Procedure(b"route", (b"host", b"port", b"tag"), _block(Statement(Return(b"1"))))
        expected = b"proc route { host port tag } {\n    return 1\n}\n"
        assert format_ast(tree) == expected

    def test_no_parameters(self) -> None:
        tree = Procedure(b"noop", (), Block())
        assert format_ast(tree) == b"proc noop { } {\n}\n"


# =============================================================================
# Conditionals
# =============================================================================


class TestIf:
    def test_if(self) -> None:
        tree = If(b"[HTTP::host] eq \"a\"", _block(Statement(Pool(b"a"))))
        expected = b'if { [HTTP::host] eq "a" } {\n    pool a\n}\n'
        assert format_ast(tree) == expected

    def test_if_else(self) -> None:
        tree = IfElse(
            condition=b"$x",
            body_if_true=_block(Statement(Pool(b"a"))),
            body_if_false=_block(Statement(Pool(b"b"))),
        )
        expected = b"if { $x } {\n    pool a\n}\nelse {\n    pool b\n}\n"
        assert format_ast(tree) == expected

    def test_if_else_empty_false_branch(self) -> None:
        tree = IfElse(b"$x", _block(Statement(Pool(b"a"))), Block())
        assert format_ast(tree) == b"if { $x } {\n    pool a\n}\nelse {\n}\n"


class TestIfElseIf:
    def test_keyword_selection(self) -> None:
        tree = IfElseIf(
            branches=(
                Branch(b"$a", _block(Statement(Pool(b"a")))),
                Branch(b"$b", _block(Statement(Pool(b"b")))),
                Branch(b"$c", _block(Statement(Pool(b"c")))),
            ),
            body_if_false=_block(Statement(Pool(b"d"))),
        )
        expected = (
            b"if { $a } {\n    pool a\n}\n"
            b"elseif { $b } {\n    pool b\n}\n"
            b"elseif { $c } {\n    pool c\n}\n"
            b"else {\n    pool d\n}\n"
        )
        assert format_ast(tree) == expected

    def test_single_branch_still_has_else(self) -> None:
        tree = IfElseIf((Branch(b"$a", _block(Statement(Pool(b"a")))),), Block())
        assert format_ast(tree) == b"if { $a } {\n    pool a\n}\nelse {\n}\n"

    def test_no_branches_is_rejected(self) -> None:
        with pytest.raises(FormatError, match="IfElseIf"):
            format_ast(IfElseIf((), Block()))


# =============================================================================
# Switch
# =============================================================================


class TestSwitch:
    def test_fallthrough_and_body(self) -> None:
        tree = Switch(
            condition=b"$x",
            cases=(
                Case(b"1"),
                Case(b"2", _block(Statement(Pool(b"p1")))),
            ),
        )
        expected = b"switch $x {\n    1 -\n    2 {\n        pool p1\n    }\n}\n"
        assert format_ast(tree) == expected

    def test_cases_keep_declared_order(self) -> None:
        tree = Switch(
            b"$x",
            (Case(b"zeta", Block()), Case(b"alpha"), Case(b"default", Block())),
        )
        out = format_ast(tree).decode()
        assert out.index("zeta") < out.index("alpha") < out.index("default")

    def test_empty_switch(self) -> None:
        assert format_ast(Switch(b"$x", ())) == b"switch $x {\n}\n"

    def test_fallthrough_has_no_nested_block(self) -> None:
        out = format_ast(Switch(b"$x", (Case(b"a"),)))
        assert out == b"switch $x {\n    a -\n}\n"


# =============================================================================
# Newline handling
# =============================================================================


class TestNewlines:
    @pytest.mark.parametrize(("run", "blank_lines"), [(0, 0), (1, 1), (2, 2), (3, 2), (5, 2)])
    def test_blank_line_runs_are_capped(self, run: int, blank_lines: int) -> None:
        tree = _block(_set(b"a", b"1"), *[Newline()] * run, _set(b"b", b"2"))
        assert format_ast(tree) == b"set a 1\n" + b"\n" * blank_lines + b"set b 2\n"

    def test_counter_resets_after_other_nodes(self) -> None:
        tree = _block(
            Newline(), Newline(), Newline(), Comment(b"c"), Newline(), Newline(), Newline()
        )
        assert format_ast(tree) == b"\n\n# c\n\n\n"

    def test_newline_is_not_indented(self) -> None:
        tree = If(b"$x", _block(_set(b"a", b"1"), Newline(), _set(b"b", b"2")))
        assert format_ast(tree) == b"if { $x } {\n    set a 1\n\n    set b 2\n}\n"

    def test_custom_limit(self) -> None:
        tree = _block(*[Newline()] * 4)
        assert format_ast(tree, config=FormatConfig(max_blank_lines=1)) == b"\n"
        assert format_ast(tree, config=FormatConfig(max_blank_lines=0)) == b""


# =============================================================================
# Nesting and configuration
# =============================================================================


class TestNesting:
    def test_deep_nesting(self) -> None:
        tree = Procedure(
            b"p",
            (b"a",),
            _block(
                Comment(b"dispatch"),
                Switch(
                    b"$a",
                    (
                        Case(
                            b"x",
                            _block(
                                IfElse(
                                    b"$b",
                                    _block(Statement(Node(b"10.0.0.1", b"80"))),
                                    _block(Statement(Snat(b"10.0.0.2", b"0"))),
                                )
                            ),
                        ),
                    ),
                ),
            ),
        )
        expected = (
            b"proc p { a } {\n"
            b"    # dispatch\n"
            b"    switch $a {\n"
            b"        x {\n"
            b"            if { $b } {\n"
            b"                node 10.0.0.1 80\n"
            b"            }\n"
            b"            else {\n"
            b"                snat 10.0.0.2 0\n"
            b"            }\n"
            b"        }\n"
            b"    }\n"
            b"}\n"
        )
        assert format_ast(tree) == expected

    def test_custom_indent(self) -> None:
        tree = If(b"$x", _block(Statement(Pool(b"p"))))
        assert format_ast(tree, config=FormatConfig(indent=b"\t")) == b"if { $x } {\n\tpool p\n}\n"

    def test_active_config_is_used(self) -> None:
        tree = If(b"$x", _block(Statement(Pool(b"p"))))
        with format_config_context(FormatConfig(indent=b"  ")):
            out = format_ast(tree)
        assert out == b"if { $x } {\n  pool p\n}\n"


class TestFormatterInstance:
    def test_reusable_and_deterministic(self) -> None:
        tree = _block(If(b"$x", _block(_set(b"a", b"1"))), Newline(), Newline(), Newline())
        formatter = Formatter()
        assert formatter.format(tree) == formatter.format(tree)

    def test_state_does_not_leak_between_calls(self) -> None:
        formatter = Formatter()
        formatter.format(_block(Newline(), Newline()))
        # A fresh pass starts with an empty blank-line run
        assert formatter.format(_block(Newline(), Newline())) == b"\n\n"

    def test_config_captured_at_construction(self) -> None:
        with format_config_context(FormatConfig(indent=b"\t")):
            formatter = Formatter()
        assert formatter.config.indent == b"\t"

    def test_unknown_node_is_rejected(self) -> None:
        with pytest.raises(FormatError, match="not a tree node"):
            format_ast(_block("set x 1"))  # type: ignore[arg-type]

    def test_unknown_statement_kind_is_rejected(self) -> None:
        with pytest.raises(FormatError, match="not a statement kind"):
            format_ast(Statement(Comment(b"x")))  # type: ignore[arg-type]


class TestThreadSafety:
    def test_shared_formatter_across_threads(self) -> None:
        from concurrent.futures import ThreadPoolExecutor

        formatter = Formatter()
        trees = [
            Procedure(b"p%d" % i, (b"a",), _block(_set(b"x", b"%d" % i), Newline(), Newline()))
            for i in range(50)
        ]
        expected = [formatter.format(tree) for tree in trees]

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(formatter.format, trees))

        assert results == expected
