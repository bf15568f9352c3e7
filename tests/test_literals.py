"""Тесты таблицы литералов и форматтера выражений по умолчанию."""

import pytest

from surfmt.expression import ExpressionSyntaxError, format_python_expression
from surfmt.literals import literal_from_bare, literal_from_code, render_literal
from surfmt.tree import LiteralValue


class TestLiteralFromCode:

    @pytest.mark.parametrize("code, expected", [
        (' "hello" ', "hello"),
        ("'hello'", "hello"),
        ("123", 123),
        (" true ", True),
        ("false", False),
        ("True", True),
        ("False", False),
    ])
    def test_literals(self, code, expected):
        literal = literal_from_code(code)

        assert literal == LiteralValue(expected)
        assert type(literal.value) is type(expected)

    @pytest.mark.parametrize("code", [
        "[1, 2]",
        "foo",
        "1.5",
        "-1",
        "None",
        "'say \"hi\"'",
        "'a\\nb'",
        "'{{ x }}'",
        "'a\\tb'",
        "'bell\\x07'",
        "b'bytes'",
        "1 +",
    ])
    def test_not_literals(self, code):
        assert literal_from_code(code) is None


class TestLiteralFromBare:

    def test_bare_values(self):
        assert literal_from_bare("true") == LiteralValue(True)
        assert literal_from_bare("false") == LiteralValue(False)
        assert literal_from_bare("42") == LiteralValue(42)
        assert literal_from_bare("0") == LiteralValue(0)

    def test_other_bare_values(self):
        assert literal_from_bare("007") is None
        assert literal_from_bare("/path") is None
        assert literal_from_bare("True") is None


class TestRenderLiteral:

    def test_shorthand_for_true(self):
        assert render_literal("secure", LiteralValue(True)) == "secure"

    def test_explicit_values(self):
        assert render_literal("secure", LiteralValue(False)) == "secure=false"
        assert render_literal("n", LiteralValue(0)) == "n=0"
        assert render_literal("s", LiteralValue("")) == 's=""'
        assert render_literal("s", LiteralValue("a b")) == 's="a b"'


class TestPythonExpressionFormatter:

    def test_normalises_spacing(self):
        assert format_python_expression("[1,2,3]") == "[1, 2, 3]"
        assert format_python_expression("  a+b*c ") == "a + b * c"

    def test_multiline_input(self):
        assert format_python_expression("[\n  1,\n  2\n]") == "[1, 2]"

    def test_idempotent(self):
        once = format_python_expression("{ 'one':1,'two' : [x for x in y] }")

        assert format_python_expression(once) == once

    def test_comment_passes_through(self):
        assert format_python_expression("  # Some comment ") == "# Some comment"

    @pytest.mark.parametrize("code", ["", "   ", "1 +", "a b", ")"])
    def test_syntax_errors(self, code):
        with pytest.raises(ExpressionSyntaxError) as exc:
            format_python_expression(code)
        assert exc.value.code == code
