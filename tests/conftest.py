import ast

import pytest

from surfmt import FormatOptions, format_string
from surfmt.expression import ExpressionSyntaxError


def split_lists(code: str) -> str:
    """
    Заглушка форматтера выражений, которая умеет переносить строки.

    Список из двух и более элементов раскладывается по одному элементу
    на строку, всё остальное печатается через ast.unparse. Как и настоящий
    форматтер, идемпотентна: отступы во входном коде игнорируются.
    """
    try:
        tree = ast.parse(code.strip(), mode="eval")
    except SyntaxError as e:
        raise ExpressionSyntaxError(e.msg, code) from e
    body = tree.body
    if isinstance(body, ast.List) and len(body.elts) >= 2:
        return "[\n" + ",\n".join("  " + ast.unparse(e) for e in body.elts) + "\n]"
    return ast.unparse(tree)


@pytest.fixture
def list_formatter():
    return split_lists


@pytest.fixture
def fmt():
    """fmt(text, line_length=98, formatter=None) → отформатированный текст."""
    def _fmt(text: str, line_length: int = 98, formatter=None) -> str:
        return format_string(text, FormatOptions(line_length=line_length), formatter=formatter)
    return _fmt
