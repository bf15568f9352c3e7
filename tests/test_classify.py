"""Тесты классификатора пробелов."""

import pytest

from surfmt import parse
from surfmt.classify import classify
from surfmt.errors import StructuralInputError
from surfmt.syntax import RawElement, RawText
from surfmt.tree import (
    BareValue, Element, Expression, ExpressionValue, LiteralValue, MarkerPosition, StringValue,
    Text, WhitespaceMarker,
)

DOC = WhitespaceMarker(MarkerPosition.DOCUMENT_START)
FIRST = WhitespaceMarker(MarkerPosition.BEFORE_FIRST_CHILD)
BETWEEN = WhitespaceMarker(MarkerPosition.BETWEEN_SIBLINGS)
BETWEEN_BLANK = WhitespaceMarker(MarkerPosition.BETWEEN_SIBLINGS, blank_line=True)
CLOSING = WhitespaceMarker(MarkerPosition.BEFORE_CLOSING_TAG)


def _shape(node):
    """Element → (name, [children]) для компактных сравнений."""
    if isinstance(node, Element):
        return (node.name, [_shape(c) for c in node.children])
    return node


class TestMarkers:

    def test_adds_context_to_whitespace(self):
        tree = parse("<div> <p> Hello\n\nGoodbye </p> </div>\n")

        assert [_shape(n) for n in tree] == [
            DOC,
            ("div", [
                FIRST,
                ("p", [FIRST, Text("Hello"), BETWEEN_BLANK, Text("Goodbye"), CLOSING]),
                CLOSING,
            ]),
        ]

    def test_no_whitespace_no_markers(self):
        tree = parse("<div><p>Hello</p></div>")

        assert [_shape(n) for n in tree] == [DOC, ("div", [("p", [Text("Hello")])])]

    def test_document_start_marker_is_always_first(self):
        assert parse("") == [DOC]
        assert parse("  \n\n ") == [DOC]
        assert parse("\n\n<p></p>\n\n")[0] == DOC
        assert len(parse("\n\n<p></p>\n\n")) == 2

    def test_whitespace_amount_does_not_matter(self):
        a = parse("<div>   \t <p></p>      </div>")
        b = parse("<div> <p></p> </div>")

        assert [_shape(n) for n in a] == [_shape(n) for n in b]

    def test_single_newline_is_not_blank(self):
        tree = parse("<p>a\nb</p>")

        assert tree[1].children == (Text("a"), BETWEEN, Text("b"))

    def test_many_newlines_make_one_blank_marker(self):
        tree = parse("<p>a\n\n\n\n\nb</p>")

        assert tree[1].children == (Text("a"), BETWEEN_BLANK, Text("b"))

    def test_blank_lines_around_children(self):
        tree = parse("<section>\n\n\nHello\n\n\n\n</section>")

        assert tree[1].children == (
            WhitespaceMarker(MarkerPosition.BEFORE_FIRST_CHILD, blank_line=True),
            Text("Hello"),
            WhitespaceMarker(MarkerPosition.BEFORE_CLOSING_TAG, blank_line=True),
        )

    def test_whitespace_only_content(self):
        tree = parse("<p> </p>")

        assert tree[1].children == (CLOSING,)

    def test_top_level_siblings(self):
        tree = parse("<a></a>\n\n\n<b></b><c></c>")

        assert [_shape(n) for n in tree] == [DOC, ("a", []), BETWEEN_BLANK, ("b", []), ("c", [])]


class TestText:

    def test_spaces_inside_text_collapse(self):
        tree = parse("<span>Foo   bar\tbaz</span>")

        assert tree[1].children == (Text("Foo bar baz"),)

    def test_text_is_not_merged_across_newline(self):
        tree = parse("<p>one two\n   three</p>")

        assert tree[1].children == (Text("one two"), BETWEEN, Text("three"))

    def test_non_breaking_space_is_content(self):
        tree = parse("<p>a\u00a0b</p>")

        assert tree[1].children == (Text("a\u00a0b"),)

    def test_text_next_to_elements(self):
        tree = parse("<p>Hello <b>x</b>there</p>")

        assert [_shape(n) for n in tree[1].children] == [Text("Hello"), BETWEEN, ("b", [Text("x")]), Text("there")]

    def test_expression_child(self):
        tree = parse("<p> {{1 + 1}}</p>")

        assert tree[1].children == (FIRST, Expression("1 + 1", 1, 5))


class TestComments:

    def test_comment_on_own_line_is_dropped(self):
        tree = parse("<div>\n  <!-- Some comment -->\n  <p>Hello</p>\n</div>")

        assert [_shape(n) for n in tree[1].children] == [FIRST, ("p", [Text("Hello")]), CLOSING]

    def test_comment_between_words(self):
        assert parse("<p>a <!-- c --> b</p>")[1].children == (Text("a b"),)
        assert parse("<p>a<!-- c -->b</p>")[1].children == (Text("ab"),)

    def test_comment_without_left_whitespace_keeps_right(self):
        tree = parse("<div><!-- c -->\n<p></p></div>")

        assert [_shape(n) for n in tree[1].children] == [FIRST, ("p", [])]

    def test_blank_line_before_comment_is_kept(self):
        tree = parse("<div><p></p>\n\n<!-- c -->\n<p></p></div>")

        assert tree[1].children[1] == BETWEEN_BLANK

    def test_blank_line_after_comment_is_kept(self):
        tree = parse("<div>\n  <!-- c -->\n\n  <p>x</p>\n</div>")

        assert tree[1].children[0] == WhitespaceMarker(MarkerPosition.BEFORE_FIRST_CHILD, blank_line=True)

    def test_comment_between_siblings_keeps_wider_run(self):
        tree = parse("<div><p></p>\n  <!-- c -->\n\n\n  <p></p></div>")

        assert [_shape(n) for n in tree[1].children] == [("p", []), BETWEEN_BLANK, ("p", [])]


class TestSensitive:

    def test_pre_content_is_untouched(self):
        tree = parse("<div> <pre>\n  a   b\n\n\n c </pre> </div>")
        pre = tree[1].children[1]

        assert pre.whitespace_sensitive
        assert pre.children == (Text("\n  a   b\n\n\n c "),)

    def test_macro_component_is_sensitive(self):
        tree = parse("<#Markdown>\n  # Title\n</#Markdown>")

        assert tree[1].whitespace_sensitive
        assert tree[1].children == (Text("\n  # Title\n"),)

    def test_regular_element_is_not_sensitive(self):
        assert not parse("<div></div>")[1].whitespace_sensitive

    def test_empty_sensitive_element(self):
        assert parse("<code></code>")[1].children == ()


class TestAttributes:

    def test_literal_canonicalisation(self):
        tree = parse('<Component foo={{ "hello" }} bar={{123}} secure={{ true }} off=false />')
        values = [(a.name, a.value) for a in tree[1].attributes]

        assert values == [
            ("foo", LiteralValue("hello")),
            ("bar", LiteralValue(123)),
            ("secure", LiteralValue(True)),
            ("off", LiteralValue(False)),
        ]

    def test_non_literal_values(self):
        tree = parse("<Foo list={{[1,2]}} class=\"a b\" href=/x :if={{ true }} flag />")
        values = [(a.name, a.value) for a in tree[1].attributes]

        assert values == [
            ("list", ExpressionValue("[1,2]")),
            ("class", StringValue('"a b"')),
            ("href", BareValue("/x")),
            (":if", ExpressionValue(" true ")),
            ("flag", LiteralValue(True)),
        ]

    def test_attribute_order_is_preserved(self):
        tree = parse("<a z=1 a=2 m=3></a>")

        assert [a.name for a in tree[1].attributes] == ["z", "a", "m"]


class TestPreconditions:

    def test_inconsistent_spans(self):
        source = "<p>x</p>"
        broken = RawElement(name="p", attributes=[], start=0, open_end=3, line=1, column=1)
        broken.children.append(RawText("x", 3, 4))

        with pytest.raises(StructuralInputError):
            classify([broken], source)

    def test_classify_accepts_external_raw_tree(self):
        source = "<p>x</p>"
        element = RawElement(name="p", attributes=[], start=0, open_end=3, line=1, column=1,
                             close_start=4, end=8)

        tree = classify([element], source)

        assert tree[1] == Element("p", children=(Text("x"),), line=1, column=1)
