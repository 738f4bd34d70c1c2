import pytest

from tflsp.hclnode import (
    HclNode,
    KeyValueFormat,
    Token,
    TokenType,
    build_hcl_node,
    hcl_node_arrays_of_pos,
)
from tflsp.hclrange import Pos, Range, contains_pos

T = TokenType


def _tokens(*items):
    """Build positioned tokens; a bare string is whitespace between tokens."""
    line, column, byte = 1, 1, 0
    result = []
    for item in items:
        if isinstance(item, str):
            kind, text = None, item
        else:
            kind, text = item
        start = Pos(line, column, byte)
        for ch in text:
            if ch == "\n":
                line, column = line + 1, 1
            else:
                column += 1
        byte += len(text.encode())
        if kind is not None:
            result.append(Token(kind, text, Range("t.hcl", start, Pos(line, column, byte))))
    return result


def _object_tokens():
    # {\n  a = "x"\n}
    return _tokens(
        (T.OBRACE, "{"), (T.NEWLINE, "\n"), "  ",
        (T.IDENT, "a"), " ", (T.EQUAL, "="), " ",
        (T.OQUOTE, '"'), (T.QUOTED_LIT, "x"), (T.CQUOTE, '"'),
        (T.NEWLINE, "\n"), (T.CBRACE, "}"),
    )


def _array_tokens():
    # {\n  a = [1, 2]\n}
    return _tokens(
        (T.OBRACE, "{"), (T.NEWLINE, "\n"), "  ",
        (T.IDENT, "a"), " ", (T.EQUAL, "="), " ",
        (T.OBRACK, "["), (T.NUMBER_LIT, "1"), (T.COMMA, ","), " ",
        (T.NUMBER_LIT, "2"), (T.CBRACK, "]"),
        (T.NEWLINE, "\n"), (T.CBRACE, "}"),
    )


def test_empty_tokens_give_empty_root():
    root = build_hcl_node([])
    assert root.children == {}
    assert root.key == ""


def test_object_attribute_value():
    root = build_hcl_node(_object_tokens())
    body = root.children["dummy"]
    attr = body.children["a"]
    assert attr.value == '"x"'
    assert attr.children is None
    assert body.key_value_format == KeyValueFormat.KEY_EQUAL_VALUE


def test_object_ranges_cover_children():
    root = build_hcl_node(_object_tokens())
    body = root.children["dummy"]
    attr = body.children["a"]
    body_range = body.get_range()
    attr_range = attr.get_range()
    assert contains_pos(body_range, attr_range.start)
    assert contains_pos(body_range, attr_range.end)
    assert contains_pos(root.get_range(), body_range.end)


def test_quoted_key_with_colon():
    tokens = _tokens(
        (T.OBRACE, "{"), (T.OQUOTE, '"'), (T.QUOTED_LIT, "a"), (T.CQUOTE, '"'),
        (T.COLON, ":"), " ", (T.NUMBER_LIT, "1"), (T.CBRACE, "}"),
    )
    root = build_hcl_node(tokens)
    body = root.children["dummy"]
    assert body.key_value_format == KeyValueFormat.QUOTED_KEY_COLON_VALUE
    assert body.children["a"].value == "1"


def test_quoted_key_with_equal():
    tokens = _tokens(
        (T.OBRACE, "{"), (T.OQUOTE, '"'), (T.QUOTED_LIT, "a"), (T.CQUOTE, '"'),
        " ", (T.EQUAL, "="), " ", (T.NUMBER_LIT, "1"), (T.NEWLINE, "\n"),
        (T.CBRACE, "}"),
    )
    body = build_hcl_node(tokens).children["dummy"]
    assert body.key_value_format == KeyValueFormat.QUOTED_KEY_EQUAL_VALUE
    assert body.children["a"].value == "1"


def test_array_elements():
    root = build_hcl_node(_array_tokens())
    body = root.children["dummy"]
    array = body.children["a"]
    assert set(array.children) == {"a.0", "a.1"}
    assert array.children["a.0"].value == "1"
    assert array.children["a.1"].value == "2"
    assert array.is_value_array()
    assert not array.is_value_map()
    assert body.is_value_map()
    assert not body.is_value_array()


def test_leaf_is_neither_array_nor_map():
    root = build_hcl_node(_object_tokens())
    leaf = root.children["dummy"].children["a"]
    assert not leaf.is_value_array()
    assert not leaf.is_value_map()


def test_index_expression_stays_in_value():
    tokens = _tokens(
        (T.OBRACE, "{"), (T.NEWLINE, "\n"),
        (T.IDENT, "a"), " ", (T.EQUAL, "="), " ",
        (T.IDENT, "foo"), (T.OBRACK, "["), (T.NUMBER_LIT, "0"), (T.CBRACK, "]"),
        (T.NEWLINE, "\n"), (T.CBRACE, "}"),
    )
    attr = build_hcl_node(tokens).children["dummy"].children["a"]
    assert attr.value == "foo[0]"
    assert attr.children is None


def test_comment_with_newline_ends_attribute():
    tokens = _tokens(
        (T.OBRACE, "{"), " ", (T.IDENT, "a"), " ", (T.EQUAL, "="), " ",
        (T.NUMBER_LIT, "1"), " ", (T.COMMENT, "# note\n"),
        (T.IDENT, "b"), " ", (T.EQUAL, "="), " ", (T.NUMBER_LIT, "2"),
        (T.NEWLINE, "\n"), (T.CBRACE, "}"),
    )
    body = build_hcl_node(tokens).children["dummy"]
    assert body.children["a"].value == "1"
    assert body.children["b"].value == "2"


def test_missing_value_gets_range_after_equal():
    tokens = _tokens(
        (T.OBRACE, "{"), (T.NEWLINE, "\n"),
        (T.IDENT, "a"), " ", (T.EQUAL, "="), (T.NEWLINE, "\n"),
        (T.CBRACE, "}"),
    )
    attr = build_hcl_node(tokens).children["dummy"].children["a"]
    assert attr.value is None
    equal_end = attr.equal_range.end
    assert attr.value_range.start == Pos(equal_end.line, equal_end.column + 1, equal_end.byte)
    assert attr.value_range.end.line == equal_end.line + 1
    assert attr.value_range.end.byte == equal_end.byte + 1


@pytest.mark.parametrize(
    "kinds",
    [
        [(T.CBRACE, "}")],
        [(T.CBRACE, "}"), (T.CBRACE, "}")],
        [(T.CBRACK, "]"), (T.IDENT, "a")],
    ],
)
def test_unbalanced_closers_give_none(kinds):
    assert build_hcl_node(_tokens(*kinds)) is None


def test_arrays_of_pos_inside_element():
    root = build_hcl_node(_array_tokens())
    second = root.children["dummy"].children["a"].children["a.1"]
    chain = hcl_node_arrays_of_pos(root, second.value_range.start)
    assert [node.key for node in chain] == ["dummy", "a", "a.1"]
    assert chain[-1] is second


def test_arrays_of_pos_outside_and_none():
    root = build_hcl_node(_array_tokens())
    assert hcl_node_arrays_of_pos(root, Pos(line=40, column=1)) == []
    assert hcl_node_arrays_of_pos(None, Pos(line=1, column=1)) == []


def test_get_range_spans_key_and_value():
    key = Range("f", Pos(1, 1, 0), Pos(1, 2, 1))
    equal = Range("f", Pos(1, 3, 2), Pos(1, 4, 3))
    value = Range("f", Pos(1, 5, 4), Pos(1, 6, 5))
    node = HclNode(key="a", value="1", key_range=key, equal_range=equal, value_range=value)
    span = node.get_range()
    assert span.start == key.start
    assert span.end == value.end