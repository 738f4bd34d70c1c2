"""Tolerant tree building from HCL object and array tokens.

The builder accepts incomplete input, such as text being typed in an
editor. It warns about unexpected tokens and carries on.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from .hclrange import Pos, Range, contains_pos, range_over

_log = logging.getLogger(__name__)


class TokenType(enum.Enum):
    """Kinds of lexical tokens that the builder tells apart."""

    OBRACE = "{"
    CBRACE = "}"
    OBRACK = "["
    CBRACK = "]"
    OPAREN = "("
    CPAREN = ")"
    OQUOTE = "OQuote"
    CQUOTE = "CQuote"
    OHEREDOC = "OHeredoc"
    CHEREDOC = "CHeredoc"
    TEMPLATE_INTERP = "${"
    TEMPLATE_CONTROL = "%{"
    TEMPLATE_SEQ_END = "TemplateSeqEnd"
    QUOTED_LIT = "QuotedLit"
    STRING_LIT = "StringLit"
    NUMBER_LIT = "NumberLit"
    IDENT = "Ident"
    COMMENT = "Comment"
    NEWLINE = "Newline"
    COMMA = ","
    COLON = ":"
    EQUAL = "="
    DOT = "."
    OPERATOR = "Operator"
    QUESTION = "?"
    ELLIPSIS = "..."
    FAT_ARROW = "=>"
    EOF = "EOF"
    INVALID = "Invalid"


@dataclass(frozen=True)
class Token:
    """A lexical token: its type, its source text and where it lies."""

    type: TokenType
    text: str
    range: Range = field(default_factory=Range)


class KeyValueFormat(enum.IntEnum):
    """How keys and values are written in an object."""

    KEY_EQUAL_VALUE = 0
    QUOTED_KEY_EQUAL_VALUE = 1
    QUOTED_KEY_COLON_VALUE = 2


@dataclass
class HclNode:
    """A key with either a raw value text or child nodes.

    Leaves have ``children`` of None; objects and arrays have a dict.
    Array elements are keyed ``<key>.<index>``.
    """

    key: str = ""
    value: Optional[str] = None
    children: Optional[dict[str, "HclNode"]] = None
    key_range: Range = field(default_factory=Range)
    value_range: Range = field(default_factory=Range)
    equal_range: Range = field(default_factory=Range)
    key_value_format: KeyValueFormat = KeyValueFormat.KEY_EQUAL_VALUE

    def get_range(self) -> Range:
        """The range covering key, separator and value."""
        return range_over(range_over(self.key_range, self.value_range), self.equal_range)

    def _child_nodes(self) -> Iterable["HclNode"]:
        return self.children.values() if self.children else ()

    def is_value_array(self) -> bool:
        """Whether every child is an indexed element of this node."""
        if self.value is not None:
            return False
        prefix = self.key + "."
        return all(child.key.startswith(prefix) for child in self._child_nodes())

    def is_value_map(self) -> bool:
        """Whether no child is an indexed element of this node."""
        if self.value is not None:
            return False
        prefix = self.key + "."
        return not any(child.key.startswith(prefix) for child in self._child_nodes())


def hcl_node_arrays_of_pos(hcl_node: Optional[HclNode], pos: Pos) -> list[HclNode]:
    """The chain of keyed nodes, outermost first, whose ranges contain pos."""
    if hcl_node is None or not contains_pos(hcl_node.get_range(), pos):
        return []
    result = [hcl_node] if hcl_node.key else []
    for child in hcl_node._child_nodes():
        nested = hcl_node_arrays_of_pos(child, pos)
        if nested:
            return result + nested
    return result


@dataclass
class _State:
    node: HclNode
    key: Optional[str] = None
    value: Optional[str] = None
    key_range: Range = field(default_factory=Range)
    value_range: Range = field(default_factory=Range)
    equal_range: Range = field(default_factory=Range)
    index: Optional[int] = None
    expect_key: bool = False
    expect_equal: bool = False

    def current_key(self) -> str:
        key = self.key if self.key is not None else "key_placeholder"
        if self.index is not None:
            return f"{key}.{self.index}"
        return key

    def found_key(self, token: Token) -> None:
        self.key = token.text
        self.key_range = token.range
        self.index = None
        self.value = None
        self.value_range = Range()
        self.equal_range = Range()
        self.expect_key = False

    def append_value(self, token: Token) -> None:
        self.value = token.text if self.value is None else self.value + token.text
        self.value_range = range_over(self.value_range, token.range)

    def leaf(self, with_key_ranges: bool = True) -> HclNode:
        key = self.current_key()
        if with_key_ranges:
            return HclNode(
                key=key,
                value=self.value,
                key_range=self.key_range,
                value_range=self.value_range,
                equal_range=self.equal_range,
            )
        return HclNode(key=key, value=self.value, value_range=self.value_range)

    def end_line(self) -> None:
        if not self.expect_key and self.index is None:
            self.node.children[self.current_key()] = self.leaf()
            self.key = None
            self.value = None
            self.expect_key = True
            self.expect_equal = True


def build_hcl_node(tokens: Iterable[Token]) -> Optional[HclNode]:
    """Build a node tree from tokens; None if the braces cannot be matched."""
    stack = [
        _State(
            node=HclNode(key_value_format=KeyValueFormat.KEY_EQUAL_VALUE, children={}),
            key="dummy",
        )
    ]

    for token in tokens:
        kind = token.type
        if kind is TokenType.COMMENT and not token.text.endswith("\n"):
            continue
        if not stack:
            return None
        state = stack[-1]

        if kind is TokenType.OBRACE:
            key = state.current_key()
            if state.expect_key:
                _log.warning("expect key but got {")
            node = HclNode(
                key=key,
                key_range=state.key_range,
                value_range=token.range,
                equal_range=state.equal_range,
                children={},
                key_value_format=state.node.key_value_format,
            )
            state.node.children[key] = node
            if state.index is None:
                state.expect_key = True
                state.expect_equal = True
            else:
                # an object inside an array: its "{" stands in for the key
                state.expect_key = False
                state.expect_equal = False
                node.key_range = token.range
            stack.append(_State(node=node, expect_key=True, expect_equal=True))

        elif kind is TokenType.CBRACE:
            if not state.expect_key:
                _log.warning("expect value but got }")
                key = state.current_key()
                state.node.children[key] = state.leaf()
            state.node.value_range = range_over(state.node.value_range, token.range)
            stack.pop()

        elif kind is TokenType.OBRACK:
            if state.expect_key:
                _log.warning("expect key but got [")
            if state.value:
                state.append_value(token)
                continue
            key = state.current_key()
            node = HclNode(
                key=key,
                key_range=state.key_range,
                equal_range=state.equal_range,
                value_range=token.range,
                key_value_format=state.node.key_value_format,
                children={},
            )
            state.node.children[key] = node
            state.expect_key = True
            state.expect_equal = True
            stack.append(_State(node=node, key=state.key, index=0))

        elif kind is TokenType.CBRACK:
            if state.value and "[" in state.value:
                state.append_value(token)
                continue
            key = state.current_key()
            if key not in state.node.children:
                _log.warning("expect value but got ]")
                # avoid adding an empty element
                if not state.value_range.empty():
                    state.node.children[key] = state.leaf(with_key_ranges=False)
            state.node.value_range = range_over(state.node.value_range, token.range)
            stack.pop()

        elif kind is TokenType.QUOTED_LIT:
            if state.expect_key:
                state.found_key(token)
                state.node.key_value_format = KeyValueFormat.QUOTED_KEY_EQUAL_VALUE
            else:
                state.append_value(token)

        elif kind is TokenType.IDENT:
            if state.expect_key:
                state.found_key(token)
            else:
                state.append_value(token)

        elif kind in (TokenType.COLON, TokenType.EQUAL):
            if state.expect_equal:
                if state.expect_key:
                    _log.warning("expect key but got %s", token.text)
                    state.expect_key = False
                if kind is TokenType.COLON:
                    state.node.key_value_format = KeyValueFormat.QUOTED_KEY_COLON_VALUE
                state.equal_range = token.range
                state.expect_equal = False
            else:
                state.append_value(token)

        elif kind in (TokenType.NEWLINE, TokenType.COMMENT):
            state.end_line()

        elif kind is TokenType.COMMA:
            if state.expect_key:
                _log.warning("expect key but got ,")
            elif state.index is None:
                _log.warning("unexpected symbol: ,")
            else:
                if state.value is not None:
                    key = state.current_key()
                    state.node.children[key] = state.leaf(with_key_ranges=False)
                state.index += 1
                state.value = None
                state.value_range = Range()

        elif not state.expect_equal:
            state.append_value(token)

    if not stack:
        return None
    root = stack[0].node
    _update_value_range(root)
    _fix_empty_value_range(root)
    return root


def _update_value_range(node: HclNode) -> None:
    for child in node._child_nodes():
        _update_value_range(child)
        node.value_range = range_over(node.value_range, child.get_range())


def _fix_empty_value_range(node: HclNode) -> None:
    if node.children is None:
        if (
            not node.key_range.empty()
            and not node.equal_range.empty()
            and node.value_range.empty()
        ):
            end = node.equal_range.end
            node.value_range = Range(
                start=Pos(line=end.line, column=end.column + 1, byte=end.byte),
                end=Pos(line=end.line + 1, byte=end.byte + 1),
            )
        return
    for child in node.children.values():
        _fix_empty_value_range(child)