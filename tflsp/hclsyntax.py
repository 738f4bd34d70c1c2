"""Minimal HCL syntax tree and lookups over it."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Optional

from .hclrange import Pos, Range, contains_pos


@dataclass
class Expression:
    """An expression with its evaluated value (None means null)."""

    value: Any = None
    range: Range = field(default_factory=Range)
    known: bool = True
    has_errors: bool = False


@dataclass
class Attribute:
    name: str
    expr: Expression
    src_range: Range = field(default_factory=Range)


@dataclass
class Body:
    attributes: dict[str, Attribute] = field(default_factory=dict)
    blocks: list["Block"] = field(default_factory=list)


@dataclass
class Block:
    type: str
    labels: list[str] = field(default_factory=list)
    body: Body = field(default_factory=Body)
    range: Range = field(default_factory=Range)


def to_literal(expression: Expression) -> Optional[str]:
    """The expression's string value, if it is a known, non-null string."""
    if expression.has_errors or not expression.known:
        return None
    return expression.value if isinstance(expression.value, str) else None


def to_literal_boolean(expression: Expression) -> Optional[bool]:
    """The expression's bool value, if it is a known, non-null bool."""
    if expression.has_errors or not expression.known:
        return None
    return expression.value if isinstance(expression.value, bool) else None


def block_at_pos(body: Body, pos: Pos) -> tuple[Optional[Block], str]:
    """The innermost block at pos and its dotted path of unlabelled block types."""
    for block in body.blocks:
        block_type = ""
        if block.type not in ("data", "resource") and not block.labels:
            block_type = block.type
        if contains_pos(block.range, pos):
            inner, inner_name = block_at_pos(block.body, pos)
            if inner is not None:
                if not block_type:
                    return inner, inner_name
                return inner, f"{block_type}.{inner_name}"
            return block, block_type
    return None, ""


def attribute_at_pos(block: Optional[Block], pos: Pos) -> tuple[Optional[Attribute], str]:
    """The attribute at pos within block and its dotted path."""
    if block is None:
        return None, ""
    for attr in block.body.attributes.values():
        if contains_pos(attr.src_range, pos) or contains_pos(attr.expr.range, pos):
            return attr, attr.name
    for nested in block.body.blocks:
        if contains_pos(nested.range, pos):
            attr, name = attribute_at_pos(nested, pos)
            if attr is not None:
                return attr, f"{nested.type}.{name}"
    return None, ""


def attribute_with_name(block: Optional[Block], name: str) -> Optional[Attribute]:
    if block is None:
        return None
    return block.body.attributes.get(name)


def block_attribute_literal_value(block: Optional[Block], name: str) -> Optional[str]:
    attr = attribute_with_name(block, name)
    return None if attr is None else to_literal(attr.expr)


_URL_RE = re.compile(rb'url[\t\n\f\r ]*=[\t\n\f\r ]*"(.+)"')


def _url_value_from_source(data: bytes, rng: Range) -> str:
    if rng.end.byte > len(data):
        return ""
    match = _URL_RE.search(data[rng.start.byte:rng.end.byte])
    return match.group(1).decode("utf-8", "replace") if match else ""


def extract_msgraph_url(block: Block, data: bytes) -> str:
    """The block's url, from its source text or its literal url attribute."""
    url = _url_value_from_source(data, block.range)
    if not url:
        literal = block_attribute_literal_value(block, "url")
        if literal is None:
            return ""
        url = literal
    return url.replace("${", "{")