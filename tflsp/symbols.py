"""Conversion of document symbols into LSP symbol structures."""

from __future__ import annotations

import enum
import os
import pathlib
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Union

from .convert import hcl_range_to_lsp
from .hclrange import Range


class SymbolKind(enum.IntEnum):
    """LSP symbol kinds."""

    FILE = 1
    MODULE = 2
    NAMESPACE = 3
    PACKAGE = 4
    CLASS = 5
    METHOD = 6
    PROPERTY = 7
    FIELD = 8
    CONSTRUCTOR = 9
    ENUM = 10
    INTERFACE = 11
    FUNCTION = 12
    VARIABLE = 13
    CONSTANT = 14
    STRING = 15
    NUMBER = 16
    BOOLEAN = 17
    ARRAY = 18
    OBJECT = 19
    KEY = 20
    NULL = 21
    ENUM_MEMBER = 22
    STRUCT = 23
    EVENT = 24
    OPERATOR = 25
    TYPE_PARAMETER = 26


class ExprKind(enum.Enum):
    """What kind of expression an attribute or expression symbol holds."""

    BOOL = "bool"
    STRING = "string"
    NUMBER = "number"
    TRAVERSAL = "traversal"
    TUPLE = "tuple"
    OBJECT = "object"
    OTHER = "other"


@dataclass
class BlockSymbol:
    name: str
    path: str = ""
    range: Range = field(default_factory=Range)
    nested: list["Symbol"] = field(default_factory=list)


@dataclass
class AttributeSymbol:
    name: str
    expr_kind: ExprKind = ExprKind.OTHER
    path: str = ""
    range: Range = field(default_factory=Range)
    nested: list["Symbol"] = field(default_factory=list)


@dataclass
class ExprSymbol:
    name: str
    expr_kind: ExprKind = ExprKind.OTHER
    path: str = ""
    range: Range = field(default_factory=Range)
    nested: list["Symbol"] = field(default_factory=list)


Symbol = Union[BlockSymbol, AttributeSymbol, ExprSymbol]

_EXPR_KINDS = {
    ExprKind.BOOL: SymbolKind.BOOLEAN,
    ExprKind.STRING: SymbolKind.STRING,
    ExprKind.NUMBER: SymbolKind.NUMBER,
    ExprKind.TRAVERSAL: SymbolKind.CONSTANT,
    ExprKind.TUPLE: SymbolKind.ARRAY,
    ExprKind.OBJECT: SymbolKind.STRUCT,
}


def _symbol_kind(symbol: Symbol, supported: Iterable[int]) -> Optional[SymbolKind]:
    if isinstance(symbol, BlockSymbol):
        kind = SymbolKind.CLASS
    else:
        kind = _EXPR_KINDS.get(symbol.expr_kind, SymbolKind.VARIABLE)
    return kind if kind in set(supported) else None


def workspace_symbols(
    symbols: Iterable[Symbol], supported_kinds: Iterable[int]
) -> list[dict[str, Any]]:
    """Symbol information for symbols whose kind the client supports."""
    supported = list(supported_kinds)
    result = []
    for symbol in symbols:
        kind = _symbol_kind(symbol, supported)
        if kind is None:
            continue
        path = os.path.abspath(os.path.join(symbol.path, symbol.range.filename))
        result.append(
            {
                "name": symbol.name,
                "kind": int(kind),
                "location": {
                    "uri": pathlib.Path(path).as_uri(),
                    "range": hcl_range_to_lsp(symbol.range),
                },
            }
        )
    return result


def document_symbols(
    symbols: Iterable[Symbol], supported_kinds: Iterable[int], hierarchical: bool
) -> list[dict[str, Any]]:
    """Document symbols, nested when the client supports a hierarchy."""
    supported = list(supported_kinds)
    result = []
    for symbol in symbols:
        kind = _symbol_kind(symbol, supported)
        if kind is None:
            continue
        rng = hcl_range_to_lsp(symbol.range)
        doc_symbol: dict[str, Any] = {
            "name": symbol.name,
            "kind": int(kind),
            "range": rng,
            "selectionRange": rng,
        }
        if hierarchical:
            doc_symbol["children"] = document_symbols(symbol.nested, supported, True)
        result.append(doc_symbol)
    return result