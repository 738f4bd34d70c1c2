"""Semantic tokens: legends, client capabilities and the LSP wire encoding."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Sequence, Union

from .hclrange import Range

_UINT32 = 0xFFFFFFFF


class SemanticTokenType(str, enum.Enum):
    """Kinds of tokens found in HCL source."""

    BLOCK_TYPE = "hcl-blockType"
    BLOCK_LABEL = "hcl-blockLabel"
    ATTR_NAME = "hcl-attrName"
    BOOL = "hcl-bool"
    NUMBER = "hcl-number"
    STRING = "hcl-string"
    OBJECT_KEY = "hcl-objectKey"
    MAP_KEY = "hcl-mapKey"
    KEYWORD = "hcl-keyword"
    TRAVERSAL_STEP = "hcl-traversalStep"


class SemanticTokenModifier(str, enum.Enum):
    """Modifiers attached to HCL tokens."""

    DEPENDENT = "hcl-dependent"
    DEPRECATED = "hcl-deprecated"


# LSP token types in use, all registered by common clients by default.
SERVER_TOKEN_TYPES = (
    "type",
    "string",
    "property",
    "keyword",
    "number",
    "parameter",
    "variable",
)
SERVER_TOKEN_MODIFIERS = (
    "deprecated",
    "modification",
)

_TYPE_MAP = {
    SemanticTokenType.BLOCK_TYPE: "type",
    SemanticTokenType.BLOCK_LABEL: "string",
    SemanticTokenType.ATTR_NAME: "property",
    SemanticTokenType.BOOL: "keyword",
    SemanticTokenType.NUMBER: "number",
    SemanticTokenType.STRING: "string",
    SemanticTokenType.OBJECT_KEY: "parameter",
    SemanticTokenType.MAP_KEY: "parameter",
    SemanticTokenType.KEYWORD: "variable",
    SemanticTokenType.TRAVERSAL_STEP: "variable",
}

_MODIFIER_MAP = {
    SemanticTokenModifier.DEPENDENT: "modification",
    SemanticTokenModifier.DEPRECATED: "deprecated",
}


@dataclass(frozen=True)
class SemanticToken:
    """A token of HCL source with its kind and modifiers."""

    type: SemanticTokenType
    range: Range = field(default_factory=Range)
    modifiers: tuple[SemanticTokenModifier, ...] = ()


@dataclass
class SemanticTokensCapabilities:
    """What a client supports for semantic tokens."""

    token_types: list[str] = field(default_factory=list)
    token_modifiers: list[str] = field(default_factory=list)
    full: Union[bool, dict[str, Any], None] = None

    def full_request(self) -> bool:
        """Whether the client can request tokens for a whole document."""
        if isinstance(self.full, bool):
            return self.full
        return isinstance(self.full, dict)


def token_types_legend(client_supported: Iterable[str]) -> list[str]:
    """The server's token types that the client supports, in server order."""
    supported = set(client_supported)
    return [t for t in SERVER_TOKEN_TYPES if t in supported]


def token_modifiers_legend(client_supported: Iterable[str]) -> list[str]:
    """The server's token modifiers that the client supports, in server order."""
    supported = set(client_supported)
    return [m for m in SERVER_TOKEN_MODIFIERS if m in supported]


def bit_mask(legend: Sequence[str], declared_modifiers: Iterable[str]) -> int:
    """Bit i is set when legend[i] is among the declared modifiers."""
    declared = set(declared_modifiers)
    mask = 0
    for i, modifier in enumerate(legend):
        if modifier in declared:
            mask |= 1 << i
    return mask


def _line_length(line: Union[bytes, str]) -> int:
    if isinstance(line, str):
        line = line.encode("utf-8")
    return len(line.rstrip(b"\n\r"))


@dataclass
class TokenEncoder:
    """Encodes tokens as the relative integer sequence LSP expects.

    ``lines`` holds the document's lines, line endings included.
    """

    lines: Sequence[Union[bytes, str]]
    tokens: Sequence[SemanticToken]
    client_caps: SemanticTokensCapabilities

    def encode(self) -> list[int]:
        """Five integers per token (or per line of a multi-line token)."""
        data: list[int] = []
        previous: Optional[SemanticToken] = None
        for token in self.tokens:
            data.extend(self._encode_token(token, previous))
            previous = token
        return data

    def _encode_token(
        self, token: SemanticToken, previous: Optional[SemanticToken]
    ) -> list[int]:
        lsp_type = _TYPE_MAP.get(token.type)
        if lsp_type is None or lsp_type not in self.client_caps.token_types:
            return []

        type_index = token_types_legend(self.client_caps.token_types).index(lsp_type)

        modifiers = [
            _MODIFIER_MAP[m]
            for m in token.modifiers
            if m in _MODIFIER_MAP
            and _MODIFIER_MAP[m] in self.client_caps.token_modifiers
        ]
        mask = bit_mask(
            token_modifiers_legend(self.client_caps.token_modifiers), modifiers
        )

        rng = token.range
        previous_line = 0
        previous_start_char = 0
        if previous is not None:
            previous_line = previous.range.end.line - 1
            if rng.end.line - 1 == previous_line:
                previous_start_char = previous.range.start.column - 1

        # Clients are assumed not to support multi-line tokens.
        if rng.end.line == rng.start.line:
            return [
                v & _UINT32
                for v in (
                    rng.start.line - 1 - previous_line,
                    rng.start.column - 1 - previous_start_char,
                    rng.end.byte - rng.start.byte,
                    type_index,
                    mask,
                )
            ]

        data: list[int] = []
        for token_line in range(rng.start.line - 1, rng.end.line):
            delta_start_char = 0
            if token_line == rng.start.line - 1:
                delta_start_char = rng.start.column - 1 - previous_start_char
            if token_line == rng.end.line - 1:
                length = rng.end.column - 1
            else:
                length = _line_length(self.lines[token_line])
            data.extend(
                v & _UINT32
                for v in (
                    token_line - previous_line,
                    delta_start_char,
                    length,
                    type_index,
                    mask,
                )
            )
            previous_line = token_line
        return data