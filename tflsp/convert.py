"""Conversion of HCL-side data into LSP wire structures (plain dicts)."""

from __future__ import annotations

import enum
import json
import os
import pathlib
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Sequence, Union

from .hclrange import Pos, Range
from .mdplain import clean

_UINT32 = 0xFFFFFFFF

DIAGNOSTIC_SEVERITY_ERROR = 1
DIAGNOSTIC_SEVERITY_WARNING = 2


class Severity(enum.Enum):
    """Severity of an HCL diagnostic."""

    INVALID = "invalid"
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class HclDiagnostic:
    """A diagnostic reported while reading HCL."""

    severity: Severity
    summary: str = ""
    detail: str = ""
    subject: Optional[Range] = None


@dataclass(frozen=True)
class Link:
    """A link found in a document."""

    uri: str
    range: Range = field(default_factory=Range)
    tooltip: str = ""


class MarkupKind(str, enum.Enum):
    PLAINTEXT = "plaintext"
    MARKDOWN = "markdown"


@dataclass(frozen=True)
class MarkupContent:
    """Text in plain or markdown form."""

    kind: MarkupKind = MarkupKind.PLAINTEXT
    value: str = ""


@dataclass(frozen=True)
class HoverData:
    """Content shown on hover and the range it applies to."""

    content: MarkupContent
    range: Range = field(default_factory=Range)


@dataclass(frozen=True)
class ReferenceOrigin:
    """A place referring to something; path is the module directory."""

    path: str
    range: Range = field(default_factory=Range)


@dataclass(frozen=True)
class ReferenceTarget:
    """Something referred to; path is the module directory."""

    path: str
    range: Range = field(default_factory=Range)
    origin_range: Range = field(default_factory=Range)
    def_range: Optional[Range] = None


@dataclass(frozen=True)
class Command:
    """A command the client can run, with JSON-serialisable arguments."""

    title: str
    id: str
    arguments: Sequence[Any] = ()


def _file_uri(directory: str, filename: str) -> str:
    return pathlib.Path(os.path.abspath(os.path.join(directory, filename))).as_uri()


def _zero_range() -> dict[str, Any]:
    return {
        "start": {"line": 0, "character": 0},
        "end": {"line": 0, "character": 0},
    }


def hcl_pos_to_lsp(pos: Pos) -> dict[str, int]:
    """A 1-based HCL position as a 0-based LSP position."""
    return {
        "line": (pos.line - 1) & _UINT32,
        "character": (pos.column - 1) & _UINT32,
    }


def hcl_range_to_lsp(rng: Range) -> dict[str, Any]:
    return {"start": hcl_pos_to_lsp(rng.start), "end": hcl_pos_to_lsp(rng.end)}


def lsp_pos_to_hcl(pos: dict[str, int]) -> Pos:
    """A 0-based LSP position as a 1-based HCL position (byte unknown)."""
    return Pos(line=pos["line"] + 1, column=pos["character"] + 1)


def hcl_severity_to_lsp(severity: Severity) -> int:
    """The LSP severity number; raises ValueError for an invalid severity."""
    if severity is Severity.ERROR:
        return DIAGNOSTIC_SEVERITY_ERROR
    if severity is Severity.WARNING:
        return DIAGNOSTIC_SEVERITY_WARNING
    if severity is Severity.INVALID:
        raise ValueError("invalid diagnostic")
    return 0


def hcl_diags_to_lsp(
    diags: Optional[Iterable[HclDiagnostic]], source: str
) -> list[dict[str, Any]]:
    """LSP diagnostics; always a list, even for no input."""
    result = []
    for diag in diags or ():
        message = diag.summary
        if diag.detail:
            message += ": " + diag.detail
        rng = hcl_range_to_lsp(diag.subject) if diag.subject is not None else _zero_range()
        result.append(
            {
                "range": rng,
                "severity": hcl_severity_to_lsp(diag.severity),
                "source": source,
                "message": message,
            }
        )
    return result


def links(links: Iterable[Link], tooltip_support: bool) -> list[dict[str, Any]]:
    """LSP document links; tooltips only when the client supports them."""
    result = []
    for link in links:
        doc_link: dict[str, Any] = {
            "range": hcl_range_to_lsp(link.range),
            "target": link.uri,
        }
        if tooltip_support and link.tooltip:
            doc_link["tooltip"] = link.tooltip
        result.append(doc_link)
    return result


def markup_content(content: MarkupContent, md_supported: bool) -> dict[str, str]:
    """Markdown is passed on if supported, otherwise cleaned to plain text."""
    value = content.value
    kind = MarkupKind.PLAINTEXT
    if content.kind is MarkupKind.MARKDOWN:
        if md_supported:
            kind = MarkupKind.MARKDOWN
        else:
            value = clean(value)
    return {"kind": kind.value, "value": value}


def hover_data(
    data: Optional[HoverData], content_formats: Sequence[str]
) -> Optional[dict[str, Any]]:
    """An LSP hover; markdown is used when the client prefers it."""
    if data is None:
        return None
    md_supported = bool(content_formats) and content_formats[0] == "markdown"
    return {
        "contents": markup_content(data.content, md_supported),
        "range": hcl_range_to_lsp(data.range),
    }


def ref_origins_to_locations(origins: Iterable[ReferenceOrigin]) -> list[dict[str, Any]]:
    return [
        {
            "uri": _file_uri(origin.path, origin.range.filename),
            "range": hcl_range_to_lsp(origin.range),
        }
        for origin in origins
    ]


def ref_targets_to_location_links(
    targets: Iterable[ReferenceTarget], link_support: bool
) -> list[dict[str, Any]]:
    """Location links if the client supports them, otherwise plain locations."""
    result = []
    for target in targets:
        uri = _file_uri(target.path, target.range.filename)
        if link_support:
            selection = (
                hcl_range_to_lsp(target.def_range)
                if target.def_range is not None
                else _zero_range()
            )
            result.append(
                {
                    "originSelectionRange": hcl_range_to_lsp(target.origin_range),
                    "targetUri": uri,
                    "targetRange": hcl_range_to_lsp(target.range),
                    "targetSelectionRange": selection,
                }
            )
        else:
            result.append({"uri": uri, "range": hcl_range_to_lsp(target.range)})
    return result


def command(cmd: Command) -> dict[str, Union[str, list[Any]]]:
    """An LSP command; raises TypeError or ValueError for unserialisable arguments."""
    lsp_cmd: dict[str, Union[str, list[Any]]] = {"title": cmd.title, "command": cmd.id}
    arguments = [json.loads(json.dumps(arg)) for arg in cmd.arguments]
    if arguments:
        lsp_cmd["arguments"] = arguments
    return lsp_cmd