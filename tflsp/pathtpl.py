"""Small path templates with function calls such as ``{{ pid }}``."""

from __future__ import annotations

import os
import re
import time
from typing import Any, Callable

_ACTION = re.compile(r"\{\{(-[ \t\r\n])?(.*?)([ \t\r\n]-)?\}\}", re.DOTALL)
_IDENT = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


class TemplateError(ValueError):
    """Raised when a path template cannot be parsed or executed."""


def _format(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class TemplatedPath:
    """A named template whose actions call registered functions."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._funcs: dict[str, Callable[[], Any]] = {}
        self._nodes: list[tuple[bool, str]] = []

    def funcs(self, func_map: dict[str, Callable[[], Any]]) -> "TemplatedPath":
        """Register functions usable in actions; returns the template."""
        self._funcs.update(func_map)
        return self

    def parse(self, text: str) -> "TemplatedPath":
        """Parse template text; returns the template."""
        nodes: list[tuple[bool, str]] = []
        pos = 0
        trim_next = False
        for match in _ACTION.finditer(text):
            literal = text[pos:match.start()]
            if trim_next:
                literal = literal.lstrip()
            if match.group(1):
                literal = literal.rstrip()
            if "{{" in literal:
                raise TemplateError(f"template: {self.name}: unclosed action")
            nodes.append((False, literal))
            body = match.group(2).strip()
            if body.startswith("/*") and body.endswith("*/"):
                pass
            elif not body:
                raise TemplateError(f"template: {self.name}: missing value for command")
            elif not _IDENT.fullmatch(body):
                raise TemplateError(f"template: {self.name}: unsupported action {body!r}")
            elif body not in self._funcs:
                raise TemplateError(
                    f'template: {self.name}: function "{body}" not defined'
                )
            else:
                nodes.append((True, body))
            trim_next = bool(match.group(3))
            pos = match.end()
        literal = text[pos:]
        if trim_next:
            literal = literal.lstrip()
        if "{{" in literal:
            raise TemplateError(f"template: {self.name}: unclosed action")
        nodes.append((False, literal))
        self._nodes = nodes
        return self

    def execute(self, data: Any = None) -> str:
        """Render the parsed template to a string."""
        parts = []
        for is_call, value in self._nodes:
            if is_call:
                try:
                    parts.append(_format(self._funcs[value]()))
                except Exception as exc:
                    raise TemplateError(
                        f"template: {self.name}: error calling {value}: {exc}"
                    ) from exc
            else:
                parts.append(value)
        return "".join(parts)


def new_path(name: str) -> TemplatedPath:
    """Create a template with the ``timestamp``, ``pid`` and ``ppid`` functions."""
    stamp = int(time.time())
    return TemplatedPath(name).funcs(
        {"timestamp": lambda: stamp, "pid": os.getpid, "ppid": os.getppid}
    )


def parse_raw_path(name: str, raw_path: str) -> str:
    """Parse and render a raw templated path."""
    return new_path(name).parse(raw_path).execute(None)