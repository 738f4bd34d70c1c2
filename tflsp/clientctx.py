"""Per-context storage of the client's capabilities and name."""

from __future__ import annotations

import contextlib
import contextvars
from dataclasses import dataclass
from typing import Any, Iterator, Optional


class ClientContextError(LookupError):
    """Raised when client data is used outside of a context holding it."""


@dataclass
class _Slot:
    value: Any


_caps: contextvars.ContextVar[_Slot] = contextvars.ContextVar("client_capabilities")
_name: contextvars.ContextVar[_Slot] = contextvars.ContextVar("client_name")


@contextlib.contextmanager
def _holding(var: contextvars.ContextVar[_Slot], value: Any) -> Iterator[None]:
    token = var.set(_Slot(value))
    try:
        yield
    finally:
        var.reset(token)


def with_client_capabilities(caps: Any) -> contextlib.AbstractContextManager[None]:
    """Context in which the client capabilities can be read and replaced."""
    return _holding(_caps, caps)


def set_client_capabilities(caps: Any) -> None:
    """Replace the capabilities held by the current context."""
    slot = _caps.get(None)
    if slot is None:
        raise ClientContextError("client capabilities not found")
    slot.value = caps


def client_capabilities() -> Any:
    """The capabilities held by the current context."""
    slot = _caps.get(None)
    if slot is None:
        raise ClientContextError("client capabilities not found")
    return slot.value


def with_client_name(name: str = "") -> contextlib.AbstractContextManager[None]:
    """Context in which the client name can be read and replaced."""
    return _holding(_name, name)


def client_name() -> Optional[str]:
    """The client name, or None outside of a context holding one."""
    slot = _name.get(None)
    return None if slot is None else slot.value


def set_client_name(name: str) -> None:
    """Replace the client name held by the current context."""
    slot = _name.get(None)
    if slot is None:
        raise ClientContextError("missing context: client name")
    slot.value = name