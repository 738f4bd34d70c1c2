"""Source positions and ranges."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Pos:
    """A position: 1-based line and column, 0-based byte offset."""

    line: int = 0
    column: int = 0
    byte: int = 0


@dataclass(frozen=True)
class Range:
    """A span of source between two positions."""

    filename: str = ""
    start: Pos = field(default_factory=Pos)
    end: Pos = field(default_factory=Pos)

    def empty(self) -> bool:
        return self.start.byte == self.end.byte


def contains_pos(rng: Range, pos: Pos) -> bool:
    """Whether pos lies within rng, by line and column, inclusive."""
    after_start = pos.line > rng.start.line or (
        pos.line == rng.start.line and pos.column >= rng.start.column
    )
    before_end = pos.line < rng.end.line or (
        pos.line == rng.end.line and pos.column <= rng.end.column
    )
    return after_start and before_end


def range_over(a: Range, b: Range) -> Range:
    """The smallest range covering both; an empty range is ignored."""
    if a.empty():
        return b
    if b.empty():
        return a
    if a.start.line < b.start.line or (
        a.start.line == b.start.line and a.start.column < b.start.column
    ):
        start = a.start
    else:
        start = b.start
    if a.end.line > b.end.line or (
        a.end.line == b.end.line and a.end.column > b.end.column
    ):
        end = a.end
    else:
        end = b.end
    return Range(a.filename, start, end)