"""Naive conversion of markdown text into plain text."""

import re

_WS = r"[\t\n\f\r ]"

_REPLACEMENTS = [
    # Header underline
    (re.compile(r"\n={2,}"), "\n"),
    # Fenced code blocks
    (re.compile(r"~{3}.*\n"), ""),
    # Strikethrough
    (re.compile(r"~~"), ""),
    # Fenced code blocks
    (re.compile(r"`{3}.*\n"), ""),
    # HTML tags
    (re.compile(r"<[^>]*>"), ""),
    # Setext-style headers
    (re.compile(rf"\A[=\-]{{2,}}{_WS}*\Z"), ""),
    # Footnotes
    (re.compile(r"\[\^.+?\](: .*?\Z)?"), ""),
    (re.compile(rf"{_WS}{{0,2}}\[.*?\]: .*?\Z"), ""),
    # Images
    (re.compile(r"!\[(.*?)\][\[(].*?[\])]"), r"\1"),
    # Inline links
    (re.compile(r"\[(.*?)\][\[(].*?[\])]"), r"\1"),
    # Blockquotes
    (re.compile(rf"\A{_WS}{{0,3}}>{_WS}?"), ""),
    # Reference-style links
    (re.compile(rf'\A{_WS}{{1,2}}\[(.*?)\]: (\S+)( ".*?")?{_WS}*\Z'), ""),
    # Atx-style headers
    (
        re.compile(
            rf"\A(\n)?{_WS}*#{{1,6}}{_WS}+| *(\n)?{_WS}*#* *(\n)?{_WS}*\Z"
        ),
        r"\1\2\3",
    ),
    # Emphasis, twice to catch double emphasis
    (
        re.compile(r"([*_]{1,3})([^\t\n\f\r *_].*?[^\t\n\f\r *_]?)([*_]{1,3})"),
        r"\2",
    ),
    (
        re.compile(r"([*_]{1,3})([^\t\n\f\r *_].*?[^\t\n\f\r *_]?)([*_]{1,3})"),
        r"\2",
    ),
    # Code blocks
    (re.compile(r"(`{3,})(.*?)(`{3,})"), r"\2"),
    # Inline code
    (re.compile(r"`(.+?)`"), r"\1"),
    # Collapse runs of blank lines
    (re.compile(r"\n{2,}"), "\n\n"),
]


def clean(markdown: str) -> str:
    """Strip common markdown syntax, leaving readable plain text."""
    for pattern, sub in _REPLACEMENTS:
        markdown = pattern.sub(sub, markdown)
    return markdown