"""Verbatim slices of the original markdown text."""

import re
from collections.abc import Sequence

from rpc_openapi.parser.base import Node

# the only line breaks markdown-it counts in its line maps
LINE_BREAK = re.compile(r"(\r\n|\r|\n)")


def split_lines(text: str) -> list[str]:
    """Lines of `text` without their terminators, numbered the way markdown-it numbers them."""
    return _split(text)[0]


def _split(text: str) -> tuple[list[str], list[str]]:
    if not text:
        return [], []
    parts = LINE_BREAK.split(text)
    lines, breaks = parts[0::2], parts[1::2]
    # a final terminator does not open another line
    if breaks and lines[-1] == "":
        lines.pop()
    return lines, breaks


def slice_source(source: str, nodes: Sequence[Node]) -> str:
    """Return the source text spanning from the first node's start to the last node's end.

    Rendering the tree back to markdown would lose the original formatting
    (emphasis markers, links, escapes), so the text is cut out of the source
    by position instead. Original line terminators are kept.
    """
    if not nodes:
        return ""
    first, last = nodes[0].position, nodes[-1].position
    if first is None or last is None:
        raise ValueError("Cannot slice nodes without a source position")

    lines, breaks = _split(source)
    start, end = first.start.line - 1, last.end.line - 1
    if start == end:
        return lines[start][first.start.column - 1 : last.end.column]

    segment = lines[start : end + 1]
    segment[0] = segment[0][first.start.column - 1 :]
    segment[-1] = segment[-1][: last.end.column]
    pieces = [segment[0]]
    for line, line_break in zip(segment[1:], breaks[start:end]):
        pieces.append(line_break)
        pieces.append(line)
    return "".join(pieces)
