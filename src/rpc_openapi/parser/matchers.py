"""Small matchers over document nodes.

Each matcher checks one structural assumption about a node and returns
either Match(value) or Mismatch(reason). Extraction phases call unwrap()
to turn a mismatch into a FormatError.
"""

import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from rpc_openapi.errors import FormatError
from rpc_openapi.parser.base import Node

T = TypeVar("T")

SECTION_DEPTH = 3

# `[bool]: Write minimal output. Default: false. Required: no.`
DEFINITION_PATTERN = re.compile(
    r"^\s*\[(?P<type>[\w-]+)\]:\s*(?P<description>.*?)\."
    r"(?:\s+Default:\s*(?P<default>.*?)\.)?"
    r"(?:\s+Required:\s*(?P<required>yes|no)\.)?\s*$",
    re.DOTALL,
)


@dataclass(frozen=True)
class Match(Generic[T]):
    value: T


@dataclass(frozen=True)
class Mismatch:
    reason: str


MatchResult = Match[T] | Mismatch


def unwrap(result: MatchResult) -> T:
    if isinstance(result, Mismatch):
        raise FormatError(result.reason)
    return result.value


def node_text(node: Node) -> str:
    """Concatenated text of a node, with inline code and emphasis flattened to their content."""
    if node.type == "break":
        return "\n"
    if node.value is not None and node.type in ("text", "inlineCode", "code", "html"):
        return node.value
    return "".join(node_text(child) for child in node.children)


def heading_text(node: Node) -> str:
    return node_text(node).strip()


def describe(node: Node) -> str:
    """Short human-readable reference to a node for error messages."""
    text = node_text(node).strip().replace("\n", " ")
    if len(text) > 60:
        text = text[:57] + "..."
    where = f" at line {node.position.start.line}" if node.position else ""
    return f"{node.type}{where} ({text!r})" if text else f"{node.type}{where}"


def is_section(node: Node, title: str) -> bool:
    return node.type == "heading" and node.depth == SECTION_DEPTH and heading_text(node) == title


def find_section(nodes: Sequence[Node], title: str, start: int = 0) -> int | None:
    """Index of the section heading with exact text `title`, or None."""
    for index in range(start, len(nodes)):
        if is_section(nodes[index], title):
            return index
    return None


def match_type(node: Node, expected: str) -> MatchResult[Node]:
    if node.type != expected:
        return Mismatch(f"Expected {expected}, got {describe(node)}")
    return Match(node)


def match_paragraph(node: Node) -> MatchResult[str]:
    if node.type != "paragraph":
        return Mismatch(f"Expected paragraph, got {describe(node)}")
    return Match(node_text(node))


def match_paragraph_text(node: Node, expected: str) -> MatchResult[Node]:
    result = match_paragraph(node)
    if isinstance(result, Mismatch):
        return result
    if result.value.strip() != expected:
        return Mismatch(f"Expected paragraph {expected!r}, got {describe(node)}")
    return Match(node)


def match_code(node: Node) -> MatchResult[str]:
    if node.type != "code":
        return Mismatch(f"Expected code block, got {describe(node)}")
    return Match(node.value or "")


def match_list_items(node: Node) -> MatchResult[tuple[Node, ...]]:
    if node.type != "list":
        return Mismatch(f"Expected list, got {describe(node)}")
    for item in node.children:
        if item.type != "listItem":
            return Mismatch(f"Expected list item, got {describe(item)}")
    return Match(node.children)


def match_argument_item(item: Node) -> MatchResult[tuple[str, str]]:
    """Split a list item into its `name` inline code and the definition text after it."""
    if len(item.children) != 1 or item.children[0].type != "paragraph":
        return Mismatch(f"Expected a single paragraph in argument item {describe(item)}")
    inline = item.children[0].children
    if not inline or inline[0].type != "inlineCode":
        return Mismatch(f"Expected argument name as inline code in {describe(item)}")
    definition = "".join(node_text(child) for child in inline[1:])
    return Match((inline[0].value or "", definition))


def match_definition(text: str) -> MatchResult[re.Match]:
    match = DEFINITION_PATTERN.match(text)
    if match is None:
        return Mismatch(f"Argument definition does not match the expected pattern: {text!r}")
    return Match(match)
