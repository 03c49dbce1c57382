"""Split the document's top-level nodes into per-endpoint sections."""

import logging
from collections.abc import Sequence

from rpc_openapi.errors import SegmentationError
from rpc_openapi.parser.base import Node
from rpc_openapi.parser.matchers import heading_text

LOGGER = logging.getLogger(__name__)

ENDPOINT_DEPTH = 2
ENDPOINT_PREFIX = "/api/"


def find_section_start(nodes: Sequence[Node], title: str, depth: int = ENDPOINT_DEPTH) -> int:
    """Index of the first node after the heading that opens the endpoint listing."""
    for index, node in enumerate(nodes):
        if node.type == "heading" and node.depth == depth and heading_text(node) == title:
            return index + 1
    raise SegmentationError(f"Section heading {'#' * depth} {title!r} not found")


def endpoint_path(node: Node) -> str | None:
    """The endpoint path if `node` is an endpoint heading, otherwise None."""
    if node.type != "heading" or node.depth != ENDPOINT_DEPTH or not node.children:
        return None
    first = node.children[0]
    if first.type == "text" and first.value and first.value.startswith(ENDPOINT_PREFIX):
        return first.value
    return None


def segment_endpoints(nodes: Sequence[Node], start: int = 0) -> dict[str, list[Node]]:
    """Map each endpoint path to the nodes between its heading and the next one."""
    sections: dict[str, list[Node]] = {}
    current: str | None = None
    body: list[Node] = []

    for node in nodes[start:]:
        path = endpoint_path(node)
        if path is None:
            if current is None:
                raise SegmentationError(f"Unexpected {node.type} node before the first endpoint heading: {_describe(node)}")
            body.append(node)
            continue
        if current is not None:
            sections[current] = body
        if path in sections:
            raise SegmentationError(f"Duplicate endpoint heading: {path}")
        current, body = path, []

    if current is None:
        raise SegmentationError("No endpoint headings found")
    sections[current] = body

    LOGGER.debug("Found %d endpoint sections", len(sections))
    return sections


def _describe(node: Node) -> str:
    if node.position is None:
        return node.type
    return f"{node.type} at line {node.position.start.line}"
