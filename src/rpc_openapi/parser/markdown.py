"""Markdown document tree.

Parses the reference text with markdown-it-py and converts its syntax tree
into the mdast-shaped Node model used by the rest of the parser: block nodes
carry source positions, inline runs are merged the way mdast merges them
(soft line breaks fold into the surrounding text).
"""

import json
from collections.abc import Sequence

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

from rpc_openapi.errors import MarkdownError
from rpc_openapi.parser.base import Node, Point, Position
from rpc_openapi.parser.source import split_lines

BLOCK_TYPES = {
    "paragraph": "paragraph",
    "bullet_list": "list",
    "ordered_list": "list",
    "list_item": "listItem",
    "blockquote": "blockquote",
    "hr": "thematicBreak",
    "table": "table",
    "tr": "tableRow",
    "th": "tableCell",
    "td": "tableCell",
}

# markdown-it only treats spaces and tabs as blank
BLANK = " \t"

INLINE_TYPES = {
    "strong": "strong",
    "em": "emphasis",
    "s": "delete",
}


def parse_document(text: str) -> Node:
    """Parse markdown text into a root Node."""
    md = MarkdownIt("commonmark").enable("table").enable("strikethrough")
    tree = SyntaxTreeNode(md.parse(text))
    lines = split_lines(text)
    children = tuple(_convert_blocks(tree.children, lines))
    position = None
    if lines:
        position = Position(start=Point(line=1, column=1), end=Point(line=len(lines), column=max(len(lines[-1]), 1)))
    return Node(type="root", children=children, position=position)


def dump_nodes(nodes: Sequence[Node]) -> str:
    """Serialize nodes to indented JSON for inspection."""
    return json.dumps([node.model_dump(mode="json", exclude_none=True) for node in nodes], indent=2)


def _convert_blocks(nodes: Sequence[SyntaxTreeNode], lines: list[str]) -> list[Node]:
    result = []
    for node in nodes:
        # thead / tbody only group rows
        if node.type in ("thead", "tbody"):
            result.extend(_convert_blocks(node.children, lines))
            continue
        result.append(_convert_block(node, lines))
    return result


def _convert_block(node: SyntaxTreeNode, lines: list[str]) -> Node:
    position = _position(node.map, lines)

    if node.type == "heading":
        return Node(type="heading", depth=int(node.tag[1:]), children=_inline_children(node), position=position)
    if node.type in ("fence", "code_block"):
        lang = node.info.split()[0] if node.info and node.info.strip() else None
        return Node(type="code", value=node.content.rstrip("\n"), lang=lang, position=position)
    if node.type == "html_block":
        return Node(type="html", value=node.content.rstrip("\n"), position=position)
    if node.type in ("paragraph", "th", "td"):
        return Node(type=BLOCK_TYPES[node.type], children=_inline_children(node), position=position)
    if node.type in BLOCK_TYPES:
        return Node(type=BLOCK_TYPES[node.type], children=tuple(_convert_blocks(node.children, lines)), position=position)
    raise MarkdownError(f"Unsupported markdown block: {node.type}")


def _inline_children(node: SyntaxTreeNode) -> tuple[Node, ...]:
    """Children of the single inline node held by paragraphs, headings and cells."""
    result: list[Node] = []
    for child in node.children:
        if child.type == "inline":
            result.extend(_convert_inline(child.children))
    return tuple(result)


def _convert_inline(nodes: Sequence[SyntaxTreeNode]) -> list[Node]:
    result: list[Node] = []
    for node in nodes:
        if node.type in ("text", "softbreak"):
            value = node.content if node.type == "text" else "\n"
            if result and result[-1].type == "text":
                result[-1] = Node(type="text", value=result[-1].value + value)
            else:
                result.append(Node(type="text", value=value))
        elif node.type == "code_inline":
            result.append(Node(type="inlineCode", value=node.content))
        elif node.type == "hardbreak":
            result.append(Node(type="break"))
        elif node.type == "html_inline":
            result.append(Node(type="html", value=node.content))
        elif node.type == "link":
            result.append(Node(type="link", url=str(node.attrs.get("href", "")), children=tuple(_convert_inline(node.children))))
        elif node.type == "image":
            result.append(Node(type="image", url=str(node.attrs.get("src", "")), value=node.content))
        elif node.type in INLINE_TYPES:
            result.append(Node(type=INLINE_TYPES[node.type], children=tuple(_convert_inline(node.children))))
        else:
            raise MarkdownError(f"Unsupported markdown inline: {node.type}")
    return result


def _position(line_map: list[int] | None, lines: list[str]) -> Position | None:
    """Turn a markdown-it line map ([begin, end), 0-indexed) into an inclusive Position.

    Start column is the first non-blank character; trailing blank lines
    swallowed by the block are excluded.
    """
    if line_map is None:
        return None
    begin, end = line_map
    last = max(end - 1, begin)
    while last > begin and not lines[last].strip(BLANK):
        last -= 1
    first_line = lines[begin]
    start_column = len(first_line) - len(first_line.lstrip(BLANK)) + 1
    end_column = max(len(lines[last].rstrip(BLANK)), 1)
    return Position(start=Point(line=begin + 1, column=start_column), end=Point(line=last + 1, column=end_column))
