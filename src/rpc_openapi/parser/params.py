"""Argument list parsing and merging of repeated arguments."""

import re
from collections.abc import Sequence
from typing import Any

from rpc_openapi.errors import FormatError
from rpc_openapi.parser.base import Node, Parameter, ParamType, WarningKind
from rpc_openapi.parser.matchers import (
    match_argument_item,
    match_definition,
    match_list_items,
    match_paragraph_text,
    unwrap,
)

NO_ARGUMENTS = "This endpoint takes no arguments."

DEFAULT_CLAUSE = re.compile(r"\.\s+Default:")

INTEGER_TYPES = {ParamType.INT, ParamType.UINT, ParamType.INT64}

WARNING_MARKERS = [
    (re.compile(r"\((?i:experimental)\)|\bEXPERIMENTAL\b"), WarningKind.EXPERIMENTAL),
    (re.compile(r"\((?i:deprecated)\)|\bDEPRECATED\b"), WarningKind.DEPRECATED),
]


def parse_arguments(nodes: Sequence[Node]) -> list[Parameter]:
    """Parse the nodes of an Arguments section into parameters, merging repeated names."""
    if not nodes:
        return []
    if len(nodes) > 1:
        raise FormatError(f"Expected at most one node in the Arguments section, got {len(nodes)}")

    node = nodes[0]
    if node.type == "paragraph":
        unwrap(match_paragraph_text(node, NO_ARGUMENTS))
        return []

    items = unwrap(match_list_items(node))
    return merge_series([parse_argument(item) for item in items])


def parse_argument(item: Node) -> Parameter:
    name, definition = unwrap(match_argument_item(item))
    match = unwrap(match_definition(definition))

    try:
        param_type = ParamType(match["type"])
    except ValueError:
        raise FormatError(f"Unknown type {match['type']!r} for argument {name!r}") from None
    if param_type is ParamType.MERGED_SERIES:
        raise FormatError(f"Unknown type {match['type']!r} for argument {name!r}")

    description = match["description"].strip()
    # a second Default: clause would otherwise be folded into the description or default
    if len(DEFAULT_CLAUSE.findall(definition)) > 1:
        raise FormatError(f"More than one Default clause for argument {name!r}")
    default = match["default"]
    return Parameter(
        name=name,
        description=description,
        type=param_type,
        default=parse_default(param_type, default.strip()) if default is not None else None,
        required=match["required"] == "yes",
        warning=detect_warning(description),
    )


def parse_default(param_type: ParamType, value: str) -> Any:
    """Convert a documented default value to the shape of its type."""
    if param_type is ParamType.BOOL:
        return value == "true"
    if param_type in INTEGER_TYPES:
        try:
            return int(value, 10)
        except ValueError:
            raise FormatError(f"Default {value!r} is not a base-10 integer") from None
    if param_type in (ParamType.ARRAY, ParamType.MERGED_SERIES):
        if not (value.startswith("[") and value.endswith("]")):
            raise FormatError(f"Default {value!r} is not a bracketed list")
        return [token for token in re.split(r"[,\s]+", value[1:-1]) if token]
    return value


def detect_warning(description: str) -> WarningKind:
    for pattern, kind in WARNING_MARKERS:
        if pattern.search(description):
            return kind
    return WarningKind.NONE


def merge_series(parameters: Sequence[Parameter]) -> list[Parameter]:
    """Fold parameters sharing a name into one merged-series parameter.

    The merged entry takes the place of the first occurrence; lists without
    repeated names come back unchanged.
    """
    groups: dict[str, list[Parameter]] = {}
    for param in parameters:
        groups.setdefault(param.name, []).append(param)
    return [group[0] if len(group) == 1 else _merge(group) for group in groups.values()]


def _merge(group: list[Parameter]) -> Parameter:
    defaults = [param.default for param in group]
    return Parameter(
        name=group[0].name,
        description="\n".join(f"{index}. {param.description}" for index, param in enumerate(group, start=1)),
        type=ParamType.MERGED_SERIES,
        default=defaults if any(default is not None for default in defaults) else None,
        required=any(param.required for param in group),
        warning=group[0].warning,
    )
