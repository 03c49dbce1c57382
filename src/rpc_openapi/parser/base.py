"""Data models for the parsed RPC reference.

The document tree (Node) is produced by parser.markdown and consumed
read-only by the segmenter and extractor. Endpoint and Parameter are the
extracted records handed to the OpenAPI generator.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict


class Point(BaseModel):
    """A 1-indexed location in the source text."""

    model_config = ConfigDict(frozen=True)

    line: int
    column: int


class Position(BaseModel):
    """Source range of a node. Both ends are inclusive."""

    model_config = ConfigDict(frozen=True)

    start: Point
    end: Point


class Node(BaseModel):
    """A single node of the markdown document tree."""

    model_config = ConfigDict(frozen=True)

    type: str  # root / heading / paragraph / list / listItem / code / inlineCode / text / ...
    depth: int | None = None  # headings only
    value: str | None = None  # leaf text, inline code or code block content
    lang: str | None = None  # code block info string
    url: str | None = None  # links and images
    children: tuple["Node", ...] = ()
    position: Position | None = None


class WarningKind(str, Enum):
    NONE = "none"
    DEPRECATED = "deprecated"
    EXPERIMENTAL = "experimental"


class ParamType(str, Enum):
    """Argument types as written in the reference, plus the synthetic merged series."""

    STRING = "string"
    BOOL = "bool"
    INT = "int"
    UINT = "uint"
    INT64 = "int64"
    ARRAY = "array"
    MERGED_SERIES = "merged-series"


class Parameter(BaseModel):
    """A single RPC argument, sent as a query parameter."""

    name: str
    description: str
    type: ParamType
    default: Any = None  # bool / int / str / list, depending on type
    required: bool = False
    warning: WarningKind = WarningKind.NONE


class Endpoint(BaseModel):
    """One RPC endpoint with everything extracted from its section."""

    path: str  # /api/v0/add
    description: str
    warning: WarningKind = WarningKind.NONE
    parameters: list[Parameter] = []
    request_body: str | None = None
    response_example: dict | list | None = None
    docs_url: str
