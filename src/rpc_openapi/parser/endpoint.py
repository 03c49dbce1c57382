"""Endpoint section extraction.

An endpoint section is laid out as

    ## /api/v0/<command>
    <description paragraphs, optionally opened by a ::: warning block>
    ### Arguments
    <a list of arguments, or "This endpoint takes no arguments.">
    ### Request Body          (optional)
    <prose>
    ### Response
    <fixed intro paragraph>
    <code block with an example body>
    ### cURL Example
    ...

Anything else is a format error: the reference is hand-written, so every
assumption is checked and the first deviation stops the build.
"""

import json
import logging
import re
from collections.abc import Mapping, Sequence

import yaml

from rpc_openapi.config import BuildConfig
from rpc_openapi.errors import ExtractionError, FormatError
from rpc_openapi.parser.base import Endpoint, Node, WarningKind
from rpc_openapi.parser.markdown import dump_nodes
from rpc_openapi.parser.matchers import (
    describe,
    find_section,
    match_code,
    match_paragraph_text,
    match_type,
    node_text,
    unwrap,
)
from rpc_openapi.parser.params import parse_arguments
from rpc_openapi.parser.source import slice_source

LOGGER = logging.getLogger(__name__)

ARGUMENTS = "Arguments"
REQUEST_BODY = "Request Body"
RESPONSE = "Response"
CURL_EXAMPLE = "cURL Example"

RESPONSE_INTRO = "On success, the call to this endpoint will return with 200 and the following body:"
TEXT_RESPONSE = "This endpoint returns a `text/plain` response body."

ADMONITION_MARKER = ":::"
ADMONITION = re.compile(r"^:::\s*warning\s+(?P<kind>\S+)\s*$")
ADMONITION_KINDS = {
    "DEPRECATED": WarningKind.DEPRECATED,
    "EXPERIMENTAL": WarningKind.EXPERIMENTAL,
}


def extract_endpoints(
    sections: Mapping[str, Sequence[Node]], source: str, config: BuildConfig | None = None
) -> dict[str, Endpoint]:
    """Extract every endpoint section, in document order."""
    return {path: extract_endpoint(path, nodes, source, config) for path, nodes in sections.items()}


def extract_endpoint(path: str, nodes: Sequence[Node], source: str, config: BuildConfig | None = None) -> Endpoint:
    """Build the Endpoint record for one section.

    Raises ExtractionError carrying the endpoint path and a JSON snapshot of
    the section's nodes.
    """
    config = config or BuildConfig()
    try:
        endpoint = _extract(path, nodes, source, config)
    except FormatError as exc:
        raise ExtractionError(path, str(exc), snapshot=dump_nodes(nodes)) from exc
    LOGGER.debug("Extracted %s (%d parameters)", path, len(endpoint.parameters))
    return endpoint


def _extract(path: str, nodes: Sequence[Node], source: str, config: BuildConfig) -> Endpoint:
    arguments = find_section(nodes, ARGUMENTS)
    if arguments is None:
        raise FormatError(f"Missing ### {ARGUMENTS} section")
    response = find_section(nodes, RESPONSE, arguments + 1)
    if response is None:
        raise FormatError(f"Missing ### {RESPONSE} section")
    curl = find_section(nodes, CURL_EXAMPLE, response + 1)
    if curl is None:
        raise FormatError(f"Missing ### {CURL_EXAMPLE} section")
    request_body = find_section(nodes[:response], REQUEST_BODY, arguments + 1)

    description, warning = parse_intro(nodes[:arguments], source)
    parameters = parse_arguments(nodes[arguments + 1 : request_body if request_body is not None else response])
    body = None
    if request_body is not None:
        body = slice_source(source, nodes[request_body + 1 : response]).strip() or None

    return Endpoint(
        path=path,
        description=description,
        warning=warning,
        parameters=parameters,
        request_body=body,
        response_example=parse_response(nodes[response + 1 : curl]),
        docs_url=config.endpoint_docs_url(path),
    )


def parse_intro(nodes: Sequence[Node], source: str) -> tuple[str, WarningKind]:
    """Description text and warning kind from the paragraphs before ### Arguments."""
    for node in nodes:
        unwrap(match_type(node, "paragraph"))

    remaining = list(nodes)
    warning = WarningKind.NONE
    if remaining and node_text(remaining[0]).lstrip().startswith(ADMONITION_MARKER):
        warning, remaining = _strip_admonition(remaining)

    return slice_source(source, remaining).strip(), warning


def _strip_admonition(nodes: list[Node]) -> tuple[WarningKind, list[Node]]:
    lines = node_text(nodes[0]).strip().split("\n")
    match = ADMONITION.match(lines[0].strip())
    if match is None or match["kind"] not in ADMONITION_KINDS:
        raise FormatError(f"Unrecognized marker {lines[0].strip()!r}")
    kind = ADMONITION_KINDS[match["kind"]]

    # closed inside the opening paragraph
    if len(lines) > 1 and lines[-1].strip() == ADMONITION_MARKER:
        return kind, nodes[1:]
    for index in range(1, len(nodes)):
        if node_text(nodes[index]).strip() == ADMONITION_MARKER:
            return kind, nodes[index + 1 :]
    raise FormatError(f"Unterminated {lines[0].strip()!r} block")


def parse_response(nodes: Sequence[Node]) -> dict | list | None:
    """Example body from the nodes between ### Response and ### cURL Example."""
    if len(nodes) != 2:
        found = ", ".join(describe(node) for node in nodes) or "nothing"
        raise FormatError(f"Expected intro paragraph and code block in the Response section, got {found}")

    unwrap(match_paragraph_text(nodes[0], RESPONSE_INTRO))
    content = unwrap(match_code(nodes[1]))
    if content.strip() == TEXT_RESPONSE:
        return None
    return parse_example(content)


def parse_example(content: str) -> dict | list:
    """Parse a response example. Strict JSON first, then YAML flow syntax for looser literals."""
    try:
        value = json.loads(content)
    except json.JSONDecodeError as exc:
        # only flow collections; block YAML would accept arbitrary prose
        if not content.lstrip().startswith(("{", "[")):
            raise FormatError(f"Response example is not valid JSON: {exc}\n{content}") from None
        try:
            value = yaml.safe_load(content)
        except yaml.YAMLError as exc:
            raise FormatError(f"Response example is not valid JSON: {exc}\n{content}") from None
    if not isinstance(value, (dict, list)):
        raise FormatError(f"Response example is not an object or array:\n{content}")
    return value
