"""The full markdown -> endpoints -> OpenAPI transformation."""

import logging

from rpc_openapi.config import BuildConfig
from rpc_openapi.generator.openapi import build_openapi
from rpc_openapi.parser.base import Endpoint
from rpc_openapi.parser.endpoint import extract_endpoints
from rpc_openapi.parser.markdown import parse_document
from rpc_openapi.parser.segment import find_section_start, segment_endpoints

LOGGER = logging.getLogger(__name__)


def parse_reference(text: str, config: BuildConfig | None = None) -> dict[str, Endpoint]:
    """Extract all endpoints from the reference markdown, keyed by path in document order."""
    config = config or BuildConfig()
    root = parse_document(text)
    start = find_section_start(root.children, config.section_heading)
    sections = segment_endpoints(root.children, start)
    endpoints = extract_endpoints(sections, text, config)
    LOGGER.info("Extracted %d endpoints", len(endpoints))
    return endpoints


def build_document(text: str, config: BuildConfig | None = None) -> dict:
    config = config or BuildConfig()
    return build_openapi(parse_reference(text, config), config)
