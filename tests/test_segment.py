import pytest

from rpc_openapi.errors import SegmentationError
from rpc_openapi.parser.base import Node
from rpc_openapi.parser.segment import endpoint_path, find_section_start, segment_endpoints


def _heading(text: str, depth: int = 2) -> Node:
    return Node(type="heading", depth=depth, children=(Node(type="text", value=text),))


def _paragraph(text: str) -> Node:
    return Node(type="paragraph", children=(Node(type="text", value=text),))


class TestEndpointPath:
    def test_api_heading(self):
        assert endpoint_path(_heading("/api/v0/add")) == "/api/v0/add"

    def test_wrong_depth(self):
        assert endpoint_path(_heading("/api/v0/add", depth=3)) is None

    def test_other_heading(self):
        assert endpoint_path(_heading("Getting started")) is None

    def test_first_child_must_be_text(self):
        heading = Node(type="heading", depth=2, children=(Node(type="inlineCode", value="/api/v0/add"),))
        assert endpoint_path(heading) is None


class TestFindSectionStart:
    def test_returns_index_after_heading(self):
        nodes = [_paragraph("intro"), _heading("RPC commands"), _heading("/api/v0/add")]
        assert find_section_start(nodes, "RPC commands") == 2

    def test_missing_heading(self):
        with pytest.raises(SegmentationError, match="RPC commands"):
            find_section_start([_paragraph("intro")], "RPC commands")


class TestSegmentEndpoints:
    def test_slices_between_headings(self):
        add_body = [_paragraph("Add."), _heading("Arguments", depth=3)]
        cat_body = [_paragraph("Cat.")]
        nodes = [_heading("/api/v0/add"), *add_body, _heading("/api/v0/cat"), *cat_body]

        sections = segment_endpoints(nodes)
        assert list(sections) == ["/api/v0/add", "/api/v0/cat"]
        assert sections["/api/v0/add"] == add_body
        assert sections["/api/v0/cat"] == cat_body

    def test_last_section_is_flushed(self):
        sections = segment_endpoints([_heading("/api/v0/add"), _paragraph("Add."), _paragraph("More.")])
        assert len(sections["/api/v0/add"]) == 2

    def test_empty_section(self):
        sections = segment_endpoints([_heading("/api/v0/add"), _heading("/api/v0/cat")])
        assert sections == {"/api/v0/add": [], "/api/v0/cat": []}

    def test_start_index_skips_preamble(self):
        nodes = [_paragraph("intro"), _heading("RPC commands"), _heading("/api/v0/add"), _paragraph("Add.")]
        assert list(segment_endpoints(nodes, start=2)) == ["/api/v0/add"]

    def test_reconstructs_node_sequence(self):
        nodes = [
            _heading("/api/v0/a"),
            _paragraph("1"),
            _heading("Other", depth=2),
            _heading("/api/v0/b"),
            _paragraph("2"),
            _paragraph("3"),
        ]
        sections = segment_endpoints(nodes)
        rebuilt = []
        for path, body in sections.items():
            rebuilt.append(_heading(path))
            rebuilt.extend(body)
        assert rebuilt == nodes

    def test_content_before_first_endpoint_fails(self):
        with pytest.raises(SegmentationError, match="before the first endpoint"):
            segment_endpoints([_paragraph("stray"), _heading("/api/v0/add")])

    def test_no_endpoints_fails(self):
        with pytest.raises(SegmentationError, match="No endpoint headings"):
            segment_endpoints([])

    def test_duplicate_endpoint_fails(self):
        with pytest.raises(SegmentationError, match="Duplicate"):
            segment_endpoints([_heading("/api/v0/add"), _heading("/api/v0/add")])
