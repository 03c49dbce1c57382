"""Build configuration defaults."""

from __future__ import annotations

from dataclasses import dataclass

MARKDOWN_URL = "https://raw.githubusercontent.com/ipfs/ipfs-docs/main/docs/reference/kubo/rpc.md"
DOCS_URL = "https://docs.ipfs.tech/reference/kubo/rpc/"


@dataclass(slots=True)
class BuildConfig:
    markdown_url: str = MARKDOWN_URL
    docs_url: str = DOCS_URL
    title: str = "Kubo RPC API"
    version: str = "v0"
    description: str = "OpenAPI description of the Kubo RPC API, generated from the reference documentation."
    section_heading: str = "RPC commands"
    timeout: float | None = None

    def endpoint_docs_url(self, path: str) -> str:
        """Anchor of an endpoint in the rendered docs: /api/v0/add -> #api-v0-add."""
        anchor = path.lstrip("/").replace("/", "-")
        return f"{self.docs_url}#{anchor}"
