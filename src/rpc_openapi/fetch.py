"""Loading the RPC reference markdown, from the network or a local file."""

import logging
from pathlib import Path

import httpx

from rpc_openapi.errors import FetchError

LOGGER = logging.getLogger(__name__)


def fetch_markdown(url: str, timeout: float | None = None) -> str:
    """Download the reference document. Any non-success status aborts the run."""
    LOGGER.info("Fetching %s", url)
    kwargs = {"timeout": timeout} if timeout is not None else {}
    try:
        response = httpx.get(url, follow_redirects=True, **kwargs)
    except httpx.HTTPError as e:
        raise FetchError(url, reason=str(e)) from e
    if not response.is_success:
        raise FetchError(url, response.status_code)
    return response.text


def load_markdown(path: Path | None = None, url: str | None = None, timeout: float | None = None) -> str:
    """Read pre-fetched text from `path` when given, otherwise fetch `url`."""
    if path is not None:
        LOGGER.info("Reading %s", path)
        return path.read_text(encoding="utf-8")
    if url is None:
        raise ValueError("Either a path or a url is required")
    return fetch_markdown(url, timeout=timeout)
