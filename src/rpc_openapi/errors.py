"""Exceptions raised while building the OpenAPI document.

Every parsing rule is strict: a document that deviates from the expected
conventions stops the whole run with one of these errors.
"""


class RpcOpenApiError(Exception):
    """Base class for all errors raised by rpc_openapi."""


class FetchError(RpcOpenApiError):
    """The reference document could not be downloaded."""

    def __init__(self, url: str, status_code: int | None = None, reason: str | None = None):
        self.url = url
        self.status_code = status_code
        if status_code is not None:
            super().__init__(f"Markdown response was {status_code} ({url})")
        else:
            super().__init__(f"Could not fetch {url}: {reason}")


class MarkdownError(RpcOpenApiError):
    """The markdown parser produced a construct the tree model does not cover."""


class SegmentationError(RpcOpenApiError):
    """The node sequence could not be split into endpoint sections."""


class ExtractionError(RpcOpenApiError):
    """An endpoint section does not follow the reference format.

    `snapshot` holds the JSON-serialized node slice of the failing endpoint
    so the caller can log or persist it.
    """

    def __init__(self, endpoint: str, reason: str, snapshot: str | None = None):
        self.endpoint = endpoint
        self.reason = reason
        self.snapshot = snapshot
        super().__init__(f"{endpoint}: {reason}")


class FormatError(RpcOpenApiError):
    """A node fragment does not match the expected convention.

    Raised inside the extraction phases; extract_endpoint attaches the
    endpoint path and node snapshot by re-raising it as ExtractionError.
    """
