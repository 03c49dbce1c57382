"""OpenAPI document builder.

Every RPC command is a POST with its arguments in the query string, so each
endpoint becomes a single `post` operation.
"""

import copy
from collections.abc import Mapping

from rpc_openapi.config import BuildConfig
from rpc_openapi.parser.base import Endpoint, Parameter, ParamType, WarningKind

OPENAPI_VERSION = "3.0.3"
METHOD = "post"
EXPERIMENTAL_FLAG = "x-experimental"

STRING_ARRAY = {"type": "array", "items": {"type": "string"}}

TYPE_SCHEMAS: dict[ParamType, dict] = {
    ParamType.STRING: {"type": "string"},
    ParamType.BOOL: {"type": "boolean"},
    ParamType.INT: {"type": "integer"},
    ParamType.UINT: {"type": "integer", "minimum": 0},
    ParamType.INT64: {"type": "integer", "format": "int64"},
    ParamType.ARRAY: STRING_ARRAY,
    ParamType.MERGED_SERIES: STRING_ARRAY,
}


def build_openapi(endpoints: Mapping[str, Endpoint], config: BuildConfig | None = None) -> dict:
    """Build the OpenAPI document. Paths keep the order of `endpoints`."""
    config = config or BuildConfig()
    return {
        "openapi": OPENAPI_VERSION,
        "info": {
            "title": config.title,
            "version": config.version,
            "description": config.description,
        },
        "externalDocs": {"url": config.docs_url},
        "paths": {path: {METHOD: build_operation(endpoint)} for path, endpoint in endpoints.items()},
    }


def build_operation(endpoint: Endpoint) -> dict:
    operation: dict = {
        "operationId": endpoint.path,
        "description": endpoint.description,
        "externalDocs": {"url": endpoint.docs_url},
    }
    operation.update(_warning_flags(endpoint.warning))
    operation["parameters"] = [build_parameter(param) for param in endpoint.parameters]
    if endpoint.request_body is not None:
        operation["requestBody"] = {"description": endpoint.request_body}

    success: dict = {"description": "Success"}
    if endpoint.response_example is not None:
        success["content"] = {"application/json": {"example": endpoint.response_example}}
    operation["responses"] = {"200": success}
    return operation


def build_parameter(param: Parameter) -> dict:
    # fresh copy so yaml does not emit anchors for shared dicts
    schema = copy.deepcopy(TYPE_SCHEMAS[param.type])
    if param.type is ParamType.MERGED_SERIES and param.default is not None:
        schema["default"] = _series_default(param.default)
    elif param.default is not None:
        schema["default"] = param.default

    result: dict = {
        "name": param.name,
        "in": "query",
        "description": param.description,
    }
    if param.required:
        result["required"] = True
    result.update(_warning_flags(param.warning))
    if param.type is ParamType.MERGED_SERIES:
        # repeated keys: ?arg=a&arg=b
        result["style"] = "form"
        result["explode"] = True
    result["schema"] = schema
    return result


def _series_default(defaults: list) -> list[str]:
    """Member defaults as strings for an array-of-string schema; members without one are skipped."""
    result = []
    for value in defaults:
        if isinstance(value, list):
            result.extend(_as_string(item) for item in value)
        elif value is not None:
            result.append(_as_string(value))
    return result


def _as_string(value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _warning_flags(warning: WarningKind) -> dict:
    if warning is WarningKind.DEPRECATED:
        return {"deprecated": True}
    if warning is WarningKind.EXPERIMENTAL:
        return {EXPERIMENTAL_FLAG: True}
    return {}
