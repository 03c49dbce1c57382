"""Serialization of the generated OpenAPI document."""

import json
from pathlib import Path

import yaml

FORMATS = ("yaml", "json")


def detect_format(path: Path) -> str:
    """'json' for .json files, 'yaml' otherwise."""
    return "json" if path.suffix.lower() == ".json" else "yaml"


def dump_document(document: dict, fmt: str = "yaml") -> str:
    if fmt == "json":
        return json.dumps(document, indent=2, ensure_ascii=False) + "\n"
    if fmt == "yaml":
        return yaml.safe_dump(document, sort_keys=False, allow_unicode=True, width=120)
    raise ValueError(f"Unknown output format: {fmt}")


def write_document(document: dict, path: Path, fmt: str | None = None) -> None:
    """Write the document in one go; `fmt` defaults to the one implied by the suffix."""
    text = dump_document(document, fmt or detect_format(path))
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
