"""CLI entry point for rpc-openapi."""

import logging
from pathlib import Path

import click

from rpc_openapi.config import BuildConfig, MARKDOWN_URL
from rpc_openapi.errors import ExtractionError, RpcOpenApiError
from rpc_openapi.fetch import load_markdown
from rpc_openapi.generator.openapi import build_openapi
from rpc_openapi.generator.writer import FORMATS, write_document
from rpc_openapi.parser.base import WarningKind
from rpc_openapi.parser.markdown import dump_nodes, parse_document
from rpc_openapi.pipeline import parse_reference

LOGGER = logging.getLogger(__name__)


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _load(input_path: Path | None, url: str, timeout: float | None) -> str:
    try:
        return load_markdown(path=input_path, url=url, timeout=timeout)
    except RpcOpenApiError as e:
        raise click.ClickException(str(e)) from e


def _report(error: RpcOpenApiError, dump_path: Path | None) -> click.ClickException:
    """Log or persist the failing endpoint's node snapshot and wrap the error for click."""
    if isinstance(error, ExtractionError) and error.snapshot:
        if dump_path is not None:
            dump_path.parent.mkdir(parents=True, exist_ok=True)
            dump_path.write_text(error.snapshot, encoding="utf-8")
            click.echo(f"Node snapshot of {error.endpoint} written to {dump_path}", err=True)
        else:
            LOGGER.debug("Nodes of %s:\n%s", error.endpoint, error.snapshot)
    return click.ClickException(str(error))


input_option = click.option("--input", "input_path", type=click.Path(exists=True, dir_okay=False, path_type=Path), default=None, help="Read the reference from a local file instead of fetching it.")
url_option = click.option("--url", default=MARKDOWN_URL, show_default=True, help="URL of the RPC reference markdown.")
timeout_option = click.option("--timeout", type=float, default=None, help="Fetch timeout in seconds.")
verbose_option = click.option("-v", "--verbose", is_flag=True, help="Verbose logging.")


@click.group()
def main():
    """rpc-openapi: build an OpenAPI document from the Kubo RPC reference."""
    pass


@main.command()
@input_option
@url_option
@timeout_option
@click.option("-o", "--output", required=True, type=click.Path(dir_okay=False, path_type=Path), help="Output file for the OpenAPI document.")
@click.option("--format", "fmt", default=None, type=click.Choice(FORMATS), help="Output format (default: from the output suffix).")
@click.option("--title", default=None, help="API title.")
@click.option("--api-version", default=None, help="API version string.")
@click.option("--docs-url", default=None, help="Base URL of the rendered reference, used for externalDocs links.")
@click.option("--dump-on-error", type=click.Path(dir_okay=False, path_type=Path), default=None, help="Write the failing endpoint's nodes to this file.")
@verbose_option
def build(
    input_path: Path | None,
    url: str,
    timeout: float | None,
    output: Path,
    fmt: str | None,
    title: str | None,
    api_version: str | None,
    docs_url: str | None,
    dump_on_error: Path | None,
    verbose: bool,
):
    """Build the OpenAPI document."""
    _setup_logging(verbose)
    config = BuildConfig(markdown_url=url, timeout=timeout)
    if title:
        config.title = title
    if api_version:
        config.version = api_version
    if docs_url:
        config.docs_url = docs_url

    click.echo(f"Loading {input_path or config.markdown_url}...")
    text = _load(input_path, config.markdown_url, config.timeout)

    try:
        endpoints = parse_reference(text, config)
    except RpcOpenApiError as e:
        raise _report(e, dump_on_error) from e
    click.echo(f"Found {len(endpoints)} endpoints.")

    write_document(build_openapi(endpoints, config), output, fmt)
    click.echo(f"OpenAPI document saved to {output}")


@main.command()
@input_option
@url_option
@timeout_option
@click.option("-o", "--output", type=click.Path(dir_okay=False, path_type=Path), default=None, help="Write the tree to a file instead of stdout.")
def tree(input_path: Path | None, url: str, timeout: float | None, output: Path | None):
    """Dump the parsed markdown tree as JSON."""
    text = _load(input_path, url, timeout)
    try:
        dumped = dump_nodes([parse_document(text)])
    except RpcOpenApiError as e:
        raise click.ClickException(str(e)) from e
    if output is None:
        click.echo(dumped)
        return
    output.write_text(dumped, encoding="utf-8")
    click.echo(f"Tree saved to {output}")


@main.command()
@input_option
@url_option
@timeout_option
@verbose_option
def endpoints(input_path: Path | None, url: str, timeout: float | None, verbose: bool):
    """List the endpoints found in the reference."""
    _setup_logging(verbose)
    text = _load(input_path, url, timeout)
    try:
        found = parse_reference(text, BuildConfig(markdown_url=url))
    except RpcOpenApiError as e:
        raise _report(e, None) from e

    for path, endpoint in found.items():
        flag = f" [{endpoint.warning.value}]" if endpoint.warning is not WarningKind.NONE else ""
        click.echo(f"{path}  ({len(endpoint.parameters)} args){flag}")
