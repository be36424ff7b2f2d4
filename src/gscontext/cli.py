"""Command line access to the script context operations."""

from __future__ import annotations

import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from gscontext.common.exceptions import (
    ConfigError,
    EmptyInputError,
    ResourceNotFoundError,
    XMLParseError,
)
from gscontext.common.exit_codes import ExitCode
from gscontext.config import Settings
from gscontext.context import DefaultContext, Task
from gscontext.logging_setup import configure_logging
from gscontext.xml import CSW_NS, OGC_NS

app = typer.Typer(help="XML and HTTP utilities of the search-service script context")
console = Console()

CONFIG_OPTION = typer.Option(None, "--config", "-c", help="Path to a YAML settings file", exists=True, dir_okay=False)
SET_OPTION = typer.Option(None, "--set", help="Override settings using dotted KEY=VALUE syntax")


def _read_input(source: Path) -> str:
    if str(source) == "-":
        return sys.stdin.read()
    try:
        return source.read_text(encoding="utf-8")
    except OSError as exc:
        typer.echo(f"Cannot read {source}: {exc}", err=True)
        raise typer.Exit(code=ExitCode.IO_ERROR) from exc


def _parse_namespaces(values: list[str]) -> dict[str, str]:
    namespaces = {**OGC_NS, **CSW_NS}
    for item in values:
        prefix, sep, uri = item.partition("=")
        if not sep or not prefix.strip() or not uri.strip():
            raise typer.BadParameter("Namespaces must be in PREFIX=URI format")
        namespaces[prefix.strip()] = uri.strip()
    return namespaces


@app.callback()
def main(
    ctx: typer.Context,
    config: Path | None = CONFIG_OPTION,
    overrides: list[str] | None = SET_OPTION,
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level"),
    log_format: str | None = typer.Option(None, "--log-format", help="Console format (text/json)"),
) -> None:
    """Load settings and configure logging for every command."""
    try:
        cli_overrides: dict[str, str] = Settings.parse_cli_overrides(overrides or [])
        if log_level:
            cli_overrides["logging.level"] = log_level
        if log_format:
            cli_overrides["logging.format"] = log_format
        settings = Settings.load(config, overrides=cli_overrides)
    except ConfigError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=ExitCode.CONFIG_ERROR) from exc

    configure_logging(
        level=settings.logging.level,
        console_format=settings.logging.format,
        log_file=settings.logging.file,
        force=True,
    )
    ctx.obj = DefaultContext(settings)


@app.command("indent")
def indent(ctx: typer.Context, source: Path = typer.Argument(..., help="XML file, or - for stdin")) -> None:
    """Print a document re-serialized with indentation."""
    context: DefaultContext = ctx.obj
    try:
        result = context.indent_xml(Task(), _read_input(source))
    except (EmptyInputError, XMLParseError) as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=ExitCode.INPUT_ERROR) from exc
    typer.echo(result or "")


@app.command("filter-capabilities")
def filter_capabilities(ctx: typer.Context, source: Path = typer.Argument(..., help="XML file, or - for stdin")) -> None:
    """Print a capabilities document reduced to its Filter_Capabilities section."""
    context: DefaultContext = ctx.obj
    typer.echo(context.remove_all_but_filter(_read_input(source)))


@app.command("query")
def query(
    ctx: typer.Context,
    source: Path = typer.Argument(..., help="XML file, or - for stdin"),
    expression: str = typer.Argument(..., help="XPath expression"),
    namespaces: list[str] | None = typer.Option(None, "--ns", help="Namespace binding PREFIX=URI"),
) -> None:
    """List the nodes selected by an XPath expression."""
    context: DefaultContext = ctx.obj
    try:
        info = context.new_xml_info(Task(), _read_input(source), _parse_namespaces(namespaces or []))
        nodes = info.evaluator.query_nodes(info.document, expression)
    except XMLParseError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=ExitCode.INPUT_ERROR) from exc

    table = Table(title=f"{len(nodes)} node(s)")
    table.add_column("Name")
    table.add_column("Namespace")
    table.add_column("Text")
    for node in nodes:
        node_info = info.evaluator.info_of(node)
        table.add_row(node_info.qualified_name or "", node_info.namespace_uri or "", info.evaluator.text_of(node) or "")
    console.print(table)


@app.command("fetch")
def fetch(
    ctx: typer.Context,
    url: str = typer.Argument(..., help="URL to fetch"),
    data: str | None = typer.Option(None, "--data", help="Request body; sends a POST"),
    content_type: str | None = typer.Option(None, "--content-type", help="Content-Type of the request body"),
    run_async: bool = typer.Option(False, "--async", help="Fetch on a worker thread"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log fetch progress"),
) -> None:
    """Print the body returned by a URL."""
    context: DefaultContext = ctx.obj
    promise = context.send_http_request(Task(async_=run_async, verbose=verbose), url, data, content_type)
    exc = promise.exception()
    if exc is not None:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=ExitCode.HTTP_ERROR)
    result = promise.result()
    if result is None:
        typer.echo(f"Fetch failed: {url}", err=True)
        raise typer.Exit(code=ExitCode.HTTP_ERROR)
    typer.echo(result)


@app.command("resource")
def resource(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="Resource path relative to the search roots"),
    charset: str | None = typer.Option(None, "--charset", help="Charset used to decode the file"),
) -> None:
    """Print a resource file."""
    context: DefaultContext = ctx.obj
    try:
        typer.echo(context.read_resource_file(path, charset))
    except ResourceNotFoundError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=ExitCode.IO_ERROR) from exc
    except ConfigError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=ExitCode.CONFIG_ERROR) from exc


__all__ = ["app"]
