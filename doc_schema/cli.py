"""DocSchema CLI

Usage::

    doc-schema mapping app.documents:Product         # Print the index definition
    doc-schema tables app.documents:Product          # Print field name tables
    doc-schema registry app.documents                # Register every index alias
"""

from __future__ import annotations

import dataclasses
import json
import logging

import click

from doc_schema.core.cache import InMemoryCache, JsonFileCache, MetadataCache
from doc_schema.core.config import CompilerConfig, load_config
from doc_schema.core.exceptions import DocSchemaError
from doc_schema.core.registry import DocumentRegistry
from doc_schema.mapping.compiler import SchemaCompiler
from doc_schema.mapping.extractor import load_class

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _configure_logging(verbose: bool) -> None:
    """Set up logging for the CLI session."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format=LOG_FORMAT)


def _build_compiler(config_file: str | None) -> SchemaCompiler:
    config = load_config(config_file) if config_file else CompilerConfig()
    cache: MetadataCache = (
        JsonFileCache(config.cache_path) if config.cache_path else InMemoryCache()
    )
    return SchemaCompiler(cache=cache, config=config)


@click.group()
@click.option(
    "-c",
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    envvar="DOC_SCHEMA_CONFIG",
    help="JSON compiler config (default: $DOC_SCHEMA_CONFIG).",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, config_file: str | None, verbose: bool) -> None:
    """DocSchema - compile annotated document classes into index schemas."""
    _configure_logging(verbose)
    ctx.ensure_object(dict)
    try:
        ctx.obj["compiler"] = _build_compiler(config_file)
    except DocSchemaError as exc:
        raise click.ClickException(str(exc)) from exc


@cli.command()
@click.argument("target")
@click.option("--indent", type=int, default=2, show_default=True, help="JSON indentation.")
@click.pass_context
def mapping(ctx: click.Context, target: str, indent: int) -> None:
    """Print the index definition compiled from TARGET (module:Class)."""
    compiler: SchemaCompiler = ctx.obj["compiler"]
    try:
        definition = compiler.compile(load_class(target))
    except DocSchemaError as exc:
        raise click.ClickException(str(exc)) from exc
    if not definition:
        raise click.ClickException(f"{target} is not an indexed document")
    click.echo(json.dumps(definition, indent=indent))


@cli.command()
@click.argument("target")
@click.pass_context
def tables(ctx: click.Context, target: str) -> None:
    """Print the field name tables of TARGET (module:Class)."""
    compiler: SchemaCompiler = ctx.obj["compiler"]
    try:
        cls = load_class(target)
        compiler.extractor.extract(cls)
    except DocSchemaError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(json.dumps(dataclasses.asdict(compiler.get_field_tables(cls)), indent=2))


@cli.command()
@click.argument("package")
@click.pass_context
def registry(ctx: click.Context, package: str) -> None:
    """Register every indexed document found in PACKAGE and save the aliases."""
    compiler: SchemaCompiler = ctx.obj["compiler"]
    documents = DocumentRegistry(compiler)
    try:
        documents.scan(package)
        documents.save()
    except (DocSchemaError, ImportError) as exc:
        raise click.ClickException(str(exc)) from exc

    for alias in documents.aliases:
        marker = " (default)" if alias == documents.default_alias else ""
        click.echo(f"{alias}: {compiler.get_document_namespace(alias)}{marker}")
    if isinstance(compiler.cache, JsonFileCache):
        click.echo(f"Saved {len(documents)} aliases to {compiler.cache.path}")


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
