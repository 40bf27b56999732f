"""scriptshift CLI - Main entry point."""

import json
import logging
import sys
from pathlib import Path
from typing import Any

import click
from tqdm import tqdm

from scriptshift.errors import ConfigurationError, TransliterationError
from scriptshift.normalize.transliteration import Transliterator, compile_separator, transliterate
from scriptshift.qc.validate_schema import validate_schemas
from scriptshift.repository import SchemaRepository
from scriptshift.resources import ResourceLocator
from scriptshift.utils.config import load_settings
from scriptshift.utils.io import ensure_dir, read_text, write_text
from scriptshift.utils.log import log_with_context, setup_logging
from scriptshift.utils.parallel import map_parallel_ordered


def build_repository(settings: dict[str, Any], logger: logging.Logger) -> SchemaRepository:
    """Build the repository used for one CLI invocation."""
    search_paths = settings.get("schemas", {}).get("search_paths") or []
    return SchemaRepository(locator=ResourceLocator(search_paths=search_paths), logger=logger)


def _fail(logger: logging.Logger, message: str, error: Exception) -> None:
    logger.error(f"{message}: {error}")
    click.echo(f"Error: {error}", err=True)
    sys.exit(1)


def _schema_option(settings: dict[str, Any], schema_ref: str | None) -> str:
    return schema_ref or settings["schemas"]["default"]


def _separator_option(settings: dict[str, Any], separator: str | None) -> str | None:
    if separator is not None:
        return separator
    return settings.get("transliteration", {}).get("separator")


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Settings file layered over the defaults",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_path: Path | None) -> None:
    """Transliterate text with data-driven schemas."""
    try:
        settings = load_settings(config_path)
    except ConfigurationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    log_config = settings.get("logging", {})
    log_level = "DEBUG" if verbose else log_config.get("level", "WARNING")
    log_format = log_config.get("format", "pretty")
    log_file = log_config.get("file")

    logger = setup_logging(level=log_level, format_type=log_format, log_file=log_file)

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings
    ctx.obj["logger"] = logger
    ctx.obj["repository"] = build_repository(settings, logger)


@cli.command()
@click.argument("text", nargs=-1)
@click.option("--schema", "-s", "schema_ref", help="Catalog identifier or schema path")
@click.option("--separator", help="Word separator regular expression")
@click.option(
    "--input",
    "input_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Read text from a file instead of arguments or stdin",
)
@click.option(
    "--output",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the result to a file",
)
@click.pass_context
def translit(
    ctx: click.Context,
    text: tuple[str, ...],
    schema_ref: str | None,
    separator: str | None,
    input_path: Path | None,
    output_path: Path | None,
) -> None:
    """Transliterate TEXT, a file or standard input."""
    logger = ctx.obj["logger"]
    settings = ctx.obj["settings"]

    schema_ref = _schema_option(settings, schema_ref)
    separator = _separator_option(settings, separator)

    try:
        if text:
            source = " ".join(text)
        elif input_path is not None:
            source = read_text(input_path)
        else:
            source = click.get_text_stream("stdin").read()
    except (UnicodeDecodeError, OSError) as e:
        _fail(logger, "Could not read input", e)
        return

    try:
        transliterator = Transliterator(ctx.obj["repository"], separator=separator)
        result = transliterator.transliterate(source, schema_ref)
    except TransliterationError as e:
        _fail(logger, "Transliteration failed", e)
        return

    if output_path is not None:
        write_text(output_path, result)
        click.echo(f"Output written to {output_path}", err=True)
    else:
        # Arguments carry no trailing newline, files and stdin keep their own
        click.echo(result, nl=bool(text))


@cli.command()
@click.argument(
    "files",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option("--schema", "-s", "schema_ref", help="Catalog identifier or schema path")
@click.option("--separator", help="Word separator regular expression")
@click.option(
    "--output-dir",
    "-o",
    required=True,
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory receiving the transliterated files",
)
@click.option("--workers", type=int, help="Parallel workers (default from settings)")
@click.pass_context
def batch(
    ctx: click.Context,
    files: tuple[Path, ...],
    schema_ref: str | None,
    separator: str | None,
    output_dir: Path,
    workers: int | None,
) -> None:
    """Transliterate FILES into an output directory."""
    logger = ctx.obj["logger"]
    settings = ctx.obj["settings"]
    repository = ctx.obj["repository"]

    schema_ref = _schema_option(settings, schema_ref)
    separator = _separator_option(settings, separator)
    workers = workers or settings.get("parallel", {}).get("max_workers", 4)

    names = [path.name for path in files]
    if len(set(names)) != len(names):
        click.echo("Error: input files must have distinct names", err=True)
        sys.exit(1)

    try:
        schema = repository.resolve(schema_ref)
        compile_separator(separator)
    except TransliterationError as e:
        _fail(logger, "Batch setup failed", e)
        return

    # Read every input before writing anything
    sources: dict[Path, str] = {}
    for path in files:
        try:
            sources[path] = read_text(path)
        except (UnicodeDecodeError, OSError) as e:
            _fail(logger, f"Could not read {path}", e)
            return

    out_dir = ensure_dir(output_dir)

    def _process(path: Path) -> Path:
        destination = out_dir / path.name
        write_text(destination, transliterate(sources[path], schema, separator) or "")
        return destination

    written = 0
    try:
        for destination in tqdm(
            map_parallel_ordered(_process, files, max_workers=workers),
            total=len(files),
            desc="Transliterating",
            unit="file",
        ):
            log_with_context(logger, "debug", "Wrote transliterated file", path=str(destination))
            written += 1
    except OSError as e:
        _fail(logger, f"Could not write into {out_dir}", e)
        return

    click.echo(f"Transliterated {written} files with {schema.name!r} into {out_dir}")


@cli.command(name="schemas")
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a table")
@click.pass_context
def list_schemas(ctx: click.Context, as_json: bool) -> None:
    """List the built-in schemas."""
    repository = ctx.obj["repository"]

    rows = [
        {"identifier": entry.identifier, "name": entry.name, "path": entry.path}
        for entry in repository.catalog
    ]

    if as_json:
        click.echo(json.dumps(rows, indent=2))
        return

    width = max(len(row["identifier"]) for row in rows)
    for row in rows:
        click.echo(f"{row['identifier']:<{width}}  {row['path']}")


@cli.command()
@click.argument("schema_ref")
@click.option("--json", "as_json", is_flag=True, help="Print the expanded schema as JSON")
@click.pass_context
def show(ctx: click.Context, schema_ref: str, as_json: bool) -> None:
    """Show metadata and table sizes of a schema."""
    logger = ctx.obj["logger"]

    try:
        schema = ctx.obj["repository"].resolve(schema_ref)
    except TransliterationError as e:
        _fail(logger, "Could not load schema", e)
        return

    if as_json:
        click.echo(json.dumps(schema.to_dict(), ensure_ascii=False, indent=2))
        return

    click.echo(f"Name:        {schema.name}")
    click.echo(f"Description: {schema.description}")
    click.echo(f"URL:         {schema.url}")
    click.echo(f"Fingerprint: {schema.fingerprint}")
    for table, size in schema.table_sizes.items():
        click.echo(f"  {table}: {size} entries")
    click.echo(f"  samples: {len(schema.samples)}")


@cli.command()
@click.argument("schema_refs", nargs=-1)
@click.pass_context
def validate(ctx: click.Context, schema_refs: tuple[str, ...]) -> None:
    """Validate schemas (default: every built-in schema)."""
    logger = ctx.obj["logger"]

    result = validate_schemas(ctx.obj["repository"], logger, schema_refs or None)

    for warning in result.warnings:
        click.echo(f"  WARNING: {warning}")

    if not result.valid:
        for error in result.errors:
            click.echo(f"  ERROR: {error}", err=True)
        sys.exit(1)

    click.echo(f"All validations passed ({len(result.checked)} schemas)")


if __name__ == "__main__":
    cli()
