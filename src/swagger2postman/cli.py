"""CLI entry point for swagger2postman."""

import asyncio
import json
import logging
from pathlib import Path

import click

from swagger2postman.config import ConversionOptions, load_options
from swagger2postman.converter import convert
from swagger2postman.errors import ConversionError
from swagger2postman.parser.loader import load_document


def _build_options(config_path: Path | None, **flags) -> ConversionOptions:
    """Merge an options file with command-line flags (flags win when set)."""
    values = load_options(config_path) if config_path else {}
    options = ConversionOptions.model_validate(values)
    overrides = {name: value for name, value in flags.items() if value not in (None, False)}
    return options.model_copy(update=overrides)


def _write_json(path: Path, data: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=4), encoding="utf-8")


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log every conversion step.")
def main(verbose: bool):
    """swagger2postman — convert Swagger 2.0 documents into Postman collections."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command(name="convert")
@click.argument("source")
@click.option("-o", "--output", required=True, type=click.Path(path_type=Path), help="Output file path for the Postman collection.")
@click.option("--env-file", "environment_target", default=None, type=click.Path(path_type=Path), help="Also write a Postman environment to this file.")
@click.option("--config", "config_path", default=None, type=click.Path(exists=True, path_type=Path), help="YAML/JSON file with conversion options.")
@click.option("--exclude-query-params", is_flag=True, help="Leave query parameters out of request URLs.")
@click.option("--exclude-optional-query-params", is_flag=True, help="Leave optional query parameters out of request URLs.")
@click.option("--exclude-body-template", is_flag=True, help="Do not render example request bodies.")
@click.option("--exclude-tests", is_flag=True, help="Do not generate test scripts.")
@click.option("--tag-filter", default=None, help="Only convert operations with this tag.")
@click.option("--host", default=None, help="Host to use instead of the document's host.")
@click.option("--default-security", default=None, help="Preferred security scheme name.")
@click.option("--default-produces-type", default=None, help="Preferred Accept media type.")
def convert_cmd(source: str, output: Path, environment_target: Path | None, config_path: Path | None, **flags):
    """Convert a Swagger 2.0 document (file or URL) into a Postman collection."""
    if environment_target is not None:
        flags["environment_target"] = str(environment_target)
    options = _build_options(config_path, **flags)

    click.echo(f"Converting {source}...")
    try:
        result = asyncio.run(convert(source, options))
    except ConversionError as e:
        raise click.ClickException(str(e)) from e

    _write_json(output, result.collection_dict())
    click.echo(f"Collection saved to {output}")

    environment = result.environment_dict()
    if environment is not None and options.environment_target:
        env_path = Path(options.environment_target)
        _write_json(env_path, environment)
        click.echo(f"Environment saved to {env_path} ({len(environment['values'])} variables)")


@main.command()
@click.argument("source")
def validate(source: str):
    """Load, dereference and validate a Swagger 2.0 document."""
    try:
        api = load_document(source)
    except ConversionError as e:
        raise click.ClickException(str(e)) from e
    click.echo(f"{source} is valid ({len(api.get('paths', {}))} paths)")
