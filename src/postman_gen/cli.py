"""CLI entry point for postman-gen."""

import importlib
import logging
import sys
from pathlib import Path

import click
import yaml
from pydantic import ValidationError

from postman_gen.config import GeneratorSettings
from postman_gen.generator.collection import generate_collection
from postman_gen.generator.routes import enumerate_routes
from postman_gen.registry.asgi import FastAPIRouteRegistry
from postman_gen.registry.base import RouteRegistry
from postman_gen.registry.detect import detect_source
from postman_gen.registry.table import load_route_table


def _load_registry(source: str, fmt: str, app_dir: Path) -> RouteRegistry:
    """Build a route registry from an app import string or a route-table file."""
    if fmt == "auto":
        fmt = detect_source(source)

    if fmt == "table":
        try:
            return load_route_table(Path(source))
        except (OSError, ValueError, KeyError, yaml.YAMLError) as e:
            raise click.ClickException(f"Cannot load route table {source}: {e}")
    return FastAPIRouteRegistry(_import_app(source, app_dir))


def _import_app(import_str: str, app_dir: Path):
    module_name, _, attr = import_str.partition(":")
    if not module_name or not attr:
        raise click.BadParameter(f'Import string "{import_str}" must be in format "<module>:<attribute>".')

    if str(app_dir) not in sys.path:
        sys.path.insert(0, str(app_dir))
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise click.ClickException(f'Could not import module "{module_name}": {e}')

    app = module
    for part in attr.split("."):
        try:
            app = getattr(app, part)
        except AttributeError:
            raise click.ClickException(f'Attribute "{attr}" not found in module "{module_name}".')
    return app


def _load_settings(config: Path | None, name: str | None, port: str | None) -> GeneratorSettings:
    try:
        settings = GeneratorSettings.from_yaml(config) if config else GeneratorSettings()
    except (ValueError, yaml.YAMLError) as e:
        raise click.ClickException(f"Cannot load config {config}: {e}")

    overrides = {}
    if name:
        overrides["app_name"] = name
    if port:
        overrides["port"] = port
    try:
        return GeneratorSettings(**{**settings.model_dump(exclude_unset=True), **overrides})
    except ValidationError as e:
        raise click.ClickException(str(e))


source_argument = click.argument("source")
format_option = click.option(
    "--format", "fmt", default="auto", type=click.Choice(["auto", "app", "table"]),
    help="Route source kind.",
)
app_dir_option = click.option(
    "--app-dir", default=".", type=click.Path(file_okay=False, path_type=Path),
    help="Directory added to sys.path before importing the app.",
)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """Postman Gen — build Postman collections from an application's route table."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


@main.command()
@source_argument
@click.option("-c", "--config", type=click.Path(exists=True, dir_okay=False, path_type=Path), help="Application YAML config (app.name, server.port, postman.output).")
@click.option("-o", "--output", type=click.Path(dir_okay=False, path_type=Path), help="Output file path for the collection JSON.")
@click.option("--name", default=None, help="Collection name (overrides app.name).")
@click.option("--port", default=None, help="Server port used in request URLs (overrides server.port).")
@format_option
@app_dir_option
def generate(source: str, config: Path | None, output: Path | None, name: str | None, port: str | None, fmt: str, app_dir: Path):
    """Generate a Postman collection from SOURCE (module:app or route-table file)."""
    settings = _load_settings(config, name, port)
    click.echo(f"Loading routes from {source} (format: {fmt})...")
    registry = _load_registry(source, fmt, app_dir)

    written = generate_collection(registry, settings, output)
    if written is None:
        raise click.ClickException("Postman collection generation failed, see log for details.")
    click.echo(f"Postman collection saved to {written}")


@main.command()
@source_argument
@format_option
@app_dir_option
def routes(source: str, fmt: str, app_dir: Path):
    """List the routes that would be written to the collection."""
    registry = _load_registry(source, fmt, app_dir)
    count = 0
    for route in enumerate_routes(registry):
        click.echo(f"{route.method:<7} {route.pattern:<35} -> {route.handler.name}")
        count += 1
    click.echo(f"Found {count} routes.")
