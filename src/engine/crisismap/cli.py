"""Command-line interface for crisis map proximity checks."""

import json
import logging
import sys
from pathlib import Path

import click
import structlog

from crisismap.categories import LAYERS
from crisismap.config import get_config, reload_config
from crisismap.geo_utils import Coordinate
from crisismap.geodata.loader import load_snapshot
from crisismap.proximity.areas import find_containing_areas, list_evacuation_areas
from crisismap.proximity.engine import evaluate
from crisismap.proximity.messages import CATALOGS, describe, describe_areas, headline, summarize

# Configure structlog for CLI output
logging.basicConfig(format="%(message)s", level=logging.INFO)

structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.dev.ConsoleRenderer(colors=True),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
)

logger = structlog.get_logger()

# Exit status when the location is inside a danger radius or evacuation area
EXIT_IN_DANGER = 3


@click.group()
@click.option("--config-dir", type=click.Path(exists=True, path_type=Path), help="Configuration directory")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
def cli(config_dir: Path | None, verbose: bool) -> None:
    """Crisis map danger-zone tools."""
    if config_dir:
        try:
            reload_config(config_dir)
        except Exception as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)

    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        click.echo("Configuration loaded", err=True)


@cli.command()
@click.option("--lat", type=float, required=True, help="Latitude in decimal degrees")
@click.option("--lng", type=float, required=True, help="Longitude in decimal degrees")
@click.option("--radius", type=float, help="Danger radius in km (default from config: 3)")
@click.option("--data-dir", type=click.Path(path_type=Path), help="Directory with GeoJSON sources")
@click.option("--locale", type=click.Choice(sorted(CATALOGS)), help="Message language")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
def check(
    lat: float,
    lng: float,
    radius: float | None,
    data_dir: Path | None,
    locale: str | None,
    as_json: bool,
) -> None:
    """Check whether a location is near a danger point or inside an evacuation area."""
    try:
        config = get_config()
        radius_km = radius if radius is not None else config.proximity.radius_km
        locale = locale or config.proximity.locale

        location = Coordinate(lat=lat, lng=lng)
        if location.is_unset:
            raise ValueError("Location (0, 0) is the unset sentinel, not a real fix")

        snapshot = load_snapshot(data_dir or config.geodata.data_dir, config.geodata.files)
        result = evaluate(location, snapshot, radius_km)
        areas = find_containing_areas(location, snapshot)

        if as_json:
            output = result.to_dict()
            output["message"] = headline(result, areas, locale)
            output["evacuation_areas"] = [
                {"type": a.category, "properties": dict(a.properties), "message": message}
                for a, message in zip(areas, describe_areas(areas, locale))
            ]
            click.echo(json.dumps(output, indent=2, ensure_ascii=False))
        else:
            if result.is_in_danger or not areas:
                click.echo(describe(result, locale))
            for line in summarize(result, config.proximity.max_listed_points, locale):
                click.echo(f"  - {line}")
            for line in describe_areas(areas, locale):
                click.echo(line)

    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if result.is_in_danger or areas:
        sys.exit(EXIT_IN_DANGER)


@cli.command()
@click.option("--data-dir", type=click.Path(path_type=Path), help="Directory with GeoJSON sources")
def layers(data_dir: Path | None) -> None:
    """List danger categories and their loaded feature counts."""
    try:
        config = get_config()
        snapshot = load_snapshot(data_dir or config.geodata.data_dir, config.geodata.files)
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    for layer in LAYERS:
        tag = layer.category.value
        filename = config.geodata.files.get(tag, layer.data_file)
        if snapshot.get(tag) is None:
            status = "missing"
        else:
            count = snapshot.feature_count(tag)
            status = f"{count} feature" if count == 1 else f"{count} features"
        marker = layer.symbol or "area"
        click.echo(f"{tag:<8} {layer.name:<20} {layer.color} {marker:<9} {filename} ({status})")


@cli.command()
@click.option("--data-dir", type=click.Path(path_type=Path), help="Directory with GeoJSON sources")
@click.option("--limit", type=int, help="Show only the newest N areas")
@click.option("--json", "as_json", is_flag=True, help="Print the areas as JSON")
def evac(data_dir: Path | None, limit: int | None, as_json: bool) -> None:
    """List dated evacuation areas, newest first."""
    try:
        config = get_config()
        snapshot = load_snapshot(data_dir or config.geodata.data_dir, config.geodata.files)
        areas = list_evacuation_areas(snapshot)
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if limit is not None:
        areas = areas[:max(limit, 0)]

    if as_json:
        output = [
            {
                "index": a.index,
                "date": a.date.isoformat(),
                "area_m2": a.area_m2,
                "bounds": list(a.bounds),
                "properties": dict(a.properties),
            }
            for a in areas
        ]
        click.echo(json.dumps(output, indent=2, ensure_ascii=False))
        return

    if not areas:
        click.echo("No dated evacuation areas")
        return

    for a in areas:
        min_lng, min_lat, max_lng, max_lat = a.bounds
        click.echo(
            f"{a.date:%Y-%m-%d %H:%M} UTC  {a.area_m2 / 1_000_000:.2f} km²  "
            f"[{min_lng:.4f}, {min_lat:.4f}, {max_lng:.4f}, {max_lat:.4f}]"
        )


if __name__ == "__main__":
    cli()
