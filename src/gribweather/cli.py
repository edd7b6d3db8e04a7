"""Command-line entry point for gribweather."""

from __future__ import annotations

from pathlib import Path
import json

import click

from gribweather.backends.base import BackendError
from gribweather.backends.cfgrib_helpers import open_grib_dataset
from gribweather.config import configure_logging
from gribweather.parameters import PRODUCTS, VARIABLE_SPECS, get_product, get_spec
from gribweather.pipeline.errors import ExtractionError
from gribweather.pipeline.extract import ExtractionPipeline
from gribweather.records import Parameter
from gribweather.service import GribService


def _emit(results) -> None:
    payload = [result.to_dict() for result in results]
    click.echo(json.dumps(payload[0] if len(payload) == 1 else payload, indent=2))


@click.group()
def main() -> None:
    """Extract wave, wind, current and precipitation fields from GRIB files."""

    configure_logging()


@main.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--product", type=click.Choice(sorted(PRODUCTS)), default=None, help="Extract every parameter of a product.")
@click.option(
    "--parameter",
    "parameters",
    type=click.Choice([p.value for p in Parameter], case_sensitive=False),
    multiple=True,
    help="Parameter to extract; may be repeated.",
)
@click.option("--max-points", type=click.IntRange(min=1), default=None, help="Decimation cap per parameter.")
@click.option("--engine", default=None, help="xarray engine used to decode PATH.")
def extract(path: Path, product: str | None, parameters: tuple[str, ...], max_points: int | None, engine: str | None) -> None:
    """
    Extract parameters from a local GRIB file and print them as JSON.
    """

    if product:
        specs = get_product(product).specs(VARIABLE_SPECS)
    elif parameters:
        specs = [get_spec(name.upper()) for name in parameters]
    else:
        raise click.UsageError("Pass --product or at least one --parameter.")

    pipeline = ExtractionPipeline(max_points=max_points)
    try:
        with open_grib_dataset(path, engine=engine) as dataset:
            results = pipeline.extract_many(dataset, specs)
    except ExtractionError as exc:
        raise click.ClickException(str(exc)) from exc
    _emit(results)


@main.command()
@click.argument("product", type=click.Choice(sorted(PRODUCTS)))
@click.argument("area")
@click.option("--work-dir", type=click.Path(path_type=Path), default=None, help="Download directory.")
def fetch(product: str, area: str, work_dir: Path | None) -> None:
    """
    Download PRODUCT for AREA from the gribfiles API and print the extraction.
    """

    service = GribService(work_dir=work_dir)
    try:
        results = service.get_product(product, area)
    except (BackendError, ExtractionError, ValueError) as exc:
        raise click.ClickException(str(exc)) from exc
    finally:
        service.close()
    _emit(results)


@main.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--engine", default=None, help="xarray engine used to decode PATH.")
def variables(path: Path, engine: str | None) -> None:
    """List the variables in a GRIB file with their shapes."""

    with open_grib_dataset(path, engine=engine) as dataset:
        for name in dataset.variables():
            click.echo(f"{name}\t{dataset.shape(name)}")
