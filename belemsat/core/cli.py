"""
belemsat CLI entrypoint: spectral index, thresholding and colormap commands
operating on local GeoTIFF band files.
"""

import json
import sys

import click  # type: ignore
from click import echo
import numpy as np

from belemsat.analytics.results import SummaryTable
from belemsat.analytics.stats import calculate_mask_statistics
from belemsat.analytics.threshold import (
    THRESHOLD_MODES,
    apply_threshold,
    calculate_otsu_threshold,
)
from belemsat.core.config import ConfigManager, ConfigValidationError
from belemsat.core.logger import Logger
from belemsat.ingestion.indices import INDEX_REGISTRY
from belemsat.ingestion.raster_io import (
    read_band,
    read_profile,
    write_index,
    write_mask,
)
from belemsat.services.water_analysis import WaterAnalysisService
from belemsat.visualization.colormaps import COLORMAPS, generate_colormap
from belemsat.visualization.quicklook import (
    plot_histogram,
    save_false_color,
    save_quicklook,
)

logger = Logger.get_logger(__name__)


def _parse_bands(ctx, _param, values) -> dict[str, str]:
    """Turn repeated ``role=path`` options into a dict of supported rasters."""
    config = (ctx.obj or {}).get("config") or ConfigManager()
    bands: dict[str, str] = {}
    for item in values:
        role, sep, path = item.partition("=")
        if not sep or not role or not path:
            raise click.BadParameter(f"Expected ROLE=PATH, got '{item}'")
        path = path.strip()
        try:
            config.check_input_format(path)
        except ConfigValidationError as e:
            raise click.BadParameter(str(e)) from None
        bands[role.strip().lower()] = path
    return bands


def _parse_threshold(value: str | None):
    if value is None or value.lower() == "otsu":
        return value
    try:
        return float(value)
    except ValueError:
        raise click.BadParameter(
            f"Threshold must be a number or 'otsu', got '{value}'"
        ) from None


def _dump(data) -> str:
    # NaN statistics are written as null
    def _clean(v):
        if isinstance(v, float) and np.isnan(v):
            return None
        return v

    if isinstance(data, dict):
        data = {k: _clean(v) for k, v in data.items()}
    return json.dumps(data, indent=2)


band_option = click.option(
    "--band",
    "-b",
    "bands",
    multiple=True,
    required=True,
    callback=_parse_bands,
    help="Band file as ROLE=PATH, e.g. -b green=B03.tif -b nir=B08.tif",
)
collection_option = click.option(
    "--collection",
    "-c",
    default=None,
    help="Collection ID used to scale DNs to reflectance (defaults to config)",
)


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True),
    default=None,
    help="YAML/TOML/JSON settings file",
)
@click.pass_context
def cli(ctx, config_path):
    """belemsat: spectral index toolkit for flood and vegetation risk maps."""
    Logger.setup()
    ctx.ensure_object(dict)
    ctx.obj["config"] = ConfigManager(config_path)


@cli.command()
@click.argument("name", type=click.Choice(list(INDEX_REGISTRY.keys())))
@band_option
@collection_option
@click.option("--output", "-o", type=click.Path(), default=None, help="Index GeoTIFF")
@click.option("--quicklook", type=click.Path(), default=None, help="Colorized PNG")
@click.pass_context
def index(ctx, name, bands, collection, output, quicklook):
    """Compute index NAME and print its statistics as JSON."""
    try:
        svc = WaterAnalysisService(config=ctx.obj["config"], logger=logger)
        analysis = svc.analyze_files(name, bands, collection=collection)
        result = analysis.result
        if output:
            profile = read_profile(next(iter(bands.values())))
            write_index(result, output, profile, logger=logger)
        if quicklook:
            save_quicklook(result, quicklook, analysis.colormap, analysis.rescale)
        echo(_dump(result.to_dict()))
    # pylint: disable=broad-exception-caught
    except Exception as e:
        echo(f"❌  Index computation failed: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.argument("name", type=click.Choice(list(INDEX_REGISTRY.keys())))
@band_option
@collection_option
@click.option(
    "--threshold",
    "-t",
    default=None,
    help="Numeric threshold or 'otsu' (defaults to config)",
)
@click.option("--mode", "-m", type=click.Choice(list(THRESHOLD_MODES)), default=None)
@click.option("--pixel-size", type=float, default=None, help="Pixel size (meters)")
@click.option("--mask-out", type=click.Path(), default=None, help="Mask GeoTIFF")
@click.option("--quicklook", type=click.Path(), default=None, help="Colorized PNG")
@click.option("--histogram", type=click.Path(), default=None, help="Histogram PNG")
@click.option(
    "--summary-csv", type=click.Path(), default=None, help="Write the summary row to CSV"
)
@click.pass_context
def analyze(
    ctx,
    name,
    bands,
    collection,
    threshold,
    mode,
    pixel_size,
    mask_out,
    quicklook,
    histogram,
    summary_csv,
):
    """Compute index NAME, threshold it and report the masked area."""
    try:
        svc = WaterAnalysisService(config=ctx.obj["config"], logger=logger)
        analysis = svc.analyze_files(
            name,
            bands,
            collection=collection,
            threshold=_parse_threshold(threshold),
            mode=mode,
            pixel_size=pixel_size,
        )
        result = analysis.result
        if mask_out:
            profile = read_profile(next(iter(bands.values())))
            write_mask(
                analysis.mask,
                result.width,
                result.height,
                mask_out,
                profile,
                logger=logger,
            )
        if quicklook:
            save_quicklook(result, quicklook, analysis.colormap, analysis.rescale)
        if histogram:
            plot_histogram(result, histogram, threshold=analysis.threshold)
        row = analysis.to_dict()
        if summary_csv:
            SummaryTable([row]).to_csv(summary_csv)
            logger.info("Summary written to %s", summary_csv)
        echo(_dump(row))
    except click.BadParameter:
        raise
    # pylint: disable=broad-exception-caught
    except Exception as e:
        echo(f"❌  Analysis failed: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.argument("index_tif", type=click.Path(exists=True))
@click.option("--threshold", "-t", default="otsu", help="Numeric threshold or 'otsu'")
@click.option(
    "--mode", "-m", type=click.Choice(list(THRESHOLD_MODES)), default="above"
)
@click.option("--pixel-size", type=float, default=None, help="Pixel size (meters)")
@click.option("--mask-out", type=click.Path(), default=None, help="Mask GeoTIFF")
@click.pass_context
def threshold(ctx, index_tif, threshold, mode, pixel_size, mask_out):
    """Threshold an existing index raster INDEX_TIF and print mask statistics."""
    try:
        value = _parse_threshold(threshold)
        band = read_band(index_tif)
        values = band.data.astype(np.float64)
        values[band.nodata_mask()] = np.nan
        auto = value is None or isinstance(value, str)
        if auto:
            value = calculate_otsu_threshold(values)
        mask = apply_threshold(values, value, mode)
        if pixel_size is None:
            pixel_size = float(ctx.obj["config"].get("pixel_size"))
        stats = calculate_mask_statistics(mask, pixel_size)
        if mask_out:
            write_mask(
                mask,
                band.width,
                band.height,
                mask_out,
                read_profile(index_tif),
                logger=logger,
            )
        out = {"threshold": value, "mode": mode, "auto_threshold": auto}
        out.update(stats.to_dict())
        echo(_dump(out))
    except click.BadParameter:
        raise
    # pylint: disable=broad-exception-caught
    except Exception as e:
        echo(f"❌  Thresholding failed: {e}", err=True)
        sys.exit(1)


@cli.command()
@band_option
@click.option("--output", "-o", type=click.Path(), required=True, help="PNG path")
@click.option("--vmin", type=float, default=0.0, help="Band value mapped to 0")
@click.option("--vmax", type=float, default=3000.0, help="Band value mapped to 255")
def composite(bands, output, vmin, vmax):
    """Write a false-color infrared PNG from the nir, red and green bands."""
    try:
        roles = ("nir", "red", "green")
        missing = [role for role in roles if role not in bands]
        if missing:
            raise ValueError(f"Composite needs bands {list(roles)}; missing {missing}")
        nir, red, green = (read_band(bands[role]) for role in roles)
        save_false_color(nir, red, green, output, (vmin, vmax))
        echo(f"✅  False-color composite written to `{output}`")
    # pylint: disable=broad-exception-caught
    except Exception as e:
        echo(f"❌  Composite failed: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.argument("name", type=click.Choice(list(COLORMAPS.keys())))
def colormap(name):
    """Print the RGB steps of palette NAME as JSON."""
    echo(json.dumps([list(rgb) for rgb in generate_colormap(name)]))


if __name__ == "__main__":
    cli()  # pylint: disable=no-value-for-parameter
