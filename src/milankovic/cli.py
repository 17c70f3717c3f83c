"""
Command-line interface for milankovic.

Usage:
    milankovic list
    milankovic info lgm
    milankovic point --latitude 65 --season 0.5 --co2 415
    milankovic run --preset lgm --time-scale 10000
    milankovic run --all-presets --outputs csv --outputs png
    milankovic compare lgm mid_holocene
    milankovic sweep --co2-min 180 --co2-max 1500 --n-samples 12
    milankovic validate
"""

import sys
import traceback
from pathlib import Path
from typing import Any, Dict, Optional

import click
import numpy as np

from milankovic import __version__, ClimateModel, PRESETS, get_preset
from milankovic.core.constants import CLIMATE_SENSITIVITY
from milankovic.io.csv_writer import write_sweep_csv
from milankovic.utils.logging import (
    setup_logging,
    start_step,
    end_step,
    log_error,
    get_timing_logger,
)
from milankovic.utils.config import load_config, model_settings

OUTPUT_FORMATS = ["csv", "netcdf", "png"]


def _input_options(func):
    """Orbital, atmospheric and evaluation options shared by several commands."""
    options = [
        click.option("--preset", "-p", type=str, default=None, help="Preset key or name (e.g. lgm)"),
        click.option("--eccentricity", type=float, default=None, help="Orbital eccentricity"),
        click.option("--axial-tilt", type=float, default=None, help="Obliquity in degrees"),
        click.option("--precession", type=float, default=None, help="Longitude of perihelion in degrees"),
        click.option("--co2", type=float, default=None, help="CO2 concentration [ppm]"),
        click.option("--season", type=float, default=None, help="Fraction of the year [0, 1)"),
        click.option("--time-scale", type=float, default=None, help="Response time in years (0 = equilibrium)"),
        click.option(
            "--sensitivity",
            type=click.Choice(sorted(CLIMATE_SENSITIVITY)),
            default=None,
            help="Climate sensitivity level",
        ),
        click.option("--offset", type=float, default=None, help="Temperature offset [°C]"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _build(config: Dict[str, Any], preset: Optional[str], values: Dict[str, Any]):
    """Create the model and its inputs from config defaults overridden by options."""
    settings = model_settings(config)
    sensitivity = values.pop("sensitivity", None)
    time_scale = values.pop("time_scale", None)
    offset = values.pop("offset", None)
    model = ClimateModel(
        sensitivity_level=sensitivity or settings["sensitivity_level"],
        time_scale_years=settings["time_scale_years"] if time_scale is None else time_scale,
        temp_offset=settings["temp_offset"] if offset is None else offset,
    )
    for key in ("latitude", "season"):
        if values.get(key) is None:
            values[key] = settings[key]
    return model, model.inputs(preset=preset, **values)


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="milankovic")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug output")
@click.option("--config", type=click.Path(exists=True, dir_okay=False), help="Config file path")
@click.pass_context
def main(ctx, verbose, debug, config):
    """
    milankovic - Climate Response Model for orbital forcing

    Computes insolation, greenhouse forcing and feedbacks for a given
    orbit and atmosphere, and aggregates temperature and ice cover over
    seven latitude bands.
    """
    ctx.ensure_object(dict)
    try:
        ctx.obj["config"] = load_config(config)
    except ValueError as e:
        _fail(str(e))

    log_config = ctx.obj["config"]["logging"]
    level = "DEBUG" if debug else ("INFO" if verbose else log_config.get("level", "WARNING"))
    setup_logging(
        level=level,
        log_dir=log_config.get("log_dir"),
        format_style=log_config.get("format_style", "simple"),
    )
    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug


@main.command("list")
def list_presets():
    """List available presets with their parameters."""
    click.echo("\nAvailable Presets:")
    click.echo("─" * 70)

    for key, preset in PRESETS.items():
        lo, hi = preset.expected_temp_range
        click.echo(f"\n  {key}:")
        click.echo(f"    Name: {preset.name}")
        click.echo(
            f"    Orbit: e={preset.orbit.eccentricity}, ε={preset.orbit.axial_tilt}°, "
            f"ϖ={preset.orbit.precession}°"
        )
        click.echo(f"    CO2: {preset.co2:g} ppm")
        click.echo(f"    Year: {preset.year:+,d}")
        click.echo(f"    Expected global mean: [{lo:g}, {hi:g}] °C")

    click.echo("\n" + "─" * 70)
    click.echo("\nRun a preset with:")
    click.echo("  milankovic run --preset lgm")
    click.echo()


@main.command("info")
@click.argument("preset")
def info(preset):
    """Show detailed information about a preset."""
    try:
        p = get_preset(preset)
    except KeyError as e:
        _fail(str(e.args[0]))

    lo, hi = p.expected_temp_range
    click.echo(f"\n{p.name}")
    click.echo("=" * 60)
    click.echo(f"Key: {p.key}")
    click.echo(f"Description: {p.description}")
    click.echo("\nOrbital Parameters:")
    click.echo(f"  Eccentricity: {p.orbit.eccentricity}")
    click.echo(f"  Axial tilt:   {p.orbit.axial_tilt}°")
    click.echo(f"  Precession:   {p.orbit.precession}°")
    click.echo("\nAtmosphere:")
    click.echo(f"  CO2: {p.co2:g} ppm")
    click.echo(f"\nYear: {p.year:+,d}")
    click.echo(f"Expected global mean: [{lo:g}, {hi:g}] °C")
    click.echo()


@main.command("point")
@_input_options
@click.option("--latitude", "-l", type=float, default=None, help="Latitude in degrees")
@click.option("--ch4", type=float, default=None, help="CH4 concentration [ppb]")
@click.option("--n2o", type=float, default=None, help="N2O concentration [ppb]")
@click.option("--aerosol", "aerosol_od", type=float, default=None, help="Aerosol optical depth")
@click.option("--enhanced", is_flag=True, help="Include CH4, N2O, aerosol and vegetation terms")
@click.pass_context
def point(ctx, preset, enhanced, **values):
    """Evaluate temperature and its decomposition at one latitude."""
    try:
        model, inputs = _build(ctx.obj["config"], preset, values)
    except KeyError as e:
        _fail(str(e.args[0]))

    result = model.point(inputs, enhanced=enhanced or any(
        v is not None for v in (inputs.atmosphere.ch4, inputs.atmosphere.n2o, inputs.atmosphere.aerosol_od)
    ))

    click.echo(f"\nLatitude {inputs.latitude:g}°, season {inputs.season:g}")
    click.echo("─" * 50)
    click.echo(f"  Temperature:        {result.temperature:8.2f} °C")
    click.echo(f"  Ice fraction:       {result.ice_factor:8.3f}")
    click.echo(f"  Base temperature:   {result.base_temperature:8.2f} °C")
    for name, value in result.effects.items():
        label = name.replace("_", " ").capitalize() + ":"
        click.echo(f"  {label:<20}{value:8.2f} °C")
    click.echo(f"  Sensitivity:        {result.sensitivity_used:8.2f} °C/(W/m²)")
    click.echo(f"  Time scale applied: {result.time_scale_applied}")
    if result.calculation_error:
        click.echo("  ✗ Calculation error: fallback result reported", err=True)
    click.echo()


@main.command("run")
@_input_options
@click.option("--all-presets", "-a", is_flag=True, help="Run every preset")
@click.option("--output-dir", "-o", type=click.Path(), default=None, help="Output directory")
@click.option(
    "--outputs",
    type=click.Choice(OUTPUT_FORMATS),
    multiple=True,
    default=None,
    help="Output formats (default: from config)",
)
@click.option("--n-seasons", type=int, default=None, help="Season grid size for the seasonal cycle")
@click.option("--no-cycle", is_flag=True, help="Skip the seasonal cycle")
@click.pass_context
def run(ctx, preset, all_presets, output_dir, outputs, n_seasons, no_cycle, **values):
    """Evaluate latitude bands and the seasonal cycle, and export the results."""
    config = ctx.obj["config"]
    output_dir = Path(output_dir or config["outputs"]["base_dir"])
    outputs = list(outputs) if outputs else list(config["outputs"]["formats"])
    n_seasons = n_seasons or int(config["seasonal_cycle"]["n_seasons"])
    dpi = config["visualization"]["dpi"]
    subdir_names = config["outputs"]["subdirs"]

    if all_presets:
        targets = list(PRESETS.keys())
    elif preset:
        targets = [preset]
    else:
        targets = [None]

    try:
        start_step("Initialize output directories")
        subdirs = {fmt: output_dir / subdir_names.get(fmt, fmt) for fmt in outputs}
        for subdir in subdirs.values():
            subdir.mkdir(parents=True, exist_ok=True)
        end_step(success=True)

        n_failed = 0
        for target in targets:
            try:
                model, inputs = _build(config, target, dict(values))
                name = get_preset(target).name if target else "Custom"
                base_name = get_preset(target).key if target else "custom"
            except KeyError as e:
                _fail(str(e.args[0]))

            start_step(f"Configuration: {base_name}")
            try:
                click.echo(f"\n{'─' * 60}")
                click.echo(f"  Processing: {name}")
                click.echo(f"  {model}")

                region = model.run(inputs, name=name)
                cycle = None if no_cycle else model.cycle(inputs, n_seasons, name=name, show_progress=False)

                if "csv" in outputs:
                    path = subdirs["csv"] / f"{base_name}_bands.csv"
                    region.to_csv(path)
                    click.echo(f"    ✓ CSV: {path}")
                    if cycle is not None:
                        path = subdirs["csv"] / f"{base_name}_seasonal.csv"
                        cycle.to_csv(path)
                        click.echo(f"    ✓ CSV: {path}")

                if "netcdf" in outputs:
                    path = subdirs["netcdf"] / f"{base_name}_bands.nc"
                    region.to_netcdf(path)
                    click.echo(f"    ✓ NetCDF: {path}")
                    if cycle is not None:
                        path = subdirs["netcdf"] / f"{base_name}_seasonal.nc"
                        cycle.to_netcdf(path)
                        click.echo(f"    ✓ NetCDF: {path}")

                if "png" in outputs:
                    path = subdirs["png"] / f"{base_name}_profile.png"
                    region.to_png(path, dpi=dpi)
                    click.echo(f"    ✓ PNG: {path}")
                    if cycle is not None:
                        path = subdirs["png"] / f"{base_name}_seasonal.png"
                        cycle.to_png(path, dpi=dpi)
                        click.echo(f"    ✓ PNG: {path}")

                summary = region.summary()
                click.echo("\n  Results Summary:")
                click.echo(f"    Global mean: {summary['global_temperature']:.2f} °C")
                click.echo(f"    Equator-pole gradient: {summary['equator_to_pole_gradient']:.2f} °C")
                click.echo(f"    Band errors: {summary['n_errors']}")
                if target:
                    lo, hi = get_preset(target).expected_temp_range
                    inside = lo <= region.global_temperature <= hi
                    click.echo(f"    Expected range: [{lo:g}, {hi:g}] °C ({'inside' if inside else 'outside'})")
                if cycle is not None:
                    click.echo(f"    Annual mean: {cycle.annual_mean:.2f} °C")
                end_step(success=True)

            except Exception as e:
                log_error(e, f"Configuration {base_name}")
                end_step(success=False)
                click.echo(f"\n  ✗ ERROR in {base_name}: {e}", err=True)
                n_failed += 1
                continue

        click.echo(f"\nOutput Directory: {output_dir}")
        timing_logger = get_timing_logger()
        if timing_logger and ctx.obj.get("verbose"):
            click.echo(timing_logger.get_summary())

        if n_failed:
            sys.exit(1)

    except OSError as e:
        log_error(e, "Main execution")
        click.echo(f"\n  FATAL ERROR: {e}", err=True)
        if ctx.obj.get("debug"):
            click.echo(traceback.format_exc(), err=True)
        sys.exit(1)


@main.command("compare")
@click.argument("first")
@click.argument("second")
@click.option("--season", type=float, default=0.5, help="Fraction of the year. Default: 0.5")
@click.option("--time-scale", type=float, default=5000.0, help="Response time in years. Default: 5000")
@click.option("--sensitivity", type=click.Choice(sorted(CLIMATE_SENSITIVITY)), default=None)
@click.option("--plot", type=click.Path(), default=None, help="Write a comparison PNG to this path")
@click.pass_context
def compare(ctx, first, second, season, time_scale, sensitivity, plot):
    """Compare the latitude bands of two presets side by side."""
    from milankovic.visualization.profile import create_comparison_plot

    settings = model_settings(ctx.obj["config"])
    model = ClimateModel(
        sensitivity_level=sensitivity or settings["sensitivity_level"],
        time_scale_years=time_scale,
        temp_offset=settings["temp_offset"],
    )
    try:
        presets = [get_preset(first), get_preset(second)]
    except KeyError as e:
        _fail(str(e.args[0]))

    a, b = (model.run(model.inputs(preset=p.key, season=season), name=p.name) for p in presets)

    click.echo(f"\n{'Band':<26}{presets[0].key:>12}{presets[1].key:>12}{'Δ':>10}")
    click.echo("─" * 60)
    for band_a, band_b in zip(a.bands, b.bands):
        diff = band_b.temperature - band_a.temperature
        click.echo(f"{band_a.name:<26}{band_a.temperature:12.2f}{band_b.temperature:12.2f}{diff:10.2f}")
    click.echo("─" * 60)
    diff = b.global_temperature - a.global_temperature
    click.echo(f"{'Global mean':<26}{a.global_temperature:12.2f}{b.global_temperature:12.2f}{diff:10.2f}")

    if plot:
        create_comparison_plot([a, b], plot, dpi=ctx.obj["config"]["visualization"]["dpi"])
        click.echo(f"\n✓ PNG: {plot}")
    click.echo()


@main.command("sweep")
@_input_options
@click.option("--co2-min", type=float, default=180.0, help="Lowest CO2 [ppm]. Default: 180")
@click.option("--co2-max", type=float, default=1500.0, help="Highest CO2 [ppm]. Default: 1500")
@click.option("--n-samples", type=int, default=12, help="Number of CO2 levels. Default: 12")
@click.option("--log-spaced", is_flag=True, help="Space CO2 levels logarithmically")
@click.option("--output", "-o", type=click.Path(), default=None, help="CSV output path")
@click.pass_context
def sweep(ctx, preset, co2_min, co2_max, n_samples, log_spaced, output, **values):
    """Global mean temperature over a range of CO2 concentrations."""
    if co2_min <= 0 or co2_max <= co2_min:
        _fail("require 0 < --co2-min < --co2-max")
    if n_samples < 2:
        _fail("--n-samples must be >= 2")

    values.pop("co2", None)
    try:
        model, inputs = _build(ctx.obj["config"], preset, values)
    except KeyError as e:
        _fail(str(e.args[0]))

    if log_spaced:
        levels = np.geomspace(co2_min, co2_max, n_samples)
    else:
        levels = np.linspace(co2_min, co2_max, n_samples)

    df = model.sweep(inputs, levels, show_progress=ctx.obj.get("verbose", False))

    click.echo(f"\nCO2 sweep ({model})")
    click.echo(df.to_string(index=False, float_format=lambda x: f"{x:.3f}"))

    per_doubling = np.polyfit(np.log2(df["co2"].to_numpy()), df["global_temperature"].to_numpy(), 1)[0]
    click.echo(f"\nApparent sensitivity: {per_doubling:.2f} °C per CO2 doubling")

    if output:
        write_sweep_csv(df, output)
        click.echo(f"✓ CSV: {output}")
    click.echo()


@main.command("validate")
def validate_cmd():
    """Check presets and model behaviour; exit status 1 on failure."""
    from milankovic.validation import validate

    report = validate()
    for line in report.lines():
        click.echo(line)
    if not report.passed:
        sys.exit(1)


if __name__ == "__main__":
    main()
