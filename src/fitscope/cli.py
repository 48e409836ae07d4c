"""CLI for the fitscope FIT activity analyzer."""

import json
import logging
from pathlib import Path

import click

from fitscope.formatters import (
    format_date,
    format_distance,
    format_duration,
    format_file_size,
    format_key,
    format_pace,
    format_value,
)
from fitscope.reader import FitFileError, read_fit_file


# (summary field, formatter) rows shown by `fitscope summary`
SUMMARY_ROWS = [
    ("sport", format_value),
    ("start_time", format_date),
    ("total_elapsed_time", format_duration),
    ("total_timer_time", format_duration),
    ("total_distance", format_distance),
    ("avg_pace", None),
    ("total_calories", format_value),
    ("avg_heart_rate", format_value),
    ("max_heart_rate", format_value),
    ("min_heart_rate", format_value),
    ("avg_cadence", format_value),
    ("avg_power", format_value),
    ("total_ascent", format_value),
    ("avg_respiration_rate", format_value),
    ("avg_temperature", format_value),
    ("training_effect", format_value),
]


def _load(file: str):
    try:
        return read_fit_file(file)
    except FitFileError as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def main(verbose: bool) -> None:
    """fitscope — activity summary and HRV analysis for FIT files."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Output the summary as JSON.")
@click.option("--all", "show_all", is_flag=True, help="List every populated field.")
def summary(file: str, as_json: bool, show_all: bool) -> None:
    """Summarize a FIT file (or a JSON message dump)."""
    report = _load(file)
    if not report.integrity_ok:
        click.echo("Warning: integrity check failed, results may be incomplete.", err=True)

    if as_json:
        click.echo(report.summary.to_json())
        return

    path = Path(file)
    click.echo(f"{path.name} ({format_file_size(path.stat().st_size)})")
    s = report.summary
    if show_all:
        rows = [(k, v) for k, v in s.to_dict(drop_absent=True).items() if k != "hrv_analysis"]
        for key, value in rows:
            click.echo(f"  {format_key(key):<28} {format_value(value)}")
    else:
        for key, fmt in SUMMARY_ROWS:
            value = getattr(s, key)
            if value is None:
                continue
            if key == "avg_pace":
                text = format_pace(s.avg_speed) + " /km"
            else:
                text = fmt(value)
            click.echo(f"  {format_key(key):<28} {text}")

    if s.hrv_analysis is not None:
        h = s.hrv_analysis
        click.echo(f"  {'HRV':<28} RMSSD {h.rmssd:.1f} ms, SDNN {h.sdnn:.1f} ms, "
                   f"pNN50 {h.pnn50:.1f}%")


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Output the metrics as JSON.")
@click.option("--intervals", is_flag=True, help="Include raw RR intervals (JSON only).")
def hrv(file: str, as_json: bool, intervals: bool) -> None:
    """Show time-domain HRV metrics from beat-interval data."""
    metrics = _load(file).summary.hrv_analysis

    if metrics is None:
        if as_json:
            click.echo("null")
        else:
            click.echo("Insufficient RR interval data for HRV analysis.")
        return

    if as_json:
        click.echo(json.dumps(metrics.to_dict(include_intervals=intervals), indent=2))
        return

    click.echo(f"  RMSSD      {metrics.rmssd:.1f} ms")
    click.echo(f"  SDNN       {metrics.sdnn:.1f} ms")
    click.echo(f"  pNN50      {metrics.pnn50:.1f} %")
    click.echo(f"  Mean NN    {metrics.mean_nn:.1f} ms")
    click.echo(f"  Min/Max NN {metrics.min_nn:.0f} / {metrics.max_nn:.0f} ms")
    click.echo(f"  Intervals  {metrics.total_intervals}")


@main.command("types")
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
def types_cmd(file: str) -> None:
    """List the message types present in a file."""
    report = _load(file)
    if not report.data_types:
        click.echo("No data found.")
        return
    for d in report.data_types:
        click.echo(f"  {d.label:<20} {d.count}")


if __name__ == "__main__":
    main()
