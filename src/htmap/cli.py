"""CLI for rendering heatmaps from map images."""

import logging
import sys
from pathlib import Path

import click

from htmap import config
from htmap.logging_config import setup_logging
from htmap.models import (
    ColorRamp,
    ConfigurationError,
    PipelineConfig,
    RenderParameters,
)
from htmap.pipeline import run_pipeline


def parse_background(value: str) -> tuple[int, int, int]:
    """Parse ``R,G,B`` into a background color tuple."""
    parts = [p.strip() for p in value.split(",")]
    if len(parts) != 3:
        raise ConfigurationError(f"Background must be R,G,B, got {value!r}")
    try:
        rgb = tuple(int(p) for p in parts)
    except ValueError as e:
        raise ConfigurationError(f"Background must be R,G,B integers, got {value!r}") from e
    if any(c < 0 or c > 255 for c in rgb):
        raise ConfigurationError(f"Background channels must be 0-255, got {value!r}")
    return rgb  # type: ignore[return-value]


def parse_ramp(entries: tuple[str, ...]) -> ColorRamp:
    """Parse ``#rrggbb[:alpha]`` entries, listed peak -> base."""
    pairs: list[tuple[str, float]] = []
    for entry in entries:
        color, _, alpha = entry.partition(":")
        try:
            pairs.append((color, float(alpha) if alpha else 1.0))
        except ValueError as e:
            raise ConfigurationError(f"Invalid ramp alpha in {entry!r}") from e
    return ColorRamp.from_entries(pairs)


@click.command()
@click.argument("image", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", type=click.Path(path_type=Path), help="Output image path")
@click.option(
    "--opacity",
    type=float,
    default=config.DEFAULT_OPACITY,
    help="Global layer opacity (0-1)",
)
@click.option("--blur", type=float, default=config.DEFAULT_BLUR, help="Band edge softness (0-1)")
@click.option(
    "--sensitivity",
    type=float,
    default=config.DEFAULT_SENSITIVITY,
    help="Extraction sensitivity (recorded only)",
)
@click.option(
    "--bg",
    "background",
    default=",".join(str(c) for c in config.MAP_BG_COLOR),
    help="Map background color as R,G,B",
)
@click.option(
    "--ramp",
    "ramp_entries",
    multiple=True,
    help="Ramp stop as #rrggbb:alpha; give exactly 4, peak first",
)
@click.option("--auto-fill", is_flag=True, help="Rebuild heat from the region fill")
@click.option("--log-file", type=click.Path(path_type=Path), help="Also write logs to this file")
@click.option("-v", "--verbose", is_flag=True, help="Verbose output")
def main(
    image: Path,
    output: Path | None,
    opacity: float,
    blur: float,
    sensitivity: float,
    background: str,
    ramp_entries: tuple[str, ...],
    auto_fill: bool,
    log_file: Path | None,
    verbose: bool,
) -> None:
    """Render a heatmap over a map IMAGE."""
    setup_logging(
        logging.DEBUG if verbose else logging.WARNING,
        log_file,
    )

    try:
        bg = parse_background(background)
        ramp = parse_ramp(ramp_entries) if ramp_entries else ColorRamp.default()
    except ConfigurationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(2)

    pipeline_config = PipelineConfig(
        background=bg,
        sensitivity=sensitivity,
        ramp=ramp,
        render=RenderParameters(global_opacity=opacity, blur=blur),
        auto_fill=auto_fill,
    )

    state = run_pipeline(str(image), str(output) if output else None, pipeline_config)

    if state.errors or state.saved_path is None:
        click.echo(f"Error processing {image}:", err=True)
        for e in state.errors:
            click.echo(f"  [{e.stage.value}] {e.message}", err=True)
        sys.exit(1)

    if verbose:
        source = "region fill" if state.filled else "image colors"
        click.echo(f"Heat from {source}")
    click.echo(f"Output: {state.saved_path}")


if __name__ == "__main__":
    main()
