"""CLI command to generate a training/simulation dataset run."""

from datetime import datetime, timezone
import logging
import sys

import click
import numpy as np
import yaml

from ..core.errors import WeatherSimError
from ..core.rng import RNG
from ..engine import (
  SIMULATION_FILE,
  SIMULATION_PARQUET_FILE,
  TRAINING_FILE,
  GenerationEngine,
  expected_line_counts,
)
from ..io.manifest import write_manifest
from ..model.locations import sample_from_elevation_grid, sample_locations
from ..model.sensors import build_sensor_models
from ..settings import load_run_config

logging.basicConfig(
  level=logging.INFO,
  format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _parse_start(value):
  if value is None:
    return None
  try:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))
  except ValueError as e:
    raise click.BadParameter(f"not an ISO-8601 timestamp: {value}") from e


@click.command()
@click.option("--config", type=click.Path(exists=True), help="Run configuration YAML")
@click.option("--run-id", type=str, help="Run identifier (output subdirectory)")
@click.option("--start", "start_time", type=str, help="Start date/time, ISO format (e.g. 2019-01-01T00:00:00Z)")
@click.option("--locations", type=int, help="Number of locations")
@click.option("--days", type=int, help="Number of simulated days per location")
@click.option("--seed", type=int, help="Random seed for reproducible runs")
@click.option("--workers", type=int, help="Threads used to simulate locations in parallel")
@click.option("--output", "output_root", type=click.Path(file_okay=False), help="Output root directory")
@click.option("--mode", type=click.Choice(["training", "simulation", "both"]), default="both", show_default=True)
@click.option("--parquet", is_flag=True, help="Also write simulation records as parquet")
@click.option("--elevation-grid", type=click.Path(exists=True),
              help="2-D elevation grid (.npy) to sample land locations from the configured region")
def main(config, run_id, start_time, locations, days, seed, workers, output_root, mode, parquet, elevation_grid):
  """Generate weather-conditioned sensor data for a set of locations."""
  try:
    cfg = load_run_config(
      config,
      run_id=run_id,
      start_time=_parse_start(start_time),
      locations=locations,
      days=days,
      seed=seed,
      workers=workers,
      output_root=output_root,
    )
    sensor_models = build_sensor_models(cfg.sensor_config())

    rng = RNG(cfg.seed)
    # Location sampling gets its own stream; simulation streams come from the engine
    loc_rng, engine_rng = rng.spawn(2)
    if elevation_grid:
      r = cfg.region
      grid = np.load(elevation_grid)
      bounds = (r.lat_range[0], r.lat_range[1], r.lon_range[0], r.lon_range[1])
      locs = sample_from_elevation_grid(grid, bounds, cfg.locations, cfg.transition_matrix, loc_rng)
    else:
      locs = sample_locations(cfg.locations, cfg.region, cfg.transition_matrix, loc_rng)

    engine = GenerationEngine(cfg, locs, sensor_models, rng=engine_rng)
    expected = expected_line_counts(cfg)
    files = {}
    if mode in ("training", "both"):
      engine.generate_training_data()
      files[TRAINING_FILE] = expected[TRAINING_FILE]
    if mode in ("simulation", "both"):
      engine.generate_simulation_data()
      files[SIMULATION_FILE] = expected[SIMULATION_FILE]
    if parquet:
      engine.generate_simulation_parquet()
      files[SIMULATION_PARQUET_FILE] = expected[SIMULATION_FILE]

    write_manifest(cfg.run_dir / "manifest.json", {
      "run_id": cfg.run_id,
      "start_time": cfg.start_time.isoformat(),
      "locations": cfg.locations,
      "days": cfg.days,
      "seed": cfg.seed,
      "created": datetime.now(timezone.utc).isoformat(),
      "files": files,
    })
  # ValueError covers pydantic validation, bad .npy files and malformed grids
  except (WeatherSimError, ValueError, OSError, yaml.YAMLError) as e:
    logger.error(f"Generation failed: {e}")
    click.echo(f"ERROR: {e}", err=True)
    sys.exit(1)

  click.echo(f"Done. Wrote run {cfg.run_id} to {cfg.run_dir}")


if __name__ == "__main__":
  main()
