import sys
from pathlib import Path

import click
import pyarrow.parquet as pq

from ..core.conditions import SensorType, WeatherCondition
from ..engine import SIMULATION_FILE, SIMULATION_PARQUET_FILE, TRAINING_FILE
from ..io.manifest import read_manifest
from ..io.simulation import parse_simulation_line
from ..io.training import FEATURE_COUNT, parse_training_line


def check_training_line(line: str):
  label, feats = parse_training_line(line)
  if sorted(feats) != list(range(1, FEATURE_COUNT + 1)):
    raise ValueError(f"expected features 1..{FEATURE_COUNT}: {line!r}")
  block = int(feats[FEATURE_COUNT])
  if block == 0:
    if not label.is_integer():
      raise ValueError(f"condition label must be an integer code: {line!r}")
    WeatherCondition.from_code(int(label))
  else:
    SensorType.from_id(block)


def count_checked_lines(path: Path, check) -> int:
  n = 0
  with open(path, encoding="utf-8") as f:
    for lineno, line in enumerate(f, 1):
      try:
        check(line)
      except ValueError as e:
        raise click.ClickException(f"{path.name}:{lineno}: {e}")
      n += 1
  return n


@click.command()
@click.option("--run-dir", required=True, type=click.Path(exists=True, file_okay=False))
def main(run_dir):
  run_dir = Path(run_dir)
  manifest_path = run_dir / "manifest.json"
  if not manifest_path.exists():
    click.echo(f"ERROR: no manifest.json in {run_dir}", err=True)
    sys.exit(1)
  try:
    m = read_manifest(manifest_path)
  except ValueError as e:
    click.echo(f"ERROR: manifest.json is not valid JSON: {e}", err=True)
    sys.exit(1)
  files = m.get("files", {}) if isinstance(m, dict) else {}
  if not isinstance(files, dict) or not files:
    click.echo("ERROR: manifest lists no output files", err=True)
    sys.exit(1)
  checks = {TRAINING_FILE: check_training_line, SIMULATION_FILE: parse_simulation_line}
  ok = True
  for name, expected in sorted(files.items()):
    if name not in checks and name != SIMULATION_PARQUET_FILE:
      click.echo(f"ERROR: manifest lists unknown output file {name}", err=True)
      ok = False
      continue
    path = run_dir / name
    if not path.exists():
      click.echo(f"ERROR: {name} listed in manifest but missing", err=True)
      ok = False
      continue
    if name == SIMULATION_PARQUET_FILE:
      found = pq.read_metadata(str(path)).num_rows
    else:
      found = count_checked_lines(path, checks[name])
    if found != expected:
      click.echo(f"ERROR: {name} has {found:,} entries, manifest expects {expected:,}", err=True)
      ok = False
    else:
      click.echo(f"{name}: {found:,} entries")
  if not ok:
    sys.exit(1)
  click.echo("Validation OK")


if __name__ == "__main__":
  main()
