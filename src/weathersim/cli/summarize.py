from collections import Counter, defaultdict
from pathlib import Path

import click

from ..core.conditions import WeatherCondition
from ..engine import SIMULATION_FILE
from ..io.simulation import parse_simulation_line


@click.command()
@click.option("--run-dir", required=True, type=click.Path(exists=True, file_okay=False))
def main(run_dir):
  path = Path(run_dir) / SIMULATION_FILE
  if not path.exists():
    raise click.ClickException(f"{path} not found")
  counts = Counter()
  temps = defaultdict(float)
  locations = set()
  with open(path, encoding="utf-8") as f:
    for line in f:
      row = parse_simulation_line(line)
      counts[row["condition"]] += 1
      temps[row["condition"]] += row["temperature"]
      locations.add(row["location_index"])
  total = sum(counts.values())
  width = max(len("Condition"), max(len(c.label) for c in WeatherCondition))
  click.echo("Condition".ljust(width) + " |   Days |  Share | Mean temp")
  click.echo("-" * width + "-|--------|--------|----------")
  for cond in WeatherCondition:
    n = counts[cond]
    share = n / total if total else 0.0
    mean = f"{temps[cond] / n:9.1f}" if n else "        -"
    click.echo(cond.label.ljust(width) + f" | {n:6,} | {share:6.1%} | {mean}")
  click.echo(f"Total location-days: {total:,}, locations: {len(locations)}")


if __name__ == "__main__":
  main()
