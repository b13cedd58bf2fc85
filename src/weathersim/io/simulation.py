"""Human-readable simulation log, one pipe-delimited line per location-day."""

from datetime import datetime, timezone
from typing import Iterable
import logging
import math

from ..core.conditions import SensorType, WeatherCondition
from .atomic import atomic_text_writer

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def _round_half_up(x: float) -> int:
  return int(math.floor(x + 0.5))


def format_timestamp(d: datetime) -> str:
  if d.tzinfo is not None:
    d = d.astimezone(timezone.utc)
  return d.strftime(TIMESTAMP_FORMAT)


def format_simulation_line(record) -> str:
  loc = record.location
  obs = record.observations
  # All three sensor types are always reported
  return "|".join([
    f"LOCATION-{record.location_index}",
    f"{loc.latitude:.2f},{loc.longitude:.2f},{loc.elevation:d}",
    format_timestamp(record.date),
    record.condition.label,
    f"{obs[SensorType.TEMPERATURE]:.1f}",
    f"{obs[SensorType.PRESSURE]:.1f}",
    f"{_round_half_up(obs[SensorType.HUMIDITY]):d}",
  ])


def write_simulation(records: Iterable, path) -> int:
  n = 0
  with atomic_text_writer(path) as f:
    for rec in records:
      f.write(format_simulation_line(rec) + "\n")
      n += 1
  logger.info(f"Wrote {n} simulation lines to {path}")
  return n


def parse_simulation_line(line: str) -> dict:
  parts = line.rstrip("\n").split("|")
  if len(parts) != 7:
    raise ValueError(f"Expected 7 fields, got {len(parts)}: {line!r}")
  loc, coords, ts, cond, temp, pressure, humidity = parts
  if not loc.startswith("LOCATION-"):
    raise ValueError(f"Bad location field {loc!r}")
  lat, lon, elv = coords.split(",")
  return {
    "location_index": int(loc[len("LOCATION-"):]),
    "latitude": float(lat),
    "longitude": float(lon),
    "elevation": int(elv),
    "timestamp": datetime.strptime(ts, TIMESTAMP_FORMAT).replace(tzinfo=timezone.utc),
    "condition": WeatherCondition.from_name(cond),
    "temperature": float(temp),
    "pressure": float(pressure),
    "humidity": int(humidity),
  }
