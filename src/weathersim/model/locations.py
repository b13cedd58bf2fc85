from dataclasses import dataclass
from itertools import islice
from typing import Iterable, List, Sequence, Tuple

import numpy as np
from pydantic import BaseModel

from ..core.errors import InsufficientLocationSamplesError
from .transition import TransitionModel


@dataclass(frozen=True)
class GeoLocation:
  latitude: float
  longitude: float
  elevation: int  # meters
  transition: TransitionModel


class RegionConfig(BaseModel):
  lat_range: Tuple[float, float]
  lon_range: Tuple[float, float]
  elevation_range: Tuple[int, int]


def take_locations(samples: Iterable[GeoLocation], count: int) -> List[GeoLocation]:
  """First ``count`` locations in source order; the position is the location index."""
  picked = list(islice(samples, count))
  if len(picked) < count:
    raise InsufficientLocationSamplesError(
      f"Requested {count} locations, location source delivered {len(picked)}"
    )
  return picked


def sample_locations(count: int, region: RegionConfig, matrix: Sequence[Sequence[float]], rng) -> List[GeoLocation]:
  lat_lo, lat_hi = region.lat_range
  lon_lo, lon_hi = region.lon_range
  elv_lo, elv_hi = region.elevation_range
  out = []
  for _ in range(count):
    out.append(GeoLocation(
      latitude=float(rng.uniform(lat_lo, lat_hi)),
      longitude=float(rng.uniform(lon_lo, lon_hi)),
      elevation=rng.integers(elv_lo, elv_hi + 1),
      transition=TransitionModel(matrix),
    ))
  return out


def sample_from_elevation_grid(grid, bounds: Tuple[float, float, float, float], count: int,
                               matrix: Sequence[Sequence[float]], rng) -> List[GeoLocation]:
  """
  Pick locations on land cells (elevation > 0) of a 2-D elevation grid.

  bounds: (lat_min, lat_max, lon_min, lon_max) covered by the grid; row 0 is the
  northern edge. Land cells are chosen uniformly, the point lands at a uniform
  offset inside the cell.
  """
  grid = np.asarray(grid)
  if grid.ndim != 2:
    raise ValueError(f"Elevation grid must be 2-D, got {grid.ndim} dimensions")
  lat_min, lat_max, lon_min, lon_max = bounds
  rows, cols = grid.shape
  land = np.flatnonzero(grid > 0)
  if land.size == 0:
    raise InsufficientLocationSamplesError("Elevation grid has no land cells to sample from")
  cell_h = (lat_max - lat_min) / rows
  cell_w = (lon_max - lon_min) / cols
  out = []
  for _ in range(count):
    flat = int(rng.choice(land))
    r, c = divmod(flat, cols)
    lat = lat_max - (r + float(rng.uniform(0, 1))) * cell_h
    lon = lon_min + (c + float(rng.uniform(0, 1))) * cell_w
    out.append(GeoLocation(
      latitude=lat,
      longitude=lon,
      elevation=int(grid[r, c]),
      transition=TransitionModel(matrix),
    ))
  return out
