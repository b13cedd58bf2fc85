"""LIBSVM-style training file: label first, then sparse ``index:value`` features 1..5."""

from typing import Dict, Iterable, List, Tuple
import logging

import numpy as np

from ..core.conditions import SensorType
from .atomic import atomic_text_writer

logger = logging.getLogger(__name__)

CONDITION_BLOCK = 0
FEATURE_COUNT = 5


def format_training_lines(record) -> List[str]:
  loc = record.location
  prefix = f"1:{loc.latitude:.2f} 2:{loc.longitude:.2f} 3:{loc.elevation:d} 4:{record.day_of_year:d}"
  lines = [f"{record.condition.code:d} {prefix} 5:{CONDITION_BLOCK}"]
  for st in SensorType:
    lines.append(f"{record.observations[st]:.2f} {prefix} 5:{st.sensor_id:d}")
  return lines


def write_training(records: Iterable, path) -> int:
  n = 0
  with atomic_text_writer(path) as f:
    for rec in records:
      for line in format_training_lines(rec):
        f.write(line + "\n")
        n += 1
  logger.info(f"Wrote {n} training lines to {path}")
  return n


def parse_training_line(line: str) -> Tuple[float, Dict[int, float]]:
  parts = line.split()
  if not parts:
    raise ValueError("Empty training line")
  label = float(parts[0])
  features = {}
  for tok in parts[1:]:
    idx, sep, val = tok.partition(":")
    if not sep:
      raise ValueError(f"Malformed feature {tok!r} in line {line!r}")
    features[int(idx)] = float(val)
  return label, features


def load_training_subset(path, block: int) -> Tuple[np.ndarray, np.ndarray]:
  """
  Read the training file and keep lines whose feature 5 equals ``block``
  (0 for weather condition lines, a sensor id for that sensor's lines).

  Returns (X, y) with X of shape (n, 5), features in index order.
  """
  xs, ys = [], []
  with open(path, encoding="utf-8") as f:
    for line in f:
      if not line.strip():
        continue
      label, feats = parse_training_line(line)
      if int(feats.get(FEATURE_COUNT, -1)) != block:
        continue
      xs.append([feats.get(i, 0.0) for i in range(1, FEATURE_COUNT + 1)])
      ys.append(label)
  return np.array(xs, dtype=float).reshape(-1, FEATURE_COUNT), np.array(ys, dtype=float)
