"""Markov transition model over weather conditions."""

from typing import Sequence

import numpy as np

from ..core.conditions import WeatherCondition
from ..core.errors import InvalidModelError

ROW_SUM_TOLERANCE = 1e-6


class TransitionModel:
  """Row-stochastic matrix: ``P[i][j]`` is the probability of moving from condition i to j.

  Rows and columns follow ``WeatherCondition`` codes. The matrix is copied and
  frozen at construction.
  """

  def __init__(self, matrix: Sequence[Sequence[float]]):
    conditions = list(WeatherCondition)
    n = len(conditions)
    try:
      p = np.array(matrix, dtype=float)
    except (TypeError, ValueError) as e:
      raise InvalidModelError(f"Transition matrix is not numeric: {e}") from e
    if p.shape != (n, n):
      raise InvalidModelError(f"Transition matrix must be {n}x{n}, got shape {p.shape}")
    if not np.all(np.isfinite(p)):
      raise InvalidModelError("Transition matrix contains non-finite entries")
    if np.any(p < 0.0) or np.any(p > 1.0):
      raise InvalidModelError("Transition probabilities must lie in [0, 1]")
    sums = p.sum(axis=1)
    for cond, total in zip(conditions, sums):
      if abs(total - 1.0) > ROW_SUM_TOLERANCE:
        raise InvalidModelError(f"Row {cond.name} sums to {total:.6f}, expected 1")
    p.flags.writeable = False
    self._matrix = p
    self._cumulative = np.cumsum(p, axis=1)
    self._cumulative.flags.writeable = False
    self._conditions = conditions

  @property
  def matrix(self) -> np.ndarray:
    return self._matrix

  def row(self, condition: WeatherCondition) -> np.ndarray:
    return self._matrix[condition.code]

  def sample_next(self, current: WeatherCondition, rng) -> WeatherCondition:
    # Inverse-CDF: first condition whose cumulative probability exceeds the draw
    u = rng.random()
    idx = int(np.searchsorted(self._cumulative[current.code], u, side="right"))
    # Floating shortfall in the last cumulative value falls to the last condition
    idx = min(idx, len(self._conditions) - 1)
    return self._conditions[idx]

  def initial_condition(self, rng) -> WeatherCondition:
    # Uniform over all conditions, independent of the matrix
    return WeatherCondition.from_code(rng.integers(0, len(self._conditions)))

  def __repr__(self):
    return f"TransitionModel({self._matrix.tolist()!r})"
