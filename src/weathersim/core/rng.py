from dataclasses import dataclass, field
from typing import List, Optional, Union

import numpy as np


@dataclass
class RNG:
  """Explicit random source. Passed to every sampling call, never shared across tasks."""
  seed: Optional[Union[int, np.random.SeedSequence]] = None
  seed_seq: np.random.SeedSequence = field(init=False, repr=False)

  def __post_init__(self):
    if isinstance(self.seed, np.random.SeedSequence):
      self.seed_seq = self.seed
    else:
      self.seed_seq = np.random.SeedSequence(self.seed)
    self.np = np.random.default_rng(self.seed_seq)

  def random(self) -> float:
    return float(self.np.random())

  def integers(self, low: int, high: int) -> int:
    return int(self.np.integers(low, high))

  def normal(self, mean: float, stddev: float) -> float:
    return float(self.np.normal(mean, stddev))

  def uniform(self, low, high, size=None):
    return self.np.uniform(low, high, size)

  def choice(self, items, p=None):
    return self.np.choice(items, p=p)

  def spawn(self, n: int) -> List["RNG"]:
    # Successive calls hand out fresh, non-overlapping child streams
    return [RNG(child) for child in self.seed_seq.spawn(n)]
